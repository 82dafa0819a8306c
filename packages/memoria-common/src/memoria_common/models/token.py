"""
Token model for Memoria.

A Token is one lower-cased word extracted from a text together with the
half-open character range it occupies in that (original) text.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class Token(BaseModel):
    """A normalised word and its ``[start, end)`` offsets in the source text.

    Attributes:
        value: Lower-cased word used for comparisons.
        start: Offset of the first character in the original text.
        end: Offset one past the last character in the original text.
    """

    model_config = {"frozen": True}

    value: str = Field(..., description="Lower-cased word value.")
    start: int = Field(..., ge=0, description="Start offset in the original text.")
    end: int = Field(..., ge=0, description="End offset (exclusive) in the original text.")

    @model_validator(mode="after")
    def _check_bounds(self) -> Token:
        if self.end < self.start:
            raise ValueError(f"token end {self.end} precedes start {self.start}")
        return self

    @property
    def span(self) -> tuple[int, int]:
        """The ``(start, end)`` character offsets."""
        return (self.start, self.end)

    def __str__(self) -> str:
        return f"({self.value}) {self.start}..<{self.end}"
