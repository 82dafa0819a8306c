"""
RangePair model for Memoria.

A RangePair links a contiguous run of master tokens with a contiguous run
of candidate tokens and records whether the two runs are a direct
token-for-token match.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class RangePair(BaseModel):
    """Correspondence between ``[master_start, master_end)`` and
    ``[candidate_start, candidate_end)`` token index ranges.

    Attributes:
        master_start: First master token index.
        master_end: One past the last master token index.
        candidate_start: First candidate token index.
        candidate_end: One past the last candidate token index.
        matched: Whether both ranges hold the same token values.
    """

    model_config = {"frozen": True}

    master_start: int = Field(..., ge=0)
    master_end: int = Field(..., ge=0)
    candidate_start: int = Field(..., ge=0)
    candidate_end: int = Field(..., ge=0)
    matched: bool = Field(default=False)

    @model_validator(mode="after")
    def _check_ranges(self) -> RangePair:
        if self.master_end < self.master_start:
            raise ValueError("master range end precedes start")
        if self.candidate_end < self.candidate_start:
            raise ValueError("candidate range end precedes start")
        if self.matched and self.master_len != self.candidate_len:
            raise ValueError("matched ranges must have equal lengths")
        return self

    @classmethod
    def empty_at(cls, master_index: int, candidate_index: int) -> RangePair:
        """An unmatched pair with both ranges empty at the given positions."""
        return cls(
            master_start=master_index,
            master_end=master_index,
            candidate_start=candidate_index,
            candidate_end=candidate_index,
        )

    @property
    def master_len(self) -> int:
        return self.master_end - self.master_start

    @property
    def candidate_len(self) -> int:
        return self.candidate_end - self.candidate_start

    @property
    def master_range(self) -> range:
        return range(self.master_start, self.master_end)

    @property
    def candidate_range(self) -> range:
        return range(self.candidate_start, self.candidate_end)

    @property
    def is_empty(self) -> bool:
        """``True`` when both ranges are empty."""
        return self.master_len == 0 and self.candidate_len == 0

    def close(self, master_end: int, candidate_end: int, matched: bool = False) -> RangePair:
        """Return a copy ending at the given indices with the given status."""
        return RangePair(
            master_start=self.master_start,
            master_end=master_end,
            candidate_start=self.candidate_start,
            candidate_end=candidate_end,
            matched=matched,
        )

    def __str__(self) -> str:
        status = "matched" if self.matched else "unmatched"
        return (
            f"{status} [{self.master_start},{self.master_end})"
            f"x[{self.candidate_start},{self.candidate_end})"
        )
