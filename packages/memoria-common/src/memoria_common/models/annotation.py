"""
Annotation output models for Memoria.

Defines the tagged spans produced by rendering a master text against a
candidate, and the result envelope returned by a full evaluation.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from memoria_common.models.range_pair import RangePair


class SpanTag(str, enum.Enum):
    """Comparison outcome attached to a rendered span."""

    MATCHED = "matched"
    MISSED = "missed"
    EXTRANEOUS = "extraneous"

    @property
    def color(self) -> str:
        """Display colour conventionally used for this tag."""
        return _TAG_COLORS[self]


_TAG_COLORS: dict[SpanTag, str] = {
    SpanTag.MATCHED: "green",
    SpanTag.MISSED: "red",
    SpanTag.EXTRANEOUS: "orange",
}


class AnnotatedSpan(BaseModel):
    """One fragment of the rendered master text.

    Untagged spans carry the master text between tokens (whitespace and
    punctuation). Extraneous spans are bracketed candidate text inserted
    at ``anchor``, an offset into the original master text.

    Attributes:
        text: The fragment as displayed.
        tag: Comparison outcome, ``None`` for plain master text.
        anchor: Master-text offset of an extraneous insertion.
    """

    model_config = {"frozen": True}

    text: str = Field(..., description="Displayed fragment.")
    tag: SpanTag | None = Field(default=None, description="Comparison outcome.")
    anchor: int | None = Field(
        default=None,
        ge=0,
        description="Insertion offset in the master text (extraneous spans only).",
    )

    @property
    def color(self) -> str | None:
        return self.tag.color if self.tag is not None else None


class AlignmentStats(BaseModel):
    """Token-level summary of one evaluation.

    Attributes:
        matched: Master tokens spoken correctly.
        missed: Master tokens not spoken.
        extraneous: Candidate tokens with no master counterpart.
        accuracy: ``matched / master token count`` (0.0 for an empty master).
    """

    matched: int = Field(default=0, ge=0)
    missed: int = Field(default=0, ge=0)
    extraneous: int = Field(default=0, ge=0)
    accuracy: float = Field(default=0.0, ge=0.0, le=1.0)


class AlignmentResult(BaseModel):
    """Everything produced by one evaluation pass.

    Attributes:
        master_token_count: Number of tokens in the master text.
        candidate_token_count: Number of tokens in the candidate text.
        range_pairs: Final consolidated alignment.
        spans: Rendered master text.
        stats: Token-level summary.
    """

    master_token_count: int = Field(..., ge=0)
    candidate_token_count: int = Field(..., ge=0)
    range_pairs: list[RangePair] = Field(default_factory=list)
    spans: list[AnnotatedSpan] = Field(default_factory=list)
    stats: AlignmentStats = Field(default_factory=AlignmentStats)
