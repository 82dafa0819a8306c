"""
Transcript event models for Memoria.

Defines the events a streaming transcription provider delivers to a
dictation session: best-guess transcript updates and provider errors.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


class TranscriptUpdate(BaseModel):
    """The provider's current best transcript for the active segment.

    Attributes:
        text: Current best-guess text of the spoken segment.
        start_timestamp: Segment start time in seconds, present only when
            the provider has finalized the segment.
        received_at: Arrival timestamp (UTC).
    """

    model_config = {"from_attributes": True}

    text: str = Field(..., description="Current best-guess transcript text.")
    start_timestamp: float | None = Field(
        default=None,
        description="Segment start (seconds); set when the segment is finalized.",
    )
    received_at: datetime = Field(default_factory=_utc_now, description="Arrival time (UTC).")

    @property
    def is_final(self) -> bool:
        """Whether this update finalizes a spoken segment."""
        return self.start_timestamp is not None


class ProviderError(BaseModel):
    """A failure reported by the transcription provider.

    Attributes:
        message: Human-readable description of the failure.
    """

    message: str = Field(..., description="Provider failure description.")
