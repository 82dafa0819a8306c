"""
Saved reference text model for Memoria.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


class MemoryText(BaseModel):
    """A reference (master) text the user is memorising.

    Attributes:
        title: Unique display title.
        text: Body of the text; the only field the engine reads.
        date_added: Creation timestamp (UTC).
    """

    model_config = {"from_attributes": True}

    title: str = Field(..., min_length=1, max_length=255, description="Display title.")
    text: str = Field(default="", description="Reference text body.")
    date_added: datetime = Field(default_factory=_utc_now, description="Creation time (UTC).")
