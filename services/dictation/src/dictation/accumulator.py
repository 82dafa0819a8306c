"""
Transcript accumulation for the Memoria dictation service.

Streaming providers publish the best guess for the segment currently
being spoken and, once the speaker pauses, re-publish it with a segment
start timestamp before starting over with an empty transcript. Some
providers occasionally skip the timestamped update; a sharp drop in the
partial transcript's length is then the only sign that a segment ended.
"""

from __future__ import annotations

import structlog

from memoria_common.config import DEFAULT_FINALIZE_DROP_CHARS
from memoria_common.models import TranscriptUpdate

logger = structlog.get_logger()


class TranscriptAccumulator:
    """Assembles transcript updates into one candidate text.

    The candidate text is every finalized segment followed by the
    in-progress text, newline separated.

    Args:
        finalize_drop_chars: A partial update shorter than the previous
            one by more than this many characters finalizes the previous one.
    """

    def __init__(self, finalize_drop_chars: int = DEFAULT_FINALIZE_DROP_CHARS) -> None:
        self._finalize_drop_chars = finalize_drop_chars
        self._segments: list[str] = []
        self._in_progress = ""

    # ── public API ──

    def apply(self, update: TranscriptUpdate) -> str:
        """Apply a provider update and return the current candidate text."""
        return self.on_transcript_update(update.text, update.start_timestamp)

    def on_transcript_update(self, text: str, start_timestamp: float | None = None) -> str:
        """Apply one update and return the current candidate text.

        Args:
            text: The provider's current best-guess text.
            start_timestamp: Present when the provider finalized the segment.

        Returns:
            The assembled candidate text.
        """
        if start_timestamp is not None:
            self._segments.append(text)
            self._in_progress = ""
            logger.debug("transcript_segment_finalized", chars=len(text))
        else:
            if len(self._in_progress) - len(text) > self._finalize_drop_chars:
                self._segments.append(self._in_progress)
                logger.debug(
                    "transcript_implicit_finalization",
                    previous_chars=len(self._in_progress),
                    chars=len(text),
                )
            self._in_progress = text
        return self.text

    def on_listening_state_changed(self, is_listening: bool, reset: bool = True) -> str:
        """Track a listening transition and return the candidate text.

        Starting to listen always drops the in-progress text; with *reset*
        it also drops the finalized segments. Stopping leaves the text as is
        so the caller can evaluate it.
        """
        if is_listening:
            if reset:
                self._segments.clear()
            self._in_progress = ""
        return self.text

    def append_error(self, message: str) -> str:
        """Annotate the in-progress text with a provider failure."""
        self._in_progress += f"<< {message} >>"
        return self.text

    def collapse(self, text: str) -> None:
        """Replace all state with *text* as the single finalized segment."""
        self._segments = [text]
        self._in_progress = ""

    def reset(self) -> None:
        """Forget every segment and the in-progress text."""
        self._segments.clear()
        self._in_progress = ""

    @property
    def text(self) -> str:
        """The assembled candidate text."""
        return "\n".join([*self._segments, self._in_progress])

    @property
    def segments(self) -> list[str]:
        """Finalized segments, oldest first."""
        return list(self._segments)

    @property
    def in_progress(self) -> str:
        """Text of the segment still being spoken."""
        return self._in_progress
