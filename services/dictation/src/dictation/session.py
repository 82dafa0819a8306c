"""
Dictation session for the Memoria dictation service.

Serialises everything that can change a session (provider transcript
updates, provider errors, start/stop of listening, clearing) onto one
``asyncio.Queue`` consumed by a single task, so events are applied
strictly in arrival order. When listening turns off the session runs
exactly one evaluation of the accumulated candidate text against the
master text and hands the result to registered listeners.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Union
from uuid import uuid4

import structlog

from memoria_common.config import (
    DEFAULT_FINALIZE_DROP_CHARS,
    DEFAULT_STOP_COMMAND,
    DEFAULT_THRESHOLDS,
)
from memoria_common.metrics import (
    evaluation_duration_seconds,
    evaluations_total,
    transcript_events_total,
)
from memoria_common.models import AlignmentResult, MemoryText, ProviderError, TranscriptUpdate

from alignment import evaluate

from dictation.accumulator import TranscriptAccumulator
from dictation.provider_base import TranscriptionProvider

logger = structlog.get_logger()

START_LABEL = "Start Dictation"
STOP_LABEL = "Stop Dictation"
CONTINUE_LABEL = "Continue Dictation"

CandidateListener = Callable[[str], None]
ResultListener = Callable[[AlignmentResult], None]


class SessionNotRunningError(RuntimeError):
    """Raised when events are submitted to a session that is not open."""


@dataclass(frozen=True)
class StartListening:
    reset: bool = True


@dataclass(frozen=True)
class StopListening:
    pass


@dataclass(frozen=True)
class ClearSession:
    pass


SessionEvent = Union[TranscriptUpdate, ProviderError, StartListening, StopListening, ClearSession]


class DictationSession:
    """Single-consumer event loop around a :class:`TranscriptAccumulator`.

    Args:
        master: The reference text, or the saved text holding it.
        thresholds: Aligner thresholds.
        finalize_drop_chars: Implicit-finalization threshold for the accumulator.
        stop_command: Spoken word that stops listening ("" disables).
        queue_size: Event queue bound (0 = unbounded).
    """

    def __init__(
        self,
        master: str | MemoryText,
        *,
        thresholds: Sequence[int] = DEFAULT_THRESHOLDS,
        finalize_drop_chars: int = DEFAULT_FINALIZE_DROP_CHARS,
        stop_command: str = DEFAULT_STOP_COMMAND,
        queue_size: int = 0,
    ) -> None:
        self.session_id = str(uuid4())
        self._master_text = master.text if isinstance(master, MemoryText) else master
        self._thresholds = tuple(thresholds)
        self._stop_command = stop_command.strip().lower()
        self._accumulator = TranscriptAccumulator(finalize_drop_chars)
        self._queue_size = queue_size
        self._queue: asyncio.Queue[SessionEvent] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._consumer: asyncio.Task[None] | None = None
        self._pump: asyncio.Task[None] | None = None
        self._provider: TranscriptionProvider | None = None
        self._listening = False
        self._last_result: AlignmentResult | None = None
        self._candidate_listeners: list[CandidateListener] = []
        self._result_listeners: list[ResultListener] = []
        self._log = logger.bind(session_id=self.session_id)

    # ── lifecycle ──

    async def open(self) -> None:
        """Start the consumer task."""
        if self._consumer is not None and not self._consumer.done():
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._consumer = asyncio.create_task(
            self._consume(self._queue), name=f"dictation-{self.session_id}"
        )
        self._log.info("dictation_session_opened")

    async def close(self) -> None:
        """Stop the provider pump and the consumer task.

        Events already queued are processed first, so a pending stop still
        evaluates.
        """
        if self._pump is not None:
            if self._provider is not None:
                await self._provider.stop()
            await self._pump
            self._pump = None
        if self._consumer is None:
            return
        await self.drain()
        self._consumer.cancel()
        try:
            await self._consumer
        except asyncio.CancelledError:
            pass
        self._consumer = None
        self._queue = None
        self._log.info("dictation_session_closed")

    async def __aenter__(self) -> DictationSession:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── listeners ──

    def add_candidate_listener(self, listener: CandidateListener) -> None:
        """Call *listener* with the candidate text after every transcript event."""
        self._candidate_listeners.append(listener)

    def add_result_listener(self, listener: ResultListener) -> None:
        """Call *listener* with every evaluation result."""
        self._result_listeners.append(listener)

    # ── submission ──

    async def submit(self, event: SessionEvent) -> None:
        """Queue *event* for the consumer.

        Raises:
            SessionNotRunningError: If the session is not open.
        """
        if self._queue is None:
            raise SessionNotRunningError(f"session {self.session_id} is not open")
        await self._queue.put(event)

    def submit_threadsafe(self, event: SessionEvent) -> Future[None]:
        """Queue *event* from a thread other than the session's event loop.

        Raises:
            SessionNotRunningError: If the session is not open.
        """
        if self._queue is None or self._loop is None:
            raise SessionNotRunningError(f"session {self.session_id} is not open")
        return asyncio.run_coroutine_threadsafe(self._queue.put(event), self._loop)

    async def start(self, reset: bool = True) -> None:
        """Start listening.

        By default every restart discards the previous transcript and result.
        ``reset=False`` is the "Continue Dictation" path: it keeps the
        transcript collapsed by the last evaluation and appends to it, so
        unlike every other restart it keeps the finalized segments.
        """
        await self.submit(StartListening(reset=reset))

    async def stop(self) -> None:
        await self.submit(StopListening())

    async def clear(self) -> None:
        """Forget the transcript and the last result. Ignored while listening."""
        await self.submit(ClearSession())

    async def submit_transcript(self, text: str, start_timestamp: float | None = None) -> None:
        await self.submit(TranscriptUpdate(text=text, start_timestamp=start_timestamp))

    async def submit_error(self, message: str) -> None:
        await self.submit(ProviderError(message=message))

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        if self._queue is not None:
            await self._queue.join()

    # ── provider wiring ──

    async def listen(self, provider: TranscriptionProvider, reset: bool = True) -> None:
        """Start listening and forward *provider* events to this session.

        When the provider's event stream ends, listening stops.
        """
        await self.start(reset=reset)
        self._provider = provider
        await provider.start()
        self._pump = asyncio.create_task(
            self._forward(provider), name=f"provider-{self.session_id}"
        )
        self._log.info("dictation_provider_attached", provider=provider.name)

    async def stop_listening(self) -> None:
        """Stop the attached provider (if any) and stop listening."""
        if self._provider is not None:
            await self._provider.stop()
        if self._pump is not None:
            await self._pump
            self._pump = None
        await self.stop()

    async def _forward(self, provider: TranscriptionProvider) -> None:
        try:
            async for event in provider.events():
                await self.submit(event)
        except Exception as exc:
            self._log.exception("transcription_provider_failed", provider=provider.name)
            if self._queue is not None:
                await self._queue.put(ProviderError(message=str(exc) or type(exc).__name__))
        finally:
            if self._queue is not None:
                await self._queue.put(StopListening())
            self._provider = None

    # ── state ──

    @property
    def is_listening(self) -> bool:
        return self._listening

    @property
    def master_text(self) -> str:
        return self._master_text

    @property
    def candidate_text(self) -> str:
        return self._accumulator.text

    @property
    def accumulator(self) -> TranscriptAccumulator:
        return self._accumulator

    @property
    def last_result(self) -> AlignmentResult | None:
        return self._last_result

    @property
    def action_label(self) -> str:
        """Label for the control that toggles dictation."""
        if self._listening:
            return STOP_LABEL
        if not self._accumulator.text and self._last_result is None:
            return START_LABEL
        return CONTINUE_LABEL

    # ── consumer ──

    async def _consume(self, queue: asyncio.Queue[SessionEvent]) -> None:
        while True:
            event = await queue.get()
            try:
                self._handle(event)
            except Exception:
                self._log.exception("dictation_event_error", event=type(event).__name__)
            finally:
                queue.task_done()

    def _handle(self, event: SessionEvent) -> None:
        if isinstance(event, TranscriptUpdate):
            self._on_transcript(event)
        elif isinstance(event, ProviderError):
            self._on_provider_error(event)
        elif isinstance(event, StartListening):
            self._on_start(event.reset)
        elif isinstance(event, StopListening):
            self._on_stop()
        elif isinstance(event, ClearSession):
            self._on_clear()

    def _on_start(self, reset: bool) -> None:
        if self._listening:
            self._log.info("dictation_session_already_listening")
            return
        self._accumulator.on_listening_state_changed(True, reset=reset)
        if reset:
            self._last_result = None
        self._listening = True
        self._log.info("dictation_session_started", reset=reset)

    def _on_transcript(self, update: TranscriptUpdate) -> None:
        if not self._listening:
            self._log.debug("transcript_update_ignored_not_listening")
            return
        if not update.text:
            return

        stop_requested = False
        if self._stop_command and update.text.lower().endswith(self._stop_command):
            update = update.model_copy(
                update={"text": update.text[: -len(self._stop_command)]}
            )
            stop_requested = True

        transcript_events_total.labels(kind="final" if update.is_final else "partial").inc()
        if update.is_final:
            self._log.info("transcript_segment_finalized", chars=len(update.text))
        candidate = self._accumulator.apply(update)
        self._notify_candidate(candidate)

        if stop_requested:
            self._log.info("dictation_stop_command_heard")
            self._on_stop()

    def _on_provider_error(self, error: ProviderError) -> None:
        self._log.warning("transcription_provider_error", message=error.message)
        self._notify_candidate(self._accumulator.append_error(error.message))

    def _on_stop(self) -> None:
        if not self._listening:
            return
        self._listening = False
        self._log.info("dictation_session_stopped")
        self._evaluate()

    def _on_clear(self) -> None:
        if self._listening:
            self._log.info("dictation_clear_ignored_while_listening")
            return
        self._accumulator.reset()
        self._last_result = None
        self._log.info("dictation_session_cleared")

    def _evaluate(self) -> None:
        candidate = self._accumulator.on_listening_state_changed(False)
        if not candidate:
            evaluations_total.labels(outcome="skipped").inc()
            self._log.info("evaluation_skipped_empty_candidate")
            return

        with evaluation_duration_seconds.time():
            result = evaluate(self._master_text, candidate, self._thresholds)
        if result is None:
            return
        evaluations_total.labels(outcome="evaluated").inc()
        self._accumulator.collapse(candidate)
        self._last_result = result
        for listener in self._result_listeners:
            try:
                listener(result)
            except Exception:
                self._log.exception("result_listener_error")

    def _notify_candidate(self, candidate: str) -> None:
        for listener in self._candidate_listeners:
            try:
                listener(candidate)
            except Exception:
                self._log.exception("candidate_listener_error")
