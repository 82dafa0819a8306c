"""
Abstract base class for streaming transcription providers in Memoria.

Defines the TranscriptionProvider interface that speech-recognition
backends implement: start/stop capture and an async stream of
transcript updates and provider errors. The stream ending is the
provider's terminal signal and stops the listening session.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable
from typing import Union

from memoria_common.models import ProviderError, TranscriptUpdate

ProviderEvent = Union[TranscriptUpdate, ProviderError]


class TranscriptionProvider(ABC):
    """Abstract base class that every transcription backend must implement.

    Subclasses provide :meth:`start`, :meth:`stop` and :meth:`events`.
    The :attr:`name` property returns an identifier used in logs.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider identifier string."""
        ...  # pragma: no cover

    @abstractmethod
    async def start(self) -> None:
        """Begin capturing and recognising speech."""
        ...  # pragma: no cover

    @abstractmethod
    async def stop(self) -> None:
        """Stop capturing; :meth:`events` must finish soon after."""
        ...  # pragma: no cover

    @abstractmethod
    async def events(self) -> AsyncIterator[ProviderEvent]:
        """Yield transcript updates and errors in arrival order."""
        ...  # pragma: no cover
        yield  # type: ignore[misc]  # pragma: no cover


class ReplayProvider(TranscriptionProvider):
    """Replays a fixed sequence of events, e.g. a recorded session.

    Args:
        events: Events to deliver, in order.
        delay_s: Pause before each event.
    """

    def __init__(self, events: Iterable[ProviderEvent], delay_s: float = 0.0) -> None:
        self._events = list(events)
        self._delay_s = delay_s
        self._stopped = asyncio.Event()
        self.started = False

    @property
    def name(self) -> str:
        return "replay"

    async def start(self) -> None:
        self.started = True
        self._stopped.clear()

    async def stop(self) -> None:
        self._stopped.set()

    async def events(self) -> AsyncIterator[ProviderEvent]:
        for event in self._events:
            if self._stopped.is_set():
                return
            if self._delay_s:
                await asyncio.sleep(self._delay_s)
            yield event
