"""
Dictation WebSocket for the Memoria dictation service.

The client acts as the transcription provider: it relays transcript
updates, provider errors and start/stop requests. Each client message is
queued on the connection's :class:`DictationSession`; once the session
has handled it, the server sends any candidate/result messages it
produced followed by a ``state`` message.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from memoria_common.config import Settings, get_settings
from memoria_common.models import AlignmentResult

from alignment import to_markup, to_plain_text

from dictation import health
from dictation.schemas import (
    CandidateMessage,
    ClearMessage,
    ClientMessage,
    ErrorMessage,
    ProviderErrorMessage,
    ResultMessage,
    StartMessage,
    StateMessage,
    StopMessage,
    TranscriptMessage,
    client_message_adapter,
)
from dictation.session import DictationSession

router = APIRouter(tags=["websocket"])
logger = structlog.get_logger()


async def _open_session(
    master_text: str, settings: Settings, outbox: list[BaseModel],
) -> DictationSession:
    session = DictationSession(
        master_text,
        thresholds=settings.thresholds,
        finalize_drop_chars=settings.finalize_drop_chars,
        stop_command=settings.stop_command,
        queue_size=settings.event_queue_size,
    )

    def on_candidate(text: str) -> None:
        outbox.append(CandidateMessage(text=text))

    def on_result(result: AlignmentResult) -> None:
        outbox.append(
            ResultMessage(
                result=result,
                plain_text=to_plain_text(result.spans),
                markup=to_markup(result.spans),
            )
        )

    session.add_candidate_listener(on_candidate)
    session.add_result_listener(on_result)
    await session.open()
    health.session_opened(session.session_id)
    return session


async def _close_session(session: DictationSession) -> None:
    if session.is_listening:
        await session.stop()
    await session.close()
    health.session_closed(session.session_id)


async def _dispatch(session: DictationSession, message: Any) -> None:
    if isinstance(message, StartMessage):
        await session.start(reset=message.reset)
    elif isinstance(message, TranscriptMessage):
        await session.submit_transcript(message.text, message.start_timestamp)
    elif isinstance(message, ProviderErrorMessage):
        await session.submit_error(message.message)
    elif isinstance(message, StopMessage):
        await session.stop()
    elif isinstance(message, ClearMessage):
        await session.clear()


async def _send(ws: WebSocket, message: BaseModel) -> None:
    await ws.send_json(message.model_dump(mode="json"))


async def _flush(ws: WebSocket, outbox: list[BaseModel]) -> None:
    for item in outbox:
        await _send(ws, item)
    outbox.clear()


@router.websocket("/ws/dictation")
async def dictation(ws: WebSocket) -> None:
    await ws.accept()
    settings = get_settings()
    session: DictationSession | None = None
    outbox: list[BaseModel] = []
    try:
        while True:
            raw = await ws.receive_text()
            try:
                message: ClientMessage = client_message_adapter.validate_json(raw)
            except ValidationError as exc:
                await _send(ws, ErrorMessage(detail=str(exc)))
                continue

            if isinstance(message, StartMessage) and message.master_text is not None:
                if session is not None and session.master_text != message.master_text:
                    await _close_session(session)
                    await _flush(ws, outbox)
                    session = None
                if session is None:
                    session = await _open_session(message.master_text, settings, outbox)
            if session is None:
                await _send(ws, ErrorMessage(detail="send a start message with master_text first"))
                continue

            await _dispatch(session, message)
            await session.drain()
            await _flush(ws, outbox)
            await _send(
                ws,
                StateMessage(
                    listening=session.is_listening,
                    action_label=session.action_label,
                    candidate_text=session.candidate_text,
                ),
            )
    except WebSocketDisconnect:
        logger.info("dictation_ws_disconnected")
    finally:
        if session is not None:
            await _close_session(session)
