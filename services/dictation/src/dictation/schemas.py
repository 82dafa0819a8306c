"""
API schemas for the Memoria dictation service.

Pydantic request/response models for one-shot alignment and for the
messages exchanged over the dictation WebSocket.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from memoria_common.models import AlignmentResult


class AlignRequest(BaseModel):
    master_text: str
    candidate_text: str


class AlignResponse(BaseModel):
    skipped: bool
    result: AlignmentResult | None = None
    plain_text: str | None = None
    markup: str | None = None


# ── WebSocket: client → server ──


class StartMessage(BaseModel):
    type: Literal["start"]
    master_text: str | None = None
    reset: bool = Field(
        default=True,
        description="False continues the previous dictation instead of starting afresh.",
    )


class TranscriptMessage(BaseModel):
    type: Literal["transcript"]
    text: str
    start_timestamp: float | None = None


class ProviderErrorMessage(BaseModel):
    type: Literal["error"]
    message: str


class StopMessage(BaseModel):
    type: Literal["stop"]


class ClearMessage(BaseModel):
    type: Literal["clear"]


ClientMessage = Annotated[
    Union[StartMessage, TranscriptMessage, ProviderErrorMessage, StopMessage, ClearMessage],
    Field(discriminator="type"),
]
client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


# ── WebSocket: server → client ──


class CandidateMessage(BaseModel):
    type: Literal["candidate"] = "candidate"
    text: str


class ResultMessage(BaseModel):
    type: Literal["result"] = "result"
    result: AlignmentResult
    plain_text: str
    markup: str


class StateMessage(BaseModel):
    type: Literal["state"] = "state"
    listening: bool
    action_label: str
    candidate_text: str


class ErrorMessage(BaseModel):
    type: Literal["error"] = "error"
    detail: str
