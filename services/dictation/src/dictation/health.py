"""
Health check endpoint for the Memoria dictation service.

Exposes a ``/health`` endpoint returning service status and the number
of open dictation sessions.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

router = APIRouter()

# Maintained by the WebSocket handler.
_active_sessions: set[str] = set()


def session_opened(session_id: str) -> None:
    _active_sessions.add(session_id)


def session_closed(session_id: str) -> None:
    _active_sessions.discard(session_id)


def active_session_count() -> int:
    return len(_active_sessions)


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Return service health.

    Returns:
        Dict with ``status``, ``service``, and ``active_sessions`` keys.
    """
    return {
        "status": "ok",
        "service": "dictation",
        "active_sessions": active_session_count(),
    }
