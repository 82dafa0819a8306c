"""Shared fixtures for dictation service tests."""

from __future__ import annotations

import os

import pytest

# Set env vars before any memoria_common settings are read.
os.environ.setdefault("MEMORIA_LOG_LEVEL", "DEBUG")
os.environ.setdefault("MEMORIA_LOG_JSON", "false")
os.environ.setdefault("MEMORIA_API_HOST", "127.0.0.1")

from memoria_common.config import get_settings  # noqa: E402

from dictation.session import DictationSession  # noqa: E402

# ─── Fixtures ────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Re-read settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def master_text() -> str:
    """A deterministic master text for session tests."""
    return "a b c d e"


@pytest.fixture()
async def session(master_text: str):
    """An open DictationSession, closed after the test."""
    s = DictationSession(master_text)
    await s.open()
    yield s
    await s.close()


@pytest.fixture()
def long_partial() -> str:
    """A partial transcript long enough to trigger implicit finalization."""
    return "the quick brown fox jumps over the lazy dog"


@pytest.fixture()
def client():
    """A TestClient around a freshly built dictation app."""
    from fastapi.testclient import TestClient

    from dictation.main import create_app

    with TestClient(create_app()) as c:
        yield c
