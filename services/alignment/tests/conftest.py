"""Shared fixtures for alignment engine tests."""

from __future__ import annotations

import os

import pytest

from memoria_common.models import Token

from alignment.tokenizer import tokenize

# Set env vars before any memoria_common settings are read.
os.environ.setdefault("MEMORIA_LOG_LEVEL", "DEBUG")
os.environ.setdefault("MEMORIA_LOG_JSON", "false")

# ─── Fixtures ────────────────────────────────────────────────


@pytest.fixture()
def words():
    """Build tokens from a space-separated string of words."""

    def _words(text: str) -> list[Token]:
        return tokenize(text)

    return _words


@pytest.fixture()
def gettysburg() -> str:
    """A short master text with punctuation and repeated words."""
    return (
        "Four score and seven years ago our fathers brought forth on this "
        "continent, a new nation, conceived in Liberty, and dedicated to the "
        "proposition that all men are created equal."
    )
