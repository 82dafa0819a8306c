"""
Word tokenizer for the Memoria alignment engine.

Splits a text into lower-cased word tokens. Whitespace and Unicode
punctuation (general category ``P*``) separate tokens and are discarded;
every other character belongs to a word. Token offsets always refer to
the original, un-normalised text.
"""

from __future__ import annotations

import unicodedata

from memoria_common.models import Token


def is_boundary(char: str) -> bool:
    """Return ``True`` if *char* separates tokens."""
    return char.isspace() or unicodedata.category(char).startswith("P")


def tokenize(text: str) -> list[Token]:
    """Split *text* into word tokens.

    Args:
        text: Any text; empty input yields no tokens.

    Returns:
        Tokens in document order, none overlapping.
    """
    tokens: list[Token] = []
    start: int | None = None
    for i, char in enumerate(text):
        if is_boundary(char):
            if start is not None:
                tokens.append(Token(value=text[start:i].lower(), start=start, end=i))
                start = None
        elif start is None:
            start = i
    if start is not None:
        tokens.append(Token(value=text[start:].lower(), start=start, end=len(text)))
    return tokens
