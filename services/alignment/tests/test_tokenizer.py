"""
Tests for the word tokenizer.

Validates boundary handling, lower-casing, and that offsets point into
the original text.
"""

from __future__ import annotations

import pytest

from alignment.tokenizer import is_boundary, tokenize


class TestTokenize:
    """Tests for tokenize()."""

    def test_empty_text(self) -> None:
        assert tokenize("") == []

    @pytest.mark.parametrize("text", [" ", "   \n\t", "...", ", ; !?", "- — ( ) \" '"])
    def test_only_boundaries(self, text: str) -> None:
        assert tokenize(text) == []

    def test_single_word(self) -> None:
        tokens = tokenize("Hello")
        assert len(tokens) == 1
        assert tokens[0].value == "hello"
        assert tokens[0].span == (0, 5)

    def test_values_are_lowercased(self) -> None:
        assert [t.value for t in tokenize("The QUICK Brown fox")] == [
            "the",
            "quick",
            "brown",
            "fox",
        ]

    def test_offsets_reference_original_text(self) -> None:
        text = "Hello,  World! Again"
        tokens = tokenize(text)
        assert [text[t.start:t.end] for t in tokens] == ["Hello", "World", "Again"]
        assert [t.span for t in tokens] == [(0, 5), (8, 13), (15, 20)]

    def test_punctuation_splits_words(self) -> None:
        assert [t.value for t in tokenize("don't stop-now")] == ["don", "t", "stop", "now"]

    def test_trailing_word_closed_at_end(self) -> None:
        tokens = tokenize("one two")
        assert tokens[-1].span == (4, 7)

    def test_leading_and_trailing_boundaries(self) -> None:
        tokens = tokenize("  (alpha) beta.  ")
        assert [t.value for t in tokens] == ["alpha", "beta"]
        assert tokens[0].span == (3, 8)
        assert tokens[1].span == (10, 14)

    def test_newlines_separate_segments(self) -> None:
        assert [t.value for t in tokenize("first line\nsecond line")] == [
            "first",
            "line",
            "second",
            "line",
        ]

    def test_symbols_and_digits_are_word_characters(self) -> None:
        assert [t.value for t in tokenize("$5 + 3")] == ["$5", "+", "3"]

    def test_tokens_never_overlap(self, gettysburg: str) -> None:
        tokens = tokenize(gettysburg)
        for prev, nxt in zip(tokens, tokens[1:]):
            assert prev.end < nxt.start

    def test_deterministic(self, gettysburg: str) -> None:
        assert tokenize(gettysburg) == tokenize(gettysburg)


class TestIsBoundary:
    """Tests for is_boundary()."""

    @pytest.mark.parametrize("char", [" ", "\t", "\n", ".", ",", "!", "?", "'", "-", "(", "»"])
    def test_boundaries(self, char: str) -> None:
        assert is_boundary(char)

    @pytest.mark.parametrize("char", ["a", "Z", "7", "é", "$", "+"])
    def test_word_characters(self, char: str) -> None:
        assert not is_boundary(char)
