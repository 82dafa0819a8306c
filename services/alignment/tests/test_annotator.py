"""
Tests for the annotated renderer.

Validates token tagging, extraneous-text anchoring and bracket spacing,
plain/markup reconstruction, and summary statistics.
"""

from __future__ import annotations

import pytest

from memoria_common.models import RangePair, SpanTag

from alignment.aligner import align
from alignment.annotator import anchor_for, render, summarize, to_markup, to_plain_text
from alignment.tokenizer import tokenize


def _render(master_text: str, candidate_text: str):
    master_tokens = tokenize(master_text)
    candidate_tokens = tokenize(candidate_text)
    pairs = align(master_tokens, candidate_tokens)
    return render(master_text, master_tokens, candidate_tokens, candidate_text, pairs)


def _tagged(spans, tag: SpanTag) -> list[str]:
    return [s.text for s in spans if s.tag is tag]


class TestRender:
    def test_substitution_scenario(self) -> None:
        spans = _render("a b c d e", "a b x d e")
        assert _tagged(spans, SpanTag.MATCHED) == ["a", "b", "d", "e"]
        assert _tagged(spans, SpanTag.MISSED) == ["c"]
        extraneous = [s for s in spans if s.tag is SpanTag.EXTRANEOUS]
        assert len(extraneous) == 1
        assert extraneous[0].text == " [x]"
        assert extraneous[0].anchor == 3
        assert to_plain_text(spans) == "a b [x] c d e"

    def test_span_order(self) -> None:
        spans = _render("a b c d e", "a b x d e")
        assert [(s.text, s.tag) for s in spans] == [
            ("a", SpanTag.MATCHED),
            (" ", None),
            ("b", SpanTag.MATCHED),
            (" [x]", SpanTag.EXTRANEOUS),
            (" ", None),
            ("c", SpanTag.MISSED),
            (" ", None),
            ("d", SpanTag.MATCHED),
            (" ", None),
            ("e", SpanTag.MATCHED),
        ]

    def test_perfect_recital(self) -> None:
        master = "Four score, and seven years ago."
        spans = _render(master, "four score and seven years ago")
        assert to_plain_text(spans) == master
        assert _tagged(spans, SpanTag.MISSED) == []
        assert _tagged(spans, SpanTag.EXTRANEOUS) == []
        assert len(_tagged(spans, SpanTag.MATCHED)) == 6

    def test_extraneous_at_start(self) -> None:
        spans = _render(
            "the quick brown fox jumps over the lazy dog",
            "lazy the quick brown fox jumps over",
        )
        assert spans[0].tag is SpanTag.EXTRANEOUS
        assert spans[0].text == "[lazy] "
        assert spans[0].anchor == 0
        assert _tagged(spans, SpanTag.MISSED) == ["the", "lazy", "dog"]
        assert to_plain_text(spans) == "[lazy] the quick brown fox jumps over the lazy dog"

    def test_extraneous_before_missed_opening(self) -> None:
        spans = _render("alpha beta gamma", "delta gamma")
        assert to_plain_text(spans) == "[delta] alpha beta gamma"
        assert _tagged(spans, SpanTag.MISSED) == ["alpha", "beta"]
        assert _tagged(spans, SpanTag.MATCHED) == ["gamma"]

    def test_extraneous_at_end(self) -> None:
        master = "one two."
        spans = _render(master, "one two three")
        assert spans[-1].tag is SpanTag.EXTRANEOUS
        assert spans[-1].anchor == len(master)
        assert to_plain_text(spans) == "one two. [three]"

    def test_extraneous_keeps_candidate_punctuation(self) -> None:
        spans = _render("go home", "go, well, um... home")
        assert to_plain_text(spans) == "go [well, um] home"

    def test_empty_master(self) -> None:
        spans = _render("", "hello there")
        assert len(spans) == 1
        assert spans[0].tag is SpanTag.EXTRANEOUS
        assert spans[0].text == "[hello there] "
        assert _tagged(spans, SpanTag.MATCHED) == []
        assert _tagged(spans, SpanTag.MISSED) == []

    def test_everything_missed(self) -> None:
        spans = _render("red green", "")
        assert _tagged(spans, SpanTag.MISSED) == ["red", "green"]
        assert to_plain_text(spans) == "red green"

    def test_multiple_insertions_in_document_order(self) -> None:
        spans = _render("a b c d e f", "x a b c y d e f z")
        extraneous = [s.text for s in spans if s.tag is SpanTag.EXTRANEOUS]
        assert extraneous == ["[x] ", " [y]", " [z]"]
        assert to_plain_text(spans) == "[x] a b c [y] d e f [z]"

    def test_out_of_range_pairs_rejected(self) -> None:
        master_tokens = tokenize("a b")
        bad = [RangePair(master_start=0, master_end=3, candidate_start=0, candidate_end=0)]
        with pytest.raises(ValueError):
            render("a b", master_tokens, [], "", bad)


class TestAnchorFor:
    def setup_method(self) -> None:
        self.master_text = "one two three"
        self.tokens = tokenize(self.master_text)

    def _unmatched(self, ms: int, me: int) -> RangePair:
        return RangePair(master_start=ms, master_end=me, candidate_start=0, candidate_end=1)

    def test_before_master(self) -> None:
        assert anchor_for(self._unmatched(0, 0), self.master_text, self.tokens) == 0

    def test_after_master(self) -> None:
        assert anchor_for(self._unmatched(3, 3), self.master_text, self.tokens) == 13

    def test_after_preceding_token(self) -> None:
        assert anchor_for(self._unmatched(1, 1), self.master_text, self.tokens) == 3
        assert anchor_for(self._unmatched(2, 2), self.master_text, self.tokens) == 7

    def test_opening_missed_run(self) -> None:
        assert anchor_for(self._unmatched(0, 2), self.master_text, self.tokens) == 0


class TestMarkupAndStats:
    def test_markup_wraps_tagged_spans(self) -> None:
        spans = _render("a b c d e", "a b x d e")
        assert to_markup(spans) == (
            "<green>a</green> <green>b</green><orange> [x]</orange> "
            "<red>c</red> <green>d</green> <green>e</green>"
        )

    def test_span_colors(self) -> None:
        spans = _render("a b c d e", "a b x d e")
        assert {s.tag: s.color for s in spans if s.tag is not None} == {
            SpanTag.MATCHED: "green",
            SpanTag.MISSED: "red",
            SpanTag.EXTRANEOUS: "orange",
        }

    def test_summarize_scenario(self) -> None:
        pairs = align(tokenize("a b c d e"), tokenize("a b x d e"))
        stats = summarize(pairs, 5)
        assert (stats.matched, stats.missed, stats.extraneous) == (4, 1, 1)
        assert stats.accuracy == pytest.approx(0.8)

    def test_summarize_empty_master(self) -> None:
        pairs = align([], tokenize("x y"))
        stats = summarize(pairs, 0)
        assert stats.extraneous == 2
        assert stats.accuracy == 0.0
