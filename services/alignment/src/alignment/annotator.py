"""
Annotated rendering of a master text for the Memoria alignment engine.

Tags every master token as matched or missed and inserts extraneous
candidate text, in brackets, at an anchor in the master text:

* before everything, when the extraneous run precedes all master text;
* after everything, when it follows the last master token;
* otherwise right after the master token preceding the pair's master range.

Colours are conventions only (matched green, missed red, extraneous
orange); display code decides how to apply them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from memoria_common.models import AnnotatedSpan, AlignmentStats, RangePair, SpanTag, Token


@dataclass(frozen=True)
class _Insertion:
    anchor: int
    text: str


def _check_indices(
    range_pairs: Sequence[RangePair],
    master_count: int,
    candidate_count: int,
) -> None:
    for pair in range_pairs:
        if pair.master_end > master_count or pair.candidate_end > candidate_count:
            raise ValueError(
                f"range pair {pair} exceeds token counts "
                f"(master={master_count}, candidate={candidate_count})"
            )


def _master_tags(range_pairs: Sequence[RangePair], master_count: int) -> list[SpanTag | None]:
    tags: list[SpanTag | None] = [None] * master_count
    for pair in range_pairs:
        tag = SpanTag.MATCHED if pair.matched else SpanTag.MISSED
        for index in pair.master_range:
            tags[index] = tag
    return tags


def anchor_for(pair: RangePair, master_text: str, master_tokens: Sequence[Token]) -> int:
    """Return the master-text offset where *pair*'s extraneous text belongs."""
    if pair.master_end == 0:
        return 0
    if pair.master_end == len(master_tokens):
        return len(master_text)
    if pair.master_start == 0:
        return 0
    return master_tokens[pair.master_start - 1].end


def _extraneous_insertions(
    range_pairs: Sequence[RangePair],
    master_text: str,
    master_tokens: Sequence[Token],
    candidate_tokens: Sequence[Token],
    candidate_text: str,
) -> list[_Insertion]:
    # Walk right to left so anchors are produced in reverse document order.
    insertions: list[_Insertion] = []
    for pair in reversed(range_pairs):
        if pair.matched or pair.candidate_len == 0:
            continue
        first = candidate_tokens[pair.candidate_start]
        last = candidate_tokens[pair.candidate_end - 1]
        source = candidate_text[first.start:last.end]
        anchor = anchor_for(pair, master_text, master_tokens)
        text = f"[{source}] " if anchor == 0 else f" [{source}]"
        insertions.append(_Insertion(anchor=anchor, text=text))
    return insertions


def render(
    master_text: str,
    master_tokens: Sequence[Token],
    candidate_tokens: Sequence[Token],
    candidate_text: str,
    range_pairs: Sequence[RangePair],
) -> list[AnnotatedSpan]:
    """Render *master_text* annotated with the outcome of an alignment.

    Args:
        master_text: The reference text.
        master_tokens: ``tokenize(master_text)``.
        candidate_tokens: ``tokenize(candidate_text)``.
        candidate_text: The spoken text.
        range_pairs: Output of :func:`alignment.aligner.align`.

    Returns:
        Spans in display order; joining their text gives the displayable string.

    Raises:
        ValueError: If a range pair points past the supplied tokens.
    """
    _check_indices(range_pairs, len(master_tokens), len(candidate_tokens))
    tags = _master_tags(range_pairs, len(master_tokens))
    pending = list(
        reversed(
            _extraneous_insertions(
                range_pairs, master_text, master_tokens, candidate_tokens, candidate_text
            )
        )
    )

    spans: list[AnnotatedSpan] = []
    pos = 0

    def emit_plain(upto: int) -> None:
        nonlocal pos
        if upto > pos:
            spans.append(AnnotatedSpan(text=master_text[pos:upto]))
            pos = upto

    def emit_insertions(upto: int) -> None:
        while pending and pending[0].anchor <= upto:
            insertion = pending.pop(0)
            emit_plain(insertion.anchor)
            spans.append(
                AnnotatedSpan(
                    text=insertion.text,
                    tag=SpanTag.EXTRANEOUS,
                    anchor=insertion.anchor,
                )
            )

    for token, tag in zip(master_tokens, tags):
        emit_insertions(token.start)
        emit_plain(token.start)
        spans.append(AnnotatedSpan(text=master_text[token.start:token.end], tag=tag))
        pos = token.end

    emit_insertions(len(master_text))
    emit_plain(len(master_text))
    return spans


def summarize(range_pairs: Iterable[RangePair], master_count: int) -> AlignmentStats:
    """Count matched, missed and extraneous tokens."""
    matched = missed = extraneous = 0
    for pair in range_pairs:
        if pair.matched:
            matched += pair.master_len
        else:
            missed += pair.master_len
            extraneous += pair.candidate_len
    accuracy = matched / master_count if master_count else 0.0
    return AlignmentStats(
        matched=matched,
        missed=missed,
        extraneous=extraneous,
        accuracy=accuracy,
    )


def to_plain_text(spans: Iterable[AnnotatedSpan]) -> str:
    """Join rendered spans into the displayable string."""
    return "".join(span.text for span in spans)


def to_markup(spans: Iterable[AnnotatedSpan]) -> str:
    """Join rendered spans, wrapping tagged ones in ``<colour>...</colour>``."""
    parts: list[str] = []
    for span in spans:
        color = span.color
        if color is None:
            parts.append(span.text)
        else:
            parts.append(f"<{color}>{span.text}</{color}>")
    return "".join(parts)
