"""
Multi-pass greedy aligner for the Memoria alignment engine.

Starting from a single unmatched RangePair covering both token sequences,
each pass extracts runs of consecutive equal tokens that are at least as
long as the pass threshold from the still-unmatched pairs, then
consolidates. Thresholds descend (6, 5, ..., 1) so long runs are claimed
first; a claimed run is never revisited by a later, shorter pass.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from memoria_common.config import DEFAULT_THRESHOLDS
from memoria_common.models import RangePair, Token

from alignment.consolidator import consolidate

logger = structlog.get_logger()


@dataclass(frozen=True)
class MatchInfo:
    """Longest run found for one candidate position."""

    master_start: int
    length: int


def run_length(
    master: Sequence[str],
    candidate: Sequence[str],
    master_index: int,
    candidate_index: int,
    master_end: int,
    candidate_end: int,
) -> int:
    """Count consecutive equal values from ``(master_index, candidate_index)``.

    Counting stops at the first mismatch or when either side reaches its
    end bound.
    """
    length = 0
    m, c = master_index, candidate_index
    while m < master_end and c < candidate_end and master[m] == candidate[c]:
        length += 1
        m += 1
        c += 1
    return length


def best_match(
    master: Sequence[str],
    candidate: Sequence[str],
    candidate_index: int,
    master_start: int,
    master_end: int,
    candidate_end: int,
) -> MatchInfo:
    """Find the longest run for *candidate_index* within ``[master_start, master_end)``.

    Ties go to the smallest master start.
    """
    best = MatchInfo(master_start=master_start, length=0)
    for m in range(master_start, master_end):
        length = run_length(master, candidate, m, candidate_index, master_end, candidate_end)
        if length > best.length:
            best = MatchInfo(master_start=m, length=length)
    return best


def extract_matches(
    pair: RangePair,
    master: Sequence[str],
    candidate: Sequence[str],
    threshold: int,
) -> list[RangePair]:
    """Split one unmatched pair around every run of at least *threshold* tokens.

    Matched pairs and pairs too short on either side are returned as-is.
    The result may contain empty pairs; callers consolidate it.

    Args:
        pair: The pair to split.
        master: Master token values.
        candidate: Candidate token values.
        threshold: Minimum accepted run length.

    Returns:
        Pairs covering exactly the ranges of *pair*, in order.
    """
    if pair.matched or pair.master_len < threshold or pair.candidate_len < threshold:
        return [pair]

    master_start = pair.master_start
    master_end = pair.master_end
    candidate_end = pair.candidate_end

    result: list[RangePair] = []
    current = RangePair.empty_at(master_start, pair.candidate_start)

    c = pair.candidate_start
    while c < candidate_end:
        match = best_match(master, candidate, c, master_start, master_end, candidate_end)
        if match.length >= threshold:
            result.append(current.close(match.master_start, c))
            matched_master_end = match.master_start + match.length
            result.append(
                RangePair(
                    master_start=match.master_start,
                    master_end=matched_master_end,
                    candidate_start=c,
                    candidate_end=c + match.length,
                    matched=True,
                )
            )
            master_start = matched_master_end
            c += match.length
            current = RangePair.empty_at(master_start, c)
        else:
            c += 1
            result.append(current.close(master_start, c))
            current = RangePair.empty_at(master_start, c)

    result.append(current.close(master_end, candidate_end))
    return result


def align(
    master_tokens: Sequence[Token],
    candidate_tokens: Sequence[Token],
    thresholds: Sequence[int] = DEFAULT_THRESHOLDS,
) -> list[RangePair]:
    """Align two token sequences.

    Args:
        master_tokens: Tokens of the reference text.
        candidate_tokens: Tokens of the spoken text.
        thresholds: Descending minimum run lengths, one pass each.

    Returns:
        Consolidated RangePairs partitioning both index spaces.
    """
    master = [t.value for t in master_tokens]
    candidate = [t.value for t in candidate_tokens]

    pairs = [
        RangePair(
            master_start=0,
            master_end=len(master),
            candidate_start=0,
            candidate_end=len(candidate),
        )
    ]
    for threshold in thresholds:
        updated: list[RangePair] = []
        for pair in pairs:
            updated.extend(extract_matches(pair, master, candidate, threshold))
        pairs = consolidate(updated)
        logger.debug(
            "alignment_pass_complete",
            threshold=threshold,
            pairs=len(pairs),
            matched_pairs=sum(1 for p in pairs if p.matched),
        )
    return pairs
