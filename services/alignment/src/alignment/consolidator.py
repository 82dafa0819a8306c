"""
RangePair consolidation for the Memoria alignment engine.

Normalises a list of RangePairs so that matched and unmatched runs
strictly alternate and no pair is empty on both sides.
"""

from __future__ import annotations

from collections.abc import Iterable

from memoria_common.models import RangePair


def consolidate(range_pairs: Iterable[RangePair]) -> list[RangePair]:
    """Drop empty pairs and merge neighbours with the same ``matched`` status.

    A merged pair keeps the start indices of the first pair and takes the
    end indices of the last.

    Args:
        range_pairs: Pairs in index order.

    Returns:
        A new list; the input is not modified.
    """
    result: list[RangePair] = []
    for pair in range_pairs:
        if pair.is_empty:
            continue
        if result and result[-1].matched == pair.matched:
            result[-1] = result[-1].close(pair.master_end, pair.candidate_end, pair.matched)
        else:
            result.append(pair)
    return result
