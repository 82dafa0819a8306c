"""
Evaluation entry point for the Memoria alignment engine.

Runs one complete, synchronous evaluation: tokenize both texts, align
them, render the annotated master text, and summarise the outcome.
Each call owns all of its working data.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from memoria_common.config import DEFAULT_THRESHOLDS
from memoria_common.models import AlignmentResult

from alignment.aligner import align
from alignment.annotator import render, summarize
from alignment.tokenizer import tokenize

logger = structlog.get_logger()


def evaluate(
    master_text: str,
    candidate_text: str,
    thresholds: Sequence[int] = DEFAULT_THRESHOLDS,
) -> AlignmentResult | None:
    """Compare *candidate_text* against *master_text*.

    Args:
        master_text: The reference text.
        candidate_text: The spoken text.
        thresholds: Descending minimum run lengths for the aligner.

    Returns:
        The evaluation result, or ``None`` when *candidate_text* is empty
        and there is nothing to evaluate.
    """
    if not candidate_text:
        logger.debug("evaluation_skipped_empty_candidate")
        return None

    master_tokens = tokenize(master_text)
    candidate_tokens = tokenize(candidate_text)
    range_pairs = align(master_tokens, candidate_tokens, thresholds)
    spans = render(master_text, master_tokens, candidate_tokens, candidate_text, range_pairs)
    stats = summarize(range_pairs, len(master_tokens))

    logger.debug(
        "alignment_evaluated",
        master_tokens=len(master_tokens),
        candidate_tokens=len(candidate_tokens),
        matched=stats.matched,
        missed=stats.missed,
        extraneous=stats.extraneous,
    )
    return AlignmentResult(
        master_token_count=len(master_tokens),
        candidate_token_count=len(candidate_tokens),
        range_pairs=range_pairs,
        spans=spans,
        stats=stats,
    )
