"""
One-shot alignment endpoint for the Memoria dictation service.

Evaluates a complete candidate text against a master text without a
streaming session.
"""

from __future__ import annotations

from fastapi import APIRouter

from memoria_common.config import get_settings
from memoria_common.metrics import evaluation_duration_seconds, evaluations_total

from alignment import evaluate, to_markup, to_plain_text

from dictation.schemas import AlignRequest, AlignResponse

router = APIRouter(tags=["alignment"])


@router.post("/align", response_model=AlignResponse)
async def align_texts(body: AlignRequest) -> AlignResponse:
    """Align *candidate_text* against *master_text*.

    An empty candidate is not evaluated and yields ``skipped=True``.
    """
    if not body.candidate_text:
        evaluations_total.labels(outcome="skipped").inc()
        return AlignResponse(skipped=True)

    settings = get_settings()
    with evaluation_duration_seconds.time():
        result = evaluate(body.master_text, body.candidate_text, settings.thresholds)
    if result is None:
        return AlignResponse(skipped=True)

    evaluations_total.labels(outcome="evaluated").inc()
    return AlignResponse(
        skipped=False,
        result=result,
        plain_text=to_plain_text(result.spans),
        markup=to_markup(result.spans),
    )
