"""
api/routes/evaluate.py

POST /api/evaluate/{rule_key} — evaluate one action against a snapshot
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...engine.evaluator import RuleEvaluator
from ...models import MerchantSnapshot
from ..serializers import OutcomeResponse

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


def _get_evaluator() -> RuleEvaluator:
    from ..main import get_evaluator
    return get_evaluator()


@router.post("/{rule_key}", response_model=OutcomeResponse)
async def evaluate_rule(
    rule_key: str,
    snapshot: MerchantSnapshot,
    evaluator: RuleEvaluator = Depends(_get_evaluator),
) -> OutcomeResponse:
    """Unknown keys follow the evaluator's lenient / strict setting, never a 404."""
    outcome = evaluator.evaluate(snapshot, rule_key)
    return OutcomeResponse(**outcome.to_dict())
