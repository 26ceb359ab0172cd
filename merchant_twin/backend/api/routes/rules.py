"""
api/routes/rules.py

GET /api/rules — the rule catalogue with demand metadata, demand order
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...engine.evaluator import RuleEvaluator
from ..serializers import RuleMetadataResponse

router = APIRouter(prefix="/rules", tags=["rules"])


def _get_evaluator() -> RuleEvaluator:
    from ..main import get_evaluator
    return get_evaluator()


@router.get("", response_model=list[RuleMetadataResponse])
async def list_rules(
    evaluator: RuleEvaluator = Depends(_get_evaluator),
) -> list[RuleMetadataResponse]:
    return [
        RuleMetadataResponse(key=key, **meta.to_dict())
        for key, meta in evaluator.catalogue.metadata().items()
    ]
