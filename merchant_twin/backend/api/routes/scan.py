"""
api/routes/scan.py

POST /api/scan — full diagnosis of one merchant: prioritised failures,
summary, contact propensity and sensor health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...analytics import ContactPropensityScorer, risk_tier, sensor_health
from ...engine.evaluator import RuleEvaluator
from ...models import MerchantSnapshot
from ...scanner import FleetScanner
from ..serializers import (
    MerchantScanResponse,
    PropensityResponse,
    ScanEntryResponse,
    SensorHealthResponse,
    SummaryResponse,
)

router = APIRouter(prefix="/scan", tags=["scan"])

_scorer = ContactPropensityScorer()


def _get_evaluator() -> RuleEvaluator:
    from ..main import get_evaluator
    return get_evaluator()


@router.post("", response_model=MerchantScanResponse)
async def scan_merchant(
    snapshot: MerchantSnapshot,
    evaluator: RuleEvaluator = Depends(_get_evaluator),
) -> MerchantScanResponse:
    result = FleetScanner(evaluator).scan_merchant(snapshot)
    health = sensor_health(snapshot)
    return MerchantScanResponse(
        merchant_id=snapshot.id,
        failures=[ScanEntryResponse(**e.to_dict()) for e in result.failures],
        summary=SummaryResponse(**result.summary.to_dict()),
        propensity=PropensityResponse(**_scorer.score(snapshot).to_dict()),
        health=SensorHealthResponse(
            **health.to_dict(),
            risk_tier=risk_tier(snapshot, health).value,
        ),
    )
