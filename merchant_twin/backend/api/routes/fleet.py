"""
api/routes/fleet.py

POST /api/fleet/scan — batch scan with fleet statistics and one digest
line per merchant
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...engine.evaluator import RuleEvaluator
from ...models import MerchantSnapshot
from ...scanner import FleetScanner
from ..serializers import FleetScanResponse, FleetStatsResponse, MerchantDigest

router = APIRouter(prefix="/fleet", tags=["fleet"])


def _get_evaluator() -> RuleEvaluator:
    from ..main import get_evaluator
    return get_evaluator()


@router.post("/scan", response_model=FleetScanResponse)
async def scan_fleet(
    snapshots: list[MerchantSnapshot],
    evaluator: RuleEvaluator = Depends(_get_evaluator),
) -> FleetScanResponse:
    batch = FleetScanner(evaluator).scan_fleet(snapshots)
    return FleetScanResponse(
        fleet=FleetStatsResponse(**batch.fleet.to_dict()),
        merchants=[
            MerchantDigest(
                merchant_id=r.snapshot.id,
                failures=r.summary.failures,
                warnings=r.summary.warnings,
                top_issue=r.top_issue,
                calls_at_risk=r.summary.calls_at_risk,
            )
            for r in batch.merchant_results
        ],
    )
