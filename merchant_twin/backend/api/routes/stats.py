"""
api/routes/stats.py

GET /api/stats — live engine counters
"""

from __future__ import annotations

from fastapi import APIRouter

from ...metrics import METRICS

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("")
async def get_stats() -> dict[str, int]:
    return METRICS.as_dict()
