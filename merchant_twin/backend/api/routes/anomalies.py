"""
api/routes/anomalies.py

POST /api/anomalies — failure-rate spike detection over a caller-owned
evaluation log, oldest event first
"""

from __future__ import annotations

from fastapi import APIRouter

from ...analytics import EvaluationEvent, detect_anomalies
from ..serializers import AnomalyResponse, EventRequest

router = APIRouter(prefix="/anomalies", tags=["anomalies"])


@router.post("", response_model=list[AnomalyResponse])
async def find_anomalies(events: list[EventRequest]) -> list[AnomalyResponse]:
    log = [EvaluationEvent(success=e.success, timestamp=e.timestamp) for e in events]
    return [AnomalyResponse(**a.to_dict()) for a in detect_anomalies(log)]
