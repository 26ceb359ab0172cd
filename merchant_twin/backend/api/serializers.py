"""
api/serializers.py

Pydantic request / response models for the REST layer.
Snapshots are accepted as MerchantSnapshot directly; invalid bodies are 422s.
"""

from __future__ import annotations

from pydantic import BaseModel


class RuleMetadataResponse(BaseModel):
    key: str
    label: str
    demand_rank: int
    demand_total: int
    menu_path: str
    ussd_path: str
    description: str


class OutcomeResponse(BaseModel):
    kind: str
    success: bool
    code: str
    severity: str | None = None
    message: str
    reason: str | None = None
    fix: str | None = None
    escalation: str | None = None


class ScanEntryResponse(OutcomeResponse):
    rule_key: str
    label: str
    menu_path: str
    ussd_path: str
    demand_rank: int
    demand_total: int


class SummaryResponse(BaseModel):
    total: int
    passing: int
    warnings: int
    failures: int
    by_severity: dict[str, int]
    calls_at_risk: int


class PropensityResponse(BaseModel):
    score: int
    tier: str
    factors: list[str]


class SensorHealthResponse(BaseModel):
    red: list[str]
    amber: list[str]
    green: list[str]
    score: float
    risk_tier: str


class MerchantScanResponse(BaseModel):
    merchant_id: str
    failures: list[ScanEntryResponse]
    summary: SummaryResponse
    propensity: PropensityResponse
    health: SensorHealthResponse


class FailureFrequencyResponse(BaseModel):
    code: str
    count: int
    pct: int


class FleetStatsResponse(BaseModel):
    total_merchants: int
    merchants_with_critical: int
    merchants_with_any_failure: int
    healthy_merchants: int
    total_calls_at_risk: int
    top_failures: list[FailureFrequencyResponse]


class MerchantDigest(BaseModel):
    merchant_id: str
    failures: int
    warnings: int
    top_issue: str | None = None
    calls_at_risk: int


class FleetScanResponse(BaseModel):
    fleet: FleetStatsResponse
    merchants: list[MerchantDigest]


class EventRequest(BaseModel):
    success: bool
    timestamp: float | None = None


class AnomalyResponse(BaseModel):
    type: str
    severity: str
    z_score: float
    latest_failure_rate_pct: float
    baseline_failure_rate_pct: float
    message: str
    description: str
