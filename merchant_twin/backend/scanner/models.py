"""
scanner/models.py

Result types produced by the scanners. All are derived values: computed on
demand, never cached, never persisted.

ScanEntry        — one non-success outcome enriched with its rule metadata
MerchantSummary  — pass / warn / fail counts for one merchant
MerchantResult   — (snapshot, prioritised failures, summary) for one merchant
FailureFrequency — one row of the fleet failure-code table
FleetStats       — fleet-wide reduction over MerchantSummary values
FleetBatchResult — per-merchant results plus FleetStats
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..engine.metadata import RuleMetadata
from ..engine.models import Outcome, Severity
from ..models import MerchantSnapshot


# ---------------------------------------------------------------------------
# ScanEntry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScanEntry:
    rule_key: str
    metadata: RuleMetadata
    outcome: Outcome

    @property
    def code(self) -> str:
        return self.outcome.code

    @property
    def severity(self) -> Severity | None:
        return self.outcome.severity

    @property
    def priority_rank(self) -> int:
        """Severity rank used for ordering; warnings rank 0, after every failure."""
        if not self.outcome.is_failure:
            return 0
        return self.outcome.severity.rank

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_key":     self.rule_key,
            "label":        self.metadata.label,
            "menu_path":    self.metadata.menu_path,
            "ussd_path":    self.metadata.ussd_path,
            "demand_rank":  self.metadata.demand_rank,
            "demand_total": self.metadata.demand_total,
            **self.outcome.to_dict(),
        }

    def __repr__(self) -> str:
        sev = self.severity.value if self.severity else "-"
        return f"ScanEntry({self.rule_key!r} {self.code} {sev})"


# ---------------------------------------------------------------------------
# MerchantSummary
# ---------------------------------------------------------------------------

def empty_histogram() -> dict[str, int]:
    return {s.value: 0 for s in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW)}


@dataclass(frozen=True, slots=True)
class MerchantSummary:
    total: int
    passing: int
    warnings: int
    failures: int
    by_severity: dict[str, int] = field(default_factory=empty_histogram)
    """Histogram over hard failures only; warnings are never counted here."""

    calls_at_risk: int = 0
    """Sum of demand_total over the currently failing rules."""

    @property
    def has_critical(self) -> bool:
        return self.by_severity.get(Severity.CRITICAL.value, 0) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total":         self.total,
            "passing":       self.passing,
            "warnings":      self.warnings,
            "failures":      self.failures,
            "by_severity":   dict(self.by_severity),
            "calls_at_risk": self.calls_at_risk,
        }


# ---------------------------------------------------------------------------
# Fleet
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MerchantResult:
    snapshot: MerchantSnapshot
    failures: list[ScanEntry]
    summary: MerchantSummary

    @property
    def top_issue(self) -> str | None:
        return self.failures[0].code if self.failures else None


@dataclass(frozen=True, slots=True)
class FailureFrequency:
    code: str
    count: int
    """Merchants exhibiting this failure code at least once."""

    pct: int
    """Share of the whole fleet affected, rounded half up."""


@dataclass(frozen=True, slots=True)
class FleetStats:
    total_merchants: int
    merchants_with_critical: int
    merchants_with_any_failure: int
    healthy_merchants: int
    total_calls_at_risk: int
    top_failures: list[FailureFrequency]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_merchants":            self.total_merchants,
            "merchants_with_critical":    self.merchants_with_critical,
            "merchants_with_any_failure": self.merchants_with_any_failure,
            "healthy_merchants":          self.healthy_merchants,
            "total_calls_at_risk":        self.total_calls_at_risk,
            "top_failures": [
                {"code": f.code, "count": f.count, "pct": f.pct}
                for f in self.top_failures
            ],
        }


@dataclass(frozen=True, slots=True)
class FleetBatchResult:
    merchant_results: list[MerchantResult]
    fleet: FleetStats
