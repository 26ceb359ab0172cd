"""
scanner/summary.py

Per-merchant aggregation: pass / warn / fail counts, a severity histogram
over hard failures, and the calls-at-risk estimate.

Calls at risk is the support volume that would be avoided if the merchant's
current failures were fixed: the sum of demand_total over the failing rule
keys, each key counted once.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..engine.catalogue import CatalogueEntry
from ..engine.evaluator import RuleEvaluator
from ..engine.models import FailureOutcome, Outcome, SuccessOutcome, WarningOutcome
from ..models import MerchantSnapshot
from .models import MerchantSummary, empty_histogram


def summarize_outcomes(evaluated: Iterable[tuple[CatalogueEntry, Outcome]]) -> MerchantSummary:
    total = passing = warnings = 0
    failing: dict[str, CatalogueEntry] = {}
    histogram = empty_histogram()

    for entry, outcome in evaluated:
        total += 1
        if isinstance(outcome, SuccessOutcome):
            passing += 1
        elif isinstance(outcome, WarningOutcome):
            warnings += 1
        elif isinstance(outcome, FailureOutcome):
            if entry.key in failing:
                continue
            failing[entry.key] = entry
            histogram[outcome.severity.value] += 1

    return MerchantSummary(
        total=total,
        passing=passing,
        warnings=warnings,
        failures=len(failing),
        by_severity=histogram,
        calls_at_risk=sum(e.metadata.demand_total for e in failing.values()),
    )


class MerchantAggregator:
    def __init__(self, evaluator: RuleEvaluator) -> None:
        self.evaluator = evaluator

    def summarize(self, snapshot: MerchantSnapshot) -> MerchantSummary:
        return summarize_outcomes(self.evaluator.evaluate_all(snapshot))
