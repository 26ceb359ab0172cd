"""
scanner/fleet.py

FleetScanner — pre-scan + summary for every merchant in a batch, reduced
into fleet-wide statistics.

Design:
  - Each merchant gets ONE evaluation pass shared by its failure list and
    its summary.
  - Merchants are independent, so the map may run on a thread pool
    (workers > 1). Results keep input order either way.
  - Fleet statistics are a pure reduction over the per-merchant results.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from ..config import settings
from ..engine.evaluator import RuleEvaluator
from ..metrics import METRICS
from ..models import MerchantSnapshot
from .models import FailureFrequency, FleetBatchResult, FleetStats, MerchantResult
from .prescan import prioritise
from .summary import summarize_outcomes

logger = logging.getLogger(__name__)


def percent_of(count: int, total: int) -> int:
    """count / total as an integer percentage, rounded half up."""
    if total <= 0:
        return 0
    return (count * 200 + total) // (2 * total)


class FleetScanner:
    def __init__(
        self,
        evaluator: RuleEvaluator,
        workers: int | None = None,
        table_size: int | None = None,
    ) -> None:
        self.evaluator = evaluator
        self.workers = settings.FLEET_SCAN_WORKERS if workers is None else workers
        self.table_size = settings.FAILURE_TABLE_SIZE if table_size is None else table_size

    def scan_merchant(self, snapshot: MerchantSnapshot) -> MerchantResult:
        METRICS.merchants_scanned.inc()
        evaluated = self.evaluator.evaluate_all(snapshot)
        return MerchantResult(
            snapshot=snapshot,
            failures=prioritise(evaluated),
            summary=summarize_outcomes(evaluated),
        )

    def scan_fleet(self, snapshots: Iterable[MerchantSnapshot]) -> FleetBatchResult:
        snapshots = list(snapshots)
        METRICS.fleets_scanned.inc()

        if self.workers > 1 and len(snapshots) > 1:
            with ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="fleet-scan"
            ) as pool:
                results = list(pool.map(self.scan_merchant, snapshots))
        else:
            results = [self.scan_merchant(s) for s in snapshots]

        fleet = self.reduce(results)
        logger.info(
            "Fleet scan — merchants=%d critical=%d failing=%d healthy=%d calls_at_risk=%d",
            fleet.total_merchants,
            fleet.merchants_with_critical,
            fleet.merchants_with_any_failure,
            fleet.healthy_merchants,
            fleet.total_calls_at_risk,
        )
        return FleetBatchResult(merchant_results=results, fleet=fleet)

    def reduce(self, results: list[MerchantResult]) -> FleetStats:
        total = len(results)
        with_critical = sum(1 for r in results if r.summary.has_critical)
        with_failure = sum(1 for r in results if r.summary.failures > 0)

        # Merchants per failure code; insertion order breaks count ties.
        frequency: dict[str, int] = {}
        for result in results:
            codes = dict.fromkeys(e.code for e in result.failures if e.outcome.is_failure)
            for code in codes:
                frequency[code] = frequency.get(code, 0) + 1

        ranked = sorted(frequency.items(), key=lambda kv: -kv[1])[: self.table_size]
        return FleetStats(
            total_merchants=total,
            merchants_with_critical=with_critical,
            merchants_with_any_failure=with_failure,
            healthy_merchants=total - with_failure,
            total_calls_at_risk=sum(r.summary.calls_at_risk for r in results),
            top_failures=[
                FailureFrequency(code=code, count=count, pct=percent_of(count, total))
                for code, count in ranked
            ],
        )
