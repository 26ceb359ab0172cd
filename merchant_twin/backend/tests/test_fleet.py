"""
tests/test_fleet.py

Tests for FleetScanner: per-merchant results, fleet reduction, the failure
frequency table, and serial / threaded equivalence.
"""

from __future__ import annotations

import pytest

from conftest import make_merchant
from merchant_twin.backend.metrics import METRICS
from merchant_twin.backend.scanner import FleetScanner, percent_of


class TestPercentOf:

    @pytest.mark.parametrize("count,total,expected", [
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),   # 12.5 rounds half up
        (1, 200, 1),  # 0.5 rounds half up
        (5, 5, 100),
        (0, 5, 0),
        (0, 0, 0),
    ])
    def test_rounding(self, count, total, expected):
        assert percent_of(count, total) == expected


class TestScanFleet:

    def test_registry_fleet_stats(self, evaluator, registry):
        batch = FleetScanner(evaluator, workers=1).scan_fleet(registry)
        fleet = batch.fleet
        assert fleet.total_merchants == 5
        assert fleet.merchants_with_critical == 2
        assert fleet.merchants_with_any_failure == 3
        assert fleet.healthy_merchants == 2
        assert fleet.total_calls_at_risk == 91815 + 21716 + 76674

    def test_failure_table(self, evaluator, registry):
        fleet = FleetScanner(evaluator, workers=1).scan_fleet(registry).fleet
        rows = [(f.code, f.count, f.pct) for f in fleet.top_failures]
        assert len(rows) == 5
        assert rows[0] == ("KYC_OVERDUE_365", 2, 40)
        # ties keep first-seen order: M002's codes in priority order
        assert [code for code, _, _ in rows[1:]] == [
            "ACC_SUSPENDED", "START_KEY_CORRUPT", "ACC_SUSPENDED_UNLOCK", "PIN_LOCKED_BAL",
        ]
        assert all(pct == 20 for _, count, pct in rows[1:])

    def test_code_counted_once_per_merchant(self, evaluator):
        # ACC_SUSPENDED fires on several rules for one suspended merchant
        fleet = FleetScanner(evaluator).scan_fleet([make_merchant(account_status="suspended")]).fleet
        counts = {f.code: f.count for f in fleet.top_failures}
        assert counts["ACC_SUSPENDED"] == 1

    def test_warnings_not_in_table(self, evaluator):
        fleet = FleetScanner(evaluator).scan_fleet(
            [make_merchant(operator_dormant_days=40)]
        ).fleet
        assert fleet.top_failures == []
        assert fleet.healthy_merchants == 1

    def test_healthy_plus_failing_is_total(self, evaluator, registry):
        fleet = FleetScanner(evaluator).scan_fleet(registry * 3).fleet
        assert fleet.healthy_merchants + fleet.merchants_with_any_failure == fleet.total_merchants

    def test_empty_fleet(self, evaluator):
        batch = FleetScanner(evaluator).scan_fleet([])
        assert batch.merchant_results == []
        assert batch.fleet.total_merchants == 0
        assert batch.fleet.top_failures == []
        assert batch.fleet.total_calls_at_risk == 0

    def test_results_keep_input_order(self, evaluator, registry):
        batch = FleetScanner(evaluator).scan_fleet(registry)
        assert [r.snapshot.id for r in batch.merchant_results] == [
            "M001", "M002", "M003", "M004", "M005",
        ]
        assert batch.merchant_results[1].top_issue == "ACC_SUSPENDED"
        assert batch.merchant_results[0].top_issue is None

    def test_threaded_matches_serial(self, evaluator, registry):
        fleet = registry * 4
        serial = FleetScanner(evaluator, workers=1).scan_fleet(fleet)
        threaded = FleetScanner(evaluator, workers=4).scan_fleet(fleet)
        assert threaded.fleet == serial.fleet
        assert [r.failures for r in threaded.merchant_results] == [
            r.failures for r in serial.merchant_results
        ]

    def test_table_size_configurable(self, evaluator, registry):
        fleet = FleetScanner(evaluator, table_size=2).scan_fleet(registry).fleet
        assert len(fleet.top_failures) == 2

    def test_metrics(self, evaluator, registry):
        FleetScanner(evaluator).scan_fleet(registry)
        assert METRICS.fleets_scanned.value == 1
        assert METRICS.merchants_scanned.value == 5

    def test_to_dict(self, evaluator, registry):
        d = FleetScanner(evaluator).scan_fleet(registry).fleet.to_dict()
        assert d["top_failures"][0] == {"code": "KYC_OVERDUE_365", "count": 2, "pct": 40}
