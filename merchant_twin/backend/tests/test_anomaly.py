"""
tests/test_anomaly.py

Tests for the failure-rate anomaly detector and evaluation events.
"""

from __future__ import annotations

from merchant_twin.backend.analytics import (
    FAILURE_RATE_SPIKE,
    AnomalyDetector,
    EvaluationEvent,
    detect_anomalies,
)
from merchant_twin.backend.engine import FailureOutcome, Severity, SuccessOutcome, WarningOutcome
from merchant_twin.backend.metrics import METRICS


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_log(pattern: str) -> list[EvaluationEvent]:
    """'.' = success, 'x' = failure, oldest first."""
    return [EvaluationEvent(success=(c == "."), timestamp=float(i)) for i, c in enumerate(pattern)]


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEvaluationEvent:

    def test_failure_is_unsuccessful(self):
        outcome = FailureOutcome("ACC_FROZEN", Severity.CRITICAL, "m", "r", "f")
        e = EvaluationEvent.from_outcome(outcome, merchant_id="M004", rule_key="SETTLE_FUNDS")
        assert e.success is False
        assert e.code == "ACC_FROZEN"
        assert e.severity == "critical"
        assert e.timestamp is not None

    def test_warning_counts_as_success(self):
        outcome = WarningOutcome("NOTIF_OFF", Severity.LOW, "m", "r", "f")
        assert EvaluationEvent.from_outcome(outcome, timestamp=1.0).success is True

    def test_success(self):
        e = EvaluationEvent.from_outcome(SuccessOutcome("done"), timestamp=5.0)
        assert e.success is True
        assert e.severity is None
        assert e.timestamp == 5.0


# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------

class TestInsufficientData:

    def test_empty_log(self):
        assert detect_anomalies([]) == []

    def test_fewer_than_one_window(self):
        assert detect_anomalies(make_log("x" * 9)) == []

    def test_single_window_has_no_spread(self):
        assert detect_anomalies(make_log("x" * 10)) == []

    def test_identical_windows(self):
        assert detect_anomalies(make_log(".x" * 30)) == []


class TestSpikes:

    def test_high_spike(self):
        anomalies = detect_anomalies(make_log("." * 20 + "x" * 10))
        assert len(anomalies) == 1
        a = anomalies[0]
        assert a.type == FAILURE_RATE_SPIKE
        assert a.severity is Severity.HIGH
        assert a.z_score == 2.18
        assert a.latest_failure_rate_pct == 100.0
        assert a.baseline_failure_rate_pct == 26.2
        assert "100%" in a.message

    def test_critical_spike(self):
        anomalies = detect_anomalies(make_log("." * 40 + "x" * 5))
        assert len(anomalies) == 1
        assert anomalies[0].severity is Severity.CRITICAL
        assert anomalies[0].z_score > 2.5

    def test_recovery_is_not_a_spike(self):
        assert detect_anomalies(make_log("x" * 20 + "." * 10)) == []

    def test_accepts_plain_mappings(self):
        log = [{"success": True}] * 20 + [{"success": False}] * 10
        assert len(detect_anomalies(log)) == 1

    def test_thresholds_configurable(self):
        log = make_log("." * 20 + "x" * 10)
        assert AnomalyDetector(z_threshold=3.0).detect(log) == []
        assert AnomalyDetector(critical_z=2.0).detect(log)[0].severity is Severity.CRITICAL

    def test_window_size_configurable(self):
        detector = AnomalyDetector(window_size=5)
        assert detector.window_failure_counts(make_log("....xx")) == [1, 2]
        assert detector.window_failure_counts(make_log("....")) == []

    def test_anomaly_counted(self):
        detect_anomalies(make_log("." * 20 + "x" * 10))
        assert METRICS.anomalies_detected.value == 1

    def test_to_dict(self):
        d = detect_anomalies(make_log("." * 20 + "x" * 10))[0].to_dict()
        assert d["type"] == FAILURE_RATE_SPIKE
        assert d["severity"] == "high"


class TestWindowCounts:

    def test_sliding_counts(self):
        counts = AnomalyDetector(window_size=10).window_failure_counts(make_log("." * 20 + "x" * 10))
        assert counts == [0] * 11 + list(range(1, 11))

    def test_zero_stddev(self):
        assert AnomalyDetector().z_score([3, 3, 3]) == 0.0
