"""
backend/metrics.py

Thread-safe counters for the diagnosis engine, exposed at GET /api/stats.
Counters are observational only: no evaluation or scan ever reads them.

Usage:
    from merchant_twin.backend.metrics import METRICS
    METRICS.rules_evaluated.inc()
    print(METRICS.as_dict())
"""

from __future__ import annotations

import threading


class Counter:
    """Monotonic integer counter guarded by its own lock."""

    __slots__ = ("name", "_value", "_lock")

    def __init__(self, name: str) -> None:
        self.name = name
        self._value = 0
        self._lock = threading.Lock()

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:  # pragma: no cover
        return f"Counter({self.name}={self._value})"


# name -> meaning; one Counter attribute per entry, in this order
COUNTERS: dict[str, str] = {
    # Evaluator
    "rules_evaluated":    "Calls to RuleEvaluator.evaluate().",
    "rule_errors":        "Rules that raised and became RULE_ERROR outcomes.",
    "unknown_rules":      "Evaluations requested for a key not in the catalogue.",
    # Scanners
    "merchants_scanned":  "Snapshots run through a full catalogue pass.",
    "fleets_scanned":     "Calls to FleetScanner.scan_fleet().",
    # Analytics
    "anomalies_detected": "FAILURE_RATE_SPIKE anomalies emitted.",
}


class Metrics:
    """Holder for every engine counter; use the METRICS singleton."""

    rules_evaluated: Counter
    rule_errors: Counter
    unknown_rules: Counter
    merchants_scanned: Counter
    fleets_scanned: Counter
    anomalies_detected: Counter

    def __init__(self) -> None:
        for name in COUNTERS:
            setattr(self, name, Counter(name))

    def counters(self) -> list[Counter]:
        return [getattr(self, name) for name in COUNTERS]

    def as_dict(self) -> dict[str, int]:
        """Return all counters as a plain dict (safe for JSON serialisation)."""
        return {c.name: c.value for c in self.counters()}

    def reset_all(self) -> None:
        """Reset every counter to zero (useful in tests)."""
        for c in self.counters():
            c.reset()


METRICS = Metrics()
