"""
analytics/anomaly.py

AnomalyDetector — flags a spike in the failure rate of the evaluation log.

Algorithm:
  1. Slide a window of `window_size` events over the log, one event at a
     time; the last window ends at the newest event.
  2. Failure rate per window = failures / window_size.
  3. Population mean and standard deviation over all window rates.
  4. z = (latest window rate - mean) / stddev, or 0 when stddev is 0.
  5. z > z_threshold -> one FAILURE_RATE_SPIKE anomaly, critical when
     z > critical_z, else high.

Fewer events than one window is "no signal yet" and returns [], never an
error. Repeated calls are not debounced.
"""

from __future__ import annotations

import logging
import statistics
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..config import settings
from ..engine.models import Severity
from ..metrics import METRICS
from .events import EvaluationEvent, event_succeeded

logger = logging.getLogger(__name__)

FAILURE_RATE_SPIKE = "FAILURE_RATE_SPIKE"


@dataclass(frozen=True, slots=True)
class Anomaly:
    type: str
    severity: Severity
    z_score: float
    latest_failure_rate_pct: float
    baseline_failure_rate_pct: float
    message: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type":                      self.type,
            "severity":                  self.severity.value,
            "z_score":                   self.z_score,
            "latest_failure_rate_pct":   self.latest_failure_rate_pct,
            "baseline_failure_rate_pct": self.baseline_failure_rate_pct,
            "message":                   self.message,
            "description":               self.description,
        }


class AnomalyDetector:
    def __init__(
        self,
        window_size: int | None = None,
        z_threshold: float | None = None,
        critical_z: float | None = None,
    ) -> None:
        self.window_size = settings.ANOMALY_WINDOW_SIZE if window_size is None else window_size
        self.z_threshold = settings.ANOMALY_Z_THRESHOLD if z_threshold is None else z_threshold
        self.critical_z = settings.ANOMALY_CRITICAL_Z if critical_z is None else critical_z

    def window_failure_counts(
        self, event_log: Sequence[EvaluationEvent | Mapping[str, Any]]
    ) -> list[int]:
        """Failures in each sliding window, oldest window first."""
        size = self.window_size
        failed = [0 if event_succeeded(e) else 1 for e in event_log]
        if len(failed) < size:
            return []
        running = sum(failed[:size])
        counts = [running]
        for i in range(size, len(failed)):
            running += failed[i] - failed[i - size]
            counts.append(running)
        return counts

    def z_score(self, counts: Sequence[int]) -> float:
        # Integer counts keep pstdev exact, so identical windows give exactly 0.
        stddev = statistics.pstdev(counts)
        if stddev == 0:
            return 0.0
        return (counts[-1] - statistics.fmean(counts)) / stddev

    def detect(
        self, event_log: Sequence[EvaluationEvent | Mapping[str, Any]]
    ) -> list[Anomaly]:
        counts = self.window_failure_counts(event_log)
        if not counts:
            return []

        z = self.z_score(counts)
        if z <= self.z_threshold:
            return []

        latest_pct = counts[-1] * 100 / self.window_size
        baseline_pct = statistics.fmean(counts) * 100 / self.window_size
        severity = Severity.CRITICAL if z > self.critical_z else Severity.HIGH
        anomaly = Anomaly(
            type=FAILURE_RATE_SPIKE,
            severity=severity,
            z_score=round(z, 2),
            latest_failure_rate_pct=round(latest_pct, 1),
            baseline_failure_rate_pct=round(baseline_pct, 1),
            message=(
                f"Failure rate anomaly detected - {latest_pct:.0f}% vs baseline "
                f"{baseline_pct:.0f}%"
            ),
            description=(
                f"Z-score of {z:.2f} indicates a statistically significant spike in "
                "failures across the fleet."
            ),
        )
        METRICS.anomalies_detected.inc()
        logger.warning(
            "ANOMALY [%s] %s z=%.2f windows=%d",
            severity.value, FAILURE_RATE_SPIKE, z, len(counts),
        )
        return [anomaly]


def detect_anomalies(
    event_log: Sequence[EvaluationEvent | Mapping[str, Any]],
) -> list[Anomaly]:
    """Run an AnomalyDetector with the configured defaults."""
    return AnomalyDetector().detect(event_log)
