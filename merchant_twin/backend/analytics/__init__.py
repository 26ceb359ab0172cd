"""
analytics/__init__.py

Public API for the analytics sub-package.
"""

from .anomaly import FAILURE_RATE_SPIKE, Anomaly, AnomalyDetector, detect_anomalies
from .events import EvaluationEvent
from .health import RiskTier, SensorHealth, risk_tier, sensor_health
from .propensity import (
    DEFAULT_WEIGHTS,
    PROPENSITY_TIERS,
    ContactPropensityScorer,
    ContactTier,
    PropensityScore,
    PropensityWeights,
)

__all__ = [
    "FAILURE_RATE_SPIKE",
    "Anomaly",
    "AnomalyDetector",
    "detect_anomalies",
    "EvaluationEvent",
    "RiskTier",
    "SensorHealth",
    "risk_tier",
    "sensor_health",
    "DEFAULT_WEIGHTS",
    "PROPENSITY_TIERS",
    "ContactPropensityScorer",
    "ContactTier",
    "PropensityScore",
    "PropensityWeights",
]
