"""
analytics/health.py

Sensor health — a red / amber / green reading of each monitored sensor,
and the coarse merchant risk tier derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..models import MerchantSnapshot


class RiskTier(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH     = "HIGH"
    MEDIUM   = "MEDIUM"
    HEALTHY  = "HEALTHY"


@dataclass(slots=True)
class SensorHealth:
    red: list[str] = field(default_factory=list)
    amber: list[str] = field(default_factory=list)
    green: list[str] = field(default_factory=list)

    @property
    def score(self) -> float:
        """Share of sensors reading green."""
        total = len(self.red) + len(self.amber) + len(self.green)
        return len(self.green) / total if total else 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "red": list(self.red),
            "amber": list(self.amber),
            "green": list(self.green),
            "score": round(self.score, 3),
        }


def sensor_health(m: MerchantSnapshot) -> SensorHealth:
    h = SensorHealth()

    (h.green if m.account_status == "active" else h.red).append("account_status")

    if m.kyc_status == "expired":
        h.red.append("kyc_status")
    elif m.kyc_status == "pending":
        h.amber.append("kyc_status")
    else:
        h.green.append("kyc_status")

    if m.pin_locked:
        h.red.append("pin_locked")
    elif m.pin_attempts >= 2:
        h.amber.append("pin_attempts")
    else:
        h.green.append("pin_attempts")

    (h.green if m.start_key_status == "valid" else h.red).append("start_key_status")

    if m.sim_status == "unregistered":
        h.red.append("sim_status")
    elif m.sim_status == "swapped":
        h.amber.append("sim_status")
    else:
        h.green.append("sim_status")

    if m.dormant_days >= 60:
        h.red.append("dormant_days")
    elif m.dormant_days >= 30:
        h.amber.append("dormant_days")
    else:
        h.green.append("dormant_days")

    (h.green if m.notifications_enabled else h.amber).append("notifications")
    (h.red if m.settlement_on_hold else h.green).append("settlement_on_hold")

    if m.operator_dormant_days >= 90:
        h.red.append("operator_dormant")
    elif m.operator_dormant_days >= 60:
        h.amber.append("operator_dormant")
    else:
        h.green.append("operator_dormant")

    return h


def risk_tier(m: MerchantSnapshot, health: SensorHealth | None = None) -> RiskTier:
    h = health or sensor_health(m)
    if len(h.red) >= 3 or m.account_status == "frozen":
        return RiskTier.CRITICAL
    if h.red or len(h.amber) >= 3:
        return RiskTier.HIGH
    if h.amber:
        return RiskTier.MEDIUM
    return RiskTier.HEALTHY
