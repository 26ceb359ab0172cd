"""
analytics/propensity.py

ContactPropensityScorer — a static additive point model estimating (0-100)
how likely a merchant is to contact support within about a week.

Each condition that holds adds its points and a factor line. Conditions are
independent and evaluated in a fixed order so the factor list reads the
same every time; within one group (e.g. dormancy bands) only the most
severe band fires. The total is capped at `max_score`.

Weights and thresholds are data (PropensityWeights, PROPENSITY_TIERS). There
is no training or calibration step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..models import MerchantSnapshot


class ContactTier(str, Enum):
    VERY_HIGH = "VERY HIGH"
    HIGH      = "HIGH"
    MEDIUM    = "MEDIUM"
    LOW       = "LOW"


# (minimum score, tier), highest first; anything below is LOW
PROPENSITY_TIERS: tuple[tuple[int, ContactTier], ...] = (
    (70, ContactTier.VERY_HIGH),
    (50, ContactTier.HIGH),
    (30, ContactTier.MEDIUM),
)


@dataclass(frozen=True)
class PropensityWeights:
    """Point values. Banded groups are (threshold, points), most severe first."""

    account_suspended: int = 30
    account_frozen: int = 35

    kyc_expired: int = 25
    kyc_aging_bands: tuple[tuple[int, int], ...] = ((300, 15), (240, 8))
    """kyc_age_days strictly greater than threshold."""

    pin_locked: int = 20
    pin_near_lock_attempts: int = 2
    pin_near_lock: int = 12

    sim_swap_bands: tuple[tuple[int, int], ...] = ((7, 18), (30, 10))
    """Days since swap strictly less than threshold."""

    start_key_expired: int = 22
    start_key_invalid: int = 18

    dormancy_bands: tuple[tuple[int, int], ...] = ((60, 20), (45, 12), (30, 6))
    """dormant_days at or above threshold."""

    notifications_off: int = 8
    settlement_on_hold: int = 10

    operator_dormant_days: int = 60
    operator_dormant: int = 10

    max_score: int = 100


DEFAULT_WEIGHTS = PropensityWeights()


@dataclass(frozen=True, slots=True)
class PropensityScore:
    score: int
    tier: ContactTier
    factors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "tier": self.tier.value, "factors": list(self.factors)}


def tier_for(score: int) -> ContactTier:
    for minimum, tier in PROPENSITY_TIERS:
        if score >= minimum:
            return tier
    return ContactTier.LOW


class ContactPropensityScorer:
    def __init__(self, weights: PropensityWeights = DEFAULT_WEIGHTS) -> None:
        self.weights = weights

    def score(self, m: MerchantSnapshot) -> PropensityScore:
        w = self.weights
        total = 0
        factors: list[str] = []

        def add(points: int, label: str) -> None:
            nonlocal total
            total += points
            factors.append(f"{label} (+{points})")

        # Account status
        if m.account_status == "suspended":
            add(w.account_suspended, "Account suspended")
        elif m.account_status == "frozen":
            add(w.account_frozen, "Account frozen")

        # KYC proximity to expiry
        if m.kyc_status == "expired":
            add(w.kyc_expired, "KYC expired")
        else:
            for threshold, points in w.kyc_aging_bands:
                if m.kyc_age_days > threshold:
                    add(points, f"KYC aging {m.kyc_age_days}d")
                    break

        # PIN proximity to lockout
        if m.pin_locked:
            add(w.pin_locked, "PIN locked")
        elif m.pin_attempts == w.pin_near_lock_attempts:
            add(w.pin_near_lock, f"{m.pin_attempts} PIN attempts")

        # SIM swap recency; an unknown swap age counts as today
        if m.sim_status == "swapped":
            days_ago = m.sim_swap_days_ago or 0
            for threshold, points in w.sim_swap_bands:
                if days_ago < threshold:
                    add(points, f"SIM swap {days_ago}d ago")
                    break

        # Start key
        if m.start_key_status == "expired":
            add(w.start_key_expired, "Start key expired")
        elif m.start_key_status == "invalid":
            add(w.start_key_invalid, "Start key invalid")

        # Dormancy
        for threshold, points in w.dormancy_bands:
            if m.dormant_days >= threshold:
                add(points, f"Dormant {m.dormant_days}d")
                break

        if not m.notifications_enabled:
            add(w.notifications_off, "Notifications off")

        if m.settlement_on_hold:
            add(w.settlement_on_hold, "Settlement on hold")

        if m.operator_dormant_days >= w.operator_dormant_days:
            add(w.operator_dormant, f"Operator dormant {m.operator_dormant_days}d")

        capped = max(0, min(total, w.max_score))
        return PropensityScore(score=capped, tier=tier_for(capped), factors=factors)
