"""
engine/rules/sim_swap.py

SIM Swap Rule.

A replacement SIM needs an account that is neither frozen nor suspended,
valid (and not under review) KYC, and an unlocked PIN to authenticate.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

KYC_VALIDITY_DAYS = 365


class SimSwapRule(BaseRule):
    key = "SIM_SWAP"
    guards = (
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "ACC_FROZEN", Severity.CRITICAL,
                "SIM swap not permitted - account is frozen.",
                "Frozen accounts cannot process identity changes until the freeze is lifted.",
                "Request account unfreeze via 0722 000 100, then retry SIM swap.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "ACC_SUSPENDED", Severity.CRITICAL,
                "SIM swap blocked - account is suspended.",
                "Suspended accounts cannot initiate SIM swaps.",
                "Resolve the suspension first by calling 100 or visiting Safaricom Shop.",
            ),
        ),
        Guard(
            lambda m: m.kyc_status == "expired",
            lambda m: FailureOutcome(
                "KYC_EXPIRED", Severity.HIGH,
                f"SIM swap requires valid KYC. Yours expired "
                f"{m.kyc_age_days - KYC_VALIDITY_DAYS} day(s) ago.",
                "CBK regulatory requirement: valid KYC must be on file for SIM swap.",
                "Renew KYC at any Safaricom Shop before proceeding with SIM swap.",
            ),
        ),
        Guard(
            lambda m: m.kyc_status == "pending",
            lambda m: FailureOutcome(
                "KYC_PENDING", Severity.MEDIUM,
                "SIM swap on hold - KYC review is still in progress.",
                "Cannot process SIM swap while KYC is actively under review.",
                "Wait 24-48hrs for KYC approval, or visit Safaricom Shop to expedite review.",
            ),
        ),
        Guard(
            lambda m: m.pin_locked,
            lambda m: FailureOutcome(
                "PIN_LOCKED", Severity.HIGH,
                "Cannot process SIM swap - PIN is locked.",
                "A valid PIN is required to authenticate the SIM swap request.",
                "Reset PIN at Safaricom Shop first, then retry SIM swap.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            "SIM swap initiated. Present your National ID at any Safaricom Shop. "
            f"Reference: SWP-{m.paybill}. Processing takes 2-4 hours."
        )
