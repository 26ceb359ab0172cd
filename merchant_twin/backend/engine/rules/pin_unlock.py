"""
engine/rules/pin_unlock.py

PIN Unlock Rule.

An unlocked PIN needs no unlock, so that success guard comes first and
short-circuits every other check.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

SWAP_HOLD_DAYS = 7


class PinUnlockRule(BaseRule):
    key = "PIN_UNLOCK"
    guards = (
        Guard(
            lambda m: not m.pin_locked,
            lambda m: SuccessOutcome(
                f"PIN is not locked. Current failed attempts: {m.pin_attempts}/3. "
                "No unlock needed."
            ),
        ),
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "ACC_SUSPENDED_UNLOCK", Severity.CRITICAL,
                "Cannot unlock PIN - account is suspended.",
                "Account suspension blocks all authentication management including PIN unlock.",
                "Resolve the suspension first (call 100), then proceed with PIN unlock.",
            ),
        ),
        Guard(
            lambda m: m.kyc_status == "expired",
            lambda m: FailureOutcome(
                "KYC_EXPIRED_UNLOCK", Severity.HIGH,
                "PIN unlock requires valid KYC. Your KYC has expired.",
                "Identity verification for PIN unlock fails when KYC is expired.",
                "Renew KYC at Safaricom Shop, then return for PIN unlock via OTP.",
            ),
        ),
        Guard(
            lambda m: m.swapped_within(SWAP_HOLD_DAYS),
            lambda m: FailureOutcome(
                "SIM_SWAP_PIN_UNLOCK", Severity.MEDIUM,
                f"PIN unlock blocked - SIM swap too recent ({m.sim_swap_days_ago} day(s) ago).",
                f"OTP for PIN unlock cannot be sent to a new SIM within {SWAP_HOLD_DAYS} "
                "days of swap.",
                f"Wait {SWAP_HOLD_DAYS - m.sim_swap_days_ago} more day(s), or visit "
                "Safaricom Shop in person for immediate unlock.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"PIN unlock OTP sent to {m.phone_number}. Enter the code within 5 minutes "
            "to complete unlock. Your PIN will reset to a new value."
        )
