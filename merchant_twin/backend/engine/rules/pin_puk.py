"""
engine/rules/pin_puk.py

PIN / PUK Request Rule.

Changing or resetting the M-PESA Business PIN is blocked by suspension, by a
PIN lockout, and for 7 days after a SIM swap.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

SWAP_HOLD_DAYS = 7


class PinPukRule(BaseRule):
    """Change / reset PIN."""

    key = "PIN_PUK"
    guards = (
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "ACC_SUSPENDED", Severity.CRITICAL,
                "PIN operations are blocked - account is suspended.",
                "Account suspension restricts all authentication and security operations.",
                "Resolve the account suspension first by calling 100 or visiting Safaricom Shop.",
            ),
        ),
        Guard(
            lambda m: m.pin_locked,
            lambda m: FailureOutcome(
                "PIN_LOCKED", Severity.HIGH,
                "Account locked after 3 failed PIN attempts.",
                "Security lockout is triggered automatically after 3 consecutive wrong PINs.",
                "Visit any Safaricom Shop with your National ID for PIN reset. "
                "USSD/App self-service is unavailable after lockout.",
            ),
        ),
        Guard(
            lambda m: m.swapped_within(SWAP_HOLD_DAYS),
            lambda m: FailureOutcome(
                "SIM_SWAP_RECENT", Severity.MEDIUM,
                f"PIN request blocked - SIM swap was {m.sim_swap_days_ago} day(s) ago "
                f"({SWAP_HOLD_DAYS}-day hold).",
                f"A {SWAP_HOLD_DAYS}-day security hold prevents PIN changes immediately "
                "after SIM swap.",
                f"Wait {SWAP_HOLD_DAYS - m.sim_swap_days_ago} more day(s) or visit "
                "Safaricom Shop in person.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"PIN/PUK request initiated. A confirmation SMS will be sent to "
            f"{m.phone_number} within 2 minutes."
        )
