"""
engine/rules/balance.py

Balance Enquiry Rule.
"""

from __future__ import annotations

from ...models import MerchantSnapshot, format_kes
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard


class BalanceRule(BaseRule):
    key = "BALANCE"
    guards = (
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "ACC_FROZEN_BAL", Severity.MEDIUM,
                "Balance display restricted - account is frozen.",
                "Frozen accounts have read-limited access. Balance cannot be confirmed "
                "via self-service.",
                "Contact 0722 000 100 for a balance confirmation from a Safaricom agent.",
            ),
        ),
        Guard(
            lambda m: m.pin_locked,
            lambda m: FailureOutcome(
                "PIN_LOCKED_BAL", Severity.HIGH,
                "Balance enquiry unavailable - PIN is locked.",
                "PIN lockout restricts all authenticated account actions including "
                "balance checks.",
                "Reset PIN at any Safaricom Shop with National ID, then retry balance enquiry.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Available Balance: {format_kes(m.balance)} | Paybill: {m.paybill} | "
            f"Last activity: {m.dormant_days} day(s) ago."
        )
