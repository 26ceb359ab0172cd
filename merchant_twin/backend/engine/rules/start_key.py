"""
engine/rules/start_key.py

Start Key Reset Rule.

An expired or corrupted start key breaks the payment pipeline outright, so
those are critical and checked before the account or SIM state.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

SWAP_STABILISATION_DAYS = 2


class StartKeyRule(BaseRule):
    key = "START_KEY"
    guards = (
        Guard(
            lambda m: m.start_key_status == "expired",
            lambda m: FailureOutcome(
                "START_KEY_EXPIRED", Severity.CRITICAL,
                "Start key expired - you cannot send or receive any payments.",
                "An expired start key completely breaks the merchant payment pipeline. "
                "Customers cannot pay you.",
                "Request urgent start key renewal via the Safaricom Business portal or "
                "call 100 immediately.",
            ),
        ),
        Guard(
            lambda m: m.start_key_status == "invalid",
            lambda m: FailureOutcome(
                "START_KEY_CORRUPT", Severity.CRITICAL,
                "Start key is corrupted. Customer payments are actively failing.",
                "Key corruption is caused by SIM swap without re-registration, or a "
                "system error. Payments fail silently.",
                "Visit any Safaricom Shop immediately with National ID. Request emergency "
                "start key regeneration.",
            ),
        ),
        Guard(
            lambda m: m.account_status != "active",
            lambda m: FailureOutcome(
                "ACC_NOT_ACTIVE", Severity.HIGH,
                "Start key reset requires an active account.",
                f"Key operations are locked when account is {m.account_status}.",
                "Reactivate the account first, then retry the start key reset.",
            ),
        ),
        Guard(
            lambda m: m.swapped_within(SWAP_STABILISATION_DAYS),
            lambda m: FailureOutcome(
                "SIM_SWAP_KEY_HOLD", Severity.MEDIUM,
                f"Start key reset available in "
                f"{SWAP_STABILISATION_DAYS - m.sim_swap_days_ago} day(s) - SIM swap too recent.",
                "System requires SIM stabilisation before issuing new start key.",
                "Wait 1-2 days after SIM swap, then retry. Or visit Safaricom Shop for "
                "same-day resolution.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Start key reset successful. New key provisioned to {m.phone_number}. "
            "Key activates within 5 minutes. Test a payment to confirm."
        )
