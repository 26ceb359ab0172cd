"""
engine/rules/settle_funds.py

Settlement of Funds Rule — the single largest contact-centre driver.

A merchant withdraws the accumulated paybill balance to their bank. Blocked,
in this order, by: suspension, freeze, a manual settlement hold, expired KYC,
the 30-day post-SIM-swap fraud hold, and an empty balance.
"""

from __future__ import annotations

from ...models import MerchantSnapshot, format_kes
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

SWAP_HOLD_DAYS = 30


def _swap_hold(m: MerchantSnapshot) -> FailureOutcome:
    remaining = SWAP_HOLD_DAYS - m.sim_swap_days_ago
    return FailureOutcome(
        "SIM_SWAP_HOLD", Severity.MEDIUM,
        f"Settlement locked for {remaining} more day(s) after SIM swap.",
        f"A {SWAP_HOLD_DAYS}-day fraud prevention hold applies after every SIM swap event.",
        f"Wait {remaining} day(s) or visit Safaricom Shop with original ID to request early lift.",
    )


class SettleFundsRule(BaseRule):
    """Withdraw / settle the paybill balance."""

    key = "SETTLE_FUNDS"
    guards = (
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "ACC_SUSPENDED", Severity.CRITICAL,
                "Your account is suspended. Settlement is blocked.",
                "Account suspension prevents all fund disbursements until resolved.",
                "Visit the nearest Safaricom Shop or call 100 with your National ID "
                "to resolve the suspension.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "ACC_FROZEN", Severity.CRITICAL,
                "Account frozen - settlement on hold pending compliance review.",
                "A compliance hold prevents outflows. This is triggered by regulatory "
                "review or KYC overdue >365 days.",
                "Contact Safaricom Business Compliance on 0722 000 100 to initiate "
                "account unfreeze.",
            ),
        ),
        Guard(
            lambda m: m.settlement_on_hold,
            lambda m: FailureOutcome(
                "SETTLE_HOLD", Severity.HIGH,
                f"Settlement is manually on hold for your paybill {m.paybill}.",
                "A settlement hold has been applied, often after a dispute or fraud "
                "investigation.",
                f"Call 100 and reference your paybill {m.paybill} to request hold removal.",
            ),
        ),
        Guard(
            lambda m: m.kyc_status == "expired",
            lambda m: FailureOutcome(
                "KYC_EXPIRED", Severity.HIGH,
                "Settlement blocked - your KYC documents have expired.",
                "CBK regulations require valid KYC for all fund settlements. "
                f"Your KYC is {m.kyc_age_days} days old.",
                "Update KYC at any Safaricom Shop. Bring: National ID + business certificate.",
            ),
        ),
        Guard(lambda m: m.swapped_within(SWAP_HOLD_DAYS), _swap_hold),
        Guard(
            lambda m: m.balance <= 0,
            lambda m: FailureOutcome(
                "ZERO_BALANCE", Severity.HIGH,
                "No balance available to settle.",
                "Your paybill has zero or negative balance - nothing to disburse.",
                "Accept customer payments to accumulate balance, then initiate settlement.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Settlement of {format_kes(m.balance)} processed to {m.bank_account_name} "
            f"({m.bank}). Funds arrive within 24 working hours."
        )
