"""
engine/rules/account_status.py

Account Status & Issues Rule.

Unlike the other rules, the chain opens with a success guard: a fully
healthy account (active, recently transacting, KYC verified) passes
immediately. Otherwise KYC overdue beats dormancy, and dormancy is checked
from the 90-day threshold down, before the lifecycle status itself.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

KYC_VALIDITY_DAYS = 365
FULL_DORMANCY_DAYS = 90
DORMANCY_SUSPEND_DAYS = 60
ACTIVE_WINDOW_DAYS = 30


def _is_healthy(m: MerchantSnapshot) -> bool:
    return (
        m.account_status == "active"
        and m.dormant_days < ACTIVE_WINDOW_DAYS
        and m.kyc_status == "verified"
    )


class AccountStatusRule(BaseRule):
    key = "ACCOUNT_STATUS"
    guards = (
        Guard(
            _is_healthy,
            lambda m: SuccessOutcome(
                f"Account is fully active. KYC: VERIFIED. Last activity: "
                f"{m.dormant_days} day(s) ago. All services operational."
            ),
        ),
        Guard(
            lambda m: m.kyc_age_days > KYC_VALIDITY_DAYS,
            lambda m: FailureOutcome(
                "KYC_OVERDUE_365", Severity.CRITICAL,
                f"Account frozen - KYC overdue by {m.kyc_age_days - KYC_VALIDITY_DAYS} day(s).",
                "Accounts with KYC older than 1 year are automatically frozen per "
                "Safaricom compliance policy.",
                "Renew KYC immediately at any Safaricom Shop. Bring: National ID, "
                "Business Certificate, KRA PIN.",
            ),
        ),
        Guard(
            lambda m: m.dormant_days >= FULL_DORMANCY_DAYS,
            lambda m: FailureOutcome(
                "FULLY_DORMANT", Severity.CRITICAL,
                f"Account suspended - no transactions in {m.dormant_days} days.",
                f"Accounts with no activity for {FULL_DORMANCY_DAYS}+ days are "
                "automatically suspended by the dormancy system.",
                "Visit Safaricom Shop or call 100 to reactivate. A transaction history "
                "review will be required.",
            ),
        ),
        Guard(
            lambda m: m.dormant_days >= DORMANCY_SUSPEND_DAYS,
            lambda m: FailureOutcome(
                "DORMANT_60", Severity.HIGH,
                f"Account suspended - inactive for {m.dormant_days} days.",
                f"Dormancy suspension is triggered at {DORMANCY_SUSPEND_DAYS} days of inactivity.",
                "Call 100 or visit Safaricom Shop with National ID to reactivate your account.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "COMPLIANCE_FREEZE", Severity.CRITICAL,
                "Account is under a compliance freeze. All services restricted.",
                "The compliance team has placed a hold on your account for regulatory review.",
                f"Contact Safaricom Business Compliance: 0722 000 100. Have paybill "
                f"{m.paybill} and ID ready.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "COMPLIANCE_HOLD", Severity.HIGH,
                "Account is suspended. Services are restricted.",
                "Account suspension may be due to inactivity, compliance review, or manual hold.",
                "Call 100 or visit Safaricom Shop with National ID to resolve and reactivate.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Account status: {m.account_status.upper()}. KYC: {m.kyc_status.upper()}. "
            f"Dormant days: {m.dormant_days}. Review required."
        )
