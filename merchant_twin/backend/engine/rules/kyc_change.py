"""
engine/rules/kyc_change.py

Update KYC Details Rule.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

SWAP_HOLD_DAYS = 14


class KycChangeRule(BaseRule):
    key = "KYC_CHANGE"
    guards = (
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "ACC_FROZEN", Severity.CRITICAL,
                "KYC changes blocked - account is frozen.",
                "Frozen accounts require compliance clearance before any KYC modifications.",
                "Request account unfreeze first via 0722 000 100, then resubmit KYC change.",
            ),
        ),
        Guard(
            lambda m: m.swapped_within(SWAP_HOLD_DAYS),
            lambda m: FailureOutcome(
                "SIM_SWAP_KYC_HOLD", Severity.MEDIUM,
                f"KYC change blocked - {SWAP_HOLD_DAYS - m.sim_swap_days_ago} day(s) "
                "remaining on post-SIM swap hold.",
                f"A {SWAP_HOLD_DAYS}-day fraud prevention hold restricts KYC changes "
                "after every SIM swap.",
                f"Wait {SWAP_HOLD_DAYS - m.sim_swap_days_ago} day(s), or visit Safaricom "
                "Shop in person for an assisted KYC update.",
            ),
        ),
        Guard(
            lambda m: m.kyc_status == "pending",
            lambda m: FailureOutcome(
                "KYC_REVIEW_ACTIVE", Severity.MEDIUM,
                "KYC change locked - a review is already in progress.",
                "You cannot modify KYC details while an existing review is active.",
                "Wait 24-48 hours for current review to complete, then submit your changes.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"KYC update submitted for paybill {m.paybill}. Review expected within "
            f"24-48 hours. Reference: KYC-{m.document_number}."
        )
