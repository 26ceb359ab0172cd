"""
engine/rules/application.py

New Application Rule.

KYC problems are checked before the account lifecycle here, so an expired
KYC on a suspended account surfaces as KYC_EXPIRED_APP.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard

KYC_VALIDITY_DAYS = 365


class ApplicationRule(BaseRule):
    key = "APPLICATION"
    guards = (
        Guard(
            lambda m: m.kyc_status == "expired",
            lambda m: FailureOutcome(
                "KYC_EXPIRED_APP", Severity.HIGH,
                "Application rejected - KYC has expired.",
                "All new applications require valid KYC on file. Your KYC expired "
                f"{m.kyc_age_days - KYC_VALIDITY_DAYS} day(s) ago.",
                "Renew KYC first. Required documents: National ID, Business Certificate, KRA PIN.",
            ),
        ),
        Guard(
            lambda m: m.kyc_status == "pending",
            lambda m: FailureOutcome(
                "KYC_PENDING_APP", Severity.MEDIUM,
                "Application on hold - KYC review is in progress.",
                "New applications cannot be processed while a KYC review is active for "
                "the same merchant.",
                "Wait 24-48hrs for current KYC review to complete, then resubmit.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "ACC_SUSPENDED_APP", Severity.CRITICAL,
                "Application blocked - account is suspended.",
                "Suspended merchants cannot initiate new product applications.",
                "Resolve the suspension first, then resubmit your application.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "ACC_FROZEN_APP", Severity.CRITICAL,
                "Application blocked - account is frozen.",
                "Frozen accounts cannot initiate new applications until the compliance "
                "freeze is lifted.",
                "Contact the compliance team to unfreeze, then resubmit.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        # Reference is derived from the snapshot only (no clock).
        return SuccessOutcome(
            f"Application submitted for paybill {m.paybill}. Reference: APP-{m.paybill}. "
            "Expected review: 3-5 business days."
        )
