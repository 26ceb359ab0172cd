"""
engine/rules/dormant_operator.py

G2 Dormant Operator Rule.

Operator permissions are revoked at 90 days without a login or
transaction. Thresholds are checked from the highest down; the 30-day
notice is a warning.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome, WarningOutcome
from .base import BaseRule, Guard

REVOKE_DAYS = 90
WARN_DAYS = 60
NOTICE_DAYS = 30


class DormantOperatorRule(BaseRule):
    key = "DORMANT_OP"
    guards = (
        Guard(
            lambda m: m.operator_dormant_days >= REVOKE_DAYS,
            lambda m: FailureOutcome(
                "OP_FULLY_DORMANT", Severity.CRITICAL,
                f"Operator access revoked - inactive for {m.operator_dormant_days} days.",
                f"G2 operator permissions are automatically revoked after {REVOKE_DAYS} "
                "days without login or transaction.",
                "Visit Safaricom Shop for operator reactivation. Bring: National ID + "
                "business registration documents.",
            ),
        ),
        Guard(
            lambda m: m.operator_dormant_days >= WARN_DAYS,
            lambda m: FailureOutcome(
                "OP_DORMANT_WARN", Severity.HIGH,
                f"Warning: Operator approaching dormancy lock "
                f"({m.operator_dormant_days}/{REVOKE_DAYS} days inactive).",
                f"Operator will be fully locked in {REVOKE_DAYS - m.operator_dormant_days} "
                "day(s) if no action is taken.",
                "Initiate any transaction or G2 login now to reset your dormancy timer.",
            ),
        ),
        Guard(
            lambda m: m.operator_dormant_days >= NOTICE_DAYS,
            lambda m: WarningOutcome(
                "OP_DORMANT_NOTICE", Severity.LOW,
                f"Operator inactive for {m.operator_dormant_days} days. Dormancy warning "
                f"at {WARN_DAYS} days.",
                f"Early notice: operator has been inactive for {m.operator_dormant_days} days.",
                "Make a transaction soon to prevent dormancy escalation.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Operator is active. Last activity {m.operator_dormant_days} day(s) ago. "
            f"Dormancy warning triggers at {WARN_DAYS} days. You are clear."
        )
