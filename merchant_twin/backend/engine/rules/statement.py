"""
engine/rules/statement.py

Statement Request Rule.

With notifications disabled the statement is still generated, so that case
is a warning rather than a failure: it is reported, but not counted.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome, WarningOutcome
from .base import BaseRule, Guard


class StatementRule(BaseRule):
    key = "STATEMENT"
    guards = (
        Guard(
            lambda m: m.account_status == "suspended",
            lambda m: FailureOutcome(
                "ACC_SUSPENDED", Severity.MEDIUM,
                "Statement access restricted - account is suspended.",
                "Suspended accounts have limited portal access. Full statements are unavailable.",
                "Call 100 for a partial statement via agent access. Resolve suspension "
                "to restore full access.",
            ),
        ),
        Guard(
            lambda m: m.account_status == "frozen",
            lambda m: FailureOutcome(
                "ACC_FROZEN", Severity.MEDIUM,
                "Statement access restricted - account is under compliance freeze.",
                "Frozen accounts have read-restricted access. Statement generation is paused.",
                "Contact the compliance team on 0722 000 100 to request a statement "
                "during the freeze period.",
            ),
        ),
        Guard(
            lambda m: not m.notifications_enabled,
            lambda m: WarningOutcome(
                "NOTIF_OFF", Severity.LOW,
                "Statement generated but cannot be delivered - notifications are disabled.",
                "SMS and email notifications are turned off on your account. The "
                "statement was created but won't be sent.",
                "Enable notifications: App > Settings > Notifications > Enable All. "
                "Then request statement again.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Statement for paybill {m.paybill} generated and sent to {m.email} and "
            f"{m.phone_number}. Covers last 90 days."
        )
