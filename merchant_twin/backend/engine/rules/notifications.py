"""
engine/rules/notifications.py

Notification Settings Rule.

Disabled notifications are a hard (low-severity) failure here, unlike the
statement rule where they only degrade delivery.
"""

from __future__ import annotations

from ...models import MerchantSnapshot
from ..models import FailureOutcome, Severity, SuccessOutcome
from .base import BaseRule, Guard


class NotificationsRule(BaseRule):
    key = "NOTIFICATIONS"
    guards = (
        Guard(
            lambda m: not m.notifications_enabled,
            lambda m: FailureOutcome(
                "NOTIF_DISABLED", Severity.LOW,
                "Notifications are OFF - you will miss payment alerts, settlement SMS, "
                "and security warnings.",
                "Your account has notifications disabled. This causes missed payment "
                "confirmations and delayed fraud alerts.",
                "Enable via: App > Settings > Notifications > Enable All. Or: *234# > 3 > 4.",
            ),
        ),
        Guard(
            lambda m: m.sim_status == "swapped",
            lambda m: FailureOutcome(
                "SIM_NOTIF_UNREG", Severity.MEDIUM,
                "New SIM not registered - notifications are going to your old number.",
                "SIM swap does not automatically re-register notification channels. "
                "Your old SIM receives alerts.",
                "Update via: *234# > My Account > Update Phone Number, or visit Safaricom Shop.",
            ),
        ),
        Guard(
            lambda m: m.account_status != "active",
            lambda m: FailureOutcome(
                "ACC_INACTIVE_NOTIF", Severity.MEDIUM,
                f"Notifications are paused while account is {m.account_status}.",
                "Non-active accounts have notification services suspended as part of "
                "account lifecycle policy.",
                "Reactivate the account to restore full notification delivery.",
            ),
        ),
    )

    def passed(self, m: MerchantSnapshot) -> SuccessOutcome:
        return SuccessOutcome(
            f"Notification test sent to {m.phone_number} and {m.email}. All channels "
            "are operational. You will receive payment and security alerts in real time."
        )
