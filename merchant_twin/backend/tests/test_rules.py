"""
tests/test_rules.py

Guard-chain tests for the twelve diagnosis rules: first matching guard wins,
and each rule falls through to a success echoing the snapshot.
"""

from __future__ import annotations

import pytest

from conftest import make_merchant
from merchant_twin.backend.engine.models import (
    ESCALATION_CRITICAL,
    ESCALATION_HIGH,
    ESCALATION_WARNING,
    FailureOutcome,
    Severity,
    SuccessOutcome,
    WarningOutcome,
)
from merchant_twin.backend.engine.rules.account_status import AccountStatusRule
from merchant_twin.backend.engine.rules.application import ApplicationRule
from merchant_twin.backend.engine.rules.balance import BalanceRule
from merchant_twin.backend.engine.rules.dormant_operator import DormantOperatorRule
from merchant_twin.backend.engine.rules.kyc_change import KycChangeRule
from merchant_twin.backend.engine.rules.notifications import NotificationsRule
from merchant_twin.backend.engine.rules.pin_puk import PinPukRule
from merchant_twin.backend.engine.rules.pin_unlock import PinUnlockRule
from merchant_twin.backend.engine.rules.settle_funds import SettleFundsRule
from merchant_twin.backend.engine.rules.sim_swap import SimSwapRule
from merchant_twin.backend.engine.rules.start_key import StartKeyRule
from merchant_twin.backend.engine.rules.statement import StatementRule

ALL_RULES = [
    SettleFundsRule, PinPukRule, SimSwapRule, AccountStatusRule,
    StartKeyRule, StatementRule, KycChangeRule, NotificationsRule,
    BalanceRule, DormantOperatorRule, PinUnlockRule, ApplicationRule,
]


def code_of(rule_cls, **sensors) -> str:
    return rule_cls().evaluate(make_merchant(**sensors)).code


# ---------------------------------------------------------------------------
# Common behaviour
# ---------------------------------------------------------------------------

class TestHealthyMerchant:

    @pytest.mark.parametrize("rule_cls", ALL_RULES)
    def test_healthy_merchant_passes_every_rule(self, rule_cls):
        outcome = rule_cls().evaluate(make_merchant())
        assert isinstance(outcome, SuccessOutcome)
        assert outcome.success is True
        assert outcome.code == "OK"
        assert outcome.severity is None

    @pytest.mark.parametrize("rule_cls", ALL_RULES)
    def test_keys_are_unique_and_set(self, rule_cls):
        assert rule_cls.key
        assert [r.key for r in ALL_RULES].count(rule_cls.key) == 1

    @pytest.mark.parametrize("rule_cls", ALL_RULES)
    def test_evaluate_is_pure(self, rule_cls):
        m = make_merchant(account_status="suspended", sim_status="swapped", sim_swap_days_ago=3)
        rule = rule_cls()
        assert rule.evaluate(m) == rule.evaluate(m)


# ---------------------------------------------------------------------------
# SETTLE_FUNDS
# ---------------------------------------------------------------------------

class TestSettleFunds:

    def test_suspension_beats_expired_kyc(self):
        outcome = SettleFundsRule().evaluate(
            make_merchant(account_status="suspended", kyc_status="expired", balance=500)
        )
        assert outcome.code == "ACC_SUSPENDED"
        assert outcome.severity is Severity.CRITICAL
        assert outcome.escalation == ESCALATION_CRITICAL

    def test_frozen(self):
        assert code_of(SettleFundsRule, account_status="frozen") == "ACC_FROZEN"

    def test_settlement_hold_mentions_paybill(self):
        outcome = SettleFundsRule().evaluate(make_merchant(settlement_on_hold=True))
        assert outcome.code == "SETTLE_HOLD"
        assert "174379" in outcome.message
        assert outcome.escalation == ESCALATION_HIGH

    def test_expired_kyc(self):
        assert code_of(SettleFundsRule, kyc_status="expired") == "KYC_EXPIRED"

    def test_swap_hold_reports_remaining_days(self):
        outcome = SettleFundsRule().evaluate(
            make_merchant(sim_status="swapped", sim_swap_days_ago=12)
        )
        assert outcome.code == "SIM_SWAP_HOLD"
        assert outcome.severity is Severity.MEDIUM
        assert "18 more day(s)" in outcome.message

    def test_swap_older_than_hold_is_ignored(self):
        assert code_of(SettleFundsRule, sim_status="swapped", sim_swap_days_ago=30) == "OK"

    def test_zero_balance(self):
        assert code_of(SettleFundsRule, balance=0) == "ZERO_BALANCE"
        assert code_of(SettleFundsRule, balance=-10) == "ZERO_BALANCE"

    def test_success_formats_balance(self):
        outcome = SettleFundsRule().evaluate(make_merchant())
        assert "KES 87,450.50" in outcome.message
        assert "Njoroge Store" in outcome.message


# ---------------------------------------------------------------------------
# PIN_PUK / PIN_UNLOCK
# ---------------------------------------------------------------------------

class TestPinRules:

    def test_recent_swap_blocks_pin_change_with_days_remaining(self):
        outcome = PinPukRule().evaluate(make_merchant(sim_status="swapped", sim_swap_days_ago=5))
        assert outcome.code == "SIM_SWAP_RECENT"
        assert outcome.severity is Severity.MEDIUM
        assert "Wait 2 more day(s)" in outcome.fix

    def test_locked_pin(self):
        assert code_of(PinPukRule, pin_locked=True, pin_attempts=3) == "PIN_LOCKED"

    def test_suspension_first(self):
        assert code_of(PinPukRule, account_status="suspended", pin_locked=True) == "ACC_SUSPENDED"

    def test_unlock_not_needed_when_not_locked(self):
        outcome = PinUnlockRule().evaluate(make_merchant(account_status="suspended"))
        assert outcome.success
        assert "No unlock needed" in outcome.message

    def test_unlock_blocked_by_suspension(self):
        assert code_of(PinUnlockRule, pin_locked=True, account_status="suspended") == (
            "ACC_SUSPENDED_UNLOCK"
        )

    def test_unlock_blocked_by_expired_kyc(self):
        assert code_of(PinUnlockRule, pin_locked=True, kyc_status="expired") == (
            "KYC_EXPIRED_UNLOCK"
        )

    def test_unlock_blocked_by_recent_swap(self):
        assert code_of(
            PinUnlockRule, pin_locked=True, sim_status="swapped", sim_swap_days_ago=1
        ) == "SIM_SWAP_PIN_UNLOCK"

    def test_unlock_allowed(self):
        outcome = PinUnlockRule().evaluate(make_merchant(pin_locked=True, pin_attempts=3))
        assert outcome.success
        assert "0704737162" in outcome.message


# ---------------------------------------------------------------------------
# SIM_SWAP / START_KEY / KYC_CHANGE
# ---------------------------------------------------------------------------

class TestSimAndKeyRules:

    def test_sim_swap_frozen_before_suspended(self):
        assert code_of(SimSwapRule, account_status="frozen") == "ACC_FROZEN"
        assert code_of(SimSwapRule, account_status="suspended") == "ACC_SUSPENDED"

    def test_sim_swap_kyc(self):
        assert code_of(SimSwapRule, kyc_status="expired") == "KYC_EXPIRED"
        assert code_of(SimSwapRule, kyc_status="pending") == "KYC_PENDING"

    def test_sim_swap_pin_locked(self):
        assert code_of(SimSwapRule, pin_locked=True) == "PIN_LOCKED"

    def test_start_key_expired_before_invalid(self):
        assert code_of(StartKeyRule, start_key_status="expired") == "START_KEY_EXPIRED"
        assert code_of(StartKeyRule, start_key_status="invalid") == "START_KEY_CORRUPT"

    def test_start_key_inactive_account(self):
        assert code_of(StartKeyRule, account_status="frozen") == "ACC_NOT_ACTIVE"

    def test_start_key_swap_hold(self):
        assert code_of(StartKeyRule, sim_status="swapped", sim_swap_days_ago=1) == (
            "SIM_SWAP_KEY_HOLD"
        )
        assert code_of(StartKeyRule, sim_status="swapped", sim_swap_days_ago=2) == "OK"

    def test_kyc_change(self):
        assert code_of(KycChangeRule, account_status="frozen") == "ACC_FROZEN"
        assert code_of(KycChangeRule, sim_status="swapped", sim_swap_days_ago=13) == (
            "SIM_SWAP_KYC_HOLD"
        )
        assert code_of(KycChangeRule, kyc_status="pending") == "KYC_REVIEW_ACTIVE"


# ---------------------------------------------------------------------------
# ACCOUNT_STATUS
# ---------------------------------------------------------------------------

class TestAccountStatus:

    def test_fully_dormant(self):
        outcome = AccountStatusRule().evaluate(make_merchant(dormant_days=95))
        assert outcome.code == "FULLY_DORMANT"
        assert outcome.severity is Severity.CRITICAL

    def test_dormant_60(self):
        outcome = AccountStatusRule().evaluate(make_merchant(dormant_days=60))
        assert outcome.code == "DORMANT_60"
        assert outcome.severity is Severity.HIGH

    def test_kyc_overdue_beats_dormancy(self):
        assert code_of(AccountStatusRule, kyc_age_days=400, dormant_days=95) == "KYC_OVERDUE_365"

    def test_compliance_states(self):
        assert code_of(AccountStatusRule, account_status="frozen") == "COMPLIANCE_FREEZE"
        assert code_of(AccountStatusRule, account_status="suspended") == "COMPLIANCE_HOLD"

    def test_healthy_account_short_circuits(self):
        # kyc age over a year is ignored when the account is otherwise healthy
        outcome = AccountStatusRule().evaluate(make_merchant(kyc_age_days=400))
        assert outcome.success
        assert "fully active" in outcome.message

    def test_review_required_fallthrough(self):
        outcome = AccountStatusRule().evaluate(make_merchant(kyc_status="pending"))
        assert outcome.success
        assert "Review required" in outcome.message


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------

class TestWarnings:

    def test_statement_notifications_off_is_warning(self):
        outcome = StatementRule().evaluate(make_merchant(notifications_enabled=False))
        assert isinstance(outcome, WarningOutcome)
        assert outcome.code == "NOTIF_OFF"
        assert outcome.severity is Severity.LOW
        assert outcome.success is False
        assert outcome.is_failure is False
        assert outcome.escalation == ESCALATION_WARNING

    def test_statement_account_states_are_medium_failures(self):
        outcome = StatementRule().evaluate(make_merchant(account_status="frozen"))
        assert isinstance(outcome, FailureOutcome)
        assert outcome.severity is Severity.MEDIUM

    @pytest.mark.parametrize("days,code", [
        (95, "OP_FULLY_DORMANT"),
        (90, "OP_FULLY_DORMANT"),
        (62, "OP_DORMANT_WARN"),
        (30, "OP_DORMANT_NOTICE"),
        (29, "OK"),
    ])
    def test_operator_dormancy_bands(self, days, code):
        assert code_of(DormantOperatorRule, operator_dormant_days=days) == code

    def test_operator_notice_is_warning(self):
        outcome = DormantOperatorRule().evaluate(make_merchant(operator_dormant_days=45))
        assert isinstance(outcome, WarningOutcome)


# ---------------------------------------------------------------------------
# NOTIFICATIONS / BALANCE / APPLICATION
# ---------------------------------------------------------------------------

class TestRemainingRules:

    def test_notifications(self):
        assert code_of(NotificationsRule, notifications_enabled=False) == "NOTIF_DISABLED"
        assert code_of(NotificationsRule, sim_status="swapped", sim_swap_days_ago=100) == (
            "SIM_NOTIF_UNREG"
        )
        assert code_of(NotificationsRule, account_status="suspended") == "ACC_INACTIVE_NOTIF"

    def test_balance(self):
        assert code_of(BalanceRule, account_status="frozen") == "ACC_FROZEN_BAL"
        assert code_of(BalanceRule, pin_locked=True) == "PIN_LOCKED_BAL"

    def test_application_kyc_before_account_state(self):
        assert code_of(ApplicationRule, kyc_status="expired", account_status="frozen") == (
            "KYC_EXPIRED_APP"
        )
        assert code_of(ApplicationRule, kyc_status="pending") == "KYC_PENDING_APP"
        assert code_of(ApplicationRule, account_status="suspended") == "ACC_SUSPENDED_APP"
        assert code_of(ApplicationRule, account_status="frozen") == "ACC_FROZEN_APP"

    def test_application_reference_is_deterministic(self):
        m = make_merchant()
        assert ApplicationRule().evaluate(m).message == ApplicationRule().evaluate(m).message
