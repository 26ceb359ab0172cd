"""
tests/conftest.py

Shared merchant fixtures: the five curated registry profiles and a builder
for one-off snapshots.
"""

from __future__ import annotations

import pytest

from merchant_twin.backend.engine import RuleEvaluator, load_catalogue
from merchant_twin.backend.metrics import METRICS
from merchant_twin.backend.models import MerchantSnapshot

HEALTHY = dict(
    id="M001", first_name="Kevin", last_name="Njoroge",
    business_name="Njoroge General Store", paybill="174379",
    phone_number="0704737162", bank="Equity Bank", bank_account_name="Njoroge Store",
    account_status="active", kyc_status="verified", kyc_age_days=180,
    sim_status="active", sim_swap_days_ago=None,
    pin_attempts=0, pin_locked=False,
    start_key_status="valid", balance=87450.50,
    dormant_days=2, notifications_enabled=True,
    settlement_on_hold=False, operator_dormant_days=2,
)

MULTI_FAILURE = dict(
    id="M002", first_name="Amara", last_name="Kamau",
    business_name="Kamau Hardware & Supplies", paybill="522533",
    phone_number="0711234567", bank="KCB Bank", bank_account_name="Kamau Hardware",
    account_status="suspended", kyc_status="expired", kyc_age_days=420,
    sim_status="swapped", sim_swap_days_ago=5,
    pin_attempts=3, pin_locked=True,
    start_key_status="invalid", balance=32100.00,
    dormant_days=60, notifications_enabled=False,
    settlement_on_hold=True, operator_dormant_days=62,
)

PARTIAL = dict(
    id="M003", first_name="Fatuma", last_name="Odhiambo",
    business_name="Fatuma Beauty & Salon", paybill="700234",
    phone_number="0722345678", bank="Cooperative Bank", bank_account_name="Fatuma Salon",
    account_status="active", kyc_status="pending", kyc_age_days=15,
    sim_status="active", sim_swap_days_ago=None,
    pin_attempts=2, pin_locked=False,
    start_key_status="valid", balance=5600.25,
    dormant_days=0, notifications_enabled=True,
    settlement_on_hold=False, operator_dormant_days=0,
)

FROZEN_DORMANT = dict(
    id="M004", first_name="Brian", last_name="Rotich",
    business_name="Rotich Electronics Hub", paybill="303030",
    phone_number="0733456789", bank="Absa Bank", bank_account_name="Rotich Electronics",
    account_status="frozen", kyc_status="verified", kyc_age_days=390,
    sim_status="active", sim_swap_days_ago=None,
    pin_attempts=0, pin_locked=False,
    start_key_status="expired", balance=234500.00,
    dormant_days=95, notifications_enabled=True,
    settlement_on_hold=True, operator_dormant_days=95,
)

CLEAN = dict(
    id="M005", first_name="Grace", last_name="Waweru",
    business_name="Waweru Fresh Groceries", paybill="899573",
    phone_number="0744567890", bank="NCBA Bank", bank_account_name="Waweru Groceries",
    account_status="active", kyc_status="verified", kyc_age_days=90,
    sim_status="active", sim_swap_days_ago=None,
    pin_attempts=0, pin_locked=False,
    start_key_status="valid", balance=12300.75,
    dormant_days=0, notifications_enabled=True,
    settlement_on_hold=False, operator_dormant_days=0,
)

REGISTRY = [HEALTHY, MULTI_FAILURE, PARTIAL, FROZEN_DORMANT, CLEAN]


def make_merchant(**overrides) -> MerchantSnapshot:
    """A healthy merchant with selected sensors overridden."""
    return MerchantSnapshot(**{**HEALTHY, "id": "TEST", **overrides})


@pytest.fixture
def registry() -> list[MerchantSnapshot]:
    return [MerchantSnapshot(**p) for p in REGISTRY]


@pytest.fixture
def profile(registry):
    by_id = {m.id: m for m in registry}
    return by_id.__getitem__


@pytest.fixture(scope="session")
def catalogue():
    return load_catalogue()


@pytest.fixture
def evaluator(catalogue) -> RuleEvaluator:
    return RuleEvaluator(catalogue, strict_keys=False)


@pytest.fixture(autouse=True)
def _reset_metrics():
    METRICS.reset_all()
    yield
