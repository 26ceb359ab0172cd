"""
backend/models.py

The merchant sensor snapshot — the single input every rule, scanner and
scorer reads.

Snapshots are produced by an external merchant store. They are frozen:
mutations such as a SIM swap or a failed PIN attempt happen upstream, and
the store hands over a fresh snapshot afterwards.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AccountStatus = Literal["active", "suspended", "frozen"]
KycStatus = Literal["verified", "pending", "expired"]
SimStatus = Literal["active", "swapped", "unregistered"]
StartKeyStatus = Literal["valid", "invalid", "expired"]

SENSOR_FIELDS: tuple[str, ...] = (
    "account_status",
    "kyc_status",
    "kyc_age_days",
    "sim_status",
    "sim_swap_days_ago",
    "pin_attempts",
    "pin_locked",
    "start_key_status",
    "balance",
    "dormant_days",
    "notifications_enabled",
    "settlement_on_hold",
    "operator_dormant_days",
)


class MerchantSnapshot(BaseModel):
    """Frozen view of one merchant at one instant."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # --- Identity / contact (message formatting only, never rule input) ---
    id: str = ""
    business_name: str = ""
    first_name: str = ""
    last_name: str = ""
    paybill: str = ""
    phone_number: str = ""
    email: str = ""
    county: str = ""
    document_number: str = ""
    bank: str = ""
    bank_account_name: str = ""

    # --- Sensors ---
    account_status: AccountStatus = "active"
    kyc_status: KycStatus = "verified"
    kyc_age_days: int = Field(default=0, ge=0)
    """Days since KYC was last verified."""

    sim_status: SimStatus = "active"
    sim_swap_days_ago: int | None = Field(default=None, ge=0)
    """Days since last SIM swap; None when the SIM was never swapped."""

    pin_attempts: int = Field(default=0, ge=0, le=3)
    pin_locked: bool = False
    start_key_status: StartKeyStatus = "valid"
    balance: float = 0.0
    """Available paybill balance in KES."""

    dormant_days: int = Field(default=0, ge=0)
    """Days since last customer transaction."""

    operator_dormant_days: int = Field(default=0, ge=0)
    """Days since the operator last logged in to G2."""

    notifications_enabled: bool = True
    settlement_on_hold: bool = False

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.business_name or self.id

    def swapped_within(self, days: int) -> bool:
        """True when the SIM was swapped fewer than `days` days ago."""
        return (
            self.sim_status == "swapped"
            and self.sim_swap_days_ago is not None
            and self.sim_swap_days_ago < days
        )

    def sensors(self) -> dict:
        return {name: getattr(self, name) for name in SENSOR_FIELDS}


def format_kes(amount: float) -> str:
    """Format an amount as Kenyan shillings, e.g. 'KES 87,450.50'."""
    return f"KES {amount:,.2f}"
