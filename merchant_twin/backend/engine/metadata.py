"""
engine/metadata.py

Demand metadata for every catalogued rule.

demand_rank  — 1 = highest contact-centre volume; ties in severity are
               broken by this rank when failures are prioritised.
demand_total — contacts recorded for the action over Oct–Dec 2025; the sum
               over a merchant's failing rules is its "calls at risk".

This table is data: update the figures here without touching any rule.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class RuleMetadata:
    label: str
    demand_rank: int
    demand_total: int
    menu_path: str = ""
    ussd_path: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


RULE_METADATA: dict[str, RuleMetadata] = {
    "SETTLE_FUNDS": RuleMetadata(
        label="Withdraw / Settle Funds",
        demand_rank=1,
        demand_total=14144,
        menu_path="Lipa na M-PESA > Withdraw / Settle Funds",
        ussd_path="*234# > 1 > 1",
        description="Merchant withdraws accumulated paybill balance to their bank account.",
    ),
    "PIN_PUK": RuleMetadata(
        label="Change / Reset PIN",
        demand_rank=2,
        demand_total=11353,
        menu_path="Security & PIN > Change / Reset PIN",
        ussd_path="*234# > 2 > 1",
        description="Merchant changes or resets their M-PESA Business PIN.",
    ),
    "SIM_SWAP": RuleMetadata(
        label="SIM Swap Request",
        demand_rank=3,
        demand_total=10076,
        menu_path="SIM & Operator > SIM Swap Request",
        ussd_path="*234# > 4 > 1",
        description="Merchant requests replacement SIM for their registered number.",
    ),
    "ACCOUNT_STATUS": RuleMetadata(
        label="Account Status & Issues",
        demand_rank=4,
        demand_total=9951,
        menu_path="My Account > Account Status & Issues",
        ussd_path="*234# > 3 > 1",
        description="Merchant checks or resolves account suspension / freeze.",
    ),
    "START_KEY": RuleMetadata(
        label="Reset Start Key",
        demand_rank=5,
        demand_total=9303,
        menu_path="Security & PIN > Reset Start Key",
        ussd_path="*234# > 2 > 3",
        description="Merchant resets the cryptographic start key used to authenticate transactions.",
    ),
    "STATEMENT": RuleMetadata(
        label="Mini Statement",
        demand_rank=6,
        demand_total=8330,
        menu_path="Lipa na M-PESA > Mini Statement",
        ussd_path="*234# > 1 > 3",
        description="Merchant requests a transaction statement for the last 90 days.",
    ),
    "KYC_CHANGE": RuleMetadata(
        label="Update KYC Details",
        demand_rank=7,
        demand_total=8157,
        menu_path="My Account > Update KYC Details",
        ussd_path="*234# > 3 > 2",
        description="Merchant updates identity or business KYC information.",
    ),
    "NOTIFICATIONS": RuleMetadata(
        label="Notification Settings",
        demand_rank=8,
        demand_total=5013,
        menu_path="My Account > Notification Settings",
        ussd_path="*234# > 3 > 4",
        description="Merchant manages SMS and push notification preferences.",
    ),
    "BALANCE": RuleMetadata(
        label="Balance Enquiry",
        demand_rank=9,
        demand_total=4439,
        menu_path="Lipa na M-PESA > Balance Enquiry",
        ussd_path="*234# > 1 > 2",
        description="Merchant checks available paybill balance.",
    ),
    "DORMANT_OP": RuleMetadata(
        label="Operator Status",
        demand_rank=10,
        demand_total=3778,
        menu_path="SIM & Operator > Operator Status",
        ussd_path="*234# > 4 > 2",
        description="Merchant checks G2 operator active status and dormancy days.",
    ),
    "PIN_UNLOCK": RuleMetadata(
        label="Unlock PIN",
        demand_rank=11,
        demand_total=3788,
        menu_path="Security & PIN > Unlock PIN",
        ussd_path="*234# > 2 > 2",
        description="Merchant unlocks their PIN after security lockout.",
    ),
    "APPLICATION": RuleMetadata(
        label="New Application",
        demand_rank=12,
        demand_total=3483,
        menu_path="My Account > New Application",
        ussd_path="*234# > 3 > 3",
        description="Merchant submits a new paybill or product application.",
    ),
}
