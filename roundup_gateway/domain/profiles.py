"""Lookup tables for risk profiles and standard savings goals"""

from decimal import Decimal
from typing import Dict, List, Tuple

from roundup_gateway.domain.models import RiskProfile

# Annual return rate and description per profile. Adjusting a tier is a data change.
RISK_PROFILES: Dict[RiskProfile, Tuple[Decimal, str]] = {
    RiskProfile.CONSERVATIVE: (
        Decimal("0.05"),
        "5% annual return - Low risk with government bonds and fixed deposits",
    ),
    RiskProfile.BALANCED: (
        Decimal("0.08"),
        "8% annual return - Medium risk with mix of stocks and bonds",
    ),
    RiskProfile.AGGRESSIVE: (
        Decimal("0.12"),
        "12% annual return - High risk with growth stocks and equity funds",
    ),
}

SAVINGS_GOALS: List[Tuple[str, Decimal]] = [
    ("Emergency Fund", Decimal("1000")),
    ("Vacation Fund", Decimal("2500")),
    ("Car Down Payment", Decimal("5000")),
    ("Home Down Payment", Decimal("20000")),
]


def annual_rate_for(profile: RiskProfile | str) -> Decimal:
    """Return the fixed annual rate for a profile (accepts the profile name)"""
    return RISK_PROFILES[RiskProfile.from_name(profile)][0]


def description_for(profile: RiskProfile | str) -> str:
    return RISK_PROFILES[RiskProfile.from_name(profile)][1]


def profiles_by_rate() -> List[RiskProfile]:
    """All profiles ordered from lowest to highest return"""
    return sorted(RISK_PROFILES, key=lambda p: RISK_PROFILES[p][0])
