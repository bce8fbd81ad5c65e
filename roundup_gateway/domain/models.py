"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from roundup_gateway.domain.exceptions import UnknownRiskProfileError


class Category(str, Enum):
    """Closed set of spending categories accepted at ingestion"""

    FOOD_AND_DINING = "Food & Dining"
    SHOPPING = "Shopping"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    TRAVEL = "Travel"
    EDUCATION = "Education"
    PERSONAL_CARE = "Personal Care"
    OTHER = "Other"

    @classmethod
    def normalize(cls, label: Any) -> "Category":
        """Map a free-form label onto a category; unrecognized labels become OTHER"""
        if isinstance(label, Category):
            return label
        if label is None:
            return cls.OTHER
        wanted = str(label).strip().casefold()
        for category in cls:
            if category.value.casefold() == wanted:
                return category
        return cls.OTHER


class RiskProfile(str, Enum):
    """Fixed risk/return tiers a user can select"""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"

    @classmethod
    def from_name(cls, name: Any) -> "RiskProfile":
        if isinstance(name, RiskProfile):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError as e:
            raise UnknownRiskProfileError(f"Unknown risk profile: {name!r}") from e


class HistoryPeriod(str, Enum):
    """Look-back windows for portfolio history charts"""

    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    YEAR = "1y"


@dataclass(frozen=True)
class Transaction:
    """Spending transaction supplied by the transaction store"""

    amount: Decimal
    category: Category
    date: date
    merchant: Optional[str] = None
    # Record fields not consumed by round-up processing, e.g. the store's id
    extra_fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProcessedTransaction:
    """Transaction together with its derived round-up"""

    amount: Decimal
    category: Category
    date: date
    merchant: Optional[str]
    round_up_amount: Decimal
    rounded_amount: Decimal
    extra_fields: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RejectedInput:
    """Batch entry that failed validation"""

    index: int
    input: Any
    reason: str


@dataclass
class RoundUpBatchResult:
    """Output of batch round-up processing"""

    processed_count: int
    total_round_ups: Decimal
    processed_transactions: List[ProcessedTransaction] = field(default_factory=list)
    rejected: List[RejectedInput] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectionResult:
    """Future values at the standard checkpoints"""

    one_year: Decimal
    three_years: Decimal
    five_years: Decimal
    ten_years: Decimal


@dataclass(frozen=True)
class ProfileProjection:
    """Checkpoint projections plus the profile metadata used to compute them"""

    profile: RiskProfile
    annual_rate: Decimal
    description: str
    current_balance: Decimal
    monthly_contribution: Decimal
    projections: ProjectionResult


@dataclass(frozen=True)
class CustomProjection:
    """What-if projection for an arbitrary horizon"""

    horizon_years: Decimal
    months: int
    current_balance: Decimal
    monthly_contribution: Decimal
    annual_rate: Decimal
    future_value: Decimal
    total_contributions: Decimal
    total_growth: Decimal
    growth_percentage: Decimal
    from_current_balance: Decimal
    from_contributions: Decimal


@dataclass(frozen=True)
class GoalTimeline:
    """Time needed to reach a savings target"""

    target_amount: Decimal
    current_balance: Decimal
    remaining_amount: Decimal
    monthly_contribution: Decimal
    achieved: bool
    months_to_reach: Optional[int]
    years_to_reach: Optional[Decimal]
    include_interest: bool
    annual_rate: Decimal


@dataclass(frozen=True)
class GoalProgress:
    """Progress toward one of the standard savings goals"""

    name: str
    amount: Decimal
    remaining_amount: Decimal
    progress_percentage: Decimal
    months_to_reach: Optional[int]
    achieved: bool


@dataclass(frozen=True)
class RoundUpHolding:
    """A persisted round-up and the day it was invested"""

    amount: Decimal
    invested_on: date


@dataclass(frozen=True)
class HoldingGrowth:
    """Growth of a single round-up since it was invested"""

    amount: Decimal
    invested_on: date
    days_invested: int
    growth_amount: Decimal
    current_value: Decimal


@dataclass
class TimeWeightedGrowth:
    """Aggregate growth of all round-ups as of a given day"""

    total_principal: Decimal
    total_growth: Decimal
    total_current_value: Decimal
    overall_growth_rate: Decimal
    holdings: List[HoldingGrowth] = field(default_factory=list)


@dataclass(frozen=True)
class PortfolioPoint:
    """Portfolio value on one day of a history chart"""

    date: date
    total_balance: Decimal
    contributions: Decimal
    growth: Decimal
    growth_rate: Decimal
    roundup_count: int
    amount_added: Decimal


@dataclass(frozen=True)
class PeriodGrowth:
    """Money added and growth earned during a look-back window"""

    period: HistoryPeriod
    period_start: date
    period_end: date
    added_this_period: Decimal
    growth_this_period: Decimal
    growth_rate: Decimal
    current_balance: Decimal
    period_start_balance: Decimal
    existing_count: int
    new_count: int
