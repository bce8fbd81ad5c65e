"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RoundUpRequest(BaseModel):
    """Request body for POST /v1/roundups/calculate"""

    amount: Decimal = Field(..., description="Transaction amount")


class RoundUpResponse(BaseModel):
    """Response for POST /v1/roundups/calculate"""

    amount: Decimal
    round_up_amount: Decimal
    rounded_amount: Decimal


class RoundUpBatchRequest(BaseModel):
    """Request body for POST /v1/roundups

    Entries are left unvalidated here, even non-objects, so malformed ones
    are reported per item instead of failing the whole batch.
    """

    transactions: List[Any]


class ProcessedTransactionSchema(BaseModel):
    """Processed record: the caller's own fields (e.g. id) plus the round-up"""

    model_config = ConfigDict(extra="allow")

    amount: Decimal
    category: str
    date: date
    merchant: Optional[str] = None
    round_up_amount: Decimal
    rounded_amount: Decimal


class RejectedInputSchema(BaseModel):
    index: int
    input: Any
    reason: str


class RoundUpBatchResponse(BaseModel):
    """Response for POST /v1/roundups"""

    processed_count: int
    total_round_ups: Decimal
    processed_transactions: List[ProcessedTransactionSchema]
    rejected: List[RejectedInputSchema]


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/projections"""

    current_balance: Decimal = Field(..., ge=0)
    monthly_contribution: Decimal = Field(..., ge=0)
    risk_profile: Optional[str] = Field(None, description="Defaults to the configured profile")


class CheckpointSchema(BaseModel):
    one_year: Decimal
    three_years: Decimal
    five_years: Decimal
    ten_years: Decimal


class ProfileProjectionSchema(BaseModel):
    name: str
    annual_rate: Decimal
    description: str
    projections: CheckpointSchema


class CurrentProfileSchema(BaseModel):
    name: str
    annual_rate: Decimal
    current_balance: Decimal
    monthly_contribution: Decimal


class ProjectionResponse(BaseModel):
    """Response for POST /v1/projections"""

    current_profile: CurrentProfileSchema
    projections: CheckpointSchema
    comparison_profiles: List[ProfileProjectionSchema]


class CustomProjectionRequest(BaseModel):
    """Request body for POST /v1/projections/custom"""

    current_balance: Decimal
    monthly_contribution: Decimal
    annual_rate: Decimal = Field(..., description="0.08 for 8%")
    horizon_years: Decimal


class CustomProjectionResponse(BaseModel):
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


class GoalTimelineRequest(BaseModel):
    """Request body for POST /v1/goals/timeline"""

    current_balance: Decimal
    monthly_contribution: Decimal
    target_amount: Decimal
    risk_profile: Optional[str] = None
    include_interest: bool = True


class GoalTimelineResponse(BaseModel):
    target_amount: Decimal
    current_balance: Decimal
    remaining_amount: Decimal
    monthly_contribution: Decimal
    achieved: bool
    months_to_reach: Optional[int] = None
    years_to_reach: Optional[Decimal] = None
    include_interest: bool
    annual_rate: Decimal


class GoalsRequest(BaseModel):
    """Request body for POST /v1/goals"""

    current_balance: Decimal
    monthly_contribution: Decimal


class GoalProgressSchema(BaseModel):
    name: str
    amount: Decimal
    remaining_amount: Decimal
    progress_percentage: Decimal
    months_to_reach: Optional[int] = None
    achieved: bool


class GoalsResponse(BaseModel):
    current_balance: Decimal
    monthly_contribution: Decimal
    goals: List[GoalProgressSchema]


class HoldingSchema(BaseModel):
    """A persisted round-up supplied by the caller"""

    amount: Decimal = Field(..., gt=0)
    invested_on: date


class PortfolioGrowthRequest(BaseModel):
    """Request body for POST /v1/portfolio/growth and /v1/portfolio/history"""

    holdings: List[HoldingSchema]
    risk_profile: Optional[str] = None
    as_of: Optional[date] = None
    period: str = "30d"


class HoldingGrowthSchema(BaseModel):
    amount: Decimal
    invested_on: date
    days_invested: int
    growth_amount: Decimal
    current_value: Decimal


class PortfolioGrowthResponse(BaseModel):
    total_principal: Decimal
    total_growth: Decimal
    total_current_value: Decimal
    overall_growth_rate: Decimal
    avg_monthly_contribution: Decimal
    holdings: List[HoldingGrowthSchema]


class PortfolioPointSchema(BaseModel):
    date: date
    total_balance: Decimal
    contributions: Decimal
    growth: Decimal
    growth_rate: Decimal
    roundup_count: int
    amount_added: Decimal


class PeriodGrowthSchema(BaseModel):
    period_start: date
    period_end: date
    added_this_period: Decimal
    growth_this_period: Decimal
    growth_rate: Decimal
    current_balance: Decimal
    existing_count: int
    new_count: int


class PortfolioHistoryResponse(BaseModel):
    period: str
    summary: PeriodGrowthSchema
    history: List[PortfolioPointSchema]
