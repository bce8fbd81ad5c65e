"""POST /v1/portfolio - growth of round-ups already invested"""

import logging
from datetime import date
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from roundup_gateway.api.v1.schemas import (
    HoldingGrowthSchema,
    HoldingSchema,
    PeriodGrowthSchema,
    PortfolioGrowthRequest,
    PortfolioGrowthResponse,
    PortfolioHistoryResponse,
    PortfolioPointSchema,
)
from roundup_gateway.api.dependencies import get_request_id
from roundup_gateway.config import settings
from roundup_gateway.domain.exceptions import InvalidProjectionInputError, UnknownRiskProfileError
from roundup_gateway.domain.growth import (
    calculate_period_growth,
    calculate_time_weighted_growth,
    generate_portfolio_history,
)
from roundup_gateway.domain.models import RoundUpHolding
from roundup_gateway.domain.profiles import annual_rate_for
from roundup_gateway.domain.projections import average_monthly_contribution

router = APIRouter()


def _holdings(items: List[HoldingSchema]) -> List[RoundUpHolding]:
    return [RoundUpHolding(amount=h.amount, invested_on=h.invested_on) for h in items]


@router.post("/portfolio/growth", response_model=PortfolioGrowthResponse)
def get_portfolio_growth(request_body: PortfolioGrowthRequest, request_id: str = Depends(get_request_id)):
    """Time-weighted value of each round-up plus the trailing monthly contribution"""
    as_of = request_body.as_of or date.today()
    holdings = _holdings(request_body.holdings)

    try:
        rate = annual_rate_for(request_body.risk_profile or settings.default_risk_profile)
        growth = calculate_time_weighted_growth(holdings, rate, as_of, settings.growth_cap_rate)
        avg_contribution = average_monthly_contribution(
            holdings, as_of, settings.contribution_lookback_months
        )
    except (InvalidProjectionInputError, UnknownRiskProfileError) as e:
        logging.warning(f"Invalid portfolio input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return PortfolioGrowthResponse(
        total_principal=growth.total_principal,
        total_growth=growth.total_growth,
        total_current_value=growth.total_current_value,
        overall_growth_rate=growth.overall_growth_rate,
        avg_monthly_contribution=avg_contribution,
        holdings=[
            HoldingGrowthSchema(
                amount=h.amount,
                invested_on=h.invested_on,
                days_invested=h.days_invested,
                growth_amount=h.growth_amount,
                current_value=h.current_value,
            )
            for h in growth.holdings
        ],
    )


@router.post("/portfolio/history", response_model=PortfolioHistoryResponse)
def get_portfolio_history(request_body: PortfolioGrowthRequest, request_id: str = Depends(get_request_id)):
    """Daily (or weekly, for 1y) portfolio values for charts, with a summary of the window"""
    as_of = request_body.as_of or date.today()
    holdings = _holdings(request_body.holdings)

    try:
        rate = annual_rate_for(request_body.risk_profile or settings.default_risk_profile)
        summary = calculate_period_growth(holdings, rate, request_body.period, as_of, settings.growth_cap_rate)
        history = generate_portfolio_history(
            holdings,
            rate,
            request_body.period,
            as_of,
            settings.growth_cap_rate,
        )
    except (InvalidProjectionInputError, UnknownRiskProfileError) as e:
        logging.warning(f"Invalid portfolio input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return PortfolioHistoryResponse(
        period=request_body.period,
        summary=PeriodGrowthSchema(
            period_start=summary.period_start,
            period_end=summary.period_end,
            added_this_period=summary.added_this_period,
            growth_this_period=summary.growth_this_period,
            growth_rate=summary.growth_rate,
            current_balance=summary.current_balance,
            existing_count=summary.existing_count,
            new_count=summary.new_count,
        ),
        history=[
            PortfolioPointSchema(
                date=p.date,
                total_balance=p.total_balance,
                contributions=p.contributions,
                growth=p.growth,
                growth_rate=p.growth_rate,
                roundup_count=p.roundup_count,
                amount_added=p.amount_added,
            )
            for p in history
        ],
    )
