"""Time-weighted growth of individual round-ups"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from roundup_gateway.domain.exceptions import InvalidProjectionInputError
from roundup_gateway.domain.models import (
    HistoryPeriod,
    HoldingGrowth,
    PeriodGrowth,
    PortfolioPoint,
    RoundUpHolding,
    TimeWeightedGrowth,
)
from roundup_gateway.utils.date_utils import generate_date_range
from roundup_gateway.utils.money import CENT, quantize, to_decimal

DAYS_PER_YEAR = 365
DEFAULT_GROWTH_CAP = Decimal("0.30")

# (days of history, days between points)
PERIOD_WINDOWS: Dict[HistoryPeriod, tuple[int, int]] = {
    HistoryPeriod.WEEK: (7, 1),
    HistoryPeriod.MONTH: (30, 1),
    HistoryPeriod.QUARTER: (90, 1),
    HistoryPeriod.YEAR: (365, 7),
}

ZERO = Decimal("0")


def _round(value: Decimal, exponent: Decimal = CENT) -> Decimal:
    try:
        return quantize(value, exponent)
    except ValueError as e:
        raise InvalidProjectionInputError(f"Growth out of range: {e}") from e


def _period(period: HistoryPeriod | str) -> HistoryPeriod:
    try:
        return HistoryPeriod(period)
    except ValueError as e:
        raise InvalidProjectionInputError(f"Unknown history period: {period!r}") from e


def calculate_time_weighted_growth(
    holdings: Sequence[RoundUpHolding],
    annual_rate: Any,
    as_of: date,
    growth_cap: Any = DEFAULT_GROWTH_CAP,
) -> TimeWeightedGrowth:
    """
    Value each round-up by how long it has been invested.

    Requirements:
    - Simple daily interest: principal * (annual_rate / 365) * days
    - Same-day or future-dated round-ups have zero growth
    - Growth per round-up is capped at ``growth_cap`` of its principal
    """
    try:
        rate = to_decimal(annual_rate)
        cap = to_decimal(growth_cap)
    except (TypeError, ValueError) as e:
        raise InvalidProjectionInputError(f"Invalid growth parameters: {e}") from e
    if rate < 0:
        raise InvalidProjectionInputError(f"annual_rate cannot be negative: {rate}")

    daily_rate = rate / DAYS_PER_YEAR
    total_principal = ZERO
    total_growth = ZERO
    details: List[HoldingGrowth] = []

    for holding in holdings:
        principal = to_decimal(holding.amount)
        days = max(0, (as_of - holding.invested_on).days)

        growth = min(principal * daily_rate * days, principal * cap)

        total_principal += principal
        total_growth += growth
        details.append(
            HoldingGrowth(
                amount=_round(principal),
                invested_on=holding.invested_on,
                days_invested=days,
                growth_amount=_round(growth, Decimal("0.0001")),
                current_value=_round(principal + growth),
            )
        )

    overall_rate = total_growth / total_principal * 100 if total_principal > 0 else ZERO

    return TimeWeightedGrowth(
        total_principal=_round(total_principal),
        total_growth=_round(total_growth),
        total_current_value=_round(total_principal + total_growth),
        overall_growth_rate=_round(overall_rate, Decimal("0.001")),
        holdings=details,
    )


def generate_portfolio_history(
    holdings: Sequence[RoundUpHolding],
    annual_rate: Any,
    period: HistoryPeriod | str = HistoryPeriod.MONTH,
    end_date: date | None = None,
    growth_cap: Any = DEFAULT_GROWTH_CAP,
) -> List[PortfolioPoint]:
    """
    Portfolio value series for charts.

    Short periods produce one point per day, a year produces weekly points.
    Each point values only the round-ups invested on or before that day.
    """
    if not holdings:
        return []

    period = _period(period)

    if end_date is None:
        end_date = date.today()

    window_days, step_days = PERIOD_WINDOWS[period]
    start_date = end_date - timedelta(days=window_days)
    ordered = sorted(holdings, key=lambda h: h.invested_on)

    history = []
    previous = start_date - timedelta(days=step_days)
    for point in generate_date_range(start_date, end_date, step_days):
        active = [h for h in ordered if h.invested_on <= point]
        added = sum((to_decimal(h.amount) for h in active if h.invested_on > previous), ZERO)
        previous = point

        analysis = calculate_time_weighted_growth(active, annual_rate, point, growth_cap)
        history.append(
            PortfolioPoint(
                date=point,
                total_balance=analysis.total_current_value,
                contributions=analysis.total_principal,
                growth=analysis.total_growth,
                growth_rate=analysis.overall_growth_rate,
                roundup_count=len(active),
                amount_added=_round(added),
            )
        )

    return history


def calculate_period_growth(
    holdings: Sequence[RoundUpHolding],
    annual_rate: Any,
    period: HistoryPeriod | str = HistoryPeriod.MONTH,
    as_of: date | None = None,
    growth_cap: Any = DEFAULT_GROWTH_CAP,
) -> PeriodGrowth:
    """
    Summarize one look-back window of the portfolio.

    Round-ups invested before the window opened are "existing"; the rest were
    added during it. Growth for the window is what the existing round-ups
    earned between its start and ``as_of``, so new money never inflates the
    growth rate. The rate is relative to the existing round-ups' value at the
    start of the window.
    """
    period = _period(period)
    if as_of is None:
        as_of = date.today()

    window_days, _ = PERIOD_WINDOWS[period]
    period_start = as_of - timedelta(days=window_days)

    existing = [h for h in holdings if h.invested_on < period_start]
    added = [h for h in holdings if h.invested_on >= period_start]

    current = calculate_time_weighted_growth(holdings, annual_rate, as_of, growth_cap)

    start_balance = ZERO
    growth_this_period = ZERO
    if existing:
        at_start = calculate_time_weighted_growth(existing, annual_rate, period_start, growth_cap)
        existing_now = calculate_time_weighted_growth(existing, annual_rate, as_of, growth_cap)
        start_balance = at_start.total_current_value
        growth_this_period = max(ZERO, existing_now.total_growth - at_start.total_growth)

    growth_rate = growth_this_period / start_balance * 100 if start_balance > 0 else ZERO

    return PeriodGrowth(
        period=period,
        period_start=period_start,
        period_end=as_of,
        added_this_period=_round(sum((to_decimal(h.amount) for h in added), ZERO)),
        growth_this_period=_round(growth_this_period),
        growth_rate=_round(growth_rate),
        current_balance=current.total_current_value,
        period_start_balance=start_balance,
        existing_count=len(existing),
        new_count=len(added),
    )
