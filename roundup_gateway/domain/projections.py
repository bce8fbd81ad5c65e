"""Compound-growth projections of accumulated round-ups"""

import math
from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import Any, Dict, Iterable, List, Optional, Tuple

from roundup_gateway.domain.exceptions import InvalidProjectionInputError
from roundup_gateway.domain.models import (
    CustomProjection,
    GoalProgress,
    GoalTimeline,
    ProfileProjection,
    ProjectionResult,
    RiskProfile,
    RoundUpHolding,
)
from roundup_gateway.domain.profiles import SAVINGS_GOALS, RISK_PROFILES, profiles_by_rate
from roundup_gateway.utils.date_utils import add_months
from roundup_gateway.utils.money import CENT, quantize, to_decimal

CHECKPOINT_YEARS = (1, 3, 5, 10)
MONTHS_PER_YEAR = 12
MAX_ANNUAL_RATE = Decimal("1.0")
MAX_HORIZON_YEARS = Decimal("50")

ZERO = Decimal("0")
TENTH = Decimal("0.1")


def _as_decimal(name: str, value: Any) -> Decimal:
    try:
        return to_decimal(value)
    except (TypeError, ValueError) as e:
        raise InvalidProjectionInputError(f"{name} must be a number: {value!r}") from e


def _round(value: Decimal, exponent: Decimal = CENT) -> Decimal:
    try:
        return quantize(value, exponent)
    except ValueError as e:
        raise InvalidProjectionInputError(f"Result out of range: {e}") from e


def _validate_inputs(
    current_balance: Any,
    monthly_contribution: Any,
    annual_rate: Any,
    max_rate: Decimal = MAX_ANNUAL_RATE,
) -> Tuple[Decimal, Decimal, Decimal]:
    balance = _as_decimal("current_balance", current_balance)
    contribution = _as_decimal("monthly_contribution", monthly_contribution)
    rate = _as_decimal("annual_rate", annual_rate)

    if balance < 0:
        raise InvalidProjectionInputError(f"current_balance cannot be negative: {balance}")
    if contribution < 0:
        raise InvalidProjectionInputError(f"monthly_contribution cannot be negative: {contribution}")
    if rate < 0 or rate > max_rate:
        raise InvalidProjectionInputError(f"annual_rate must be between 0 and {max_rate}: {rate}")

    return balance, contribution, rate


def _horizon_months(horizon_years: Any, max_years: Decimal = MAX_HORIZON_YEARS) -> Tuple[Decimal, int]:
    """Validate a horizon and convert it to whole months (rounded down)"""
    horizon = _as_decimal("horizon_years", horizon_years)
    if horizon <= 0:
        raise InvalidProjectionInputError(f"horizon_years must be positive: {horizon}")
    if horizon > max_years:
        raise InvalidProjectionInputError(f"horizon_years cannot exceed {max_years}: {horizon}")

    months = int((horizon * MONTHS_PER_YEAR).to_integral_value(rounding=ROUND_FLOOR))
    return horizon, months


def _compound(balance: Decimal, contribution: Decimal, annual_rate: Decimal, months: int) -> Decimal:
    """
    Monthly compounding with end-of-period contributions (ordinary annuity).

    Interest for the month is applied to the prior balance, then the
    contribution is added. Returns the unrounded value.
    """
    growth = 1 + annual_rate / MONTHS_PER_YEAR
    for _ in range(months):
        balance = balance * growth + contribution
    return balance


def project(
    current_balance: Any,
    monthly_contribution: Any,
    annual_rate: Any,
    horizon_years: Any,
    max_rate: Decimal = MAX_ANNUAL_RATE,
    max_horizon_years: Decimal = MAX_HORIZON_YEARS,
) -> Decimal:
    """
    Future value of a balance plus monthly contributions.

    Raises:
        InvalidProjectionInputError: Negative amounts, rate out of bounds,
            or non-positive horizon
    """
    balance, contribution, rate = _validate_inputs(current_balance, monthly_contribution, annual_rate, max_rate)
    _, months = _horizon_months(horizon_years, max_horizon_years)
    return _round(_compound(balance, contribution, rate, months))


def _checkpoint_values(balance: Decimal, contribution: Decimal, rate: Decimal) -> ProjectionResult:
    # One pass over the longest horizon, sampled at each checkpoint
    checkpoints = {years * MONTHS_PER_YEAR: years for years in CHECKPOINT_YEARS}
    values: Dict[int, Decimal] = {}
    growth = 1 + rate / MONTHS_PER_YEAR
    for month in range(1, max(checkpoints) + 1):
        balance = balance * growth + contribution
        if month in checkpoints:
            values[checkpoints[month]] = _round(balance)

    return ProjectionResult(
        one_year=values[1],
        three_years=values[3],
        five_years=values[5],
        ten_years=values[10],
    )


def project_checkpoints(
    current_balance: Any,
    monthly_contribution: Any,
    profile: RiskProfile | str,
) -> ProfileProjection:
    """Project 1, 3, 5 and 10 year values under a fixed risk profile"""
    profile = RiskProfile.from_name(profile)
    rate, description = RISK_PROFILES[profile]
    balance, contribution, rate = _validate_inputs(current_balance, monthly_contribution, rate)

    return ProfileProjection(
        profile=profile,
        annual_rate=rate,
        description=description,
        current_balance=balance,
        monthly_contribution=contribution,
        projections=_checkpoint_values(balance, contribution, rate),
    )


def compare_profiles(current_balance: Any, monthly_contribution: Any) -> List[ProfileProjection]:
    """Checkpoint projections under every risk profile, lowest return first"""
    return [
        project_checkpoints(current_balance, monthly_contribution, profile)
        for profile in profiles_by_rate()
    ]


def project_custom(
    current_balance: Any,
    monthly_contribution: Any,
    annual_rate: Any,
    horizon_years: Any,
    max_rate: Decimal = MAX_ANNUAL_RATE,
    max_horizon_years: Decimal = MAX_HORIZON_YEARS,
) -> CustomProjection:
    """
    What-if projection with every input supplied explicitly.

    Fractional horizons are rounded down to whole months. The breakdown
    separates growth of the starting balance from the contribution stream.
    """
    balance, contribution, rate = _validate_inputs(current_balance, monthly_contribution, annual_rate, max_rate)
    horizon, months = _horizon_months(horizon_years, max_horizon_years)

    future_value = _compound(balance, contribution, rate, months)
    from_balance = _compound(balance, ZERO, rate, months)

    total_contributions = balance + contribution * months
    total_growth = future_value - total_contributions
    growth_percentage = (
        total_growth / total_contributions * 100 if total_contributions > 0 else ZERO
    )

    return CustomProjection(
        horizon_years=horizon,
        months=months,
        current_balance=balance,
        monthly_contribution=contribution,
        annual_rate=rate,
        future_value=_round(future_value),
        total_contributions=_round(total_contributions),
        total_growth=_round(total_growth),
        growth_percentage=_round(growth_percentage),
        from_current_balance=_round(from_balance),
        from_contributions=_round(future_value - from_balance),
    )


def _months_of_compounding(balance: Decimal, target: Decimal, growth: Decimal) -> int:
    """Smallest n with balance * growth**n >= target, solved with logarithms"""
    months = math.ceil((target / balance).ln() / growth.ln())
    # ln is rounded to the context precision; step back if n - 1 already suffices
    if months > 0 and balance * growth ** (months - 1) >= target:
        months -= 1
    return months


def months_to_goal(
    current_balance: Any,
    monthly_contribution: Any,
    target_amount: Any,
    annual_rate: Any,
    include_interest: bool = True,
    max_months: int = 600,
) -> GoalTimeline:
    """
    Months of contributions needed to reach a savings target.

    With interest and contributions the projection recurrence is stepped
    until the target is met or ``max_months`` elapse. With interest alone the
    balance compounds toward the target with no month cap. Without interest
    it is plain division.
    ``months_to_reach`` is None when the target cannot be reached.
    """
    balance, contribution, rate = _validate_inputs(current_balance, monthly_contribution, annual_rate)
    target = _as_decimal("target_amount", target_amount)
    if target <= 0:
        raise InvalidProjectionInputError(f"target_amount must be positive: {target}")

    remaining = max(ZERO, target - balance)
    months: Optional[int]

    if balance >= target:
        months = 0
    elif include_interest and rate > 0:
        months = None
        growth = 1 + rate / MONTHS_PER_YEAR
        if contribution == 0 and balance > 0:
            months = _months_of_compounding(balance, target, growth)
        elif contribution > 0:
            value, elapsed = balance, 0
            while value < target and elapsed < max_months:
                value = value * growth + contribution
                elapsed += 1
            if value >= target:
                months = elapsed
    else:
        months = math.ceil(remaining / contribution) if contribution > 0 else None

    years = _round(Decimal(months) / MONTHS_PER_YEAR, TENTH) if months is not None else None

    return GoalTimeline(
        target_amount=target,
        current_balance=balance,
        remaining_amount=_round(remaining),
        monthly_contribution=contribution,
        achieved=balance >= target,
        months_to_reach=months,
        years_to_reach=years,
        include_interest=include_interest,
        annual_rate=rate if include_interest else ZERO,
    )


def track_goals(current_balance: Any, monthly_contribution: Any) -> List[GoalProgress]:
    """Progress toward the standard savings goals, ignoring interest"""
    balance, contribution, _ = _validate_inputs(current_balance, monthly_contribution, ZERO)

    progress = []
    for name, amount in SAVINGS_GOALS:
        remaining = max(ZERO, amount - balance)
        if remaining == 0:
            months: Optional[int] = 0
        elif contribution > 0:
            months = math.ceil(remaining / contribution)
        else:
            months = None

        progress.append(
            GoalProgress(
                name=name,
                amount=amount,
                remaining_amount=_round(remaining),
                progress_percentage=_round(balance / amount * 100, TENTH),
                months_to_reach=months,
                achieved=balance >= amount,
            )
        )
    return progress


def average_monthly_contribution(
    holdings: Iterable[RoundUpHolding],
    as_of: date,
    lookback_months: int = 6,
) -> Decimal:
    """
    Mean monthly round-up total over a trailing window.

    Only calendar months with at least one round-up count toward the mean.
    """
    if lookback_months < 1:
        raise InvalidProjectionInputError(f"lookback_months must be at least 1: {lookback_months}")

    cutoff = add_months(as_of, -lookback_months)
    monthly_totals: Dict[Tuple[int, int], Decimal] = defaultdict(lambda: ZERO)
    for holding in holdings:
        if cutoff <= holding.invested_on <= as_of:
            key = (holding.invested_on.year, holding.invested_on.month)
            monthly_totals[key] += _as_decimal("amount", holding.amount)

    if not monthly_totals:
        return _round(ZERO)
    return _round(sum(monthly_totals.values(), ZERO) / len(monthly_totals))
