"""Unit tests for time-weighted growth and portfolio history"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from roundup_gateway.domain.exceptions import InvalidProjectionInputError
from roundup_gateway.domain.growth import (
    calculate_period_growth,
    calculate_time_weighted_growth,
    generate_portfolio_history,
)
from roundup_gateway.domain.models import HistoryPeriod, RoundUpHolding


def test_time_weighted_growth_simple_daily_interest():
    """Test $100 at 3.65% for 10 days earns 0.01% per day"""
    holdings = [RoundUpHolding(amount=Decimal("100.00"), invested_on=date(2024, 1, 1))]

    result = calculate_time_weighted_growth(holdings, Decimal("0.0365"), date(2024, 1, 11))

    assert result.total_principal == Decimal("100.00")
    assert result.total_growth == Decimal("0.10")
    assert result.total_current_value == Decimal("100.10")
    assert result.overall_growth_rate == Decimal("0.100")
    assert result.holdings[0].days_invested == 10
    assert result.holdings[0].growth_amount == Decimal("0.1000")


def test_time_weighted_growth_is_capped():
    """Test growth never exceeds 30% of principal"""
    holdings = [RoundUpHolding(amount=Decimal("10.00"), invested_on=date(2020, 1, 1))]

    result = calculate_time_weighted_growth(holdings, Decimal("0.12"), date(2024, 1, 1))

    assert result.total_growth == Decimal("3.00")
    assert result.total_current_value == Decimal("13.00")


def test_time_weighted_growth_future_round_up_has_no_growth():
    holdings = [RoundUpHolding(amount=Decimal("0.68"), invested_on=date(2024, 2, 1))]

    result = calculate_time_weighted_growth(holdings, Decimal("0.08"), date(2024, 1, 1))

    assert result.holdings[0].days_invested == 0
    assert result.total_current_value == Decimal("0.68")


def test_time_weighted_growth_empty():
    result = calculate_time_weighted_growth([], Decimal("0.08"), date(2024, 1, 1))

    assert result.total_principal == Decimal("0.00")
    assert result.overall_growth_rate == Decimal("0")
    assert result.holdings == []


def test_time_weighted_growth_rejects_negative_rate():
    with pytest.raises(InvalidProjectionInputError):
        calculate_time_weighted_growth([], Decimal("-0.01"), date(2024, 1, 1))


def test_portfolio_history_daily_points(sample_holdings):
    """Test one point per day with round-ups added on the day they land"""
    history = generate_portfolio_history(
        sample_holdings, Decimal("0.08"), HistoryPeriod.WEEK, end_date=date(2024, 3, 20)
    )

    assert len(history) == 8
    assert history[0].date == date(2024, 3, 13)
    assert history[-1].date == date(2024, 3, 20)

    by_date = {point.date: point for point in history}
    assert by_date[date(2024, 3, 14)].roundup_count == 3
    assert by_date[date(2024, 3, 15)].roundup_count == 4
    assert by_date[date(2024, 3, 15)].amount_added == Decimal("0.25")
    assert by_date[date(2024, 3, 16)].amount_added == Decimal("0.00")
    assert history[-1].contributions == Decimal("2.55")
    assert history[-1].total_balance > history[-1].contributions


def test_portfolio_history_year_is_weekly(sample_holdings):
    history = generate_portfolio_history(sample_holdings, Decimal("0.08"), "1y", end_date=date(2024, 3, 20))

    assert len(history) == 53
    assert history[1].date - history[0].date == timedelta(days=7)
    assert history[0].roundup_count == 0
    assert history[0].total_balance == Decimal("0.00")


def test_portfolio_history_empty_holdings():
    assert generate_portfolio_history([], Decimal("0.08"), "30d") == []


def test_portfolio_history_unknown_period(sample_holdings):
    with pytest.raises(InvalidProjectionInputError):
        generate_portfolio_history(sample_holdings, Decimal("0.08"), "2w")


def test_period_growth_splits_existing_and_new_round_ups():
    """Test only round-ups held before the window count toward its growth"""
    holdings = [
        RoundUpHolding(amount=Decimal("100.00"), invested_on=date(2024, 1, 1)),
        RoundUpHolding(amount=Decimal("50.00"), invested_on=date(2024, 3, 25)),
    ]

    result = calculate_period_growth(holdings, Decimal("0.0365"), HistoryPeriod.WEEK, date(2024, 3, 31))

    # Existing $100: 83 days (0.83) at window start, 90 days (0.90) now
    assert result.period_start == date(2024, 3, 24)
    assert result.period_end == date(2024, 3, 31)
    assert result.existing_count == 1
    assert result.new_count == 1
    assert result.added_this_period == Decimal("50.00")
    assert result.period_start_balance == Decimal("100.83")
    assert result.growth_this_period == Decimal("0.07")
    assert result.growth_rate == Decimal("0.07")
    # New $50 held 6 days adds 0.03
    assert result.current_balance == Decimal("150.93")


def test_period_growth_only_new_round_ups():
    """Test a window with no prior round-ups reports additions but no growth"""
    holdings = [RoundUpHolding(amount=Decimal("0.53"), invested_on=date(2024, 1, 5))]

    result = calculate_period_growth(holdings, Decimal("0.08"), "30d", date(2024, 1, 10))

    assert result.existing_count == 0
    assert result.added_this_period == Decimal("0.53")
    assert result.growth_this_period == Decimal("0.00")
    assert result.growth_rate == Decimal("0.00")


def test_period_growth_unknown_period():
    with pytest.raises(InvalidProjectionInputError):
        calculate_period_growth([], Decimal("0.08"), "2w", date(2024, 1, 10))


def test_time_weighted_growth_too_large_to_round():
    holdings = [RoundUpHolding(amount=Decimal("1e27"), invested_on=date(2024, 1, 1))]

    with pytest.raises(InvalidProjectionInputError):
        calculate_time_weighted_growth(holdings, Decimal("0.08"), date(2024, 1, 2))
