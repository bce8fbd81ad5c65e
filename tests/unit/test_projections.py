"""Unit tests for compound growth projections"""

import pytest
from decimal import Decimal
from roundup_gateway.domain.exceptions import InvalidProjectionInputError, UnknownRiskProfileError
from roundup_gateway.domain.models import RiskProfile
from roundup_gateway.domain.profiles import annual_rate_for, profiles_by_rate
from roundup_gateway.domain.projections import (
    compare_profiles,
    project,
    project_checkpoints,
    project_custom,
)


def test_project_three_months_of_contributions():
    """Test $35/month at 4% for 3 months: $105 contributed plus a little growth"""
    result = project(0, 35, Decimal("0.04"), Decimal("0.25"))

    # 35 -> 35*(1+r)+35 = 70.1167 -> 70.1167*(1+r)+35 = 105.3504
    assert result == Decimal("105.35")
    assert Decimal("105") < result < Decimal("106.05")


def test_project_zero_rate_is_plain_sum():
    assert project(100, 10, 0, 1) == Decimal("220.00")


def test_project_balance_only_compounds_monthly():
    """Test $1000 at 12% compounds to 1000 * 1.01^12"""
    assert project(1000, 0, Decimal("0.12"), 1) == Decimal("1126.83")


def test_project_contribution_added_after_interest():
    """Test one month: contribution earns no interest in the month it is added"""
    assert project(0, 100, Decimal("0.12"), Decimal("0.09")) == Decimal("100.00")
    assert project(1200, 100, Decimal("0.12"), Decimal("0.09")) == Decimal("1312.00")


def test_project_increases_with_horizon():
    """Test longer horizons always project a larger value"""
    values = [project(250, 35, Decimal("0.05"), years) for years in range(1, 11)]
    assert all(earlier < later for earlier, later in zip(values, values[1:]))


def test_project_accepts_float_inputs():
    assert project(100.0, 10.0, 0.0, 1) == Decimal("220.00")


@pytest.mark.parametrize(
    "balance, contribution, rate, horizon",
    [
        (-1, 10, "0.05", 1),
        (100, -10, "0.05", 1),
        (100, 10, "-0.01", 1),
        (100, 10, "1.5", 1),
        (100, 10, "0.05", 0),
        (100, 10, "0.05", -1),
        (100, 10, "0.05", 51),
        ("abc", 10, "0.05", 1),
        (100, None, "0.05", 1),
    ],
)
def test_project_rejects_invalid_inputs(balance, contribution, rate, horizon):
    with pytest.raises(InvalidProjectionInputError):
        project(balance, contribution, Decimal(rate), horizon)


def test_project_checkpoints_match_single_projections():
    """Test the one-pass checkpoint projection agrees with individual horizons"""
    result = project_checkpoints(Decimal("120.50"), Decimal("35"), RiskProfile.BALANCED)
    rate = Decimal("0.08")

    assert result.profile is RiskProfile.BALANCED
    assert result.annual_rate == rate
    assert result.description.startswith("8%")
    assert result.projections.one_year == project(Decimal("120.50"), 35, rate, 1)
    assert result.projections.three_years == project(Decimal("120.50"), 35, rate, 3)
    assert result.projections.five_years == project(Decimal("120.50"), 35, rate, 5)
    assert result.projections.ten_years == project(Decimal("120.50"), 35, rate, 10)


def test_project_checkpoints_accepts_profile_name():
    result = project_checkpoints(0, 10, " Aggressive ")
    assert result.profile is RiskProfile.AGGRESSIVE
    assert result.annual_rate == Decimal("0.12")


def test_project_checkpoints_unknown_profile():
    with pytest.raises(UnknownRiskProfileError):
        project_checkpoints(0, 10, "yolo")


def test_compare_profiles_orders_by_rate():
    """Test side-by-side projections for all three profiles"""
    results = compare_profiles(500, 40)

    assert [r.profile for r in results] == [
        RiskProfile.CONSERVATIVE,
        RiskProfile.BALANCED,
        RiskProfile.AGGRESSIVE,
    ]
    ten_year = [r.projections.ten_years for r in results]
    assert ten_year[0] < ten_year[1] < ten_year[2]

    for r in results:
        assert r.projections.ten_years == project(500, 40, annual_rate_for(r.profile), 10)


def test_profiles_by_rate_lookup_table():
    assert [annual_rate_for(p) for p in profiles_by_rate()] == [
        Decimal("0.05"),
        Decimal("0.08"),
        Decimal("0.12"),
    ]


def test_project_custom_breakdown():
    """Test the breakdown between starting balance and contributions"""
    result = project_custom(1000, 0, Decimal("0.12"), 1)

    assert result.months == 12
    assert result.future_value == Decimal("1126.83")
    assert result.from_current_balance == Decimal("1126.83")
    assert result.from_contributions == Decimal("0.00")
    assert result.total_contributions == Decimal("1000.00")
    assert result.total_growth == Decimal("126.83")
    assert result.growth_percentage == Decimal("12.68")


def test_project_custom_fractional_horizon_rounds_down_to_months():
    result = project_custom(0, 10, 0, Decimal("0.5"))
    assert result.months == 6
    assert result.future_value == Decimal("60.00")

    result = project_custom(0, 10, 0, Decimal("0.1"))
    assert result.months == 1
    assert result.future_value == Decimal("10.00")


def test_project_custom_horizon_shorter_than_a_month():
    result = project_custom(250, 10, Decimal("0.05"), Decimal("0.05"))

    assert result.months == 0
    assert result.future_value == Decimal("250.00")
    assert result.total_growth == Decimal("0.00")


def test_project_custom_nothing_contributed():
    result = project_custom(0, 0, Decimal("0.08"), 5)

    assert result.future_value == Decimal("0.00")
    assert result.growth_percentage == Decimal("0.00")


def test_project_result_too_large_to_round():
    """Test a balance too large for cent precision is rejected, not crashed on"""
    with pytest.raises(InvalidProjectionInputError):
        project(Decimal("1e27"), 0, Decimal("0.05"), 1)

    with pytest.raises(InvalidProjectionInputError):
        project_custom(Decimal("1e27"), 0, Decimal("0.05"), 1)

    with pytest.raises(InvalidProjectionInputError):
        project_checkpoints(Decimal("1e27"), 0, RiskProfile.BALANCED)


def test_project_custom_respects_limits():
    with pytest.raises(InvalidProjectionInputError):
        project_custom(0, 10, Decimal("0.3"), 1, max_rate=Decimal("0.2"))

    with pytest.raises(InvalidProjectionInputError):
        project_custom(0, 10, Decimal("0.05"), 20, max_horizon_years=Decimal("10"))
