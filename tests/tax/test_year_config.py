"""Tests for section 461(l) excess business loss thresholds."""

from decimal import Decimal

import pytest

from ebl_planner.tax.year_config import (
    EXCESS_BUSINESS_LOSS_THRESHOLDS,
    get_excess_business_loss_limit,
)

D = Decimal


class TestPublishedThresholds:
    @pytest.mark.parametrize(
        ("tax_year", "single", "joint"),
        [
            (2018, D("250000"), D("500000")),
            (2021, D("262000"), D("524000")),
            (2023, D("289000"), D("578000")),
            (2024, D("305000"), D("610000")),
            (2025, D("317000"), D("634000")),
        ],
    )
    def test_table_values(self, tax_year, single, joint) -> None:
        assert get_excess_business_loss_limit(tax_year, filing_status_single=True) == single
        assert get_excess_business_loss_limit(tax_year, filing_status_single=False) == joint

    def test_joint_is_double_single(self) -> None:
        for threshold in EXCESS_BUSINESS_LOSS_THRESHOLDS.values():
            assert threshold.married_filing_jointly == threshold.single * 2

    def test_threshold_frozen(self) -> None:
        with pytest.raises(AttributeError):
            EXCESS_BUSINESS_LOSS_THRESHOLDS[2024].single = D("1")  # type: ignore[misc]

    def test_years_before_2018_use_2018(self) -> None:
        assert get_excess_business_loss_limit(2010) == D("250000")
        assert get_excess_business_loss_limit(2017, filing_status_single=False) == D("500000")


class TestProjectedThresholds:
    """Years after 2025 compound the 2025 value and round to $1,000."""

    def test_one_year_out(self) -> None:
        # 317,000 x 1.03 = 326,510 -> 327,000
        assert get_excess_business_loss_limit(2026) == D("327000")
        # 634,000 x 1.03 = 653,020 -> 653,000
        assert get_excess_business_loss_limit(2026, filing_status_single=False) == D("653000")

    def test_two_years_out(self) -> None:
        # 317,000 x 1.0609 = 336,305.3 -> 336,000
        assert get_excess_business_loss_limit(2027) == D("336000")

    def test_rounds_to_nearest_thousand(self) -> None:
        # 317,000 x 1.005 = 318,585 -> 319,000
        assert get_excess_business_loss_limit(
            2026, cost_of_living_adjustment=D("1.005")
        ) == D("319000")
        # 317,000 x 1.0015 = 317,475.5 -> 317,000
        assert get_excess_business_loss_limit(
            2026, cost_of_living_adjustment=D("1.0015")
        ) == D("317000")

    def test_no_inflation_keeps_base(self) -> None:
        assert get_excess_business_loss_limit(
            2035, cost_of_living_adjustment=D("1")
        ) == D("317000")

    def test_projection_increases_each_year(self) -> None:
        limits = [get_excess_business_loss_limit(year) for year in range(2025, 2036)]
        assert limits == sorted(limits)
        assert all(limit % 1000 == 0 for limit in limits)
