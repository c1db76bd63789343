"""Section 461(l) excess business loss thresholds by tax year.

This module centralizes the statutory maximum excess business loss (Form 461,
line 15) so the threshold is never hardcoded at call sites. Published values
cover 2018-2025; later years are projected from the 2025 value with an annual
cost-of-living factor.

Example:
    >>> from ebl_planner.tax.year_config import get_excess_business_loss_limit
    >>> get_excess_business_loss_limit(2024)
    Decimal('305000')
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

ROUNDING_INCREMENT = Decimal("1000")
MINIMUM_PROJECTED_LIMIT = Decimal("1000")


@dataclass(frozen=True)
class ExcessBusinessLossThreshold:
    """Published section 461(l) thresholds for one tax year.

    Attributes:
        tax_year: The tax year these values apply to.
        single: Threshold for single filers.
        married_filing_jointly: Threshold for joint filers.
    """

    tax_year: int
    single: Decimal
    married_filing_jointly: Decimal

    def for_filing_status(self, filing_status_single: bool) -> Decimal:
        """Return the threshold for the given filing status."""
        return self.single if filing_status_single else self.married_filing_jointly


# Registry of published thresholds (IRC 461(l)(3) and Rev. Proc. inflation adjustments)
EXCESS_BUSINESS_LOSS_THRESHOLDS: dict[int, ExcessBusinessLossThreshold] = {
    year: ExcessBusinessLossThreshold(
        tax_year=year, single=Decimal(single), married_filing_jointly=Decimal(joint)
    )
    for year, single, joint in (
        (2018, "250000", "500000"),
        (2019, "255000", "510000"),
        (2020, "259000", "518000"),
        (2021, "262000", "524000"),
        (2022, "270000", "540000"),
        (2023, "289000", "578000"),
        (2024, "305000", "610000"),
        (2025, "317000", "634000"),
    )
}

FIRST_THRESHOLD_YEAR = min(EXCESS_BUSINESS_LOSS_THRESHOLDS)
LATEST_THRESHOLD_YEAR = max(EXCESS_BUSINESS_LOSS_THRESHOLDS)


def get_excess_business_loss_limit(
    tax_year: int,
    filing_status_single: bool = True,
    cost_of_living_adjustment: Decimal = Decimal("1.03"),
) -> Decimal:
    """Get the maximum excess business loss for a tax year.

    Published years return the table value. Years after the latest published
    year compound the latest value by ``cost_of_living_adjustment`` per year,
    rounded half-up to the nearest $1,000 and never below $1,000. Years before
    2018 use the 2018 values.

    Args:
        tax_year: The tax year (e.g., 2024).
        filing_status_single: True for single, False for married filing jointly.
        cost_of_living_adjustment: Annual inflation factor for projected years.

    Returns:
        The threshold amount.

    Example:
        >>> get_excess_business_loss_limit(2026)
        Decimal('327000')
    """
    known = EXCESS_BUSINESS_LOSS_THRESHOLDS.get(tax_year)
    if known is not None:
        return known.for_filing_status(filing_status_single)

    if tax_year < FIRST_THRESHOLD_YEAR:
        return EXCESS_BUSINESS_LOSS_THRESHOLDS[FIRST_THRESHOLD_YEAR].for_filing_status(
            filing_status_single
        )

    base = EXCESS_BUSINESS_LOSS_THRESHOLDS[LATEST_THRESHOLD_YEAR].for_filing_status(
        filing_status_single
    )
    years_since_base = tax_year - LATEST_THRESHOLD_YEAR
    raw = base * cost_of_living_adjustment**years_since_base
    rounded = (raw / ROUNDING_INCREMENT).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    ) * ROUNDING_INCREMENT
    return max(rounded, MINIMUM_PROJECTED_LIMIT)
