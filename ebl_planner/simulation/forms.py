"""Simplified federal return line computations.

Implements the subset of Form 1040 that the excess business loss planner
needs, in the order the lines depend on each other:

1. Schedule D: combine personal and business capital gains, limit a net
   capital loss, and split the limited amount back into its two portions
2. Form 461: excess business loss limitation (section 461(l))
3. Schedule 1: additional income, including the NOL deduction (line 8a) and
   the excess business loss add-back (line 8p)
4. Form 1040: total income, AGI and taxable income

Tax, credits and payments are not computed. All arithmetic uses Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ebl_planner.simulation.amounts import ZERO

CAPITAL_LOSS_LIMIT = Decimal("3000")
TWO_PLACES = Decimal("0.01")


# =============================================================================
# Schedule D
# =============================================================================


@dataclass(frozen=True)
class ScheduleDResult:
    """Schedule D summary lines.

    Attributes:
        line16: Combined net capital gain or (loss).
        line21: Amount carried to Form 1040 line 7 after the loss limit.
        total_business_gains: Business portion of line 16.
        total_personal_gains: Personal portion of line 16.
        limited_business_gains: Business portion of line 21.
        limited_personal_gains: Personal portion of line 21.
    """

    line16: Decimal
    line21: Decimal
    total_business_gains: Decimal
    total_personal_gains: Decimal
    limited_business_gains: Decimal
    limited_personal_gains: Decimal


def calculate_schedule_d(
    personal_gains: Decimal, business_gains: Decimal
) -> ScheduleDResult:
    """Combine capital gains and apply the capital loss limit.

    When the loss limit applies, the limited amount is allocated between the
    business and personal portions in proportion to their share of the loss.
    The business share is rounded to cents and the personal share takes the
    residual, so the two always add back to line 21.
    """
    line16 = personal_gains + business_gains
    line21 = max(line16, -CAPITAL_LOSS_LIMIT) if line16 < ZERO else line16

    if line21 == line16:
        limited_business = business_gains
        limited_personal = personal_gains
    else:
        limited_business = (line21 * business_gains / line16).quantize(TWO_PLACES)
        limited_personal = line21 - limited_business

    return ScheduleDResult(
        line16=line16,
        line21=line21,
        total_business_gains=business_gains,
        total_personal_gains=personal_gains,
        limited_business_gains=limited_business,
        limited_personal_gains=limited_personal,
    )


# =============================================================================
# Form 461
# =============================================================================


@dataclass(frozen=True)
class Form461Result:
    """Form 461 lines (Limitation on Business Losses).

    Attributes:
        line2: Schedule 1 line 3 (business income or loss).
        line3: Form 1040 line 7 (capital gain or loss, limited).
        line4: Schedule 1 line 4 (other gains or losses).
        line5: Schedule 1 line 5 (rental, royalties, pass-throughs).
        line6: Schedule 1 line 6 (farm income or loss).
        line8: Other trade or business income, gain or loss.
        line9: Combine lines 1 through 8.
        line10: Non-business income or gain included above.
        line11: Non-business losses or deductions included above.
        line12: Line 10 minus line 11.
        line13: Line 12 with its sign reversed.
        line14: Net business income or loss (line 9 plus line 13).
        line15: Maximum excess business loss.
        line16: Excess business loss (positive amount), if any.
    """

    line2: Decimal
    line3: Decimal
    line4: Decimal
    line5: Decimal
    line6: Decimal
    line8: Decimal
    line9: Decimal
    line10: Decimal
    line11: Decimal
    line12: Decimal
    line13: Decimal
    line14: Decimal
    line15: Decimal
    line16: Decimal


def calculate_form_461(
    business_income: Decimal,
    schedule_d: ScheduleDResult,
    limit: Decimal,
    other_gains: Decimal = ZERO,
    rental_income: Decimal = ZERO,
    farm_income: Decimal = ZERO,
) -> Form461Result:
    """Compute the excess business loss.

    Args:
        business_income: Schedule 1 line 3.
        schedule_d: Schedule D result supplying line 3 and the personal
            capital gain portion removed on line 10.
        limit: Maximum excess business loss (line 15).
        other_gains: Schedule 1 line 4.
        rental_income: Schedule 1 line 5.
        farm_income: Schedule 1 line 6.

    Returns:
        Form461Result with all computed lines.
    """
    line8 = ZERO
    line9 = (
        business_income
        + schedule_d.line21
        + other_gains
        + rental_income
        + farm_income
        + line8
    )

    line10 = schedule_d.limited_personal_gains
    line11 = ZERO
    line12 = line10 - line11
    line13 = -line12
    line14 = line9 + line13
    line16 = abs(min(ZERO, line14 + limit))

    return Form461Result(
        line2=business_income,
        line3=schedule_d.line21,
        line4=other_gains,
        line5=rental_income,
        line6=farm_income,
        line8=line8,
        line9=line9,
        line10=line10,
        line11=line11,
        line12=line12,
        line13=line13,
        line14=line14,
        line15=limit,
        line16=line16,
    )


# =============================================================================
# Schedule 1
# =============================================================================


@dataclass(frozen=True)
class Schedule1Result:
    """Schedule 1 lines.

    Attributes:
        line3: Business income or (loss).
        line4: Other gains or (losses).
        line5: Rental real estate, royalties, partnerships, S corporations.
        line6: Farm income or (loss).
        line8a: Net operating loss deduction (negative).
        line8p: Section 461(l) excess business loss adjustment.
        line9: Total other income.
        line10: Additional income (Form 1040 line 8).
        line26: Adjustments to income (Form 1040 line 10).
        form461: Form 461 computation feeding line 8p.
    """

    line3: Decimal
    line4: Decimal
    line5: Decimal
    line6: Decimal
    line8a: Decimal
    line8p: Decimal
    line9: Decimal
    line10: Decimal
    line26: Decimal
    form461: Form461Result


def calculate_schedule_1(
    form461: Form461Result,
    nol_deduction: Decimal,
    adjustments: Decimal = ZERO,
) -> Schedule1Result:
    """Compute additional income and adjustments to income."""
    line8a = -nol_deduction
    line8p = form461.line16
    line9 = line8a + line8p
    line10 = form461.line2 + form461.line4 + form461.line5 + form461.line6 + line9

    return Schedule1Result(
        line3=form461.line2,
        line4=form461.line4,
        line5=form461.line5,
        line6=form461.line6,
        line8a=line8a,
        line8p=line8p,
        line9=line9,
        line10=line10,
        line26=adjustments,
        form461=form461,
    )


# =============================================================================
# Form 1040
# =============================================================================


@dataclass(frozen=True)
class Form1040Result:
    """Form 1040 income lines through taxable income.

    Attributes:
        line9: Total income.
        line10: Adjustments to income.
        line11: Adjusted gross income.
        line12: Standard deduction.
        line15: Taxable income (minimum 0).
        schedule_1: Schedule 1 computation.
        schedule_d: Schedule D computation.
    """

    line9: Decimal
    line10: Decimal
    line11: Decimal
    line12: Decimal
    line15: Decimal
    schedule_1: Schedule1Result
    schedule_d: ScheduleDResult


def calculate_form_1040(
    ordinary_income: Decimal,
    schedule_d: ScheduleDResult,
    schedule_1: Schedule1Result,
    standard_deduction: Decimal,
) -> Form1040Result:
    """Compute AGI and taxable income.

    Args:
        ordinary_income: Sum of Form 1040 lines 1z through 6b.
        schedule_d: Schedule D result supplying line 7.
        schedule_1: Schedule 1 result supplying lines 8 and 10.
        standard_deduction: Deduction subtracted from AGI (line 12).
    """
    line9 = ordinary_income + schedule_d.line21 + schedule_1.line10
    line10 = schedule_1.line26
    line11 = line9 - line10
    line15 = max(ZERO, line11 - standard_deduction)

    return Form1040Result(
        line9=line9,
        line10=line10,
        line11=line11,
        line12=standard_deduction,
        line15=line15,
        schedule_1=schedule_1,
        schedule_d=schedule_d,
    )
