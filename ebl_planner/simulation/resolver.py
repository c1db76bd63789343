"""Two-pass resolution of one simulated year.

AGI depends on the NOL deduction, and the usable NOL deduction depends on AGI.
The circularity is broken in a fixed order:

1. Preliminary pass: evaluate the return with no NOL deduction
2. Clamp: NOL used = min(starting NOL, max(0, preliminary AGI))
3. Final pass: evaluate the return again with that deduction
4. Allowed loss: add the disallowed portion back to a net business loss
5. New NOL: any AGI still negative after the deduction

This is only sound because the excess business loss limitation does not
depend on the NOL deduction; every year checks that the two passes agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ebl_planner.simulation.amounts import ZERO
from ebl_planner.simulation.federal_return import (
    FederalReturnAdapter,
    LimitationDependenceError,
    LimitationOutput,
    build_federal_return_input,
)
from ebl_planner.simulation.models import CanonicalYear, YearResult


@dataclass(frozen=True)
class YearResolution:
    """A resolved year plus the carryforward for the following year.

    Attributes:
        result: The year's result.
        next_starting_nol: Carryforward handed to the next year.
    """

    result: YearResult
    next_starting_nol: Decimal


def _fallback_limitation(year: CanonicalYear) -> LimitationOutput:
    """Limitation values used when the adapter reports none."""
    return LimitationOutput(
        limit=year.override_limit if year.override_limit is not None else ZERO,
        net_business_income=year.business_net_income + year.business_capital_gain,
        disallowed_loss=ZERO,
    )


def resolve_year(
    year: CanonicalYear,
    starting_nol: Decimal,
    adapter: FederalReturnAdapter,
) -> YearResolution:
    """Resolve one year's losses, NOL usage and carryforward.

    Args:
        year: Canonical inputs for the year.
        starting_nol: Carryforward available at the start of the year (>= 0).
        adapter: Federal return adapter, called exactly twice.

    Returns:
        YearResolution with the year's result and the next carryforward.

    Raises:
        LimitationDependenceError: If the limitation output differs between
            the preliminary and final passes.
        Exception: Any error raised by the adapter propagates unchanged.
    """
    preliminary = adapter(build_federal_return_input(year, nol_deduction=ZERO))
    preliminary_agi = preliminary.agi

    nol_used = min(starting_nol, max(ZERO, preliminary_agi))

    final = adapter(build_federal_return_input(year, nol_deduction=nol_used))
    if preliminary.limitation != final.limitation:
        raise LimitationDependenceError(
            year.year, preliminary=preliminary.limitation, final=final.limitation
        )

    limitation = final.limitation or _fallback_limitation(year)
    net_business_income = limitation.net_business_income
    if net_business_income < ZERO:
        disallowed_loss = limitation.disallowed_loss
        allowed_loss = net_business_income + disallowed_loss
    else:
        disallowed_loss = ZERO
        allowed_loss = net_business_income

    current_year_nol = max(ZERO, -final.agi)
    next_starting_nol = starting_nol - nol_used + disallowed_loss + current_year_nol

    result = YearResult(
        year=year.year,
        starting_nol=starting_nol,
        limit=limitation.limit,
        net_business_income=net_business_income,
        allowed_loss=allowed_loss,
        disallowed_loss=disallowed_loss,
        preliminary_agi=preliminary_agi,
        nol_used=nol_used,
        current_year_nol=current_year_nol,
        agi=final.agi,
        taxable_income=final.taxable_income,
        ending_nol=next_starting_nol,
        raw_federal_output=final,
    )
    return YearResolution(result=result, next_starting_nol=next_starting_nol)
