"""Federal return adapter contract and the simplified reference adapter.

The simulation engine depends only on the ``FederalReturnAdapter`` protocol:
a pure callable that turns one year's inputs plus a single NOL deduction into
AGI, taxable income and the excess business loss limitation output.

``SimplifiedFederalReturn`` is the adapter used when a caller supplies none.
It evaluates the Schedule D -> Form 461 -> Schedule 1 -> Form 1040 chain in
``ebl_planner.simulation.forms``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

from ebl_planner.core.config import settings
from ebl_planner.simulation.amounts import ZERO
from ebl_planner.simulation.forms import (
    calculate_form_461,
    calculate_form_1040,
    calculate_schedule_1,
    calculate_schedule_d,
)
from ebl_planner.simulation.models import CanonicalYear
from ebl_planner.tax.year_config import get_excess_business_loss_limit


class FederalReturnError(Exception):
    """Raised when a federal return adapter cannot produce a valid result.

    Attributes:
        tax_year: Tax year being evaluated, when known.
    """

    def __init__(self, message: str, tax_year: int | None = None) -> None:
        self.tax_year = tax_year
        super().__init__(message)


class LimitationDependenceError(FederalReturnError):
    """Raised when the limitation output changes with the NOL deduction.

    The two-pass evaluation is only correct when the excess business loss
    limitation is independent of the NOL deduction amount.

    Attributes:
        preliminary: Limitation output from the zero-deduction pass.
        final: Limitation output from the final pass.
    """

    def __init__(
        self,
        tax_year: int,
        preliminary: LimitationOutput | None,
        final: LimitationOutput | None,
    ) -> None:
        self.preliminary = preliminary
        self.final = final
        super().__init__(
            f"Limitation output for {tax_year} depends on the NOL deduction: "
            f"{preliminary} != {final}",
            tax_year=tax_year,
        )


@dataclass(frozen=True)
class FederalReturnInput:
    """Inputs to one federal return evaluation.

    Only wages, capital gains, business income, the NOL deduction, filing
    status, tax year and override are populated by the simulation; the other
    income and adjustment lines default to zero.
    """

    tax_year: int
    filing_status_single: bool
    wages: Decimal = ZERO
    interest: Decimal = ZERO
    dividends: Decimal = ZERO
    ira_distributions: Decimal = ZERO
    pensions: Decimal = ZERO
    social_security: Decimal = ZERO
    non_business_capital_gains: Decimal = ZERO
    business_income: Decimal = ZERO
    business_capital_gains: Decimal = ZERO
    other_gains: Decimal = ZERO
    rental_income: Decimal = ZERO
    farm_income: Decimal = ZERO
    nol_deduction: Decimal = ZERO
    self_employment_tax: Decimal = ZERO
    retirement_plan_contributions: Decimal = ZERO
    self_employed_health_insurance: Decimal = ZERO
    early_withdrawal_penalty: Decimal = ZERO
    override_limit: Decimal | None = None


@dataclass(frozen=True)
class LimitationOutput:
    """Excess business loss limitation output.

    Attributes:
        limit: Maximum excess business loss applied.
        net_business_income: Net business income or (loss) before the limit.
        disallowed_loss: Business loss exceeding the limit (positive amount).
    """

    limit: Decimal
    net_business_income: Decimal
    disallowed_loss: Decimal


@dataclass(frozen=True)
class FederalReturnOutput:
    """Result of one federal return evaluation.

    Attributes:
        agi: Adjusted gross income.
        taxable_income: Taxable income.
        limitation: Limitation output, or None when the return has none.
        detail: Adapter-specific line detail for display.
    """

    agi: Decimal
    taxable_income: Decimal
    limitation: LimitationOutput | None = None
    detail: Any = None


class FederalReturnAdapter(Protocol):
    """Pure function from one year's inputs to its federal return output."""

    def __call__(self, return_input: FederalReturnInput) -> FederalReturnOutput: ...


def build_federal_return_input(
    year: CanonicalYear, nol_deduction: Decimal
) -> FederalReturnInput:
    """Build the adapter input for a canonical year and NOL deduction.

    Both passes of a year's evaluation go through this function, so they
    differ only in ``nol_deduction``.
    """
    return FederalReturnInput(
        tax_year=year.year,
        filing_status_single=year.filing_status_single,
        wages=year.wages,
        non_business_capital_gains=year.personal_capital_gain,
        business_income=year.business_net_income,
        business_capital_gains=year.business_capital_gain,
        nol_deduction=nol_deduction,
        override_limit=year.override_limit,
    )


class SimplifiedFederalReturn:
    """Reference adapter evaluating the simplified federal return.

    Args:
        standard_deduction: Deduction subtracted from AGI. Defaults to
            ``settings.standard_deduction``.
        cost_of_living_adjustment: Inflation factor used to project the
            excess business loss threshold. Defaults to
            ``settings.cost_of_living_adjustment``.
    """

    def __init__(
        self,
        standard_deduction: Decimal | None = None,
        cost_of_living_adjustment: Decimal | None = None,
    ) -> None:
        self.standard_deduction = (
            settings.standard_deduction
            if standard_deduction is None
            else standard_deduction
        )
        self.cost_of_living_adjustment = (
            settings.cost_of_living_adjustment
            if cost_of_living_adjustment is None
            else cost_of_living_adjustment
        )

    def limit_for(self, return_input: FederalReturnInput) -> Decimal:
        """Return the override if present, otherwise the statutory threshold."""
        if return_input.override_limit is not None:
            return return_input.override_limit
        return get_excess_business_loss_limit(
            return_input.tax_year,
            filing_status_single=return_input.filing_status_single,
            cost_of_living_adjustment=self.cost_of_living_adjustment,
        )

    def __call__(self, return_input: FederalReturnInput) -> FederalReturnOutput:
        if return_input.nol_deduction < ZERO:
            raise FederalReturnError(
                f"nol_deduction must be >= 0, got {return_input.nol_deduction}",
                tax_year=return_input.tax_year,
            )

        schedule_d = calculate_schedule_d(
            personal_gains=return_input.non_business_capital_gains,
            business_gains=return_input.business_capital_gains,
        )
        form461 = calculate_form_461(
            business_income=return_input.business_income,
            schedule_d=schedule_d,
            limit=self.limit_for(return_input),
            other_gains=return_input.other_gains,
            rental_income=return_input.rental_income,
            farm_income=return_input.farm_income,
        )
        schedule_1 = calculate_schedule_1(
            form461,
            nol_deduction=return_input.nol_deduction,
            adjustments=(
                return_input.self_employment_tax
                + return_input.retirement_plan_contributions
                + return_input.self_employed_health_insurance
                + return_input.early_withdrawal_penalty
            ),
        )
        ordinary_income = (
            return_input.wages
            + return_input.interest
            + return_input.dividends
            + return_input.ira_distributions
            + return_input.pensions
            + return_input.social_security
        )
        form1040 = calculate_form_1040(
            ordinary_income=ordinary_income,
            schedule_d=schedule_d,
            schedule_1=schedule_1,
            standard_deduction=self.standard_deduction,
        )

        return FederalReturnOutput(
            agi=form1040.line11,
            taxable_income=form1040.line15,
            limitation=LimitationOutput(
                limit=form461.line15,
                net_business_income=form461.line14,
                disallowed_loss=form461.line16,
            ),
            detail=form1040,
        )
