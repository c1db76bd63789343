"""Data models for the excess business loss carryforward simulation.

This module defines:
- YearRow / GlobalConfig: validated caller inputs (Pydantic, frozen)
- CanonicalYear: one normalized year with override precedence resolved
- YearResult: one simulated year, as consumed by the display layer

All monetary fields use Decimal for precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ebl_planner.simulation.amounts import ZERO, to_decimal


# =============================================================================
# Inputs
# =============================================================================


class YearRow(BaseModel):
    """One year of planning inputs as entered by the user.

    Rows are order-sensitive: a simulation processes them in strictly
    ascending ``year`` order.
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(description="Tax year")
    wages: Decimal = Field(default=ZERO, description="W-2 wages")
    personal_capital_gain: Decimal = Field(
        default=ZERO, description="Capital gain or (loss) not from a trade or business"
    )
    business_capital_gain: Decimal = Field(
        default=ZERO, description="Capital gain or (loss) from a trade or business"
    )
    business_net_income: Decimal = Field(
        default=ZERO, description="Net business income or (loss)"
    )
    row_override_limit: Decimal | None = Field(
        default=None, description="Per-year override of the excess business loss limit"
    )

    @field_validator(
        "wages",
        "personal_capital_gain",
        "business_capital_gain",
        "business_net_income",
        mode="before",
    )
    @classmethod
    def coerce_amount(cls, value: object) -> Decimal:
        """Coerce numeric input to an exact Decimal."""
        return to_decimal(value)  # type: ignore[arg-type]

    @field_validator("row_override_limit", mode="before")
    @classmethod
    def coerce_override(cls, value: object) -> Decimal | None:
        """Coerce an optional override to an exact Decimal."""
        if value is None:
            return None
        return to_decimal(value)  # type: ignore[arg-type]


class GlobalConfig(BaseModel):
    """Settings that apply to every year of a simulation run."""

    model_config = ConfigDict(frozen=True)

    filing_status_single: bool = Field(
        default=True, description="True for single, False for married filing jointly"
    )
    global_override_limit: Decimal | None = Field(
        default=None, description="Override of the excess business loss limit for all years"
    )

    @field_validator("global_override_limit", mode="before")
    @classmethod
    def coerce_override(cls, value: object) -> Decimal | None:
        """Coerce an optional override to an exact Decimal."""
        if value is None:
            return None
        return to_decimal(value)  # type: ignore[arg-type]


# =============================================================================
# Normalized year and results
# =============================================================================


@dataclass(frozen=True)
class CanonicalYear:
    """A normalized year ready for simulation.

    Attributes:
        year: Tax year.
        wages: W-2 wages.
        personal_capital_gain: Non-business capital gain or (loss).
        business_capital_gain: Business capital gain or (loss).
        business_net_income: Net business income or (loss).
        override_limit: Resolved excess business loss limit override, or None
            to use the statutory threshold.
        filing_status_single: True for single, False for married filing jointly.
    """

    year: int
    wages: Decimal
    personal_capital_gain: Decimal
    business_capital_gain: Decimal
    business_net_income: Decimal
    override_limit: Decimal | None
    filing_status_single: bool


@dataclass(frozen=True)
class YearResult:
    """Outcome of simulating one year.

    Attributes:
        year: Tax year.
        starting_nol: Carryforward available at the start of the year (>= 0).
        limit: Excess business loss limit applied this year.
        net_business_income: Net business income before the limit.
        allowed_loss: Business income, or the portion of a business loss
            allowed against other income.
        disallowed_loss: Business loss above the limit, carried forward (>= 0).
        preliminary_agi: AGI before any NOL deduction.
        nol_used: NOL deducted this year (>= 0).
        current_year_nol: New NOL created by negative AGI this year (>= 0).
        agi: Adjusted gross income after the NOL deduction.
        taxable_income: Taxable income reported by the federal return.
        ending_nol: Carryforward handed to the next year.
        raw_federal_output: Full federal return output for the final pass.
    """

    year: int
    starting_nol: Decimal
    limit: Decimal
    net_business_income: Decimal
    allowed_loss: Decimal
    disallowed_loss: Decimal
    preliminary_agi: Decimal
    nol_used: Decimal
    current_year_nol: Decimal
    agi: Decimal
    taxable_income: Decimal
    ending_nol: Decimal
    raw_federal_output: Any
