"""Planning-horizon helpers around the simulation.

- build_projection_rows: prefilled rows for a multi-year plan
- summarize_results: totals across a simulated run
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ebl_planner.core.config import settings
from ebl_planner.simulation.amounts import ZERO
from ebl_planner.simulation.models import YearResult, YearRow


@dataclass(frozen=True)
class SimulationSummary:
    """Totals across a simulated run.

    Attributes:
        first_year: First simulated year, or None for an empty run.
        last_year: Last simulated year, or None for an empty run.
        total_disallowed_loss: Sum of business losses deferred by the limit.
        total_nol_used: Sum of NOL deductions taken.
        total_current_year_nol: Sum of NOL created by negative AGI.
        ending_nol: Carryforward remaining after the last year.
    """

    first_year: int | None
    last_year: int | None
    total_disallowed_loss: Decimal
    total_nol_used: Decimal
    total_current_year_nol: Decimal
    ending_nol: Decimal


def build_projection_rows(
    start_year: int,
    years: int | None = None,
    wages: Decimal | None = None,
    personal_capital_gain: Decimal = ZERO,
    business_capital_gain: Decimal | None = None,
    business_net_income: Decimal | None = None,
) -> list[YearRow]:
    """Build consecutive planning rows starting at ``start_year``.

    Amounts not given fall back to the configured planning defaults.

    Args:
        start_year: First projected year.
        years: Number of rows. Defaults to ``settings.projection_years``.
        wages: Wages for every row.
        personal_capital_gain: Personal capital gain for every row.
        business_capital_gain: Business capital gain for every row.
        business_net_income: Business net income for every row.

    Returns:
        Rows in ascending year order.

    Raises:
        ValueError: If ``years`` is less than 1.
    """
    count = settings.projection_years if years is None else years
    if count < 1:
        raise ValueError(f"years must be >= 1, got {count}")

    return [
        YearRow(
            year=start_year + offset,
            wages=settings.default_wages if wages is None else wages,
            personal_capital_gain=personal_capital_gain,
            business_capital_gain=(
                settings.default_business_capital_gain
                if business_capital_gain is None
                else business_capital_gain
            ),
            business_net_income=(
                settings.default_business_net_income
                if business_net_income is None
                else business_net_income
            ),
        )
        for offset in range(count)
    ]


def summarize_results(results: Sequence[YearResult]) -> SimulationSummary:
    """Total the deferred losses and NOL activity of a run."""
    if not results:
        return SimulationSummary(
            first_year=None,
            last_year=None,
            total_disallowed_loss=ZERO,
            total_nol_used=ZERO,
            total_current_year_nol=ZERO,
            ending_nol=ZERO,
        )

    return SimulationSummary(
        first_year=results[0].year,
        last_year=results[-1].year,
        total_disallowed_loss=sum((r.disallowed_loss for r in results), ZERO),
        total_nol_used=sum((r.nol_used for r in results), ZERO),
        total_current_year_nol=sum((r.current_year_nol for r in results), ZERO),
        ending_nol=results[-1].ending_nol,
    )
