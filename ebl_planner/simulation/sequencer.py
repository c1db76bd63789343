"""Multi-year carryforward simulation.

``simulate`` folds the two-pass year resolver over the planning rows in
chronological order. The carryforward is the fold's accumulator: it starts at
zero on every call and is never stored outside a single run.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from decimal import Decimal
from functools import partial, reduce

from ebl_planner.core.logging import get_logger, simulation_id_ctx, tax_year_ctx
from ebl_planner.simulation.amounts import ZERO
from ebl_planner.simulation.federal_return import (
    FederalReturnAdapter,
    SimplifiedFederalReturn,
)
from ebl_planner.simulation.models import (
    CanonicalYear,
    GlobalConfig,
    YearResult,
    YearRow,
)
from ebl_planner.simulation.normalizer import normalize_years
from ebl_planner.simulation.resolver import resolve_year

logger = get_logger(__name__)

FoldState = tuple[tuple[YearResult, ...], Decimal]


class YearOrderError(ValueError):
    """Raised when planning rows are not in strictly ascending year order.

    Attributes:
        year: The out-of-order year.
        previous_year: The year that preceded it.
    """

    def __init__(self, year: int, previous_year: int) -> None:
        self.year = year
        self.previous_year = previous_year
        super().__init__(
            f"Years must be strictly ascending: {year} follows {previous_year}"
        )


def check_chronological(years: Sequence[CanonicalYear]) -> None:
    """Raise YearOrderError unless years are strictly ascending."""
    for previous, current in zip(years, years[1:]):
        if current.year <= previous.year:
            raise YearOrderError(current.year, previous.year)


def _fold_year(
    adapter: FederalReturnAdapter, state: FoldState, year: CanonicalYear
) -> FoldState:
    """Resolve one year and thread its carryforward to the next."""
    results, carryforward = state
    token = tax_year_ctx.set(year.year)
    try:
        resolution = resolve_year(year, carryforward, adapter)
    finally:
        tax_year_ctx.reset(token)
    logger.debug(
        "year_resolved",
        year=year.year,
        starting_nol=carryforward,
        nol_used=resolution.result.nol_used,
        disallowed_loss=resolution.result.disallowed_loss,
        current_year_nol=resolution.result.current_year_nol,
        ending_nol=resolution.next_starting_nol,
    )
    return (*results, resolution.result), resolution.next_starting_nol


def run_fold(
    years: Sequence[CanonicalYear], adapter: FederalReturnAdapter
) -> list[YearResult]:
    """Fold the resolver over canonical years with a zero opening carryforward.

    Args:
        years: Canonical years in strictly ascending order.
        adapter: Federal return adapter.

    Returns:
        One YearResult per year, in order.

    Raises:
        YearOrderError: If years are not strictly ascending.
    """
    check_chronological(years)
    initial: FoldState = ((), ZERO)
    results, _ = reduce(partial(_fold_year, adapter), years, initial)
    return list(results)


def simulate(
    year_rows: Sequence[YearRow],
    config: GlobalConfig,
    adapter: FederalReturnAdapter | None = None,
) -> list[YearResult]:
    """Simulate excess business loss limits and NOL carryforwards.

    Progress is logged with structlog; call ``configure_logging()`` once at
    application startup to choose console or JSON output.

    Args:
        year_rows: Planning rows in strictly ascending year order.
        config: Filing status and global limit override.
        adapter: Federal return adapter. Defaults to SimplifiedFederalReturn.

    Returns:
        One YearResult per row, in order.

    Raises:
        YearOrderError: If rows are not strictly ascending by year.
        Exception: Any adapter error aborts the run and propagates unchanged.

    Example:
        >>> rows = [YearRow(year=2025, wages=100000, business_net_income=-500000)]
        >>> results = simulate(rows, GlobalConfig(filing_status_single=True))
        >>> results[0].disallowed_loss
        Decimal('183000')
    """
    adapter = adapter if adapter is not None else SimplifiedFederalReturn()
    years = normalize_years(year_rows, config)
    token = simulation_id_ctx.set(uuid.uuid4().hex)

    logger.info(
        "simulation_start",
        years=len(years),
        filing_status_single=config.filing_status_single,
        global_override_limit=config.global_override_limit,
    )

    try:
        results = run_fold(years, adapter)
    except Exception as exc:
        logger.error(
            "simulation_failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise
    else:
        logger.info(
            "simulation_complete",
            years=len(results),
            ending_nol=results[-1].ending_nol if results else ZERO,
        )
    finally:
        simulation_id_ctx.reset(token)
    return results
