"""Normalize planning rows into canonical simulation years."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from ebl_planner.simulation.amounts import ZERO
from ebl_planner.simulation.models import CanonicalYear, GlobalConfig, YearRow


def resolve_override_limit(
    row_override: Decimal | None, global_override: Decimal | None
) -> Decimal | None:
    """Resolve the excess business loss limit override for one year.

    The row value wins over the global value. A non-positive result means
    "no override" and falls back to the statutory threshold.

    Example:
        >>> resolve_override_limit(Decimal("300000"), Decimal("250000"))
        Decimal('300000')
        >>> resolve_override_limit(None, Decimal("0")) is None
        True
    """
    override = row_override if row_override is not None else global_override
    if override is None or override <= ZERO:
        return None
    return override


def normalize_year(row: YearRow, config: GlobalConfig) -> CanonicalYear:
    """Build the canonical record for one planning row."""
    return CanonicalYear(
        year=row.year,
        wages=row.wages,
        personal_capital_gain=row.personal_capital_gain,
        business_capital_gain=row.business_capital_gain,
        business_net_income=row.business_net_income,
        override_limit=resolve_override_limit(
            row.row_override_limit, config.global_override_limit
        ),
        filing_status_single=config.filing_status_single,
    )


def normalize_years(
    rows: Iterable[YearRow], config: GlobalConfig
) -> list[CanonicalYear]:
    """Normalize rows in the order given."""
    return [normalize_year(row, config) for row in rows]
