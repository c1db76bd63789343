"""Excess business loss and NOL carryforward simulation.

Components:
- Normalizer: canonical year records with override precedence resolved
- Federal return adapter: contract plus the simplified reference adapter
- Resolver: two-pass evaluation of a single year
- Sequencer: chronological fold threading the carryforward across years
- Projection helpers: default planning rows and run summaries
"""

from ebl_planner.simulation.amounts import parse_currency, to_decimal
from ebl_planner.simulation.federal_return import (
    FederalReturnAdapter,
    FederalReturnError,
    FederalReturnInput,
    FederalReturnOutput,
    LimitationDependenceError,
    LimitationOutput,
    SimplifiedFederalReturn,
    build_federal_return_input,
)
from ebl_planner.simulation.models import (
    CanonicalYear,
    GlobalConfig,
    YearResult,
    YearRow,
)
from ebl_planner.simulation.normalizer import (
    normalize_year,
    normalize_years,
    resolve_override_limit,
)
from ebl_planner.simulation.projection import (
    SimulationSummary,
    build_projection_rows,
    summarize_results,
)
from ebl_planner.simulation.resolver import YearResolution, resolve_year
from ebl_planner.simulation.sequencer import YearOrderError, run_fold, simulate

__all__ = [
    # Entry point
    "simulate",
    "run_fold",
    # Data structures
    "YearRow",
    "GlobalConfig",
    "CanonicalYear",
    "YearResult",
    "YearResolution",
    "SimulationSummary",
    # Federal return contract
    "FederalReturnAdapter",
    "FederalReturnInput",
    "FederalReturnOutput",
    "LimitationOutput",
    "SimplifiedFederalReturn",
    "build_federal_return_input",
    # Errors
    "FederalReturnError",
    "LimitationDependenceError",
    "YearOrderError",
    # Functions
    "normalize_year",
    "normalize_years",
    "resolve_override_limit",
    "resolve_year",
    "build_projection_rows",
    "summarize_results",
    "parse_currency",
    "to_decimal",
]
