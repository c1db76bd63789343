"""Tax thresholds used by the loss-limitation simulation."""

from ebl_planner.tax.year_config import (
    EXCESS_BUSINESS_LOSS_THRESHOLDS,
    ExcessBusinessLossThreshold,
    get_excess_business_loss_limit,
)

__all__ = [
    "ExcessBusinessLossThreshold",
    "EXCESS_BUSINESS_LOSS_THRESHOLDS",
    "get_excess_business_loss_limit",
]
