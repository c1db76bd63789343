"""Excess business loss planning: multi-year NOL carryforward simulation.

Applications call ``ebl_planner.core.logging.configure_logging()`` once at
startup so the engine's structlog events use the configured renderer.
"""

from ebl_planner.simulation import GlobalConfig, YearResult, YearRow, simulate

__all__ = ["GlobalConfig", "YearResult", "YearRow", "simulate"]
