"""Tests for structured logging configuration."""

from decimal import Decimal

import orjson
import structlog
import structlog.testing

from ebl_planner import GlobalConfig, YearRow, simulate
from ebl_planner.core.config import settings
from ebl_planner.core.logging import (
    _add_context_vars,
    _orjson_serializer,
    configure_logging,
    simulation_id_ctx,
    tax_year_ctx,
)


def _reset_structlog() -> None:
    """Reset structlog defaults to avoid test cross-talk."""
    structlog.reset_defaults()


def test_configure_logging_uses_json_when_log_format_json() -> None:
    """Use JSON logging when log_format=json, even in development."""
    original_env = settings.environment
    original_format = getattr(settings, "log_format", None)

    try:
        settings.environment = "development"
        settings.log_format = "json"
        configure_logging()

        processors = structlog.get_config()["processors"]
        assert any(
            isinstance(processor, structlog.processors.JSONRenderer)
            for processor in processors
        )
        assert any(
            isinstance(processor, structlog.processors.EventRenamer)
            for processor in processors
        )
    finally:
        settings.environment = original_env
        settings.log_format = original_format
        _reset_structlog()


def test_configure_logging_uses_console_when_log_format_console() -> None:
    """Use console logging when log_format=console in production."""
    original_env = settings.environment
    original_format = getattr(settings, "log_format", None)

    try:
        settings.environment = "production"
        settings.log_format = "console"
        configure_logging()

        processors = structlog.get_config()["processors"]
        assert any(
            isinstance(processor, structlog.dev.ConsoleRenderer)
            for processor in processors
        )
        assert not any(
            isinstance(processor, structlog.processors.JSONRenderer)
            for processor in processors
        )
    finally:
        settings.environment = original_env
        settings.log_format = original_format
        _reset_structlog()


def test_json_serializer_renders_decimal_as_string() -> None:
    """Decimal amounts keep full precision in JSON logs."""
    rendered = _orjson_serializer({"ending_nol": Decimal("350000.10")})
    assert orjson.loads(rendered) == {"ending_nol": "350000.10"}


def test_context_vars_added_to_events() -> None:
    """Simulation id and tax year are merged into log events when set."""
    sim_token = simulation_id_ctx.set("sim-123")
    year_token = tax_year_ctx.set(2026)
    try:
        event = _add_context_vars(None, "info", {"event": "year_resolved"})  # type: ignore[arg-type]
    finally:
        simulation_id_ctx.reset(sim_token)
        tax_year_ctx.reset(year_token)

    assert event["simulation_id"] == "sim-123"
    assert event["tax_year"] == 2026


def test_context_vars_omitted_when_unset() -> None:
    """Unset context variables do not appear in events."""
    event = _add_context_vars(None, "info", {"event": "simulation_start"})  # type: ignore[arg-type]
    assert "simulation_id" not in event
    assert "tax_year" not in event


def test_simulation_events_serialize_to_json(stub_adapter) -> None:
    """Engine events carry Decimal amounts that the JSON renderer accepts."""
    with structlog.testing.capture_logs() as captured:
        simulate(
            [YearRow(year=2025, wages=100000, business_net_income=-500000)],
            GlobalConfig(),
            adapter=stub_adapter,
        )

    events = {entry["event"]: entry for entry in captured}
    assert {"simulation_start", "simulation_complete"} <= events.keys()

    complete = orjson.loads(_orjson_serializer(events["simulation_complete"]))
    assert complete["ending_nol"] == "400000"
