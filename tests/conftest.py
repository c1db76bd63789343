"""Pytest configuration and shared fixtures for tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from ebl_planner.simulation.federal_return import (
    FederalReturnInput,
    FederalReturnOutput,
    LimitationOutput,
)

ZERO = Decimal("0")
STUB_DEFAULT_LIMIT = Decimal("250000")


class StubFederalReturn:
    """Linear federal return used to test the engine in isolation.

    agi = wages + allowed loss - NOL deduction, where the allowed loss is the
    net business income capped at ``-limit``.

    Attributes:
        calls: Every input received, in order.
    """

    def __init__(self) -> None:
        self.calls: list[FederalReturnInput] = []

    def __call__(self, return_input: FederalReturnInput) -> FederalReturnOutput:
        self.calls.append(return_input)

        limit = (
            return_input.override_limit
            if return_input.override_limit is not None
            else STUB_DEFAULT_LIMIT
        )
        net_business_income = (
            return_input.business_income + return_input.business_capital_gains
        )
        if net_business_income < ZERO:
            disallowed = max(ZERO, -net_business_income - limit)
            allowed = net_business_income + disallowed
        else:
            disallowed = ZERO
            allowed = net_business_income

        agi = return_input.wages + allowed - return_input.nol_deduction
        return FederalReturnOutput(
            agi=agi,
            taxable_income=max(ZERO, agi),
            limitation=LimitationOutput(
                limit=limit,
                net_business_income=net_business_income,
                disallowed_loss=disallowed,
            ),
        )


@pytest.fixture
def stub_adapter() -> StubFederalReturn:
    """Create a fresh stub federal return adapter.

    Returns:
        StubFederalReturn with an empty call log.
    """
    return StubFederalReturn()
