"""Exact Decimal coercion for currency amounts.

All monetary values in the simulation are Decimal. No floating point.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

_CURRENCY_NOISE = re.compile(r"[\s$,]")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a numeric value to an exact Decimal.

    Floats go through their shortest repr so ``0.1`` becomes ``Decimal("0.1")``
    rather than the binary expansion.

    Args:
        value: Numeric value or numeric string.

    Returns:
        Decimal value.

    Raises:
        ValueError: If the value is not numeric.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a numeric amount, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Expected a numeric amount, got {value!r}") from exc
    else:
        raise ValueError(f"Expected a numeric amount, got {value!r}")

    if not result.is_finite():
        raise ValueError(f"Expected a finite amount, got {value!r}")
    return result


def parse_currency(text: str | None) -> Decimal:
    """Parse user-entered currency text, treating malformed input as zero.

    Accepts dollar signs, thousands separators, a leading minus sign and
    accounting-style parentheses for negatives. A sign inside parentheses is
    malformed.

    Example:
        >>> parse_currency("$1,250.50")
        Decimal('1250.50')
        >>> parse_currency("(300)")
        Decimal('-300')
        >>> parse_currency("n/a")
        Decimal('0')
    """
    if text is None:
        return ZERO

    cleaned = _CURRENCY_NOISE.sub("", text)
    negative = cleaned.startswith("(") and cleaned.endswith(")")
    if negative:
        cleaned = cleaned[1:-1]
        if cleaned[:1] in ("-", "+"):
            return ZERO
    if not cleaned:
        return ZERO

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return ZERO
    if not amount.is_finite():
        return ZERO
    return -amount if negative else amount
