"""Decimal helpers for currency arithmetic"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    """
    Convert a numeric input to Decimal without binary float drift.

    Floats go through their shortest repr, so 4.32 becomes Decimal("4.32").

    Raises:
        TypeError: For booleans, None, and non-numeric types
        ValueError: For unparseable text, NaN, and infinities
    """
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Not a number: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a number: {value!r}") from e
    else:
        raise TypeError(f"Not a number: {value!r}")

    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def quantize(value: Decimal, exponent: Decimal = CENT) -> Decimal:
    """
    Round half-up to the places of ``exponent``.

    Raises:
        ValueError: Value has more digits than the decimal context can hold
            at that precision
    """
    try:
        return value.quantize(exponent, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Too many digits to round to {exponent}: {value}") from e


def quantize_cents(value: Decimal) -> Decimal:
    """Round half-up to two decimal places"""
    return quantize(value, CENT)
