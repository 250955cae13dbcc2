"""
Money Utilities - Safe Decimal operations for cart amounts.

Prices arrive as plain JSON numbers. All arithmetic runs on Decimal and only
converts back to int/float at the API boundary.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

# Precision for whole-unit amounts (tax is always whole Rand)
INTEGER_PRECISION = Decimal("1")

# VAT applied to the cart subtotal
TAX_RATE = Decimal("0.15")

CURRENCY_SYMBOL = "R"

# Largest unit price a line item may carry
MAX_PRICE = 1_000_000_000


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Go through str so 0.1 stays 0.1
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def round_money(value: Number, to_int: bool = False) -> Decimal:
    """
    Round monetary value half-up.

    Args:
        value: Value to round
        to_int: If True, round to a whole unit

    Returns:
        Rounded Decimal value
    """
    decimal_value = to_decimal(value)
    precision = INTEGER_PRECISION if to_int else MONEY_PRECISION
    return decimal_value.quantize(precision, rounding=ROUND_HALF_UP)


def add(a: Number, b: Number) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def calculate_tax(subtotal: Number) -> Decimal:
    """Tax on a subtotal: 15%, rounded half-up to a whole unit."""
    return round_money(multiply(subtotal, TAX_RATE), to_int=True)


def to_number(value: Number) -> Union[int, float]:
    """
    Convert a Decimal to a JSON-friendly number.

    Integral values become int so "250" never shows up as "250.0".
    """
    decimal_value = to_decimal(value)
    if decimal_value == decimal_value.to_integral_value():
        return int(decimal_value)
    return float(decimal_value)


def format_money(value: Number) -> str:
    """
    Format an amount for display, e.g. R250 or R99.50.

    Args:
        value: Amount to format

    Returns:
        Label with the currency symbol prefixed
    """
    decimal_value = to_decimal(value)
    if decimal_value == decimal_value.to_integral_value():
        return f"{CURRENCY_SYMBOL}{int(decimal_value)}"
    return f"{CURRENCY_SYMBOL}{round_money(decimal_value):.2f}"
