"""
USD <-> SYP conversion helpers.

Amounts are held as ``Decimal`` at two decimal places. A conversion is a single
multiplication or division by the exchange rate followed by one rounding step.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
WHOLE = Decimal("1")


class InvalidRate(ValueError):
    """Raised when an exchange rate is zero or negative."""


class InvalidAmount(ValueError):
    """Raised when a value cannot be read as a monetary amount."""


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, bool):
        raise InvalidAmount(f"Not a monetary amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 0.1 stays 0.1 rather than its binary expansion
        result = Decimal(str(value))
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "").replace(" ", "")
        if not cleaned:
            raise InvalidAmount("Empty monetary amount")
        try:
            result = Decimal(cleaned)
        except InvalidOperation:
            raise InvalidAmount(f"Not a monetary amount: {value!r}")
    else:
        raise InvalidAmount(f"Not a monetary amount: {value!r}")

    if not result.is_finite():
        raise InvalidAmount(f"Not a monetary amount: {value!r}")
    return result


def _checked_rate(exchange_rate: Number) -> Decimal:
    rate = _to_decimal(exchange_rate)
    if rate <= 0:
        raise InvalidRate("Exchange rate must be positive")
    return rate


def _rounded(amount: Decimal, exponent: Decimal) -> Decimal:
    # quantize fails once the result needs more digits than the context precision
    try:
        return amount.quantize(exponent, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmount(f"Amount out of range: {amount}")


def parse_currency(value: Number) -> Decimal:
    """
    Read a number or string (``"1,250.5"``) into a Decimal at cent precision.

    Raises:
        InvalidAmount: if the value is not a finite number or is too large to hold in cents
    """
    return _rounded(_to_decimal(value), CENT)


def format_currency(value: Number) -> str:
    """Render with thousands separators and two decimals, no symbol."""
    return f"{parse_currency(value):,.2f}"


def usd_to_syr(price_usd: Number, exchange_rate: Number) -> Decimal:
    """Convert a USD amount to SYP at cent precision."""
    rate = _checked_rate(exchange_rate)
    return _rounded(parse_currency(price_usd) * rate, CENT)


def syr_to_usd(price_syr: Number, exchange_rate: Number) -> Decimal:
    """Convert a SYP amount back to USD at cent precision."""
    rate = _checked_rate(exchange_rate)
    return _rounded(parse_currency(price_syr) / rate, CENT)


def usd_to_syr_whole(price_usd: Number, exchange_rate: Number) -> int:
    """Convert a USD amount to whole SYP, as shown on the public catalog."""
    rate = _checked_rate(exchange_rate)
    return int(_rounded(_to_decimal(price_usd) * rate, WHOLE))
