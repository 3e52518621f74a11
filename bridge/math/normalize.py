"""Conversion of raw token amounts to decimal and fiat values.

Token amounts routinely exceed 2^53 and often exceed the 28 significant
digits of the default decimal context, so to_decimal builds the Decimal
directly from the integer's digits and an exponent. No arithmetic happens,
so nothing is rounded.

Usage:
    from bridge.math import to_decimal, to_fiat

    amount = to_decimal("1500000", 6)      # Decimal("1.500000")
    value = to_fiat(amount, rate)          # None when rate is None
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

Rate = Union[Decimal, int, float, str]


def to_decimal(amount: int | str, decimals: int) -> Decimal:
    """Convert an amount in smallest units to whole-token units.

    Args:
        amount: Integer amount, as int or decimal integer string
        decimals: Token decimals (0 is valid)

    Returns:
        Exact Decimal value of amount / 10**decimals

    Raises:
        ValueError: If decimals is negative or amount is not an integer
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"Decimals must be a non-negative integer, got {decimals!r}")

    if isinstance(amount, bool):
        raise ValueError("Amount cannot be a boolean")
    if isinstance(amount, str):
        try:
            amount = int(amount)
        except ValueError as err:
            raise ValueError(f"Amount must be an integer string: '{amount}'") from err
    elif not isinstance(amount, int):
        raise ValueError(f"Amount must be int or str, got {type(amount).__name__}")

    sign = 1 if amount < 0 else 0
    digits = tuple(int(d) for d in str(abs(amount)))
    return Decimal((sign, digits, -decimals))


def to_smallest_unit(amount: Decimal | str, decimals: int) -> int:
    """Convert a whole-token amount to smallest units, truncating the excess.

    Args:
        amount: Amount in whole-token units, e.g. user input "1.5"
        decimals: Token decimals

    Returns:
        Integer amount in smallest units

    Raises:
        ValueError: If decimals is negative or amount is not a number
    """
    if decimals < 0:
        raise ValueError(f"Decimals must be a non-negative integer, got {decimals!r}")
    try:
        value = Decimal(amount)
    except InvalidOperation as err:
        raise ValueError(f"Invalid amount: '{amount}'") from err
    if not value.is_finite():
        raise ValueError(f"Invalid amount: '{amount}'")

    sign, digits, exponent = value.as_tuple()
    shifted = exponent + decimals
    integer = int("".join(map(str, digits)) or "0")
    if shifted >= 0:
        integer *= 10**shifted
    else:
        integer //= 10**-shifted
    return -integer if sign else integer


def to_rate(exchange_rate: Rate | None) -> Decimal | None:
    """Coerce an exchange rate to Decimal, keeping None as None.

    Floats go through str so 0.1 becomes Decimal("0.1") rather than its
    binary expansion.
    """
    if exchange_rate is None:
        return None
    if isinstance(exchange_rate, Decimal):
        return exchange_rate
    if isinstance(exchange_rate, float):
        return Decimal(str(exchange_rate))
    return Decimal(exchange_rate)


def to_fiat(amount: Decimal, exchange_rate: Rate | None) -> Decimal | None:
    """Value an amount in fiat.

    Args:
        amount: Amount in whole-token units
        exchange_rate: Fiat value of one token, or None when unknown

    Returns:
        amount * exchange_rate, or None when the rate is unknown
    """
    rate = to_rate(exchange_rate)
    if rate is None:
        return None
    return amount * rate
