"""Money boundary.

All monetary quantities inside the engine are ``int`` cents (``Money``).
Values enter through exactly one of two doors:

- ``ensure_money``: already-numeric values (JSON ints, config rows)
- ``parse_money``: free-form text typed by a seller (``"1.200,50"``)

Nothing past these functions re-parses strings or sees floats.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from phone_quote.domain.errors import InvalidNumericInput

Money = int

CENT = Decimal("1")

_CURRENCY_NOISE = re.compile(r"[R$\s]")
_DIGITS = re.compile(r"^\d+$")
_DOTTED = re.compile(r"^\d+(\.\d+)+$")


def ensure_money(value: object, field: str = "value") -> Money:
    """
    Validate a numeric monetary value and return it as cents.

    Raises:
        InvalidNumericInput: If value is not a non-negative whole number of cents
    """
    # bool is an int subclass; True cents is never intended
    if isinstance(value, bool):
        raise InvalidNumericInput(f"{field} must be an integer number of cents", field=field)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidNumericInput(f"{field} must be finite", field=field)
        raise InvalidNumericInput(f"{field} must be an integer number of cents", field=field)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidNumericInput(f"{field} must be finite", field=field)
        if value != value.to_integral_value():
            raise InvalidNumericInput(f"{field} must be an integer number of cents", field=field)
        value = int(value)
    if not isinstance(value, int):
        raise InvalidNumericInput(f"{field} must be an integer number of cents", field=field)
    if value < 0:
        raise InvalidNumericInput(f"{field} cannot be negative", field=field)
    return value


def parse_money(text: str, field: str = "value") -> Money:
    """
    Parse seller-typed currency text into cents.

    Accepted formats:
    - "1200"        -> 120000 (whole reais)
    - "1.200,50"    -> 120050 (comma is the decimal separator)
    - "12,5"        -> 1250
    - "1234.56"     -> 123456 (dot followed by exactly two digits is decimal)
    - "1.200"       -> 120000 (otherwise dots group thousands)
    - "R$ 1.200,00" -> 120000
    - ""            -> 0

    Raises:
        InvalidNumericInput: If the text is not a recognizable amount
    """
    cleaned = _CURRENCY_NOISE.sub("", text or "")
    if not cleaned:
        return 0

    if "," in cleaned:
        integer_part, sep, decimal_part = cleaned.partition(",")
        integer_part = integer_part.replace(".", "")
        if "," in decimal_part or not _DIGITS.match(integer_part or "0"):
            raise InvalidNumericInput(f"{field} is not a valid amount: {text!r}", field=field)
        if decimal_part and not _DIGITS.match(decimal_part):
            raise InvalidNumericInput(f"{field} is not a valid amount: {text!r}", field=field)
        reais = int(integer_part or "0")
        cents = int(decimal_part.ljust(2, "0")[:2])
        return reais * 100 + cents

    if "." in cleaned:
        if not _DOTTED.match(cleaned):
            raise InvalidNumericInput(f"{field} is not a valid amount: {text!r}", field=field)
        parts = cleaned.split(".")
        if len(parts[-1]) == 2:
            return int("".join(parts[:-1])) * 100 + int(parts[-1])
        return int("".join(parts)) * 100

    if not _DIGITS.match(cleaned):
        raise InvalidNumericInput(f"{field} is not a valid amount: {text!r}", field=field)
    return int(cleaned) * 100


def round_cents(value: Decimal, field: str = "amount") -> Money:
    """
    Round a precise Decimal amount of cents to whole cents (ROUND_HALF_UP).

    Raises:
        InvalidNumericInput: If the amount has more digits than the decimal
            context can hold
    """
    try:
        return int(value.quantize(CENT, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise InvalidNumericInput(f"{field} is too large to round to cents", field=field)


def format_brl(cents: int) -> str:
    """
    Render cents as pt-BR currency text.

    Examples:
        120000 -> "R$ 1.200,00"
        -5050  -> "-R$ 50,50"
    """
    sign = "-" if cents < 0 else ""
    reais, centavos = divmod(abs(cents), 100)
    grouped = f"{reais:,}".replace(",", ".")
    return f"{sign}R$ {grouped},{centavos:02d}"
