from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext

from app.domain.exceptions import InvalidAmountError


_DECIMAL_NUMERAL = re.compile(r"^(\d+\.?\d*|\.\d+)$")


def parse_human_amount(value: str, decimals: int) -> int:
    """Convert a user-typed decimal string to the token's smallest unit.

    Extra fractional digits beyond ``decimals`` are truncated.
    """
    if decimals < 0 or decimals > 255:
        raise InvalidAmountError(f"decimals must be between 0 and 255: {decimals}")
    if not isinstance(value, str):
        raise InvalidAmountError("amount must be a decimal string.")
    text = value.strip()
    if not _DECIMAL_NUMERAL.match(text):
        raise InvalidAmountError(f"Invalid amount: {value!r}")

    try:
        amount = Decimal(text)
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from exc

    with localcontext() as ctx:
        # Enough precision for 78-digit uint256 values plus the fractional part.
        ctx.prec = len(text) + decimals + 2
        scaled = amount.scaleb(decimals)
        return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def format_units(value: int, decimals: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative.")
    if decimals == 0:
        return str(value)
    whole, fraction = divmod(value, 10**decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    if not fraction_text:
        return str(whole)
    return f"{whole}.{fraction_text}"


def to_float_units(value: int, decimals: int) -> float:
    return float(value) / (10.0**decimals)
