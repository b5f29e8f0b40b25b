from __future__ import annotations

import math

from app.domain.entities.campaign import TickRange
from app.domain.exceptions import (
    InvalidPriceError,
    InvalidSqrtPriceOrderError,
    SpreadMisalignedError,
    SpreadTooNarrowError,
    TickOutOfRangeError,
)


# Tick <-> price conversions use float log/pow on purpose; callers only go
# through the functions below so the backing arithmetic can be swapped.
TICK_BASE = 1.0001
LOG_BASE = math.log(TICK_BASE)
Q96 = 2**96

# One tick inside the protocol limit of +/-887272.
MIN_TICK = -887270
MAX_TICK = 887270


def _ensure_positive_price(price: float, *, field_name: str = "price") -> float:
    try:
        value = float(price)
    except (TypeError, ValueError) as exc:
        raise InvalidPriceError(f"{field_name} must be a number.") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidPriceError(f"{field_name} must be a positive finite number: {price}")
    return value


def price_to_tick(price: float) -> int:
    value = _ensure_positive_price(price)
    return math.floor(math.log(value) / LOG_BASE)


def tick_to_price(tick: int | float) -> float:
    return math.pow(TICK_BASE, tick)


def align_to_tick_spacing(tick: int, tick_spacing: int) -> int:
    if tick_spacing <= 0:
        raise ValueError("tick_spacing must be positive.")
    return (tick // tick_spacing) * tick_spacing


def ensure_tick_bounds(tick_lower: int, tick_upper: int) -> None:
    if tick_lower < MIN_TICK or tick_upper > MAX_TICK:
        raise TickOutOfRangeError(
            f"Tick out of range: {tick_lower} < {MIN_TICK} or {tick_upper} > {MAX_TICK}"
        )


def compute_tick_range(price: float, tick_spacing: int, spread: int) -> TickRange:
    """Center ``spread`` ticks on each side of the aligned tick for ``price``.

    The spread checks run before the price is looked at, so a bad spread is
    reported even when the price is also invalid.
    """
    if spread < tick_spacing:
        raise SpreadTooNarrowError(
            f"Spread must be >= tick spacing: {spread} < {tick_spacing}"
        )
    if spread % tick_spacing != 0:
        raise SpreadMisalignedError(
            f"Spread must be divisible by tick spacing: {spread} % {tick_spacing} != 0"
        )

    current_tick = price_to_tick(price)
    usable_tick = align_to_tick_spacing(current_tick, tick_spacing)
    tick_lower = usable_tick - spread
    tick_upper = usable_tick + spread
    ensure_tick_bounds(tick_lower, tick_upper)
    return TickRange(tick_lower=tick_lower, tick_upper=tick_upper)


def encode_sqrt_price_x96(price: float) -> int:
    value = _ensure_positive_price(price)
    return math.floor(math.sqrt(value) * float(Q96))


def tick_to_sqrt_price_x96(tick: int) -> int:
    return encode_sqrt_price_x96(tick_to_price(tick))


def sqrt_prices_from_ticks(tick_lower: int, tick_upper: int) -> tuple[int, int]:
    if tick_lower >= tick_upper:
        raise InvalidSqrtPriceOrderError(
            f"tick_lower must be < tick_upper: {tick_lower} >= {tick_upper}"
        )
    return tick_to_sqrt_price_x96(tick_lower), tick_to_sqrt_price_x96(tick_upper)


def compute_liquidity_from_amount0(
    sqrt_price_lower_x96: int,
    sqrt_price_upper_x96: int,
    amount0: int,
) -> int:
    if sqrt_price_lower_x96 >= sqrt_price_upper_x96:
        raise InvalidSqrtPriceOrderError("sqrt_price_lower_x96 must be < sqrt_price_upper_x96")

    numerator = amount0 * (sqrt_price_lower_x96 * sqrt_price_upper_x96)
    denominator = sqrt_price_upper_x96 - sqrt_price_lower_x96
    # Division order matches the on-chain helper; do not merge the two steps.
    return numerator // Q96 // denominator


def range_value_factor(price: float, tick_lower: int, tick_upper: int) -> float:
    """Token0-denominated value held by one unit of liquidity in the range."""
    value = _ensure_positive_price(price)
    sqrt_p = math.sqrt(value)
    sqrt_a = math.sqrt(tick_to_price(tick_lower))
    sqrt_b = math.sqrt(tick_to_price(tick_upper))
    return (sqrt_b - sqrt_p) / (sqrt_p * sqrt_b) + (sqrt_p - sqrt_a) / value
