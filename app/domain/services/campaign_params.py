from __future__ import annotations

import math
import time
from decimal import Decimal
from typing import Any, Callable

from app.domain.entities.campaign import (
    CreateCampaignParams,
    MintPositionParams,
    PoolKey,
    RewardType,
)
from app.domain.entities.token import FeeTier, TokenDescriptor
from app.domain.exceptions import (
    CampaignValidationError,
    InvalidPriceError,
    ParameterOverflowError,
)
from app.domain.services.amounts import parse_human_amount, to_float_units
from app.domain.services.campaign_goal import (
    DEFAULT_USD_PER_REWARD_TOKEN,
    compute_goal_from_usd_budget,
    reward_amount_to_usd,
)
from app.domain.services.pair_orientation import normalize_and_sort_tokens, orient_pair
from app.domain.services.spread import DEFAULT_BASE_SPREAD, resolve_spread
from app.domain.services.univ3_math import (
    compute_liquidity_from_amount0,
    compute_tick_range,
    encode_sqrt_price_x96,
    sqrt_prices_from_ticks,
)


STREAMER_HOOK_ADDRESS = "0xdf128f75822B36fbca98c302B7011a40CF6cC500"
SECONDS_PER_DAY = 86400
DEFAULT_DEADLINE_WINDOW_SECONDS = 1800

UINT24_MAX = 2**24 - 1
UINT128_MAX = 2**128 - 1
UINT160_MAX = 2**160 - 1
UINT256_MAX = 2**256 - 1

BuildObserver = Callable[[str, dict[str, Any]], None]


def _ensure_fits(name: str, value: int, upper: int) -> None:
    if value < 0 or value > upper:
        raise ParameterOverflowError(f"{name} does not fit its ABI type: {value}")


def effective_price(
    amount0: int,
    amount1: int,
    token0_decimals: int,
    token1_decimals: int,
) -> float:
    """Token1 per token0 implied by the deposit ratio, in human units."""
    try:
        amount0_normalized = to_float_units(amount0, token0_decimals)
        amount1_normalized = to_float_units(amount1, token1_decimals)
    except OverflowError as exc:
        raise ParameterOverflowError("Deposit amounts are too large to derive a price.") from exc
    if amount0_normalized <= 0 or amount1_normalized <= 0:
        raise InvalidPriceError("Both deposit amounts must be positive to derive a price.")
    price = amount1_normalized / amount0_normalized
    if not math.isfinite(price) or price <= 0:
        raise InvalidPriceError(f"Derived price is not a positive finite number: {price}")
    return price


def build_create_campaign_params(
    token0: TokenDescriptor,
    token1: TokenDescriptor,
    fee_tier: FeeTier,
    initial_price_hint: str,
    amount0: str,
    amount1: str,
    reward_token: TokenDescriptor,
    reward_amount: str,
    duration_days: int,
    recipient: str,
    *,
    hooks_address: str = STREAMER_HOOK_ADDRESS,
    base_spread: int = DEFAULT_BASE_SPREAD,
    usd_per_reward_token: Decimal = DEFAULT_USD_PER_REWARD_TOKEN,
    deadline_window_seconds: int = DEFAULT_DEADLINE_WINDOW_SECONDS,
    clock: Callable[[], float] = time.time,
    observer: BuildObserver | None = None,
) -> CreateCampaignParams:
    """Compute the ``createCampaign`` arguments for a new streaming campaign.

    ``amount0``/``amount1`` follow the order of ``token0``/``token1`` as the
    user entered them; they are re-attached to the sorted currencies here.
    The price used for every tick and liquidity value is derived from the
    deposit ratio; ``initial_price_hint`` is only reported to ``observer``.

    Only ``deadline`` depends on ``clock``; everything else is a pure function
    of the arguments.
    """

    def emit(stage: str, **values: Any) -> None:
        if observer is not None:
            observer(stage, values)

    if isinstance(duration_days, bool) or not isinstance(duration_days, int) or duration_days <= 0:
        raise CampaignValidationError(f"duration_days must be a positive integer: {duration_days}")

    emit(
        "input",
        token0=token0,
        token1=token1,
        fee_tier=fee_tier,
        initial_price_hint=initial_price_hint,
        amount0=amount0,
        amount1=amount1,
        reward_token=reward_token,
        reward_amount=reward_amount,
        duration_days=duration_days,
        recipient=recipient,
    )

    sorted_tokens = normalize_and_sort_tokens(token0, token1)
    currency0 = sorted_tokens.currency0
    currency1 = sorted_tokens.currency1
    emit(
        "sorted_tokens",
        swapped=sorted_tokens.swapped,
        currency0=currency0.address,
        currency1=currency1.address,
    )

    amount0_text, amount1_text = orient_pair(amount0, amount1, swapped=sorted_tokens.swapped)
    amount0_max = parse_human_amount(amount0_text, currency0.decimals)
    amount1_max = parse_human_amount(amount1_text, currency1.decimals)
    budget = parse_human_amount(reward_amount, reward_token.decimals)
    for name, value in (
        ("amount0_max", amount0_max),
        ("amount1_max", amount1_max),
        ("budget", budget),
    ):
        _ensure_fits(name, value, UINT256_MAX)
    emit("amounts", amount0_max=amount0_max, amount1_max=amount1_max, budget=budget)

    price = effective_price(amount0_max, amount1_max, currency0.decimals, currency1.decimals)
    emit("price", initial_price_hint=initial_price_hint, price=price)

    tick_spacing = fee_tier.tick_spacing
    spread = resolve_spread(tick_spacing, base_spread)
    emit("tick_config", tick_spacing=tick_spacing, base_spread=base_spread, spread=spread)

    tick_range = compute_tick_range(price, tick_spacing, spread)
    emit("tick_range", tick_lower=tick_range.tick_lower, tick_upper=tick_range.tick_upper)

    sqrt_lower_x96, sqrt_upper_x96 = sqrt_prices_from_ticks(
        tick_range.tick_lower,
        tick_range.tick_upper,
    )
    liquidity = compute_liquidity_from_amount0(sqrt_lower_x96, sqrt_upper_x96, amount0_max)
    emit(
        "liquidity",
        sqrt_price_lower_x96=sqrt_lower_x96,
        sqrt_price_upper_x96=sqrt_upper_x96,
        liquidity=liquidity,
    )

    usd_budget = reward_amount_to_usd(reward_amount, usd_per_reward_token)
    goal = compute_goal_from_usd_budget(
        usd_budget,
        currency0.decimals,
        price,
        tick_range.tick_lower,
        tick_range.tick_upper,
    )
    emit("goal", usd_budget=usd_budget, goal=goal)

    duration = duration_days * SECONDS_PER_DAY
    deadline = math.floor(clock()) + deadline_window_seconds
    starting_price = encode_sqrt_price_x96(price)
    emit("time", duration=duration, deadline=deadline, starting_price=starting_price)

    _ensure_fits("fee", fee_tier.fee, UINT24_MAX)
    _ensure_fits("liquidity", liquidity, UINT128_MAX)
    _ensure_fits("starting_price", starting_price, UINT160_MAX)
    _ensure_fits("goal", goal, UINT256_MAX)

    pool = PoolKey(
        currency0=currency0.address,
        currency1=currency1.address,
        fee=fee_tier.fee,
        tick_spacing=tick_spacing,
        hooks=hooks_address,
    )
    mint_params = MintPositionParams(
        tick_lower=tick_range.tick_lower,
        tick_upper=tick_range.tick_upper,
        liquidity=liquidity,
        amount0_max=amount0_max,
        amount1_max=amount1_max,
        recipient=recipient,
        hook_data="0x",
    )
    result = CreateCampaignParams(
        pool=pool,
        reward=reward_token.address,
        budget=budget,
        goal=goal,
        duration=duration,
        deadline=deadline,
        reward_type=RewardType.STREAMING,
        starting_price=starting_price,
        mint_params=mint_params,
    )
    emit("result", params=result)
    return result
