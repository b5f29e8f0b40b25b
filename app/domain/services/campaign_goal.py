from __future__ import annotations

import math
from decimal import Decimal

from app.domain.exceptions import InvalidKFactorError, ParameterOverflowError
from app.domain.services.amounts import parse_human_amount
from app.domain.services.univ3_math import range_value_factor


# The reward amount numeral is read as a USD figure for the goal.
DEFAULT_USD_PER_REWARD_TOKEN = Decimal("1")


def reward_amount_to_usd(
    reward_amount: str,
    usd_per_reward_token: Decimal = DEFAULT_USD_PER_REWARD_TOKEN,
) -> str:
    if usd_per_reward_token == 1:
        return reward_amount.strip()
    value = Decimal(reward_amount.strip()) * usd_per_reward_token
    return format(value, "f")


def compute_goal_from_usd_budget(
    usd_budget: str,
    token0_decimals: int,
    price: float,
    tick_lower: int,
    tick_upper: int,
) -> int:
    budget_token0 = parse_human_amount(usd_budget, token0_decimals)
    k0 = range_value_factor(price, tick_lower, tick_upper)
    if not k0 > 0:
        raise InvalidKFactorError(f"Invalid K factor for liquidity calculation: {k0}")
    try:
        return math.floor(float(budget_token0) / k0)
    except OverflowError as exc:
        raise ParameterOverflowError(f"USD budget is too large for a liquidity goal: {usd_budget}") from exc


def liquidity_to_usd(
    liquidity: int,
    price: float,
    tick_lower: int,
    tick_upper: int,
    token0_decimals: int,
) -> float:
    """Approximate USD value of ``liquidity`` when token0 trades at 1 USD."""
    if liquidity <= 0:
        return 0.0
    k0 = range_value_factor(price, tick_lower, tick_upper)
    if not k0 > 0:
        return 0.0
    return float(liquidity) * k0 / (10.0**token0_decimals)
