from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class RewardType(IntEnum):
    POINTS = 0
    STREAMING = 1
    TOKENS = 2


@dataclass(frozen=True)
class PoolKey:
    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str


@dataclass(frozen=True)
class TickRange:
    tick_lower: int
    tick_upper: int


@dataclass(frozen=True)
class MintPositionParams:
    tick_lower: int
    tick_upper: int
    liquidity: int
    amount0_max: int
    amount1_max: int
    recipient: str
    hook_data: str = "0x"


@dataclass(frozen=True)
class CreateCampaignParams:
    pool: PoolKey
    reward: str
    budget: int
    goal: int
    duration: int
    deadline: int
    reward_type: RewardType
    starting_price: int
    mint_params: MintPositionParams


@dataclass(frozen=True)
class ApprovalCall:
    to: str
    spender: str
    amount: int
    data: str
