from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.campaign import ApprovalCall, CreateCampaignParams
from app.domain.entities.token import TokenDescriptor


@dataclass(frozen=True)
class BuildCampaignParamsInput:
    token0: TokenDescriptor
    token1: TokenDescriptor
    fee: int
    initial_price: str
    amount0: str
    amount1: str
    reward_token: TokenDescriptor
    reward_amount: str
    duration_days: int
    recipient: str


@dataclass(frozen=True)
class CampaignAmounts:
    """Deposits and budget in human units, ordered like the pool currencies."""

    amount0: str
    amount1: str
    budget: str


@dataclass(frozen=True)
class BuildCampaignParamsOutput:
    params: CreateCampaignParams
    position_value_usd: float
    amounts: CampaignAmounts


@dataclass(frozen=True)
class PrepareCreateCampaignOutput:
    approvals: list[ApprovalCall]
    params: CreateCampaignParams
    position_value_usd: float
    amounts: CampaignAmounts


@dataclass(frozen=True)
class PrepareCreateCampaignInput:
    campaign: BuildCampaignParamsInput
    owner: str
