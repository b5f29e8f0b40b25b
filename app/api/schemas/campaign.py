from __future__ import annotations

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    address: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    decimals: int = Field(..., ge=0, le=255)
    symbol: str


class CampaignParamsRequest(BaseModel):
    token0: TokenPayload
    token1: TokenPayload
    fee: int = Field(..., description="Fee tier in hundredths of a bip (100, 500, 3000, 10000).")
    initial_price: str = Field("", description="Price typed by the user. Informational only.")
    amount0: str = Field(..., description="Deposit of token0 in human units.")
    amount1: str = Field(..., description="Deposit of token1 in human units.")
    reward_token: TokenPayload
    reward_amount: str = Field(..., description="Reward budget in human units.")
    duration_days: int = Field(..., gt=0)
    recipient: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")


class PrepareCampaignRequest(CampaignParamsRequest):
    owner: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")


class PoolKeyResponse(BaseModel):
    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str


class MintParamsResponse(BaseModel):
    tick_lower: int
    tick_upper: int
    liquidity: str
    amount0_max: str
    amount1_max: str
    recipient: str
    hook_data: str


class AmountsResponse(BaseModel):
    amount0: str
    amount1: str
    budget: str


class CampaignParamsResponse(BaseModel):
    pool: PoolKeyResponse
    reward: str
    budget: str
    goal: str
    duration: str
    deadline: str
    reward_type: int
    starting_price: str
    mint_params: MintParamsResponse
    position_value_usd: float
    amounts: AmountsResponse


class ApprovalCallResponse(BaseModel):
    to: str
    data: str


class PrepareCampaignResponse(BaseModel):
    approvals: list[ApprovalCallResponse]
    params: CampaignParamsResponse


class FeeTierResponse(BaseModel):
    fee: int
    tick_spacing: int
    label: str
    description: str
