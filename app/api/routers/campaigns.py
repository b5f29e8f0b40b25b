from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import (
    get_build_campaign_params_use_case,
    get_prepare_create_campaign_use_case,
)
from app.api.schemas.campaign import (
    AmountsResponse,
    ApprovalCallResponse,
    CampaignParamsRequest,
    CampaignParamsResponse,
    MintParamsResponse,
    PoolKeyResponse,
    PrepareCampaignRequest,
    PrepareCampaignResponse,
    TokenPayload,
)
from app.application.dto.campaign_params import (
    BuildCampaignParamsInput,
    CampaignAmounts,
    PrepareCreateCampaignInput,
)
from app.application.use_cases.build_campaign_params import BuildCampaignParamsUseCase
from app.application.use_cases.prepare_create_campaign import PrepareCreateCampaignUseCase
from app.domain.entities.campaign import CreateCampaignParams
from app.domain.entities.token import TokenDescriptor
from app.domain.exceptions import (
    ApprovalInputError,
    CampaignValidationError,
    FeeTierNotFoundError,
)

router = APIRouter()


def _token(payload: TokenPayload) -> TokenDescriptor:
    return TokenDescriptor(address=payload.address, decimals=payload.decimals, symbol=payload.symbol)


def _build_input(req: CampaignParamsRequest) -> BuildCampaignParamsInput:
    return BuildCampaignParamsInput(
        token0=_token(req.token0),
        token1=_token(req.token1),
        fee=req.fee,
        initial_price=req.initial_price,
        amount0=req.amount0,
        amount1=req.amount1,
        reward_token=_token(req.reward_token),
        reward_amount=req.reward_amount,
        duration_days=req.duration_days,
        recipient=req.recipient,
    )


def _params_response(
    params: CreateCampaignParams,
    position_value_usd: float,
    amounts: CampaignAmounts,
) -> CampaignParamsResponse:
    mint = params.mint_params
    return CampaignParamsResponse(
        pool=PoolKeyResponse(
            currency0=params.pool.currency0,
            currency1=params.pool.currency1,
            fee=params.pool.fee,
            tick_spacing=params.pool.tick_spacing,
            hooks=params.pool.hooks,
        ),
        reward=params.reward,
        budget=str(params.budget),
        goal=str(params.goal),
        duration=str(params.duration),
        deadline=str(params.deadline),
        reward_type=int(params.reward_type),
        starting_price=str(params.starting_price),
        mint_params=MintParamsResponse(
            tick_lower=mint.tick_lower,
            tick_upper=mint.tick_upper,
            liquidity=str(mint.liquidity),
            amount0_max=str(mint.amount0_max),
            amount1_max=str(mint.amount1_max),
            recipient=mint.recipient,
            hook_data=mint.hook_data,
        ),
        position_value_usd=position_value_usd,
        amounts=AmountsResponse(amount0=amounts.amount0, amount1=amounts.amount1, budget=amounts.budget),
    )


@router.post("/v1/campaigns/params", response_model=CampaignParamsResponse)
def build_campaign_params(
    req: CampaignParamsRequest,
    use_case: BuildCampaignParamsUseCase = Depends(get_build_campaign_params_use_case),
):
    try:
        result = use_case.execute(_build_input(req))
    except FeeTierNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CampaignValidationError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "code": exc.code}) from exc

    return _params_response(result.params, result.position_value_usd, result.amounts)


@router.post("/v1/campaigns/prepare", response_model=PrepareCampaignResponse)
def prepare_campaign(
    req: PrepareCampaignRequest,
    use_case: PrepareCreateCampaignUseCase = Depends(get_prepare_create_campaign_use_case),
):
    try:
        result = use_case.execute(
            PrepareCreateCampaignInput(campaign=_build_input(req), owner=req.owner)
        )
    except FeeTierNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CampaignValidationError as exc:
        raise HTTPException(status_code=422, detail={"message": str(exc), "code": exc.code}) from exc
    except ApprovalInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return PrepareCampaignResponse(
        approvals=[ApprovalCallResponse(to=call.to, data=call.data) for call in result.approvals],
        params=_params_response(result.params, result.position_value_usd, result.amounts),
    )
