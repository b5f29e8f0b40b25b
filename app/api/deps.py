from __future__ import annotations

from functools import lru_cache

from app.application.use_cases.build_campaign_params import (
    BuildCampaignParamsUseCase,
    CampaignBuilderSettings,
)
from app.application.use_cases.list_fee_tiers import ListFeeTiersUseCase
from app.application.use_cases.prepare_create_campaign import PrepareCreateCampaignUseCase
from app.infrastructure.clients.rpc_allowance_client import (
    RpcAllowanceClient,
    RpcAllowanceClientSettings,
)
from app.infrastructure.registry.fee_tier_registry import StaticFeeTierRegistry
from app.shared.config import get_settings


@lru_cache(maxsize=1)
def _get_fee_tier_registry() -> StaticFeeTierRegistry:
    return StaticFeeTierRegistry()


@lru_cache(maxsize=1)
def _get_rpc_allowance_client() -> RpcAllowanceClient:
    settings = get_settings()
    return RpcAllowanceClient(
        RpcAllowanceClientSettings(
            rpc_url=settings.rpc_url,
            timeout_seconds=settings.rpc_timeout_seconds,
        )
    )


def get_list_fee_tiers_use_case() -> ListFeeTiersUseCase:
    return ListFeeTiersUseCase(fee_tier_port=_get_fee_tier_registry())


def get_build_campaign_params_use_case() -> BuildCampaignParamsUseCase:
    settings = get_settings()
    return BuildCampaignParamsUseCase(
        fee_tier_port=_get_fee_tier_registry(),
        settings=CampaignBuilderSettings(
            hooks_address=settings.streamer_hook_address,
            base_spread=settings.campaign_base_spread,
            deadline_window_seconds=settings.campaign_deadline_window_seconds,
            usd_per_reward_token=settings.usd_per_reward_token,
        ),
    )


def get_prepare_create_campaign_use_case() -> PrepareCreateCampaignUseCase:
    settings = get_settings()
    return PrepareCreateCampaignUseCase(
        build_use_case=get_build_campaign_params_use_case(),
        allowance_port=_get_rpc_allowance_client(),
        streamer_address=settings.streamer_address,
    )
