from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from app.application.dto.campaign_params import (
    BuildCampaignParamsInput,
    BuildCampaignParamsOutput,
    CampaignAmounts,
)
from app.application.ports.fee_tier_port import FeeTierPort
from app.domain.entities.campaign import CreateCampaignParams
from app.domain.services.amounts import format_units
from app.domain.services.campaign_goal import liquidity_to_usd
from app.domain.services.campaign_params import build_create_campaign_params, effective_price
from app.domain.services.pair_orientation import normalize_and_sort_tokens


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CampaignBuilderSettings:
    hooks_address: str
    base_spread: int
    deadline_window_seconds: int
    usd_per_reward_token: Decimal


def log_build_stage(stage: str, values: dict[str, Any]) -> None:
    if stage == "result":
        params: CreateCampaignParams = values["params"]
        logger.info(
            "campaign_params: built currency0=%s currency1=%s fee=%s tick_lower=%s tick_upper=%s "
            "liquidity=%s budget=%s goal=%s deadline=%s",
            params.pool.currency0,
            params.pool.currency1,
            params.pool.fee,
            params.mint_params.tick_lower,
            params.mint_params.tick_upper,
            params.mint_params.liquidity,
            params.budget,
            params.goal,
            params.deadline,
        )
        return
    logger.debug("campaign_params: stage=%s values=%s", stage, values)


class BuildCampaignParamsUseCase:
    def __init__(
        self,
        *,
        fee_tier_port: FeeTierPort,
        settings: CampaignBuilderSettings,
        clock: Callable[[], float] = time.time,
    ):
        self._fee_tier_port = fee_tier_port
        self._settings = settings
        self._clock = clock

    def execute(self, command: BuildCampaignParamsInput) -> BuildCampaignParamsOutput:
        fee_tier = self._fee_tier_port.get_by_fee(command.fee)
        params = build_create_campaign_params(
            command.token0,
            command.token1,
            fee_tier,
            command.initial_price,
            command.amount0,
            command.amount1,
            command.reward_token,
            command.reward_amount,
            command.duration_days,
            command.recipient,
            hooks_address=self._settings.hooks_address,
            base_spread=self._settings.base_spread,
            usd_per_reward_token=self._settings.usd_per_reward_token,
            deadline_window_seconds=self._settings.deadline_window_seconds,
            clock=self._clock,
            observer=log_build_stage,
        )
        return BuildCampaignParamsOutput(
            params=params,
            position_value_usd=position_value_usd(command, params),
            amounts=human_amounts(command, params),
        )


def position_value_usd(command: BuildCampaignParamsInput, params: CreateCampaignParams) -> float:
    sorted_tokens = normalize_and_sort_tokens(command.token0, command.token1)
    mint = params.mint_params
    price = effective_price(
        mint.amount0_max,
        mint.amount1_max,
        sorted_tokens.currency0.decimals,
        sorted_tokens.currency1.decimals,
    )
    return liquidity_to_usd(
        mint.liquidity,
        price,
        mint.tick_lower,
        mint.tick_upper,
        sorted_tokens.currency0.decimals,
    )


def human_amounts(command: BuildCampaignParamsInput, params: CreateCampaignParams) -> CampaignAmounts:
    sorted_tokens = normalize_and_sort_tokens(command.token0, command.token1)
    return CampaignAmounts(
        amount0=format_units(params.mint_params.amount0_max, sorted_tokens.currency0.decimals),
        amount1=format_units(params.mint_params.amount1_max, sorted_tokens.currency1.decimals),
        budget=format_units(params.budget, command.reward_token.decimals),
    )
