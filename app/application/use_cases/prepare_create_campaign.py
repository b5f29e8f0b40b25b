from __future__ import annotations

import logging

from app.application.dto.campaign_params import (
    PrepareCreateCampaignInput,
    PrepareCreateCampaignOutput,
)
from app.application.ports.allowance_port import AllowancePort
from app.application.use_cases.build_campaign_params import BuildCampaignParamsUseCase
from app.domain.entities.token import TokenDescriptor
from app.domain.services.approvals import build_approve_calls
from app.domain.services.pair_orientation import normalize_and_sort_tokens


logger = logging.getLogger(__name__)


class PrepareCreateCampaignUseCase:
    """Approvals plus the ``createCampaign`` arguments, in submission order."""

    def __init__(
        self,
        *,
        build_use_case: BuildCampaignParamsUseCase,
        allowance_port: AllowancePort,
        streamer_address: str,
    ):
        self._build_use_case = build_use_case
        self._allowance_port = allowance_port
        self._streamer_address = streamer_address

    def execute(self, command: PrepareCreateCampaignInput) -> PrepareCreateCampaignOutput:
        built = self._build_use_case.execute(command.campaign)
        params = built.params
        campaign = command.campaign

        sorted_tokens = normalize_and_sort_tokens(campaign.token0, campaign.token1)
        # A reward token that is also a pool currency must cover deposit plus budget.
        required: dict[str, tuple[TokenDescriptor, int]] = {}
        for token, amount in (
            (sorted_tokens.currency0, params.mint_params.amount0_max),
            (sorted_tokens.currency1, params.mint_params.amount1_max),
            (campaign.reward_token, params.budget),
        ):
            key = token.address.lower()
            if key in required:
                first, total = required[key]
                required[key] = (first, total + amount)
            else:
                required[key] = (token, amount)

        tokens = [token for token, _ in required.values()]
        amounts = [amount for _, amount in required.values()]
        allowances = {
            key: self._allowance_port.get_allowance(
                owner=command.owner,
                token_address=token.address,
                spender=self._streamer_address,
            )
            for key, (token, _) in required.items()
        }

        approvals = build_approve_calls(tokens, amounts, allowances, self._streamer_address)
        logger.info(
            "prepare_create_campaign: owner=%s approvals=%s total_calls=%s",
            command.owner,
            len(approvals),
            len(approvals) + 1,
        )
        return PrepareCreateCampaignOutput(
            approvals=approvals,
            params=params,
            position_value_usd=built.position_value_usd,
            amounts=built.amounts,
        )
