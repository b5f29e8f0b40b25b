from __future__ import annotations

from decimal import Decimal
import logging
import unittest

from app.application.dto.campaign_params import (
    BuildCampaignParamsInput,
    CampaignAmounts,
    PrepareCreateCampaignInput,
)
from app.application.use_cases.build_campaign_params import (
    BuildCampaignParamsUseCase,
    CampaignBuilderSettings,
)
from app.application.use_cases.list_fee_tiers import ListFeeTiersUseCase
from app.application.use_cases.prepare_create_campaign import PrepareCreateCampaignUseCase
from app.domain.entities.token import TokenDescriptor
from app.domain.exceptions import FeeTierNotFoundError, InvalidAmountError
from app.domain.services.approvals import MAX_UINT256
from app.domain.services.campaign_goal import liquidity_to_usd
from app.infrastructure.registry.fee_tier_registry import StaticFeeTierRegistry


HOOKS = "0xdf128f75822B36fbca98c302B7011a40CF6cC500"
STREAMER = "0x08440b6118721414Fc35616da45251f12e634Fa4"
OWNER = "0x4444444444444444444444444444444444444444"
TOKEN_A = TokenDescriptor(address="0x1111111111111111111111111111111111111111", decimals=18, symbol="A")
TOKEN_B = TokenDescriptor(address="0x2222222222222222222222222222222222222222", decimals=6, symbol="B")
REWARD = TokenDescriptor(address="0x3333333333333333333333333333333333333333", decimals=18, symbol="R")


class FakeAllowancePort:
    def __init__(self, allowances: dict[str, int]):
        self._allowances = allowances
        self.calls: list[tuple[str, str, str]] = []

    def get_allowance(self, *, owner: str, token_address: str, spender: str) -> int:
        self.calls.append((owner, token_address, spender))
        return self._allowances.get(token_address, 0)


def _use_case(**settings_overrides) -> BuildCampaignParamsUseCase:
    settings = {
        "hooks_address": HOOKS,
        "base_spread": 3000,
        "deadline_window_seconds": 1800,
        "usd_per_reward_token": Decimal("1"),
    }
    settings.update(settings_overrides)
    return BuildCampaignParamsUseCase(
        fee_tier_port=StaticFeeTierRegistry(),
        settings=CampaignBuilderSettings(**settings),
        clock=lambda: 1_700_000_000,
    )


def _input(**overrides) -> BuildCampaignParamsInput:
    payload = {
        "token0": TOKEN_B,
        "token1": TOKEN_A,
        "fee": 3000,
        "initial_price": "1",
        "amount0": "1000",
        "amount1": "1000",
        "reward_token": REWARD,
        "reward_amount": "500",
        "duration_days": 7,
        "recipient": OWNER,
    }
    payload.update(overrides)
    return BuildCampaignParamsInput(**payload)


class BuildCampaignParamsUseCaseTests(unittest.TestCase):
    def test_resolves_fee_tier_and_builds_params(self):
        result = _use_case().execute(_input())

        self.assertEqual(result.params.pool.currency0, TOKEN_A.address)
        self.assertEqual(result.params.pool.tick_spacing, 60)
        self.assertEqual(result.params.pool.hooks, HOOKS)
        self.assertEqual(result.params.deadline, 1_700_001_800)
        self.assertEqual(result.params.duration, 7 * 86400)
        expected_value = liquidity_to_usd(result.params.mint_params.liquidity, 1.0, -3000, 3000, 18)
        self.assertEqual(result.position_value_usd, expected_value)
        self.assertGreater(result.position_value_usd, 0)
        self.assertEqual(result.amounts, CampaignAmounts(amount0="1000", amount1="1000", budget="500"))

    def test_settings_flow_into_builder(self):
        result = _use_case(base_spread=6000, deadline_window_seconds=60).execute(_input())
        self.assertEqual(result.params.mint_params.tick_lower, -6000)
        self.assertEqual(result.params.deadline, 1_700_000_060)

    def test_unknown_fee_tier(self):
        with self.assertRaises(FeeTierNotFoundError):
            _use_case().execute(_input(fee=1234))

    def test_validation_errors_propagate(self):
        with self.assertRaises(InvalidAmountError):
            _use_case().execute(_input(amount1="1,000"))

    def test_logs_result_at_info(self):
        with self.assertLogs("app.application.use_cases.build_campaign_params", level=logging.INFO) as logs:
            _use_case().execute(_input())
        self.assertTrue(any("campaign_params: built" in line for line in logs.output))


class PrepareCreateCampaignUseCaseTests(unittest.TestCase):
    def test_approvals_come_before_params_in_sorted_token_order(self):
        allowance_port = FakeAllowancePort(
            {
                TOKEN_A.address: 0,
                TOKEN_B.address: 5,
                REWARD.address: MAX_UINT256,
            }
        )
        use_case = PrepareCreateCampaignUseCase(
            build_use_case=_use_case(),
            allowance_port=allowance_port,
            streamer_address=STREAMER,
        )

        result = use_case.execute(PrepareCreateCampaignInput(campaign=_input(), owner=OWNER))

        self.assertEqual(
            [(call.to, call.amount) for call in result.approvals],
            [
                (TOKEN_A.address, MAX_UINT256),
                (TOKEN_B.address, 0),
                (TOKEN_B.address, MAX_UINT256),
            ],
        )
        self.assertTrue(all(call.spender == STREAMER for call in result.approvals))
        self.assertEqual(
            allowance_port.calls,
            [
                (OWNER, TOKEN_A.address, STREAMER),
                (OWNER, TOKEN_B.address, STREAMER),
                (OWNER, REWARD.address, STREAMER),
            ],
        )
        self.assertEqual(result.params.budget, 500 * 10**18)

    def test_reward_token_shared_with_pool_is_read_once(self):
        allowance_port = FakeAllowancePort({})
        use_case = PrepareCreateCampaignUseCase(
            build_use_case=_use_case(),
            allowance_port=allowance_port,
            streamer_address=STREAMER,
        )

        use_case.execute(
            PrepareCreateCampaignInput(campaign=_input(reward_token=TOKEN_A), owner=OWNER)
        )

        self.assertEqual(len(allowance_port.calls), 2)

    def test_shared_reward_token_allowance_covers_deposit_plus_budget(self):
        # 1200 covers the 1000 deposit and the 500 budget separately, not together.
        allowance_port = FakeAllowancePort(
            {
                TOKEN_A.address: 1200 * 10**18,
                TOKEN_B.address: MAX_UINT256,
            }
        )
        use_case = PrepareCreateCampaignUseCase(
            build_use_case=_use_case(),
            allowance_port=allowance_port,
            streamer_address=STREAMER,
        )

        result = use_case.execute(
            PrepareCreateCampaignInput(campaign=_input(reward_token=TOKEN_A), owner=OWNER)
        )

        self.assertEqual(
            [(call.to, call.amount) for call in result.approvals],
            [(TOKEN_A.address, 0), (TOKEN_A.address, MAX_UINT256)],
        )

    def test_shared_reward_token_with_enough_allowance_needs_no_approval(self):
        allowance_port = FakeAllowancePort(
            {
                TOKEN_A.address: 1500 * 10**18,
                TOKEN_B.address: MAX_UINT256,
            }
        )
        use_case = PrepareCreateCampaignUseCase(
            build_use_case=_use_case(),
            allowance_port=allowance_port,
            streamer_address=STREAMER,
        )

        result = use_case.execute(
            PrepareCreateCampaignInput(campaign=_input(reward_token=TOKEN_A), owner=OWNER)
        )

        self.assertEqual(result.approvals, [])
        self.assertEqual(result.amounts.budget, "500")


class ListFeeTiersUseCaseTests(unittest.TestCase):
    def test_lists_registry_tiers(self):
        tiers = ListFeeTiersUseCase(fee_tier_port=StaticFeeTierRegistry()).execute()
        self.assertEqual(
            [(tier.fee, tier.tick_spacing) for tier in tiers],
            [(100, 1), (500, 10), (3000, 60), (10000, 200)],
        )


if __name__ == "__main__":
    unittest.main()
