from __future__ import annotations

from app.domain.entities.token import FeeTier
from app.domain.exceptions import FeeTierNotFoundError


UNISWAP_V4_TIERS: tuple[FeeTier, ...] = (
    FeeTier(fee=100, tick_spacing=1, label="0.01%", description="Best for very stable pairs."),
    FeeTier(fee=500, tick_spacing=10, label="0.05%", description="Best for stable pairs."),
    FeeTier(fee=3000, tick_spacing=60, label="0.3%", description="Best for most pairs."),
    FeeTier(fee=10000, tick_spacing=200, label="1%", description="Best for exotic pairs."),
)


class StaticFeeTierRegistry:
    def __init__(self, tiers: tuple[FeeTier, ...] = UNISWAP_V4_TIERS):
        self._tiers = tiers
        self._by_fee = {tier.fee: tier for tier in tiers}

    def list_all(self) -> list[FeeTier]:
        return list(self._tiers)

    def get_by_fee(self, fee: int) -> FeeTier:
        tier = self._by_fee.get(fee)
        if tier is None:
            raise FeeTierNotFoundError(f"Fee tier not supported: {fee}")
        return tier
