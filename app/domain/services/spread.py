from __future__ import annotations


# Applied to every fee tier alike.
DEFAULT_BASE_SPREAD = 3000
MIN_SPREAD_SPACINGS = 10
FALLBACK_SPREAD_SPACINGS = 300


def resolve_spread(tick_spacing: int, base_spread: int = DEFAULT_BASE_SPREAD) -> int:
    if tick_spacing <= 0:
        raise ValueError("tick_spacing must be positive.")
    spread = (base_spread // tick_spacing) * tick_spacing
    if spread < tick_spacing * MIN_SPREAD_SPACINGS:
        spread = tick_spacing * FALLBACK_SPREAD_SPACINGS
    return spread
