from __future__ import annotations

from dataclasses import dataclass


ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class TokenDescriptor:
    address: str
    decimals: int
    symbol: str


@dataclass(frozen=True)
class FeeTier:
    fee: int
    tick_spacing: int
    label: str = ""
    description: str = ""


@dataclass(frozen=True)
class SortedTokens:
    currency0: TokenDescriptor
    currency1: TokenDescriptor
    swapped: bool
