from __future__ import annotations

from typing import TypeVar

from app.domain.entities.token import SortedTokens, TokenDescriptor


T = TypeVar("T")


def normalize_and_sort_tokens(token_a: TokenDescriptor, token_b: TokenDescriptor) -> SortedTokens:
    if token_a.address.lower() > token_b.address.lower():
        return SortedTokens(currency0=token_b, currency1=token_a, swapped=True)
    return SortedTokens(currency0=token_a, currency1=token_b, swapped=False)


def orient_pair(first: T, second: T, *, swapped: bool) -> tuple[T, T]:
    """Return ``(first, second)`` in canonical currency order."""
    if swapped:
        return second, first
    return first, second
