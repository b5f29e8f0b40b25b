from __future__ import annotations

from typing import Protocol


class AllowancePort(Protocol):
    def get_allowance(self, *, owner: str, token_address: str, spender: str) -> int:
        ...
