from __future__ import annotations

from typing import Protocol

from app.domain.entities.token import FeeTier


class FeeTierPort(Protocol):
    def list_all(self) -> list[FeeTier]:
        ...

    def get_by_fee(self, fee: int) -> FeeTier:
        ...
