from __future__ import annotations

from app.application.ports.fee_tier_port import FeeTierPort
from app.domain.entities.token import FeeTier


class ListFeeTiersUseCase:
    def __init__(self, *, fee_tier_port: FeeTierPort):
        self._fee_tier_port = fee_tier_port

    def execute(self) -> list[FeeTier]:
        return self._fee_tier_port.list_all()
