from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_list_fee_tiers_use_case
from app.api.schemas.campaign import FeeTierResponse
from app.application.use_cases.list_fee_tiers import ListFeeTiersUseCase

router = APIRouter()


@router.get("/v1/fee-tiers", response_model=list[FeeTierResponse])
def list_fee_tiers(
    use_case: ListFeeTiersUseCase = Depends(get_list_fee_tiers_use_case),
):
    return [
        FeeTierResponse(
            fee=tier.fee,
            tick_spacing=tier.tick_spacing,
            label=tier.label,
            description=tier.description,
        )
        for tier in use_case.execute()
    ]
