from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routers.campaigns import router as campaigns_router
from app.api.routers.fee_tiers import router as fee_tiers_router
from app.shared.config import get_settings

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="Streams Campaign API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(fee_tiers_router)
app.include_router(campaigns_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
