from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


@dataclass(frozen=True)
class Settings:
    streamer_address: str
    streamer_hook_address: str
    campaign_base_spread: int
    campaign_deadline_window_seconds: int
    usd_per_reward_token: Decimal
    rpc_url: str
    rpc_timeout_seconds: float
    log_level: str


def get_settings() -> Settings:
    return Settings(
        streamer_address=_env("STREAMER_ADDRESS", "0x08440b6118721414Fc35616da45251f12e634Fa4"),
        streamer_hook_address=_env(
            "STREAMER_HOOK_ADDRESS",
            "0xdf128f75822B36fbca98c302B7011a40CF6cC500",
        ),
        campaign_base_spread=int(_env("CAMPAIGN_BASE_SPREAD", "3000")),
        campaign_deadline_window_seconds=int(_env("CAMPAIGN_DEADLINE_WINDOW_SECONDS", "1800")),
        usd_per_reward_token=Decimal(_env("USD_PER_REWARD_TOKEN", "1")),
        rpc_url=_env("RPC_URL", ""),
        rpc_timeout_seconds=float(_env("RPC_TIMEOUT_SECONDS", "10")),
        log_level=_env("LOG_LEVEL", "INFO"),
    )
