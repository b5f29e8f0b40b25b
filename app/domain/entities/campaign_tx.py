from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CampaignTxStatus(str, Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    AWAITING_SIGNATURE = "awaiting_signature"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class CampaignTxEventType(str, Enum):
    START = "start"
    PREPARED = "prepared"
    SUBMITTED = "submitted"
    POLLED = "polled"
    REJECTED = "rejected"
    RESET = "reset"


@dataclass(frozen=True)
class CampaignTxEvent:
    type: CampaignTxEventType
    request_id: int = 0
    batch_id: str | None = None
    poll_status: str | None = None
    receipts: tuple[str, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class CampaignTxState:
    status: CampaignTxStatus = CampaignTxStatus.IDLE
    request_id: int = 0
    batch_id: str | None = None
    receipts: tuple[str, ...] = field(default_factory=tuple)
    error: str | None = None
