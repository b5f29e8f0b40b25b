from __future__ import annotations

from dataclasses import replace

from app.domain.entities.campaign_tx import (
    CampaignTxEvent,
    CampaignTxEventType,
    CampaignTxState,
    CampaignTxStatus,
)
from app.domain.exceptions import InvalidTransitionError


_STARTABLE = {
    CampaignTxStatus.IDLE,
    CampaignTxStatus.PREPARING,
    CampaignTxStatus.SUCCESS,
    CampaignTxStatus.FAILED,
}
_IN_FLIGHT = {
    CampaignTxStatus.PREPARING,
    CampaignTxStatus.AWAITING_SIGNATURE,
    CampaignTxStatus.PENDING,
}


def reduce_campaign_tx(state: CampaignTxState, event: CampaignTxEvent) -> CampaignTxState:
    """Apply one event to the create-campaign transaction state.

    Events carrying an older ``request_id`` than the state are stale and are
    dropped without changing anything.
    """
    if event.type is CampaignTxEventType.RESET:
        return CampaignTxState(request_id=state.request_id)

    if event.type is CampaignTxEventType.START:
        if state.status not in _STARTABLE:
            raise InvalidTransitionError(f"cannot start while {state.status.value}")
        if event.request_id <= state.request_id:
            raise InvalidTransitionError("request_id must increase on start.")
        return CampaignTxState(status=CampaignTxStatus.PREPARING, request_id=event.request_id)

    if event.request_id != state.request_id:
        return state

    if event.type is CampaignTxEventType.PREPARED and state.status is CampaignTxStatus.PREPARING:
        return replace(state, status=CampaignTxStatus.AWAITING_SIGNATURE)

    if (
        event.type is CampaignTxEventType.SUBMITTED
        and state.status is CampaignTxStatus.AWAITING_SIGNATURE
    ):
        if not event.batch_id:
            raise InvalidTransitionError("submitted event requires batch_id.")
        return replace(state, status=CampaignTxStatus.PENDING, batch_id=event.batch_id)

    if event.type is CampaignTxEventType.POLLED and state.status is CampaignTxStatus.PENDING:
        if event.poll_status == "pending":
            return state
        if event.poll_status == "success":
            return replace(state, status=CampaignTxStatus.SUCCESS, receipts=event.receipts)
        if event.poll_status == "failure":
            return replace(
                state,
                status=CampaignTxStatus.FAILED,
                receipts=event.receipts,
                error=event.error or "Transaction failed.",
            )
        raise InvalidTransitionError(f"unknown poll status: {event.poll_status}")

    if event.type is CampaignTxEventType.REJECTED and state.status in _IN_FLIGHT:
        return replace(state, status=CampaignTxStatus.FAILED, error=event.error or "Unknown error occurred")

    raise InvalidTransitionError(f"{event.type.value} not allowed while {state.status.value}")
