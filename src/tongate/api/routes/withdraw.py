"""Withdraw payload endpoint.

Returns an UNSIGNED transaction template. The client signs it with its own
wallet and broadcasts it; nothing is signed server-side.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from tongate.api.deps import get_context
from tongate.api.models import (
    ErrorResponse,
    UnsignedTransaction,
    WithdrawPayloadRequest,
    WithdrawPayloadResponse,
)
from tongate.context import GatewayContext
from tongate.payload.schema import EncodingError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/withdraw-payload",
    response_model=WithdrawPayloadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def withdraw_payload(
    body: Optional[WithdrawPayloadRequest] = Body(None),
    context: GatewayContext = Depends(get_context),
):
    """Build a WithdrawRequest payload for client-side signing."""
    if body is None or body.amount is None or body.amount == "":
        return JSONResponse(status_code=400, content={"error": "Amount required"})

    try:
        tx = context.withdrawals.build_payload(body.amount)
    except EncodingError as e:
        logger.error(f"Withdraw payload error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to generate payload", "details": str(e)},
        )

    return WithdrawPayloadResponse(
        success=True,
        transaction=UnsignedTransaction(**tx.to_dict()),
    )
