"""Contract balance endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from tongate.api.deps import get_context
from tongate.api.models import BalanceResponse, ErrorResponse, WalletRequest
from tongate.context import GatewayContext

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/balance",
    response_model=BalanceResponse,
    responses={400: {"model": ErrorResponse}},
)
async def get_balance(
    body: Optional[WalletRequest] = Body(None),
    context: GatewayContext = Depends(get_context),
):
    """Get the balance the contract holds for a wallet.

    Always answers 200 once a wallet is given: if the contract cannot be
    queried the amount is reported as "0".
    """
    if body is None or not body.wallet:
        return JSONResponse(status_code=400, content={"error": "Wallet required"})

    result = await context.balances.lookup(body.wallet)
    if not result.is_available:
        logger.warning(f"Reporting 0 balance for {body.wallet}: {result.error}")

    return BalanceResponse(wallet=result.wallet, amount=str(result.amount))
