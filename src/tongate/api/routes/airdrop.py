"""Airdrop claim endpoint.

Claims are NOT idempotent: each successful call broadcasts a new Claim
message from the admin wallet.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from tongate.address import AddressError
from tongate.api.deps import get_context
from tongate.api.models import ClaimResponse, ErrorResponse, WalletRequest
from tongate.config import ConfigurationError
from tongate.context import GatewayContext
from tongate.ledger.base import LedgerError
from tongate.payload.schema import EncodingError
from tongate.signing.base import SigningError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/claim-airdrop",
    response_model=ClaimResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def claim_airdrop(
    body: Optional[WalletRequest] = Body(None),
    context: GatewayContext = Depends(get_context),
):
    """Send the airdrop amount from the admin wallet to a user."""
    if body is None or not body.wallet:
        return JSONResponse(status_code=400, content={"error": "Wallet required"})

    try:
        await context.airdrops.claim(body.wallet)
    except ConfigurationError as e:
        logger.error(f"Airdrop refused: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    except AddressError as e:
        return JSONResponse(
            status_code=400, content={"error": "Invalid wallet", "details": str(e)}
        )
    except (LedgerError, SigningError, EncodingError) as e:
        logger.error(f"Airdrop error: {e}")
        return JSONResponse(
            status_code=500, content={"error": "Airdrop failed", "details": str(e)}
        )

    return ClaimResponse(success=True)
