"""Request and response models.

Request fields accept any JSON value: presence and type are checked by the
routes and services, so a missing or malformed ``wallet``/``amount`` is
answered with a plain ``{"error": ...}`` body, not a 422 report.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class WalletRequest(BaseModel):
    """Request carrying a user wallet address."""

    wallet: Any = Field(None, description="User wallet address")


class WithdrawPayloadRequest(BaseModel):
    """Request for a withdraw payload."""

    amount: Any = Field(
        None, description="Amount to withdraw in display units, e.g. \"12.5\""
    )


class BalanceResponse(BaseModel):
    """Balance of a wallet inside the contract."""

    wallet: Any = Field(None, description="Wallet as requested")
    amount: str = Field(..., description="Balance in nanotokens (\"0\" if unavailable)")


class ClaimResponse(BaseModel):
    """Airdrop claim accepted by the RPC endpoint."""

    success: bool = Field(True)


class UnsignedTransaction(BaseModel):
    """Transaction template for client-side signing."""

    to: str = Field(..., description="Contract address")
    value: str = Field(..., description="TON to attach, in nanotons")
    payload: str = Field(..., description="Base64 BOC message body")


class WithdrawPayloadResponse(BaseModel):
    """Withdraw payload response."""

    success: bool = Field(True)
    transaction: UnsignedTransaction


class ErrorResponse(BaseModel):
    """Error body."""

    error: str
    details: Optional[str] = None
