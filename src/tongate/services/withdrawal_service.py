"""Withdraw payload construction.

This service builds UNSIGNED payloads only. The client signs with its own
wallet and broadcasts; the backend never touches the user's keys.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from tongate.address import LedgerAddress
from tongate.payload.amounts import to_nano
from tongate.payload.messages import WithdrawRequest, encode_message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WithdrawTransaction:
    """Transaction template for the client wallet.

    Attributes:
        to: Contract address (user-friendly)
        value: TON to attach, in nanotons, as a decimal string
        payload: Base64 BOC of the WithdrawRequest body
        amount: Requested amount in nanotokens
    """
    to: str
    value: str
    payload: str
    amount: int

    def to_dict(self) -> dict:
        return {"to": self.to, "value": self.value, "payload": self.payload}


class WithdrawalService:
    """Builds WithdrawRequest payloads for client-side signing."""

    def __init__(self, contract_address: LedgerAddress, gas: int):
        self.contract_address = contract_address
        self.gas = gas

    def build_payload(self, amount: Any) -> WithdrawTransaction:
        """Build a withdraw transaction template.

        Args:
            amount: Display amount, e.g. "12.5"

        Raises:
            EncodingError: If the amount cannot be converted or encoded
        """
        # JSON numbers arrive as floats; their shortest repr is the literal sent
        if isinstance(amount, float):
            amount = Decimal(repr(amount))
        nano_amount = to_nano(amount)

        payload = encode_message(WithdrawRequest(amount=nano_amount))
        logger.info(f"Withdraw payload built for {nano_amount} nanotokens")

        return WithdrawTransaction(
            to=self.contract_address.to_string(),
            value=str(self.gas),
            payload=payload,
            amount=nano_amount,
        )
