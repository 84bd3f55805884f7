"""Airdrop claims.

The admin wallet sends a ``Claim`` message crediting a fixed amount to a
user. Claims are NOT deduplicated: every call broadcasts a new message, the
caller is responsible for not submitting twice.
"""

import logging
from typing import Optional

from tongate.address import LedgerAddress, parse_address
from tongate.config import ConfigurationError
from tongate.contract import WalletMapContract
from tongate.ledger.base import LedgerClient
from tongate.signing.base import WalletIdentity

logger = logging.getLogger(__name__)


class AirdropService:
    """Sends admin-signed Claim messages to the WalletMap contract."""

    def __init__(
        self,
        ledger: LedgerClient,
        contract_address: LedgerAddress,
        admin: Optional[WalletIdentity],
        amount: int,
        gas: int,
    ):
        """Initialize airdrop service.

        Args:
            ledger: Ledger client
            contract_address: WalletMap contract address
            admin: Admin identity, None if no mnemonic is configured
            amount: Credited amount per claim (nanotokens)
            gas: TON attached to every Claim (nanotons)
        """
        self.ledger = ledger
        self.contract_address = contract_address
        self.admin = admin
        self.amount = amount
        self.gas = gas

    async def claim(self, wallet: str) -> LedgerAddress:
        """Credit the airdrop amount to ``wallet``.

        Returns:
            Parsed recipient address

        Raises:
            ConfigurationError: If no admin identity is configured
            AddressError: If ``wallet`` is not a valid address
            LedgerError: If the broadcast fails
            SigningError: If the transfer cannot be signed
        """
        if self.admin is None:
            raise ConfigurationError("Server MNEMONIC missing")

        user = parse_address(wallet)
        contract = WalletMapContract(self.ledger, self.contract_address)
        await contract.send_claim(self.admin, user=user, amount=self.amount, value=self.gas)

        logger.info(f"Airdrop sent to {wallet}")
        return user
