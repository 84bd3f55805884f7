"""Contract balance lookups.

A failed lookup still produces a result: the HTTP layer renders it as "0" so
client displays keep working. Internally the result is tagged so that an
unavailable balance can be told apart from a real zero.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tongate.address import LedgerAddress, parse_address
from tongate.contract import DEFAULT_BALANCE_GETTER, WalletMapContract
from tongate.ledger.base import LedgerClient

logger = logging.getLogger(__name__)


class BalanceStatus(str, Enum):
    """Outcome of a balance lookup."""
    OK = "ok"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class BalanceLookup:
    """Result of a balance lookup.

    Attributes:
        wallet: Wallet text as requested
        amount: Balance in nanotokens (0 when unavailable)
        status: Whether the amount came from the contract
        error: Failure description when unavailable
    """
    wallet: str
    amount: int
    status: BalanceStatus
    error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status == BalanceStatus.OK

    @classmethod
    def unavailable(cls, wallet: str, error: str) -> "BalanceLookup":
        return cls(wallet=wallet, amount=0, status=BalanceStatus.UNAVAILABLE, error=error)


class BalanceService:
    """Reads user balances from the WalletMap contract."""

    def __init__(
        self,
        ledger: LedgerClient,
        contract_address: LedgerAddress,
        balance_getter: str = DEFAULT_BALANCE_GETTER,
    ):
        self.ledger = ledger
        self.contract_address = contract_address
        self.balance_getter = balance_getter

    async def lookup(self, wallet: str) -> BalanceLookup:
        """Fetch a fresh balance for ``wallet``. Never raises."""
        try:
            user = parse_address(wallet)
            contract = WalletMapContract(self.ledger, self.contract_address, self.balance_getter)
            amount = await contract.get_wallet_amount(user)
        except Exception as e:
            logger.error(f"Balance fetch error for {wallet!r}: {e}")
            return BalanceLookup.unavailable(wallet, str(e))

        return BalanceLookup(wallet=wallet, amount=amount, status=BalanceStatus.OK)
