"""WalletMap contract proxy.

Binds the contract address to a ledger client and exposes the contract ABI
as typed calls:

- ``getWalletAmount(user: Address): Int`` get-method
- ``Claim{user, amount}`` message (admin only)
- ``WithdrawRequest{amount}`` message (sent by users from their own wallets)

Handles are cheap and hold no contract state; create one per call.
"""

import logging

from tonsdk.boc import begin_cell

from tongate.address import LedgerAddress
from tongate.ledger.base import LedgerClient, parse_stack_int
from tongate.payload.messages import Claim, MessageBody, cell_to_base64, encode_body
from tongate.signing.base import WalletIdentity

logger = logging.getLogger(__name__)

DEFAULT_BALANCE_GETTER = "getWalletAmount"


def address_stack_entry(address: LedgerAddress) -> list:
    """Encode an address get-method argument (a slice holding MsgAddress)."""
    cell = begin_cell().store_address(address.to_tonsdk()).end_cell()
    return ["tvm.Slice", cell_to_base64(cell)]


class WalletMapContract:
    """Read/write binding to the WalletMap contract."""

    def __init__(
        self,
        ledger: LedgerClient,
        address: LedgerAddress,
        balance_getter: str = DEFAULT_BALANCE_GETTER,
    ):
        self.ledger = ledger
        self.address = address
        self.balance_getter = balance_getter

    async def get_wallet_amount(self, user: LedgerAddress) -> int:
        """Fetch the balance the contract holds for ``user``.

        Raises:
            RpcError: On any RPC failure or malformed result
        """
        stack = await self.ledger.invoke_getter(
            self.address, self.balance_getter, [address_stack_entry(user)]
        )
        return parse_stack_int(stack, 0)

    async def send(self, sender: WalletIdentity, value: int, body: MessageBody) -> None:
        """Sign ``body`` with ``sender`` and broadcast it to the contract.

        Args:
            sender: Signing wallet identity
            value: TON attached for gas (nanotons)
            body: Message body
        """
        await self.ledger.send_message(sender, self.address, value, encode_body(body))

    async def send_claim(
        self, sender: WalletIdentity, user: LedgerAddress, amount: int, value: int
    ) -> None:
        """Credit ``amount`` to ``user``. Not idempotent: every call broadcasts."""
        await self.send(sender, value, Claim(user=user, amount=amount))

    def __repr__(self) -> str:
        return f"WalletMapContract(address={self.address})"
