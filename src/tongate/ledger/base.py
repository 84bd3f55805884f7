"""Base interface for TON ledger clients.

Flow of a state-changing call:
1. Read the sender wallet's current seqno (never cached)
2. Ask the wallet identity for a signed external message
3. Broadcast the message BOC
4. Success means "accepted by the RPC endpoint", not finalized
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tonsdk.boc import Cell

from tongate.address import LedgerAddress

if TYPE_CHECKING:
    from tongate.signing.base import WalletIdentity

logger = logging.getLogger(__name__)

# toncenter stack entry: ["num", "0x1f"], ["tvm.Slice", "<base64 boc>"], ...
StackEntry = list[Any]


@dataclass
class MasterchainInfo:
    """Latest masterchain block seen by the RPC endpoint."""
    seqno: int
    workchain: int = -1
    shard: str = ""


class LedgerClient(ABC):
    """Abstract base class for ledger clients.

    Implementations must be safe to share between concurrent requests.
    """

    @abstractmethod
    async def connect(self) -> MasterchainInfo:
        """Verify the RPC endpoint is reachable.

        Raises:
            LedgerConnectionError: If the endpoint cannot be reached
        """
        pass

    @abstractmethod
    async def invoke_getter(
        self, address: LedgerAddress, method: str, stack: list[StackEntry]
    ) -> list[StackEntry]:
        """Run a read-only get-method of a contract.

        Args:
            address: Contract address
            method: Get-method name
            stack: Arguments in toncenter stack format

        Returns:
            Result stack in toncenter stack format

        Raises:
            RpcError: On timeout, transport failure or non-zero exit code
        """
        pass

    @abstractmethod
    async def get_address_state(self, address: LedgerAddress) -> str:
        """Get account state: ``active``, ``uninitialized`` or ``frozen``."""
        pass

    @abstractmethod
    async def send_boc(self, boc: bytes) -> None:
        """Broadcast a serialized external message.

        Raises:
            RpcError: If the endpoint rejects the message
        """
        pass

    async def get_seqno(self, address: LedgerAddress) -> int:
        """Get the current seqno of a wallet contract (0 if not deployed)."""
        state = await self.get_address_state(address)
        if state != "active":
            return 0

        stack = await self.invoke_getter(address, "seqno", [])
        return parse_stack_int(stack, 0)

    async def send_message(
        self,
        sender: "WalletIdentity",
        to: LedgerAddress,
        value: int,
        body: Cell,
    ) -> None:
        """Sign and broadcast an internal message from a wallet.

        Args:
            sender: Signing wallet identity
            to: Destination address
            value: TON attached to the message (nanotons)
            body: Message body cell
        """
        seqno = await self.get_seqno(sender.address)
        boc = sender.create_transfer(to=to, value=value, body=body, seqno=seqno)
        await self.send_boc(boc)
        logger.info(f"Message from {sender.address} to {to} accepted (seqno={seqno})")

    async def close(self) -> None:
        """Release network resources."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def parse_stack_int(stack: list[StackEntry], index: int) -> int:
    """Read an integer entry from a toncenter result stack.

    Raises:
        RpcError: If the entry is missing or not a number
    """
    try:
        kind, value = stack[index][0], stack[index][1]
    except (IndexError, TypeError, KeyError) as e:
        raise RpcError(f"Result stack has no entry {index}: {stack!r}") from e

    if kind != "num" or not isinstance(value, str):
        raise RpcError(f"Stack entry {index} is not a number: {stack[index]!r}")

    try:
        return int(value, 16) if value.lstrip("-").startswith("0x") else int(value)
    except ValueError as e:
        raise RpcError(f"Stack entry {index} is not a number: {value!r}") from e


class LedgerError(Exception):
    """Base exception for ledger interaction failures."""
    pass


class LedgerConnectionError(LedgerError):
    """Raised when the RPC endpoint cannot be reached at startup."""
    pass


class RpcError(LedgerError):
    """Raised when a single RPC call fails."""
    pass


class RpcTimeoutError(RpcError):
    """Raised when an RPC call exceeds the configured timeout."""
    pass
