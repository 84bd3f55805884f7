"""Dry-run ledger client.

Keeps contract balances and wallet seqnos in memory and records every
broadcast instead of sending it. Used when DRY_RUN=true and as the ledger
double in tests.
"""

import base64
import logging
from dataclasses import dataclass, field
from typing import Optional

from tonsdk.boc import Cell

from tongate.address import LedgerAddress, from_tonsdk
from tongate.ledger.base import (
    LedgerClient,
    LedgerConnectionError,
    MasterchainInfo,
    RpcError,
    StackEntry,
)

logger = logging.getLogger(__name__)


@dataclass
class SentMessage:
    """A message captured by the dry-run client."""
    boc: bytes
    sender: Optional[LedgerAddress] = None
    to: Optional[LedgerAddress] = None
    value: int = 0
    body: Optional[Cell] = None
    seqno: int = 0


@dataclass
class DryRunLedgerClient(LedgerClient):
    """In-memory ledger.

    Attributes:
        balances: Contract balance table keyed by raw user address
        seqnos: Wallet seqnos keyed by raw wallet address
        sent: Every broadcast, in order
        calls: Names of RPC-level operations performed, in order
        fail_with: If set, every RPC raises this error
        reachable: If False, ``connect`` fails
    """
    balances: dict[str, int] = field(default_factory=dict)
    seqnos: dict[str, int] = field(default_factory=dict)
    sent: list[SentMessage] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    fail_with: Optional[RpcError] = None
    reachable: bool = True

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def set_balance(self, user: LedgerAddress, amount: int) -> None:
        self.balances[user.to_raw()] = amount

    async def connect(self) -> MasterchainInfo:
        self.calls.append("connect")
        if not self.reachable:
            raise LedgerConnectionError("Dry-run ledger marked unreachable")
        logger.info("Using dry-run ledger (no real transactions)")
        return MasterchainInfo(seqno=0)

    async def invoke_getter(
        self, address: LedgerAddress, method: str, stack: list[StackEntry]
    ) -> list[StackEntry]:
        self._record(f"invoke_getter:{method}")

        if method == "seqno":
            return [["num", hex(self.seqnos.get(address.to_raw(), 0))]]

        # Any other getter is treated as a balance lookup keyed by an address argument
        if not stack or stack[0][0] != "tvm.Slice":
            raise RpcError(f"Dry-run getter {method} expects an address argument")
        user = _address_from_slice_entry(stack[0][1])
        return [["num", hex(self.balances.get(user.to_raw(), 0))]]

    async def get_address_state(self, address: LedgerAddress) -> str:
        self._record("get_address_state")
        return "active" if address.to_raw() in self.seqnos else "uninitialized"

    async def send_boc(self, boc: bytes) -> None:
        self._record("send_boc")
        self.sent.append(SentMessage(boc=boc))

    async def send_message(self, sender, to: LedgerAddress, value: int, body: Cell) -> None:
        await super().send_message(sender, to, value, body)

        key = sender.address.to_raw()
        seqno = self.seqnos.get(key, 0)
        self.seqnos[key] = seqno + 1

        message = self.sent[-1]
        message.sender = sender.address
        message.to = to
        message.value = value
        message.body = body
        message.seqno = seqno
        logger.info(f"[DRY RUN] {value} nanoton message {sender.address} -> {to} (seqno={seqno})")

    def __repr__(self) -> str:
        return f"DryRunLedgerClient(sent={len(self.sent)})"


def _address_from_slice_entry(value: str) -> LedgerAddress:
    try:
        cell = Cell.one_from_boc(base64.b64decode(value))
        address = cell.begin_parse().read_msg_addr()
    except Exception as e:
        raise RpcError(f"Dry-run getter argument is not an address slice: {e}") from e
    if address is None:
        raise RpcError("Dry-run getter argument is addr_none")
    return from_tonsdk(address)
