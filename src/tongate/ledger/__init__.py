"""TON ledger clients.

- ToncenterClient: toncenter v2 JSON-RPC over httpx
- DryRunLedgerClient: in-memory ledger (DRY_RUN mode, tests)
"""

from tongate.ledger.base import (
    LedgerClient,
    LedgerConnectionError,
    LedgerError,
    MasterchainInfo,
    RpcError,
    RpcTimeoutError,
)
from tongate.ledger.dryrun import DryRunLedgerClient
from tongate.ledger.factory import create_ledger_client
from tongate.ledger.toncenter import ToncenterClient

__all__ = [
    "DryRunLedgerClient",
    "LedgerClient",
    "LedgerConnectionError",
    "LedgerError",
    "MasterchainInfo",
    "RpcError",
    "RpcTimeoutError",
    "ToncenterClient",
    "create_ledger_client",
]
