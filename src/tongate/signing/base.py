"""Signing identity types.

The admin key pair lives only inside ``KeyPair`` and the tonsdk wallet
contract built from it. Neither is ever logged or serialized: ``repr`` shows
a public-key fingerprint and errors never carry mnemonic words.
"""

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any

from tonsdk.boc import Cell

from tongate.address import LedgerAddress, from_tonsdk
from tongate.config import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class KeyPair:
    """Ed25519 key pair derived from a mnemonic.

    Attributes:
        public_key: 32-byte public key
        secret_key: 64-byte NaCl secret key (seed + public key)
    """
    public_key: bytes
    secret_key: bytes

    @property
    def fingerprint(self) -> str:
        """Short public identifier for logs."""
        return hashlib.sha256(self.public_key).hexdigest()[:16]

    def __repr__(self) -> str:
        return f"KeyPair(public={self.fingerprint})"


@dataclass(frozen=True, repr=False)
class WalletIdentity:
    """A key pair bound to a wallet contract revision and workchain.

    The wallet seqno is owned by the ledger; callers read it before every
    ``create_transfer``.
    """
    key_pair: KeyPair
    workchain: int
    version: str
    wallet: Any = field(compare=False)

    @property
    def address(self) -> LedgerAddress:
        """Address of the wallet contract."""
        return from_tonsdk(self.wallet.address)

    def create_transfer(
        self, to: LedgerAddress, value: int, body: Cell, seqno: int
    ) -> bytes:
        """Build a signed external message carrying one internal message.

        Args:
            to: Destination address
            value: TON attached to the internal message (nanotons)
            body: Internal message body
            seqno: Current wallet seqno (0 also deploys the wallet)

        Returns:
            Serialized external message (BOC bytes)
        """
        try:
            query = self.wallet.create_transfer_message(
                to_addr=to.to_tonsdk().to_string(True, True, to.bounceable, to.test_only),
                amount=value,
                seqno=seqno,
                payload=body,
            )
            return bytes(query["message"].to_boc(False))
        except Exception as e:
            raise SigningError(f"Cannot build signed transfer: {e}") from e

    def __repr__(self) -> str:
        return (
            f"WalletIdentity(version={self.version}, workchain={self.workchain}, "
            f"public={self.key_pair.fingerprint})"
        )


class SigningError(Exception):
    """Exception raised when signing fails."""
    pass


class DerivationError(ConfigurationError):
    """Raised when a key pair cannot be derived from the configured mnemonic."""
    pass
