"""Admin signing identity.

- KeyPair: Ed25519 keys derived from the admin mnemonic
- WalletIdentity: key pair bound to a wallet v4r2 contract
"""

from tongate.signing.base import (
    DerivationError,
    KeyPair,
    SigningError,
    WalletIdentity,
)
from tongate.signing.mnemonic import (
    build_wallet_identity,
    derive_key_pair,
    load_admin_identity,
)

__all__ = [
    "DerivationError",
    "KeyPair",
    "SigningError",
    "WalletIdentity",
    "build_wallet_identity",
    "derive_key_pair",
    "load_admin_identity",
]
