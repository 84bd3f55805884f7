"""Mnemonic-based signer.

Derives the admin key pair from a TON mnemonic (not BIP39 seed derivation:
TON hashes the words with PBKDF2 "TON default seed") and wraps it in a
wallet v4r2 contract, the revision used by common TON wallets.
"""

import logging
from typing import Optional, Sequence

from tonsdk.contract.wallet import Wallets, WalletVersionEnum
from tonsdk.crypto import mnemonic_is_valid, mnemonic_to_wallet_key

from tongate.config import Settings
from tongate.signing.base import DerivationError, KeyPair, WalletIdentity

logger = logging.getLogger(__name__)

VALID_WORD_COUNTS = (12, 24)

DEFAULT_WALLET_VERSION = WalletVersionEnum.v4r2


def derive_key_pair(words: Sequence[str]) -> KeyPair:
    """Derive an Ed25519 key pair from mnemonic words.

    Args:
        words: Ordered mnemonic words (12 or 24)

    Returns:
        KeyPair

    Raises:
        DerivationError: If the mnemonic is empty or malformed
    """
    words = [w.strip().lower() for w in words if w and w.strip()]

    if not words:
        raise DerivationError("Mnemonic is empty")

    if len(words) not in VALID_WORD_COUNTS:
        raise DerivationError(
            f"Mnemonic must have 12 or 24 words, got {len(words)}"
        )

    # chained exceptions are dropped so the words never reach a traceback
    try:
        valid = mnemonic_is_valid(words)
    except Exception:
        raise DerivationError("Mnemonic is not a valid TON mnemonic") from None
    if not valid:
        raise DerivationError("Mnemonic is not a valid TON mnemonic")

    public_key, secret_key = mnemonic_to_wallet_key(words)
    return KeyPair(public_key=bytes(public_key), secret_key=bytes(secret_key))


def build_wallet_identity(
    key_pair: KeyPair,
    workchain: int = 0,
    version: WalletVersionEnum = DEFAULT_WALLET_VERSION,
) -> WalletIdentity:
    """Bind a key pair to a wallet contract.

    Args:
        key_pair: Derived key pair
        workchain: Wallet workchain id
        version: Wallet contract revision

    Returns:
        WalletIdentity able to emit signed transfers
    """
    wallet = Wallets.ALL[version](
        public_key=key_pair.public_key,
        private_key=key_pair.secret_key,
        wc=workchain,
    )
    return WalletIdentity(
        key_pair=key_pair,
        workchain=workchain,
        version=version.value,
        wallet=wallet,
    )


def load_admin_identity(settings: Settings) -> Optional[WalletIdentity]:
    """Derive the admin wallet identity from settings.

    Returns:
        WalletIdentity, or None if no mnemonic is configured

    Raises:
        DerivationError: If a mnemonic is configured but malformed
    """
    if not settings.has_mnemonic:
        logger.warning("MNEMONIC not set - airdrop claims are disabled")
        return None

    key_pair = derive_key_pair(settings.mnemonic_words)
    identity = build_wallet_identity(key_pair, workchain=settings.wallet_workchain)
    logger.info(f"Admin wallet {identity.version}: {identity.address}")
    return identity
