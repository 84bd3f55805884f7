"""TON account addresses.

Wraps ``tonsdk`` address parsing into an immutable value object so that
addresses can be compared, hashed and passed around without sharing mutable
``tonsdk.utils.Address`` instances.
"""

from dataclasses import dataclass

from tonsdk.utils import Address


@dataclass(frozen=True)
class LedgerAddress:
    """A validated, chain-scoped TON account identifier.

    Attributes:
        workchain: Workchain id (0 = basechain, -1 = masterchain)
        hash_part: 32-byte account id
        bounceable: Bounceable flag of the user-friendly form
        test_only: Testnet-only flag of the user-friendly form
    """
    workchain: int
    hash_part: bytes
    bounceable: bool = True
    test_only: bool = False

    def to_raw(self) -> str:
        """Raw form: ``<workchain>:<hex account id>``."""
        return f"{self.workchain}:{self.hash_part.hex()}"

    def to_string(self) -> str:
        """URL-safe user-friendly form, keeping the parsed flags."""
        return self.to_tonsdk().to_string(True, True, self.bounceable, self.test_only)

    def to_tonsdk(self) -> Address:
        """Fresh ``tonsdk`` address for cell builders and wallet contracts."""
        return Address(self.to_raw())

    def same_account(self, other: "LedgerAddress") -> bool:
        """Compare account identity, ignoring rendering flags."""
        return self.workchain == other.workchain and self.hash_part == other.hash_part

    def __str__(self) -> str:
        return self.to_string()


def parse_address(text: str) -> LedgerAddress:
    """Parse a user-friendly or raw TON address.

    Args:
        text: Address text (``EQ...``/``kQ...``/``UQ...`` or ``0:<hex>``)

    Returns:
        LedgerAddress

    Raises:
        AddressError: If the text is not a valid address
    """
    if not isinstance(text, str):
        raise AddressError(f"Address must be a string, got {type(text).__name__}")
    if not text.strip():
        raise AddressError("Address is empty")

    text = text.strip()
    try:
        parsed = Address(text)
    except Exception as e:
        raise AddressError(f"Invalid TON address {text!r}: {e}") from e

    hash_part = bytes(parsed.hash_part)
    if len(hash_part) != 32:
        raise AddressError(f"Invalid TON address {text!r}: account id must be 32 bytes")

    if parsed.is_user_friendly:
        return LedgerAddress(
            workchain=parsed.wc,
            hash_part=hash_part,
            bounceable=bool(parsed.is_bounceable),
            test_only=bool(parsed.is_test_only),
        )
    return LedgerAddress(workchain=parsed.wc, hash_part=hash_part)


def from_tonsdk(address: Address) -> LedgerAddress:
    """Convert a ``tonsdk`` address (e.g. read from a cell) to a LedgerAddress."""
    return LedgerAddress(workchain=address.wc, hash_part=bytes(address.hash_part))


class AddressError(ValueError):
    """Raised when an address cannot be parsed."""
    pass
