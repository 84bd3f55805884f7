"""Message schemas of the WalletMap contract.

Each message body is a single cell:

    opcode:uint32  field_1  field_2 ...

The contract is written in Tact, so the opcode of a message without an
explicit one is the first 32 bits of the SHA-256 of its signature, e.g.
``Deploy{queryId:uint64}`` -> ``0x946a98b6``. Field kinds and widths:

    address  MsgAddressInt addr_std: 2-bit prefix, anycast bit, int8 workchain,
             256-bit account id (267 bits)
    coins    VarUInteger 16: 4-bit byte length followed by that many bytes
"""

import hashlib
from dataclasses import dataclass
from typing import Optional

TAG_BITS = 32

# Coins are VarUInteger 16: at most 15 value bytes.
MAX_COINS = 2**120 - 1

ADDRESS = "address"
COINS = "coins"


def tact_opcode(signature: str) -> int:
    """Default Tact opcode of a message signature such as ``Name{a:coins}``."""
    return int.from_bytes(hashlib.sha256(signature.encode()).digest()[:4], "big")


@dataclass(frozen=True)
class FieldSpec:
    """A single field in a message body."""
    name: str
    kind: str


@dataclass(frozen=True)
class MessageSchema:
    """Layout of one message type.

    Attributes:
        name: Message type name (matches the Python dataclass name)
        fields: Fields in serialization order
        opcode: Explicit opcode, for messages declared ``message(0x...)``
    """
    name: str
    fields: tuple[FieldSpec, ...]
    opcode: Optional[int] = None

    @property
    def signature(self) -> str:
        """Tact signature: ``Name{field:kind,...}``."""
        body = ",".join(f"{f.name}:{f.kind}" for f in self.fields)
        return f"{self.name}{{{body}}}"

    @property
    def tag(self) -> int:
        """32-bit message opcode."""
        if self.opcode is not None:
            return self.opcode
        return tact_opcode(self.signature)


CLAIM = MessageSchema(
    name="Claim",
    fields=(FieldSpec("user", ADDRESS), FieldSpec("amount", COINS)),
)

WITHDRAW_REQUEST = MessageSchema(
    name="WithdrawRequest",
    fields=(FieldSpec("amount", COINS),),
)

SCHEMAS = {schema.name: schema for schema in (CLAIM, WITHDRAW_REQUEST)}
SCHEMAS_BY_TAG = {schema.tag: schema for schema in SCHEMAS.values()}


class EncodingError(ValueError):
    """Raised when a message body cannot be encoded or decoded."""
    pass


class AmountError(EncodingError):
    """Raised when an amount cannot be converted to nanotons."""
    pass
