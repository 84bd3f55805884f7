"""Message bodies and their cell / BOC encoding.

Encoding is driven by the schemas in ``tongate.payload.schema`` so that the
byte layout (tag, field order, field widths) is declared in one place.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Union

from tonsdk.boc import Cell, begin_cell

from tongate.address import LedgerAddress, from_tonsdk
from tongate.payload.schema import (
    ADDRESS,
    CLAIM,
    COINS,
    MAX_COINS,
    SCHEMAS_BY_TAG,
    TAG_BITS,
    WITHDRAW_REQUEST,
    EncodingError,
    MessageSchema,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Claim:
    """Admin credit of ``amount`` nanotokens to ``user``."""
    user: LedgerAddress
    amount: int


@dataclass(frozen=True)
class WithdrawRequest:
    """User request to withdraw ``amount`` nanotokens."""
    amount: int


MessageBody = Union[Claim, WithdrawRequest]

_SCHEMA_FOR_TYPE = {
    Claim: CLAIM,
    WithdrawRequest: WITHDRAW_REQUEST,
}
_TYPE_FOR_SCHEMA = {schema.name: cls for cls, schema in _SCHEMA_FOR_TYPE.items()}


def schema_of(body: MessageBody) -> MessageSchema:
    """Get the schema describing a message body."""
    try:
        return _SCHEMA_FOR_TYPE[type(body)]
    except KeyError:
        raise EncodingError(f"Unknown message type: {type(body).__name__}") from None


def encode_body(body: MessageBody) -> Cell:
    """Serialize a message body into a single cell.

    Raises:
        EncodingError: If a field value does not fit its declared kind
    """
    schema = schema_of(body)
    builder = begin_cell().store_uint(schema.tag, TAG_BITS)

    for field in schema.fields:
        value = getattr(body, field.name)
        if field.kind == COINS:
            if not isinstance(value, int) or isinstance(value, bool):
                raise EncodingError(f"{schema.name}.{field.name} must be an int")
            if value < 0 or value > MAX_COINS:
                raise EncodingError(f"{schema.name}.{field.name} out of Coins range: {value}")
            builder.store_coins(value)
        elif field.kind == ADDRESS:
            if not isinstance(value, LedgerAddress):
                raise EncodingError(f"{schema.name}.{field.name} must be a LedgerAddress")
            builder.store_address(value.to_tonsdk())
        else:
            raise EncodingError(f"Unsupported field kind: {field.kind}")

    return builder.end_cell()


def decode_body(cell: Cell) -> MessageBody:
    """Parse a message body cell back into its dataclass.

    Raises:
        EncodingError: If the tag is unknown or the cell is truncated
    """
    try:
        cs = cell.begin_parse()
        tag = cs.read_uint(TAG_BITS)
    except Exception as e:
        raise EncodingError(f"Cannot read message tag: {e}") from e

    schema = SCHEMAS_BY_TAG.get(tag)
    if schema is None:
        raise EncodingError(f"Unknown message tag: 0x{tag:08x}")

    values = {}
    try:
        for field in schema.fields:
            if field.kind == COINS:
                values[field.name] = cs.read_coins()
            elif field.kind == ADDRESS:
                address = cs.read_msg_addr()
                if address is None:
                    raise EncodingError(f"{schema.name}.{field.name} is addr_none")
                values[field.name] = from_tonsdk(address)
    except EncodingError:
        raise
    except Exception as e:
        raise EncodingError(f"Malformed {schema.name} body: {e}") from e

    return _TYPE_FOR_SCHEMA[schema.name](**values)


def cell_to_base64(cell: Cell) -> str:
    """Serialize a cell as a base64 bag-of-cells (no index, with CRC32C)."""
    return base64.b64encode(bytes(cell.to_boc(False))).decode("ascii")


def cell_from_base64(payload: str) -> Cell:
    """Parse a base64 bag-of-cells holding exactly one root cell."""
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Payload is not valid base64: {e}") from e

    try:
        return Cell.one_from_boc(raw)
    except Exception as e:
        raise EncodingError(f"Payload is not a valid BOC: {e}") from e


def encode_message(body: MessageBody) -> str:
    """Encode a message body as a transport-safe base64 BOC."""
    payload = cell_to_base64(encode_body(body))
    logger.debug(f"Encoded {schema_of(body).name} payload ({len(payload)} chars)")
    return payload


def decode_message(payload: str) -> MessageBody:
    """Decode a base64 BOC produced by ``encode_message``."""
    return decode_body(cell_from_base64(payload))
