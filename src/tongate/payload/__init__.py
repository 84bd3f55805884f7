"""Contract message payloads.

- schema: tags, field order and widths of every message type
- amounts: exact display amount <-> nanoton conversion
- messages: message dataclasses and their cell / base64 BOC encoding
"""

from tongate.payload.amounts import from_nano, to_nano
from tongate.payload.messages import (
    Claim,
    MessageBody,
    WithdrawRequest,
    decode_body,
    decode_message,
    encode_body,
    encode_message,
)
from tongate.payload.schema import AmountError, EncodingError

__all__ = [
    "AmountError",
    "Claim",
    "EncodingError",
    "MessageBody",
    "WithdrawRequest",
    "decode_body",
    "decode_message",
    "encode_body",
    "encode_message",
    "from_nano",
    "to_nano",
]
