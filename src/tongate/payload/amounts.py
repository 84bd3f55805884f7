"""Exact conversion between display amounts and nanotons."""

import re
from decimal import Decimal, localcontext
from typing import Union

from tongate.payload.schema import MAX_COINS, AmountError

NANO_DECIMALS = 9
NANO_PER_UNIT = 10**NANO_DECIMALS

AmountInput = Union[str, int, Decimal]

# plain decimal notation only: no sign, exponent, separators or "inf"
AMOUNT_PATTERN = re.compile(r"^(\d+\.?\d*|\.\d+)$", re.ASCII)


def to_nano(value: AmountInput) -> int:
    """Convert a display amount ("12.5") to nanotons (12500000000).

    Raises:
        AmountError: If the value is not a finite non-negative number, has more
            than 9 fractional digits, or does not fit into Coins
    """
    if isinstance(value, bool) or isinstance(value, float):
        # callers that accept JSON numbers convert floats with Decimal(repr())
        raise AmountError(f"Unsupported amount type: {type(value).__name__}")

    text = format(value, "f") if isinstance(value, Decimal) else str(value).strip()
    if not text:
        raise AmountError("Amount is empty")

    if not AMOUNT_PATTERN.match(text):
        if text.startswith("-") and AMOUNT_PATTERN.match(text[1:]):
            raise AmountError(f"Amount must not be negative: {text!r}")
        raise AmountError(f"Amount is not a number: {text!r}")
    amount = Decimal(text)

    with localcontext() as ctx:
        ctx.prec = 100
        try:
            nano = amount.scaleb(NANO_DECIMALS)
        except ArithmeticError as e:
            raise AmountError(f"Amount is out of range: {text!r}") from e
        if nano != nano.to_integral_value():
            raise AmountError(
                f"Amount has more than {NANO_DECIMALS} fractional digits: {text!r}"
            )
        result = int(nano)

    if result > MAX_COINS:
        raise AmountError(f"Amount is out of range: {text!r}")
    return result


def from_nano(nano: int) -> Decimal:
    """Convert nanotons back to a display amount."""
    with localcontext() as ctx:
        ctx.prec = 100
        return Decimal(nano) / NANO_PER_UNIT
