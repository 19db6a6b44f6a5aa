"""Gross/net price math."""

from decimal import Decimal
from typing import Optional, Union

BPS_DENOMINATOR = Decimal(10000)

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric store value to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def get_net_amount(amount: Number, fee_bps: Optional[Number]) -> Decimal:
    """
    Amount left after the fee fraction is taken.

    net = amount * (10000 - fee_bps) / 10000

    Example:
        >>> get_net_amount(100, 250)
        Decimal('97.5')
    """
    bps = to_decimal(fee_bps) if fee_bps is not None else Decimal(0)
    return to_decimal(amount) * (BPS_DENOMINATOR - bps) / BPS_DENOMINATOR
