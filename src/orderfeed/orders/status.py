"""Order status derivation from fillability and approval flags."""

from enum import Enum


class FillabilityStatus(str, Enum):
    FILLABLE = "fillable"
    FILLED = "filled"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    NO_BALANCE = "no-balance"


class ApprovalStatus(str, Enum):
    APPROVED = "approved"
    NO_APPROVAL = "no-approval"


class OrderStatus(str, Enum):
    FILLED = "filled"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    INACTIVE = "inactive"
    ACTIVE = "active"


# Terminal fillability states map straight to a status, in precedence order
_FILLABILITY_PRECEDENCE = (
    (FillabilityStatus.FILLED, OrderStatus.FILLED),
    (FillabilityStatus.CANCELLED, OrderStatus.CANCELLED),
    (FillabilityStatus.EXPIRED, OrderStatus.EXPIRED),
    (FillabilityStatus.NO_BALANCE, OrderStatus.INACTIVE),
)


def classify_status(fillability: str, approval: str) -> OrderStatus:
    """
    Derive the order status label.

    Fillability is checked first (filled, cancelled, expired, no-balance),
    then a missing approval makes the order inactive. Anything else is active.

    Args:
        fillability: Raw fillability flag
        approval: Raw approval flag

    Returns:
        OrderStatus label
    """
    for flag, status in _FILLABILITY_PRECEDENCE:
        if fillability == flag.value:
            return status
    if approval == ApprovalStatus.NO_APPROVAL.value:
        return OrderStatus.INACTIVE
    return OrderStatus.ACTIVE
