"""
Order status enum and the order lifecycle state machine.

Status transitions:
    PENDING -> CONFIRMED -> PREPARING -> READY -> OUT_FOR_DELIVERY -> DELIVERED
    Any non-terminal status -> CANCELLED

Terminal statuses:
    DELIVERED, CANCELLED (no outgoing transitions)

The transition table is a plain mapping kept apart from the enum's display
metadata; ``can_transition`` is the only place that consults it.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple


class OrderStatus(str, Enum):
    """
    Order lifecycle status.

    Values are persisted by name.
    """

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    READY = "READY"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def description(self) -> str:
        """Human-readable description for display."""
        return STATUS_DESCRIPTIONS[self]

    @property
    def is_terminal(self) -> bool:
        """True if no transition leaves this status."""
        return not _VALID_TRANSITIONS[self]

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """Check if an order in this status may move to new_status."""
        return can_transition(self, new_status)


STATUS_DESCRIPTIONS: Dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Order has been created and is waiting for confirmation",
    OrderStatus.CONFIRMED: "Order has been confirmed and payment processed",
    OrderStatus.PREPARING: "Order is being prepared in the kitchen",
    OrderStatus.READY: "Order is ready for pickup/delivery",
    OrderStatus.OUT_FOR_DELIVERY: "Order is out for delivery",
    OrderStatus.DELIVERED: "Order has been delivered successfully",
    OrderStatus.CANCELLED: "Order has been cancelled",
}

# State machine transition map
_VALID_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED}),
    OrderStatus.OUT_FOR_DELIVERY: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),  # Terminal
    OrderStatus.CANCELLED: frozenset(),  # Terminal
}

# Happy-path successor of each status
_NEXT_STATUS: Dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.OUT_FOR_DELIVERY: OrderStatus.DELIVERED,
}

# Statuses eligible for automatic progression, in sweep order
IN_FLIGHT_STATUSES: Tuple[OrderStatus, ...] = (
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
)


def can_transition(current: OrderStatus, candidate: OrderStatus) -> bool:
    """
    Check whether current -> candidate is a legal edge.

    Args:
        current: Status the order is in now
        candidate: Status the order would move to

    Returns:
        True if the transition is permitted
    """
    return candidate in _VALID_TRANSITIONS.get(current, frozenset())


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    """Return the happy-path successor of current, or None if terminal."""
    return _NEXT_STATUS.get(current)


def parse_status(value) -> OrderStatus:
    """
    Coerce a status name (any case) or OrderStatus into an OrderStatus.

    Raises:
        ValueError: If value names no status
    """
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus[str(value).strip().upper()]
    except KeyError:
        valid = ", ".join(status.value for status in OrderStatus)
        raise ValueError(f"Unknown order status '{value}'. Valid statuses: {valid}") from None
