"""
Database models package.

This package contains the SQLAlchemy ORM models and the order status
state machine.
"""

from .base import Base, BaseModel
from .order import Order, OrderItem
from .order_status import (
    IN_FLIGHT_STATUSES,
    OrderStatus,
    can_transition,
    next_status,
    parse_status,
)

__all__ = [
    "Base",
    "BaseModel",
    "Order",
    "OrderItem",
    "OrderStatus",
    "IN_FLIGHT_STATUSES",
    "can_transition",
    "next_status",
    "parse_status",
]
