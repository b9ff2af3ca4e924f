"""
Order models for the order lifecycle.

This module contains:
- Order: Aggregate root tracking items, total and lifecycle status
- OrderItem: A line item owned by exactly one Order
"""

from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from .base import BaseModel
from .order_status import OrderStatus
from foodybuddy_orders.utils.constants import (
    MAX_ITEM_ID_LENGTH,
    MAX_ITEM_NAME_LENGTH,
    MONEY_SCALE,
    PRICE_PRECISION,
    TABLE_ORDER,
    TABLE_ORDER_ITEM,
    TOTAL_PRECISION,
)
from foodybuddy_orders.utils.datetime_utils import ensure_utc


class Order(BaseModel):
    """
    Order aggregate root.

    The total is computed once when the order is created and is never
    recomputed from the items. The status only changes through set_status(),
    which also moves updated_at forward.

    Attributes:
        order_id: Externally visible identifier (UUID string, immutable)
        items: Line items, kept in insertion order
        total: Sum of price x quantity at creation time
        status: Current lifecycle status
        created_at: When the order was created
        updated_at: When the order was created or last changed status
    """

    __tablename__ = TABLE_ORDER

    order_id = Column(String(36), nullable=False)
    total = Column(Numeric(TOTAL_PRECISION, MONEY_SCALE), nullable=False)
    status = Column(
        SQLEnum(OrderStatus, name="order_status", native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        Index("idx_order_order_id", "order_id", unique=True),
        Index("idx_order_status", "status"),
    )

    def set_status(self, status: OrderStatus, now: datetime) -> None:
        """
        Assign a new status and refresh updated_at.

        Args:
            status: New lifecycle status
            now: Current time from the service clock
        """
        self.status = status
        self.touch(now)

    def touch(self, now: datetime) -> None:
        """
        Move updated_at forward to now.

        updated_at strictly increases: a clock reading at or before the
        current value yields the current value plus one microsecond.
        """
        now = ensure_utc(now)
        previous = ensure_utc(self.updated_at)
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        self.updated_at = now

    def __repr__(self) -> str:
        """String representation of order."""
        status = self.status.value if self.status is not None else None
        return f"Order(id={self.id}, order_id='{self.order_id}', status={status})"


class OrderItem(BaseModel):
    """
    A line item of an order.

    Attributes:
        order_pk: Foreign key to the owning Order
        item_id: Catalogue identifier of the food item
        item_name: Display name of the food item
        quantity: Number of units ordered (> 0)
        price: Unit price (>= 0)
    """

    __tablename__ = TABLE_ORDER_ITEM

    order_pk = Column(
        Integer, ForeignKey(f"{TABLE_ORDER}.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_id = Column(String(MAX_ITEM_ID_LENGTH), nullable=False)
    item_name = Column(String(MAX_ITEM_NAME_LENGTH), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(PRICE_PRECISION, MONEY_SCALE), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
        CheckConstraint("price >= 0", name="ck_order_item_price_non_negative"),
    )

    @property
    def subtotal(self) -> Decimal:
        """Line subtotal (price x quantity)."""
        return Decimal(str(self.price)) * self.quantity

    def __repr__(self) -> str:
        """String representation of order item."""
        return f"OrderItem(id={self.id}, item_id='{self.item_id}', quantity={self.quantity})"
