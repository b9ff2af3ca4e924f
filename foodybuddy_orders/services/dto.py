"""Data Transfer Objects for the order service layer.

Requests coming in and views going out of the order service are plain
dataclasses so callers never hold on to ORM instances:

- OrderItemRequest / CreateOrderRequest: input to create_order()
- OrderItemView / OrderView: materialized order returned by every operation
- StepResult: outcome of one (from_status, to_status) bulk step
- ProgressionReport: outcome of a full progression sweep

Every outgoing object has a to_dict() producing the camelCase shape used on
the wire.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from foodybuddy_orders.models.order_status import OrderStatus
from foodybuddy_orders.utils.datetime_utils import ensure_utc


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime as ISO-8601 in UTC."""
    value = ensure_utc(value)
    return value.isoformat() if value is not None else None


def _money(value: Decimal) -> float:
    """Serialize a Decimal amount for JSON output."""
    return float(value)


# ============================================================================
# Requests
# ============================================================================


@dataclass
class OrderItemRequest:
    """One requested line item of a new order.

    Attributes:
        item_id: Catalogue identifier of the food item
        item_name: Display name of the food item
        quantity: Units ordered (must be > 0)
        price: Unit price (must be >= 0); int, float, Decimal or numeric string
    """

    item_id: str
    item_name: str
    quantity: int
    price: Any

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderItemRequest":
        """Build from a camelCase or snake_case mapping."""
        return cls(
            item_id=data.get("itemId", data.get("item_id")),
            item_name=data.get("itemName", data.get("item_name")),
            quantity=data.get("quantity"),
            price=data.get("price"),
        )


@dataclass
class CreateOrderRequest:
    """Request to create a new order from a list of items."""

    items: List[OrderItemRequest] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreateOrderRequest":
        """Build from a mapping with an "items" list."""
        return cls(items=[OrderItemRequest.from_dict(item) for item in data.get("items") or []])


# ============================================================================
# Views
# ============================================================================


@dataclass(frozen=True)
class OrderItemView:
    """Read-only view of an order line item."""

    id: Optional[int]
    item_id: str
    item_name: str
    quantity: int
    price: Decimal

    @classmethod
    def from_model(cls, item) -> "OrderItemView":
        return cls(
            id=item.id,
            item_id=item.item_id,
            item_name=item.item_name,
            quantity=item.quantity,
            price=Decimal(str(item.price)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "itemId": self.item_id,
            "itemName": self.item_name,
            "quantity": self.quantity,
            "price": _money(self.price),
        }


@dataclass(frozen=True)
class OrderView:
    """Read-only, fully materialized view of an order and its items."""

    id: Optional[int]
    order_id: str
    items: List[OrderItemView]
    total: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, order) -> "OrderView":
        """Snapshot an Order model; timestamps are normalized to aware UTC."""
        return cls(
            id=order.id,
            order_id=order.order_id,
            items=[OrderItemView.from_model(item) for item in order.items],
            total=Decimal(str(order.total)),
            status=order.status,
            created_at=ensure_utc(order.created_at),
            updated_at=ensure_utc(order.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "items": [item.to_dict() for item in self.items],
            "total": _money(self.total),
            "status": self.status.value,
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }


# ============================================================================
# Bulk Results
# ============================================================================


class StepResult:
    """Outcome of moving every order found at from_status to to_status.

    Counters are filled in as orders are processed. A step that finds no
    orders is successful; a step is failed as soon as one order fails.
    """

    def __init__(self, step_name: str, from_status: OrderStatus, to_status: OrderStatus):
        self.step_name = step_name
        self.from_status = from_status
        self.to_status = to_status
        self.total_found = 0
        self.updated_count = 0
        self.skipped_count = 0
        self.failed_count = 0
        self.errors: List[Dict[str, str]] = []
        # Set when the orders for this step could not be loaded at all
        self.load_error: Optional[str] = None

    def add_updated(self) -> None:
        """Record an order moved to to_status."""
        self.updated_count += 1

    def add_skipped(self) -> None:
        """Record an order left alone because its transition was no longer legal."""
        self.skipped_count += 1

    def add_failure(self, order_id: str, error: str) -> None:
        """Record an order whose update raised."""
        self.failed_count += 1
        self.errors.append({"orderId": order_id, "error": error})

    def mark_load_failed(self, error: str) -> None:
        """Record that the orders at from_status could not be fetched."""
        self.load_error = error

    @property
    def success(self) -> bool:
        return self.failed_count == 0 and self.load_error is None

    @property
    def message(self) -> str:
        from_name = self.from_status.value
        to_name = self.to_status.value
        if self.load_error is not None:
            return f"{from_name} -> {to_name} failed: {self.load_error}"
        if self.total_found == 0:
            return f"No orders found with status {from_name}"
        if self.failed_count:
            first_error = self.errors[0]["error"]
            return (
                f"{from_name} -> {to_name} failed for {self.failed_count} of "
                f"{self.total_found} orders: {first_error}"
            )
        return f"Successfully updated {self.updated_count} orders from {from_name} to {to_name}"

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "success": self.success,
            "fromStatus": self.from_status.value,
            "toStatus": self.to_status.value,
            "updatedCount": self.updated_count,
            "totalFound": self.total_found,
            "skippedCount": self.skipped_count,
            "failedCount": self.failed_count,
            "message": self.message,
        }
        if self.errors:
            result["errors"] = list(self.errors)
        return result

    def __repr__(self) -> str:
        return (
            f"StepResult(step_name='{self.step_name}', updated={self.updated_count}, "
            f"found={self.total_found}, failed={self.failed_count})"
        )


@dataclass
class ProgressionReport:
    """Outcome of a full progression sweep.

    The outer success flag only says the sweep ran to completion; per-step
    success flags and counters carry partial failures.
    """

    timestamp: datetime
    step_results: Dict[str, StepResult] = field(default_factory=dict)
    success: bool = True
    message: str = "Order status progression processing completed"

    @property
    def total_orders_updated(self) -> int:
        return sum(step.updated_count for step in self.step_results.values())

    @property
    def has_failures(self) -> bool:
        return any(not step.success for step in self.step_results.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "timestamp": _isoformat(self.timestamp),
            "totalOrdersUpdated": self.total_orders_updated,
            "stepResults": {name: step.to_dict() for name, step in self.step_results.items()},
        }
