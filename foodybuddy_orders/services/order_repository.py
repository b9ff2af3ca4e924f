"""Order Store - persistence of Order aggregates.

The order service talks to storage only through the OrderStore protocol.
SqlAlchemyOrderRepository is the default implementation; each call runs in
its own session_scope() so every save is an independent unit of work.

Returned orders are detached from their session with items already loaded,
so they can be mutated and passed back to save().
"""

from typing import List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from foodybuddy_orders.models.order import Order
from foodybuddy_orders.models.order_status import OrderStatus
from foodybuddy_orders.services.database import session_scope
from foodybuddy_orders.services.exceptions import DatabaseError


class OrderStore(Protocol):
    """
    Protocol for order persistence.

    Implementations must preserve the insertion order of an order's items
    across a save/load round trip.
    """

    def save(self, order: Order) -> Order:
        """Insert or update an order, assigning its internal id if new."""
        ...

    def find_by_order_id(self, order_id: str) -> Optional[Order]:
        """Return the order with this order ID, or None."""
        ...

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        """Return every order currently in status."""
        ...

    def find_all(self) -> List[Order]:
        """Return every order."""
        ...


class SqlAlchemyOrderRepository:
    """OrderStore backed by the SQLAlchemy session factory in services.database."""

    def save(self, order: Order) -> Order:
        """
        Persist an order.

        New orders are added; orders loaded earlier are merged back so the
        changes made while detached are written.

        Args:
            order: Order to persist

        Returns:
            The persisted order (a new instance when merged)

        Raises:
            DatabaseError: If the write or commit fails
        """
        try:
            with session_scope() as session:
                if order.id is None:
                    session.add(order)
                else:
                    order = session.merge(order)
                session.flush()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to save order {order.order_id}", e) from e
        return order

    def find_by_order_id(self, order_id: str) -> Optional[Order]:
        try:
            with session_scope() as session:
                return session.query(Order).filter(Order.order_id == order_id).first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load order {order_id}", e) from e

    def find_by_status(self, status: OrderStatus) -> List[Order]:
        try:
            with session_scope() as session:
                return (
                    session.query(Order)
                    .filter(Order.status == status)
                    .order_by(Order.id)
                    .all()
                )
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load orders with status {status.value}", e) from e

    def find_all(self) -> List[Order]:
        try:
            with session_scope() as session:
                return session.query(Order).order_by(Order.id).all()
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to load orders", e) from e
