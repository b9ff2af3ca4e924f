"""Test doubles and helpers shared by the order service tests."""

from datetime import datetime, timedelta, timezone

from foodybuddy_orders.models import Order
from foodybuddy_orders.services.database import session_scope

START_TIME = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)

PIZZA = {"itemId": "pz-1", "itemName": "Margherita", "quantity": 2, "price": 12.99}
COLA = {"itemId": "dr-7", "itemName": "Cola", "quantity": 1, "price": "2.50"}


class RecordingNotifier:
    """GatewayNotifier that remembers every notification."""

    def __init__(self):
        self.calls = []

    def notify(self, order_id, new_status, message, source_tag):
        self.calls.append(
            {
                "order_id": order_id,
                "status": new_status,
                "message": message,
                "source_tag": source_tag,
            }
        )

    def for_order(self, order_id):
        return [call for call in self.calls if call["order_id"] == order_id]


class FailingNotifier:
    """GatewayNotifier whose gateway is always down."""

    def __init__(self):
        self.attempts = 0

    def notify(self, order_id, new_status, message, source_tag):
        self.attempts += 1
        raise RuntimeError("gateway unavailable")


class TickingClock:
    """Deterministic clock advancing by a fixed step on every reading."""

    def __init__(self, start=START_TIME, step=timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self):
        now = self.current
        self.current = self.current + self.step
        return now


def force_status(order_id, status):
    """Put an order straight into a status, bypassing the state machine."""
    with session_scope() as session:
        order = session.query(Order).filter(Order.order_id == order_id).one()
        order.status = status


def load_status(order_id):
    """Read an order's status straight from the database."""
    with session_scope() as session:
        return session.query(Order).filter(Order.order_id == order_id).one().status
