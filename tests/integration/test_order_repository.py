"""Integration tests for SqlAlchemyOrderRepository against SQLite."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from foodybuddy_orders.models import Order, OrderItem, OrderStatus
from foodybuddy_orders.services import order_repository
from foodybuddy_orders.services.exceptions import DatabaseError
from foodybuddy_orders.services.order_repository import SqlAlchemyOrderRepository

T0 = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)


def new_order(order_id, status=OrderStatus.PENDING):
    return Order(
        order_id=order_id,
        items=[
            OrderItem(item_id="pz-1", item_name="Margherita", quantity=1, price=Decimal("9.50")),
            OrderItem(item_id="dr-7", item_name="Cola", quantity=2, price=Decimal("2.00")),
        ],
        total=Decimal("13.50"),
        status=status,
        created_at=T0,
        updated_at=T0,
    )


@pytest.fixture
def repository(test_db):
    return SqlAlchemyOrderRepository()


def test_save_assigns_id_and_round_trips(repository):
    saved = repository.save(new_order("order-1"))
    assert saved.id is not None

    loaded = repository.find_by_order_id("order-1")

    assert loaded.id == saved.id
    assert loaded.status == OrderStatus.PENDING
    assert loaded.total == Decimal("13.50")
    assert [item.item_id for item in loaded.items] == ["pz-1", "dr-7"]


def test_find_missing_returns_none(repository):
    assert repository.find_by_order_id("nope") is None


def test_detached_update_is_written(repository):
    repository.save(new_order("order-1"))
    loaded = repository.find_by_order_id("order-1")

    loaded.set_status(OrderStatus.CONFIRMED, datetime(2026, 3, 14, 12, 5, tzinfo=timezone.utc))
    repository.save(loaded)

    reloaded = repository.find_by_order_id("order-1")
    assert reloaded.status == OrderStatus.CONFIRMED
    assert len(reloaded.items) == 2


def test_find_by_status(repository):
    repository.save(new_order("a", OrderStatus.CONFIRMED))
    repository.save(new_order("b", OrderStatus.READY))
    repository.save(new_order("c", OrderStatus.CONFIRMED))

    assert [o.order_id for o in repository.find_by_status(OrderStatus.CONFIRMED)] == ["a", "c"]
    assert repository.find_by_status(OrderStatus.DELIVERED) == []
    assert [o.order_id for o in repository.find_all()] == ["a", "b", "c"]


def test_duplicate_order_id_rejected(repository):
    repository.save(new_order("order-1"))
    with pytest.raises(DatabaseError):
        repository.save(new_order("order-1"))


def test_query_failure_wrapped(repository):
    error = OperationalError("SELECT", {}, Exception("database is locked"))
    with patch.object(order_repository, "session_scope", side_effect=error):
        with pytest.raises(DatabaseError) as exc_info:
            repository.find_all()
    assert exc_info.value.original_error is error
