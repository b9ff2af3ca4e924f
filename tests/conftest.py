"""Pytest configuration and fixtures for the orders service tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from foodybuddy_orders.models import OrderStatus
from foodybuddy_orders.models.base import Base
from foodybuddy_orders.services.dto import CreateOrderRequest
from foodybuddy_orders.services.order_repository import SqlAlchemyOrderRepository
from foodybuddy_orders.services.order_service import OrderLifecycleService
from foodybuddy_orders.utils.config import reset_config
from tests.fixtures.order_fixtures import PIZZA, RecordingNotifier, TickingClock, force_status


@pytest.fixture(autouse=True)
def clean_config():
    """Never leak the configuration singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="function")
def test_db():
    """Provide a clean in-memory database for each test function.

    This fixture:
    1. Creates an in-memory SQLite database with all tables
    2. Points the global engine and session factory at it
    3. Drops all tables and restores the globals after the test
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    # Monkey-patch the global engine and session factory for tests
    import foodybuddy_orders.services.database as db_module

    original_get_session_factory = db_module.get_session_factory
    original_get_engine = db_module.get_engine
    db_module.get_session_factory = lambda: session_factory
    db_module.get_engine = lambda force_recreate=False: engine

    yield session_factory

    db_module.get_session_factory = original_get_session_factory
    db_module.get_engine = original_get_engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def order_service(test_db, notifier, clock):
    """Order service wired to the test database and a recording notifier."""
    return OrderLifecycleService(SqlAlchemyOrderRepository(), notifier, clock=clock)


@pytest.fixture
def seed_order(order_service):
    """Factory creating an order and placing it in the requested status.

    Seeding sends no notifications.
    """

    def _seed(status=OrderStatus.PENDING, items=None):
        view = order_service.create_order(CreateOrderRequest.from_dict({"items": items or [PIZZA]}))
        if status != OrderStatus.PENDING:
            force_status(view.order_id, status)
        return view.order_id

    return _seed
