"""Unit tests for the database health check."""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from foodybuddy_orders.services import health_service
from foodybuddy_orders.utils.constants import APP_VERSION


def test_online_with_database(test_db):
    status = health_service.check_health()

    assert status["status"] == "online"
    assert status["database"] == "connected"
    assert status["app_version"] == APP_VERSION
    assert status["timestamp"].endswith("+00:00")


def test_degraded_when_database_unreachable(test_db):
    error = OperationalError("SELECT 1", {}, Exception("unable to open database file"))
    with patch.object(health_service, "session_scope", side_effect=error):
        status = health_service.check_health()

    assert status["status"] == "degraded"
    assert status["database"] == "disconnected"


def test_degraded_when_tables_missing(test_db):
    with patch.object(health_service, "verify_database", return_value=False):
        status = health_service.check_health()

    assert status["status"] == "degraded"
    assert status["database"] == "disconnected"
