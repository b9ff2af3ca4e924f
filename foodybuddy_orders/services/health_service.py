"""
Health check for the orders service.

Reports whether the database answers a trivial query and has the order
tables. Used by the ``health`` CLI command in place of an HTTP health
endpoint.

Example usage:
    from foodybuddy_orders.services.health_service import check_health

    status = check_health()
    # {"status": "online", "database": "connected", ...}
"""

from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from foodybuddy_orders.services.database import session_scope, verify_database
from foodybuddy_orders.services.logging_utils import get_service_logger
from foodybuddy_orders.utils.constants import APP_VERSION
from foodybuddy_orders.utils.datetime_utils import utc_now

logger = get_service_logger(__name__)


def _check_database() -> str:
    """
    Test database connectivity and schema.

    Returns:
        "connected" if the database answers and has the order tables
        "disconnected" otherwise
    """
    try:
        with session_scope() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return "disconnected"

    if not verify_database():
        logger.warning("Database is reachable but the order tables are missing")
        return "disconnected"
    return "connected"


def check_health() -> Dict[str, Any]:
    """
    Build the current health status.

    Returns:
        Dictionary with status ("online" or "degraded"), database state,
        timestamp and application version
    """
    db_status = _check_database()
    status_data = {
        "status": "online" if db_status == "connected" else "degraded",
        "database": db_status,
        "timestamp": utc_now().isoformat(),
        "app_version": APP_VERSION,
    }
    logger.debug(
        f"Health check performed: status={status_data['status']}, db={status_data['database']}"
    )
    return status_data
