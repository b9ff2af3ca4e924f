"""Service layer logging utilities.

Provides structured logging functions for service operations, enabling
consistent log format and context across order creation, status updates
and bulk progression sweeps.

Usage:
    from foodybuddy_orders.services.logging_utils import get_service_logger, log_operation

    logger = get_service_logger(__name__)

    # Log successful operation
    log_operation(
        logger,
        operation="update_order_status",
        outcome="success",
        order_id="3f1c...",
        from_status="PENDING",
        to_status="CONFIRMED",
    )

    # Log a per-order failure inside a sweep
    log_operation(
        logger,
        operation="progress_order",
        outcome="error",
        level=logging.ERROR,
        order_id="3f1c...",
        error="database is locked",
    )
"""

import logging
from typing import Any

LOGGER_PREFIX = "foodybuddy_orders.services"


def get_service_logger(name: str) -> logging.Logger:
    """
    Get a logger configured for service operations.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance under the 'foodybuddy_orders.services' prefix.

    Example:
        >>> logger = get_service_logger(__name__)
        >>> logger.name
        'foodybuddy_orders.services.order_service'
    """
    # Extract just the module name if full path is provided
    if "." in name:
        name = name.split(".")[-1]
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_operation(
    logger: logging.Logger,
    operation: str,
    outcome: str,
    level: int = logging.INFO,
    exc_info: bool = False,
    **context: Any,
) -> None:
    """
    Log a service operation with structured context.

    The message is always "<operation>: <outcome>"; the context is passed via
    the 'extra' parameter so structured handlers can pick the fields up.

    Args:
        logger: Logger instance to use
        operation: Operation name (e.g., "create_order", "process_status_progressions")
        outcome: Outcome description (e.g., "success", "skipped", "error")
        level: Log level (default: INFO). Use DEBUG for per-order detail.
        exc_info: Attach the active exception's traceback
        **context: Additional context fields. Common fields:
            - order_id: Order being processed
            - from_status / to_status: Transition being applied
            - step: Sweep step name
            - updated_count / total_found: Step counters
            - error: Error message if outcome is "error"
    """
    extra = {
        "operation": operation,
        "outcome": outcome,
        **context,
    }
    logger.log(level, f"{operation}: {outcome}", extra=extra, exc_info=exc_info)
