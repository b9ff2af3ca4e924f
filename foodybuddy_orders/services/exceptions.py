"""Service layer exception classes for the FoodyBuddy orders service.

This module defines all custom exceptions used by the service layer to provide
consistent error handling across the application.

Exception Hierarchy:
    ServiceError (base)
    ├── OrderNotFound
    ├── InvalidStatusTransition
    ├── ValidationError
    └── DatabaseError

Gateway notification failures have no exception class: they are
caught and logged where the notification is sent and never reach callers.
"""


class ServiceError(Exception):
    """Base exception for all service layer errors.

    All service-specific exceptions should inherit from this class.
    """

    pass


class OrderNotFound(ServiceError):
    """Raised when an order cannot be found by its order ID.

    Args:
        order_id: The order ID that was not found

    Example:
        >>> raise OrderNotFound("3f1c...")
        OrderNotFound: Order not found: 3f1c...
    """

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class InvalidStatusTransition(ServiceError):
    """Raised when a requested status change is not an edge of the state machine.

    Args:
        from_status: Status the order (or bulk selection) is in
        to_status: Status that was requested (None when the order has no
            next status to progress to)
        order_id: Order concerned, if the request targeted a single order

    Example:
        >>> raise InvalidStatusTransition(OrderStatus.DELIVERED, OrderStatus.PENDING)
        InvalidStatusTransition: Invalid status transition from DELIVERED to PENDING
    """

    def __init__(self, from_status, to_status=None, order_id: str = None):
        self.from_status = from_status
        self.to_status = to_status
        self.order_id = order_id

        if to_status is None:
            message = f"Cannot progress order from status {_status_name(from_status)}"
        else:
            message = (
                f"Invalid status transition from {_status_name(from_status)} "
                f"to {_status_name(to_status)}"
            )
        if order_id:
            message = f"{message} for order {order_id}"
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when data validation fails.

    Args:
        errors: List of human-readable validation messages
    """

    def __init__(self, errors: list):
        self.errors = errors
        error_msg = "; ".join(errors)
        super().__init__(f"Validation failed: {error_msg}")


class DatabaseError(ServiceError):
    """Raised when a database operation fails.

    Args:
        message: What the store was doing when it failed
        original_error: The underlying SQLAlchemy exception
    """

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


def _status_name(status) -> str:
    """Return the bare name of a status enum member or plain value."""
    return getattr(status, "value", status)
