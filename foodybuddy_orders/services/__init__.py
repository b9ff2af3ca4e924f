"""Services package - Business logic layer for the FoodyBuddy orders service.

Architecture:
- OrderLifecycleService: order creation, status transitions, bulk progression
- Collaborators: OrderStore (persistence), GatewayNotifier (notifications),
  and a clock, all passed in explicitly
- Transactions: Each store call runs in its own session_scope()
- Exceptions: Consistent error handling via the ServiceError hierarchy

Service Modules:
- order_service: Order lifecycle engine and its factory
- order_repository: SQLAlchemy-backed order store
- gateway_notifier: Best-effort gateway notifications over HTTP
- health_service: Database health check

Infrastructure:
- database: Engine and session management
- exceptions: Custom exception classes for service layer errors
- dto: Request, view and bulk result objects
- logging_utils: Structured operation logging
"""

from .exceptions import (
    DatabaseError,
    InvalidStatusTransition,
    OrderNotFound,
    ServiceError,
    ValidationError,
)
from .dto import (
    CreateOrderRequest,
    OrderItemRequest,
    OrderItemView,
    OrderView,
    ProgressionReport,
    StepResult,
)
from .order_service import OrderLifecycleService, build_order_service

__all__ = [
    "CreateOrderRequest",
    "DatabaseError",
    "InvalidStatusTransition",
    "OrderItemRequest",
    "OrderItemView",
    "OrderLifecycleService",
    "OrderNotFound",
    "OrderView",
    "ProgressionReport",
    "ServiceError",
    "StepResult",
    "ValidationError",
    "build_order_service",
]
