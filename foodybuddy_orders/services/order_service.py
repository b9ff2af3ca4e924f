"""Order Lifecycle Service - creation, status updates and bulk progression.

This service handles all order-related operations: it creates orders,
applies single-order status transitions, and advances orders in bulk along
the delivery pipeline, notifying the gateway of every status change.

Collaborators are passed in explicitly:
- repository: OrderStore used for every read and write
- notifier: GatewayNotifier receiving status-change notifications
- clock: zero-argument callable returning the current UTC time

Each order write is its own unit of work. A bulk operation interrupted part
way leaves some orders advanced and the rest untouched; there is no
transaction spanning several orders.

Bulk progression sweep:
    CONFIRMED -> PREPARING -> READY -> OUT_FOR_DELIVERY -> DELIVERED

Orders are grouped by status once, before anything is changed, so an order
moves at most one step per sweep.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Union

from foodybuddy_orders.models.order import Order, OrderItem
from foodybuddy_orders.models.order_status import (
    IN_FLIGHT_STATUSES,
    OrderStatus,
    can_transition,
    next_status,
    parse_status,
)
from foodybuddy_orders.services.dto import (
    CreateOrderRequest,
    OrderView,
    ProgressionReport,
    StepResult,
)
from foodybuddy_orders.services.exceptions import (
    InvalidStatusTransition,
    OrderNotFound,
    ValidationError,
)
from foodybuddy_orders.services.gateway_notifier import GatewayNotifier, RestGatewayNotifier
from foodybuddy_orders.services.logging_utils import get_service_logger, log_operation
from foodybuddy_orders.services.order_repository import OrderStore, SqlAlchemyOrderRepository
from foodybuddy_orders.utils.config import Config, get_config
from foodybuddy_orders.utils.constants import PROGRESSION_STEP_NAMES, SOURCE_TAG
from foodybuddy_orders.utils.datetime_utils import utc_now
from foodybuddy_orders.utils.validators import validate_order_items

logger = get_service_logger(__name__)

StatusLike = Union[OrderStatus, str]

# (step name, from status, to status) in sweep order
PROGRESSION_STEPS = tuple(
    (step_name, from_status, next_status(from_status))
    for step_name, from_status in zip(PROGRESSION_STEP_NAMES, IN_FLIGHT_STATUSES)
)


class OrderLifecycleService:
    """
    Order lifecycle engine.

    Single-order operations either fully succeed or raise. Bulk operations
    never raise once validated; they return a report whose nested success
    flags and counters describe partial failures.
    """

    def __init__(
        self,
        repository: OrderStore,
        notifier: GatewayNotifier,
        clock: Callable[[], datetime] = utc_now,
        enforce_transitions: bool = True,
    ):
        """
        Args:
            repository: Order store
            notifier: Gateway notifier (best-effort)
            clock: Source of current UTC timestamps; must not go backwards
            enforce_transitions: Reject single-order updates that are not
                edges of the state machine. Bulk operations always enforce.
        """
        self._repository = repository
        self._notifier = notifier
        self._clock = clock
        self._enforce_transitions = enforce_transitions

    # =========================================================================
    # Creation and lookup
    # =========================================================================

    def create_order(self, request: CreateOrderRequest) -> OrderView:
        """
        Create a new PENDING order.

        The total is the sum of price x quantity over the items and is never
        recomputed afterwards. No gateway notification is sent.

        Args:
            request: Items to order

        Returns:
            View of the stored order

        Raises:
            ValidationError: If the request has no items or an invalid item
        """
        errors = validate_order_items(request.items)
        if errors:
            log_operation(
                logger,
                operation="create_order",
                outcome="validation_failed",
                level=logging.WARNING,
                errors=errors,
            )
            raise ValidationError(errors)

        order_id = str(uuid.uuid4())
        now = self._clock()

        items = [
            OrderItem(
                item_id=str(item.item_id).strip(),
                item_name=str(item.item_name).strip(),
                quantity=item.quantity,
                price=Decimal(str(item.price)),
            )
            for item in request.items
        ]
        total = sum((item.subtotal for item in items), Decimal("0"))

        order = Order(
            order_id=order_id,
            items=items,
            total=total,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self._repository.save(order)
        # Reload so the view matches the stored record
        order = self._get_order_or_raise(order_id)

        log_operation(
            logger,
            operation="create_order",
            outcome="success",
            order_id=order_id,
            item_count=len(items),
            total=str(total),
        )
        return OrderView.from_model(order)

    def get_order(self, order_id: str) -> OrderView:
        """
        Get an order by its order ID.

        Raises:
            OrderNotFound: If no order has this ID
        """
        order = self._get_order_or_raise(order_id)
        logger.debug(f"Order retrieved - OrderId: {order_id}, Status: {order.status.value}")
        return OrderView.from_model(order)

    def list_orders(self) -> List[OrderView]:
        """Get every order, oldest first."""
        orders = self._repository.find_all()
        logger.debug(f"Found {len(orders)} orders")
        return [OrderView.from_model(order) for order in orders]

    # =========================================================================
    # Single-order transitions
    # =========================================================================

    def update_order_status(self, order_id: str, status: StatusLike) -> OrderView:
        """
        Move one order to a new status and notify the gateway.

        Args:
            order_id: Order to update
            status: Target status (OrderStatus or status name)

        Returns:
            View of the updated order

        Raises:
            OrderNotFound: If no order has this ID
            InvalidStatusTransition: If transitions are enforced and the
                change is not an edge of the state machine
        """
        status = parse_status(status)
        order = self._get_order_or_raise(order_id)
        return self._apply_status(order, status, operation="update_order_status")

    def advance_order(self, order_id: str) -> OrderView:
        """
        Move one order a single step along the happy path.

        PENDING -> CONFIRMED -> PREPARING -> READY -> OUT_FOR_DELIVERY -> DELIVERED

        Raises:
            OrderNotFound: If no order has this ID
            InvalidStatusTransition: If the order is DELIVERED or CANCELLED
        """
        order = self._get_order_or_raise(order_id)
        target = next_status(order.status)
        if target is None:
            log_operation(
                logger,
                operation="advance_order",
                outcome="terminal_status",
                level=logging.WARNING,
                order_id=order_id,
                from_status=order.status.value,
            )
            raise InvalidStatusTransition(order.status, None, order_id=order_id)
        return self._apply_status(order, target, operation="advance_order")

    def _apply_status(self, order: Order, status: OrderStatus, operation: str) -> OrderView:
        """Validate, persist and announce a single-order status change."""
        order_id = order.order_id
        old_status = order.status

        if self._enforce_transitions and not can_transition(old_status, status):
            log_operation(
                logger,
                operation=operation,
                outcome="invalid_transition",
                level=logging.WARNING,
                order_id=order_id,
                from_status=old_status.value,
                to_status=status.value,
            )
            raise InvalidStatusTransition(old_status, status, order_id=order_id)

        order.set_status(status, self._clock())
        order = self._repository.save(order)

        log_operation(
            logger,
            operation=operation,
            outcome="success",
            order_id=order_id,
            from_status=old_status.value,
            to_status=status.value,
        )

        self._notify_gateway(
            order_id,
            status,
            f"Order status updated from {old_status.value} to {status.value}",
        )
        return OrderView.from_model(order)

    # =========================================================================
    # Bulk transitions
    # =========================================================================

    def bulk_update_order_status(self, from_status: StatusLike, to_status: StatusLike) -> StepResult:
        """
        Move every order at from_status to to_status.

        The pair is checked against the state machine once, before the store
        is touched; individual orders are not re-checked.

        Args:
            from_status: Status to select orders by
            to_status: Status to move them to

        Returns:
            StepResult with found/updated/failed counters

        Raises:
            InvalidStatusTransition: If from_status -> to_status is not an edge
        """
        from_status = parse_status(from_status)
        to_status = parse_status(to_status)

        if not can_transition(from_status, to_status):
            log_operation(
                logger,
                operation="bulk_update_order_status",
                outcome="invalid_transition",
                level=logging.ERROR,
                from_status=from_status.value,
                to_status=to_status.value,
            )
            raise InvalidStatusTransition(from_status, to_status)

        step = StepResult(
            f"{from_status.value.lower()}_to_{to_status.value.lower()}", from_status, to_status
        )
        orders = self._repository.find_by_status(from_status)
        step.total_found = len(orders)
        logger.debug(f"Found {len(orders)} orders with status {from_status.value}")

        for order in orders:
            self._advance_in_step(
                order,
                step,
                recheck=False,
                message=f"Bulk status update from {from_status.value} to {to_status.value}",
            )

        log_operation(
            logger,
            operation="bulk_update_order_status",
            outcome="success" if step.success else "partial_failure",
            level=logging.INFO if step.success else logging.WARNING,
            from_status=from_status.value,
            to_status=to_status.value,
            updated_count=step.updated_count,
            total_found=step.total_found,
            failed_count=step.failed_count,
        )
        return step

    def process_all_status_progressions(self) -> ProgressionReport:
        """
        Advance every in-flight order exactly one step.

        1. Fetch the orders at CONFIRMED, PREPARING, READY and
           OUT_FOR_DELIVERY, in that order, before changing anything.
        2. For each group, re-check each order's current status against the
           state machine and advance it if still legal, else skip it.
        3. Record per-step counters; a failing order marks its step failed
           and processing carries on.

        Returns:
            ProgressionReport keyed by step name
        """
        log_operation(logger, operation="process_status_progressions", outcome="started")
        report = ProgressionReport(timestamp=self._clock())

        # Group once, up front
        orders_by_status = {}
        load_errors = {}
        for from_status in IN_FLIGHT_STATUSES:
            try:
                orders_by_status[from_status] = self._repository.find_by_status(from_status)
            except Exception as e:
                load_errors[from_status] = str(e)
                log_operation(
                    logger,
                    operation="process_status_progressions",
                    outcome="load_failed",
                    level=logging.ERROR,
                    exc_info=True,
                    from_status=from_status.value,
                    error=str(e),
                )

        for step_name, from_status, to_status in PROGRESSION_STEPS:
            step = StepResult(step_name, from_status, to_status)
            report.step_results[step_name] = step

            if from_status in load_errors:
                step.mark_load_failed(load_errors[from_status])
                continue

            orders = orders_by_status[from_status]
            step.total_found = len(orders)
            for order in orders:
                self._advance_in_step(
                    order,
                    step,
                    recheck=True,
                    message=f"Order status updated from {from_status.value} to {to_status.value}",
                )

            log_operation(
                logger,
                operation="process_status_progressions",
                outcome="step_completed" if step.success else "step_failed",
                level=logging.INFO if step.success else logging.WARNING,
                step=step_name,
                updated_count=step.updated_count,
                total_found=step.total_found,
                skipped_count=step.skipped_count,
                failed_count=step.failed_count,
            )

        log_operation(
            logger,
            operation="process_status_progressions",
            outcome="completed",
            total_orders_updated=report.total_orders_updated,
        )
        return report

    def _advance_in_step(self, order: Order, step: StepResult, recheck: bool, message: str) -> None:
        """
        Move one order to step.to_status, recording the outcome on step.

        With recheck, the order is reloaded and skipped unless its current
        status can still move to step.to_status. Any exception is recorded as
        a failure of this order and does not propagate.
        """
        order_id = order.order_id
        try:
            if recheck:
                current = self._repository.find_by_order_id(order_id)
                if current is None or not can_transition(current.status, step.to_status):
                    step.add_skipped()
                    log_operation(
                        logger,
                        operation="progress_order",
                        outcome="skipped",
                        level=logging.INFO,
                        order_id=order_id,
                        current_status=current.status.value if current is not None else None,
                        to_status=step.to_status.value,
                    )
                    return
                order = current

            order.set_status(step.to_status, self._clock())
            self._repository.save(order)
            step.add_updated()
            logger.debug(
                f"Updated order {order_id} from {step.from_status.value} to {step.to_status.value}"
            )
        except Exception as e:
            step.add_failure(order_id, str(e))
            log_operation(
                logger,
                operation="progress_order",
                outcome="error",
                level=logging.ERROR,
                exc_info=True,
                order_id=order_id,
                from_status=step.from_status.value,
                to_status=step.to_status.value,
                error=str(e),
            )
            return

        self._notify_gateway(order_id, step.to_status, message)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_order_or_raise(self, order_id: str) -> Order:
        order = self._repository.find_by_order_id(order_id)
        if order is None:
            log_operation(
                logger,
                operation="get_order",
                outcome="not_found",
                level=logging.WARNING,
                order_id=order_id,
            )
            raise OrderNotFound(order_id)
        return order

    def _notify_gateway(self, order_id: str, status: OrderStatus, message: str) -> None:
        """Send a status notification; failures are logged and dropped."""
        try:
            self._notifier.notify(order_id, status.value, message, SOURCE_TAG)
        except Exception as e:
            log_operation(
                logger,
                operation="notify_gateway",
                outcome="failed",
                level=logging.WARNING,
                exc_info=True,
                order_id=order_id,
                status=status.value,
                error=str(e),
            )


def build_order_service(
    config: Optional[Config] = None,
    repository: Optional[OrderStore] = None,
    notifier: Optional[GatewayNotifier] = None,
) -> OrderLifecycleService:
    """
    Wire an OrderLifecycleService from configuration.

    Args:
        config: Configuration (defaults to get_config())
        repository: Store override (defaults to SqlAlchemyOrderRepository)
        notifier: Notifier override (defaults to RestGatewayNotifier)

    Returns:
        Ready-to-use service
    """
    if config is None:
        config = get_config()
    if repository is None:
        repository = SqlAlchemyOrderRepository()
    if notifier is None:
        notifier = RestGatewayNotifier(config.gateway_status_url, timeout=config.gateway_timeout)

    logger.info(
        f"Order service initialized - gateway: {config.gateway_status_url}, "
        f"enforce transitions: {config.enforce_transitions}"
    )
    return OrderLifecycleService(
        repository,
        notifier,
        enforce_transitions=config.enforce_transitions,
    )
