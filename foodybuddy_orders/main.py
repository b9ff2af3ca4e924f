"""
Command-line interface for the FoodyBuddy orders service.

Usage Examples:
    # Create an order (items as JSON)
    foodybuddy-orders create '[{"itemId": "pz-1", "itemName": "Margherita", "quantity": 2, "price": 12.99}]'

    # Show one order / all orders
    foodybuddy-orders get 3f1c2a9e-...
    foodybuddy-orders list

    # Move one order to a status, or one step along the happy path
    foodybuddy-orders update-status 3f1c2a9e-... CONFIRMED
    foodybuddy-orders advance 3f1c2a9e-...

    # Advance every in-flight order one step
    foodybuddy-orders progress

    # Move every order at one status to another
    foodybuddy-orders bulk-update CONFIRMED PREPARING

    # Check database health
    foodybuddy-orders health

Every command prints JSON and returns 0 on success, 1 on failure.
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from foodybuddy_orders.models.order_status import OrderStatus
from foodybuddy_orders.services.database import initialize_app_database
from foodybuddy_orders.services.dto import CreateOrderRequest
from foodybuddy_orders.services.exceptions import ServiceError
from foodybuddy_orders.services.gateway_notifier import RestGatewayNotifier
from foodybuddy_orders.services.health_service import check_health
from foodybuddy_orders.services.order_service import OrderLifecycleService, build_order_service
from foodybuddy_orders.utils.config import get_config
from foodybuddy_orders.utils.constants import APP_NAME
from foodybuddy_orders.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

STATUS_CHOICES = [status.value for status in OrderStatus]


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def create_cmd(service: OrderLifecycleService, items_json: str) -> int:
    """Create an order from a JSON list of items."""
    try:
        items = json.loads(items_json)
    except json.JSONDecodeError as e:
        print(f"ERROR: Items must be a JSON list: {e}")
        return 1
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        print("ERROR: Items must be a JSON list of objects")
        return 1

    order = service.create_order(CreateOrderRequest.from_dict({"items": items}))
    _print_json(order.to_dict())
    return 0


def get_cmd(service: OrderLifecycleService, order_id: str) -> int:
    """Show one order."""
    _print_json(service.get_order(order_id).to_dict())
    return 0


def list_cmd(service: OrderLifecycleService) -> int:
    """Show every order."""
    _print_json([order.to_dict() for order in service.list_orders()])
    return 0


def update_status_cmd(service: OrderLifecycleService, order_id: str, status: str) -> int:
    """Move one order to a status."""
    _print_json(service.update_order_status(order_id, status).to_dict())
    return 0


def advance_cmd(service: OrderLifecycleService, order_id: str) -> int:
    """Move one order a single step along the happy path."""
    _print_json(service.advance_order(order_id).to_dict())
    return 0


def progress_cmd(service: OrderLifecycleService) -> int:
    """Run the bulk progression sweep."""
    report = service.process_all_status_progressions()
    _print_json(report.to_dict())
    return 0 if not report.has_failures else 1


def bulk_update_cmd(service: OrderLifecycleService, from_status: str, to_status: str) -> int:
    """Move every order at from_status to to_status."""
    result = service.bulk_update_order_status(from_status, to_status)
    _print_json(result.to_dict())
    return 0 if result.success else 1


def health_cmd() -> int:
    """Report database health."""
    status = check_health()
    _print_json(status)
    return 0 if status["status"] == "online" else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="foodybuddy-orders",
        description=f"{APP_NAME} - order lifecycle management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  ORDERS_DATABASE_URL         SQLAlchemy URL of the order store
  ORDERS_GATEWAY_URL          Gateway base URL for status notifications
  ORDERS_GATEWAY_TIMEOUT      Gateway request timeout in seconds
  ORDERS_ENFORCE_TRANSITIONS  Set to 0 to allow any single-order status change
  ORDERS_LOG_LEVEL            Log level (default INFO)
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    create_parser = subparsers.add_parser("create", help="Create an order")
    create_parser.add_argument(
        "items",
        help='JSON list of items, e.g. \'[{"itemId": "pz-1", "itemName": "Pizza", "quantity": 1, "price": 9.5}]\'',
    )

    get_parser = subparsers.add_parser("get", help="Show one order")
    get_parser.add_argument("order_id", help="Order ID")

    subparsers.add_parser("list", help="Show all orders")

    update_parser = subparsers.add_parser("update-status", help="Move one order to a status")
    update_parser.add_argument("order_id", help="Order ID")
    update_parser.add_argument("status", type=str.upper, choices=STATUS_CHOICES, help="New status")

    advance_parser = subparsers.add_parser(
        "advance", help="Move one order a single step along the delivery pipeline"
    )
    advance_parser.add_argument("order_id", help="Order ID")

    subparsers.add_parser("progress", help="Advance every in-flight order one step")

    bulk_parser = subparsers.add_parser(
        "bulk-update", help="Move every order at one status to another"
    )
    bulk_parser.add_argument("from_status", type=str.upper, choices=STATUS_CHOICES)
    bulk_parser.add_argument("to_status", type=str.upper, choices=STATUS_CHOICES)

    subparsers.add_parser("health", help="Check database health")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = get_config()
    configure_logging(config.log_level)

    # Initialize database (required for all operations)
    initialize_app_database()

    if args.command == "health":
        return health_cmd()

    notifier = RestGatewayNotifier(config.gateway_status_url, timeout=config.gateway_timeout)
    service = build_order_service(config, notifier=notifier)

    try:
        if args.command == "create":
            return create_cmd(service, args.items)
        elif args.command == "get":
            return get_cmd(service, args.order_id)
        elif args.command == "list":
            return list_cmd(service)
        elif args.command == "update-status":
            return update_status_cmd(service, args.order_id, args.status)
        elif args.command == "advance":
            return advance_cmd(service, args.order_id)
        elif args.command == "progress":
            return progress_cmd(service)
        elif args.command == "bulk-update":
            return bulk_update_cmd(service, args.from_status, args.to_status)
        else:
            print(f"Unknown command: {args.command}")
            return 1
    except ServiceError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"ERROR: {e}")
        return 1
    finally:
        notifier.close()


if __name__ == "__main__":
    sys.exit(main())
