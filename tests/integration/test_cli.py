"""Tests for the foodybuddy-orders command-line interface."""

import json
from unittest.mock import Mock

import pytest

from foodybuddy_orders import main as cli
from foodybuddy_orders.models import OrderStatus
from tests.fixtures.order_fixtures import PIZZA, load_status


@pytest.fixture
def run_cli(order_service, monkeypatch, capsys):
    """Run the CLI against the test database and return (exit code, stdout)."""
    monkeypatch.setenv("ORDERS_DATABASE_URL", "sqlite://")
    monkeypatch.setattr(cli, "build_order_service", lambda config=None, notifier=None: order_service)

    def _run(*argv):
        code = cli.main(list(argv))
        return code, capsys.readouterr().out

    return _run


def test_create_and_get(run_cli):
    code, out = run_cli("create", json.dumps([PIZZA]))
    assert code == 0
    created = json.loads(out)
    assert created["status"] == "PENDING"
    assert created["total"] == 25.98

    code, out = run_cli("get", created["orderId"])
    assert code == 0
    assert json.loads(out)["orderId"] == created["orderId"]


def test_create_rejects_bad_json(run_cli):
    code, out = run_cli("create", "not json")
    assert code == 1
    assert out.startswith("ERROR")


def test_create_rejects_empty_order(run_cli):
    code, out = run_cli("create", "[]")
    assert code == 1
    assert "at least one item" in out


def test_list(run_cli, seed_order):
    seed_order()
    seed_order(OrderStatus.READY)

    code, out = run_cli("list")

    assert code == 0
    assert [order["status"] for order in json.loads(out)] == ["PENDING", "READY"]


def test_update_status_and_advance(run_cli, seed_order, notifier):
    order_id = seed_order()

    code, out = run_cli("update-status", order_id, "confirmed")
    assert code == 0
    assert json.loads(out)["status"] == "CONFIRMED"

    code, out = run_cli("advance", order_id)
    assert code == 0
    assert json.loads(out)["status"] == "PREPARING"
    assert len(notifier.calls) == 2


def test_illegal_update_reports_error(run_cli, seed_order):
    order_id = seed_order()

    code, out = run_cli("update-status", order_id, "DELIVERED")

    assert code == 1
    assert "Invalid status transition from PENDING to DELIVERED" in out
    assert load_status(order_id) == OrderStatus.PENDING


def test_get_missing_order(run_cli):
    code, out = run_cli("get", "no-such-order")
    assert code == 1
    assert "Order not found: no-such-order" in out


def test_progress(run_cli, seed_order):
    order_id = seed_order(OrderStatus.OUT_FOR_DELIVERY)

    code, out = run_cli("progress")

    assert code == 0
    report = json.loads(out)
    assert report["totalOrdersUpdated"] == 1
    assert report["stepResults"]["out_for_delivery_to_delivered"]["updatedCount"] == 1
    assert load_status(order_id) == OrderStatus.DELIVERED


def test_bulk_update(run_cli, seed_order):
    seed_order(OrderStatus.CONFIRMED)

    code, out = run_cli("bulk-update", "CONFIRMED", "PREPARING")

    assert code == 0
    assert json.loads(out)["updatedCount"] == 1


def test_bulk_update_illegal_pair(run_cli):
    code, out = run_cli("bulk-update", "DELIVERED", "PENDING")
    assert code == 1
    assert "Invalid status transition" in out


def test_unknown_status_rejected_by_parser(run_cli):
    with pytest.raises(SystemExit) as exc_info:
        run_cli("bulk-update", "SHIPPED", "PENDING")
    assert exc_info.value.code == 2


def test_health(run_cli):
    code, out = run_cli("health")
    assert code == 0
    assert json.loads(out)["database"] == "connected"


def test_no_command_prints_help(run_cli):
    code, out = run_cli()
    assert code == 1
    assert "usage" in out


@pytest.mark.parametrize("argv", [("list",), ("get", "no-such-order")])
def test_gateway_session_closed_on_exit(run_cli, monkeypatch, argv):
    notifier_class = Mock()
    monkeypatch.setattr(cli, "RestGatewayNotifier", notifier_class)

    run_cli(*argv)

    notifier_class.assert_called_once()
    notifier_class.return_value.close.assert_called_once_with()
