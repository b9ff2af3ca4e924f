"""Unit tests for structured service logging."""

import logging

from foodybuddy_orders.services.logging_utils import get_service_logger, log_operation


def test_logger_name_under_service_prefix():
    assert get_service_logger("foodybuddy_orders.services.order_service").name == (
        "foodybuddy_orders.services.order_service"
    )
    assert get_service_logger("gateway_notifier").name == "foodybuddy_orders.services.gateway_notifier"


def test_log_operation_message_and_context(caplog):
    logger = get_service_logger("test_logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)

    log_operation(
        logger,
        operation="update_order_status",
        outcome="success",
        order_id="order-1",
        from_status="PENDING",
        to_status="CONFIRMED",
    )

    record = caplog.records[-1]
    assert record.getMessage() == "update_order_status: success"
    assert record.levelno == logging.INFO
    assert record.operation == "update_order_status"
    assert record.outcome == "success"
    assert record.order_id == "order-1"
    assert record.to_status == "CONFIRMED"


def test_log_operation_level_and_traceback(caplog):
    logger = get_service_logger("test_logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        log_operation(logger, "progress_order", "error", level=logging.ERROR, exc_info=True)

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.exc_info is not None
    assert record.exc_info[0] is RuntimeError
