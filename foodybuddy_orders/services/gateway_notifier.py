"""Gateway Notifier - best-effort order status notifications.

Every status change is reported to the gateway with a JSON POST:

    {"orderId": "...", "status": "PREPARING",
     "message": "Order status updated from CONFIRMED to PREPARING",
     "updatedBy": "order-service"}

Delivery is best-effort: notify() never raises. Failures are logged and
dropped, and nothing is retried.
"""

import logging
from typing import Optional, Protocol

import requests

from foodybuddy_orders.services.logging_utils import get_service_logger, log_operation
from foodybuddy_orders.utils.constants import DEFAULT_GATEWAY_TIMEOUT

logger = get_service_logger(__name__)


class GatewayNotifier(Protocol):
    """Protocol for status-change notification delivery."""

    def notify(self, order_id: str, new_status: str, message: str, source_tag: str) -> None:
        """Deliver one status change. Must not raise."""
        ...


class RestGatewayNotifier:
    """
    GatewayNotifier that POSTs to the gateway's status endpoint with requests.

    Attributes:
        status_url: Full URL of the gateway status endpoint
        timeout: Seconds before the request is abandoned
    """

    def __init__(
        self,
        status_url: str,
        timeout: float = DEFAULT_GATEWAY_TIMEOUT,
        http: Optional[requests.Session] = None,
    ):
        """
        Args:
            status_url: Full URL of the gateway status endpoint
            timeout: Seconds before the request is abandoned
            http: Session to send with (a new requests.Session by default)
        """
        self.status_url = status_url
        self.timeout = timeout
        self._http = http or requests.Session()
        logger.info(f"Gateway notifier initialized with URL: {status_url}")

    def notify(self, order_id: str, new_status: str, message: str, source_tag: str) -> None:
        payload = {
            "orderId": order_id,
            "status": new_status,
            "message": message,
            "updatedBy": source_tag,
        }
        try:
            response = self._http.post(self.status_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            log_operation(
                logger,
                operation="notify_gateway",
                outcome="failed",
                level=logging.WARNING,
                order_id=order_id,
                status=new_status,
                error=str(e),
            )
            return

        log_operation(
            logger,
            operation="notify_gateway",
            outcome="success",
            level=logging.DEBUG,
            order_id=order_id,
            status=new_status,
        )

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._http.close()
