"""
Constants for the FoodyBuddy orders service.

This module defines all system-wide constants including:
- Application metadata
- Gateway notification settings
- Bulk progression step names
- Validation limits and error messages
"""

from typing import List

# ============================================================================
# Application Metadata
# ============================================================================

APP_NAME = "FoodyBuddy Orders"
APP_VERSION = "0.1.0"

# ============================================================================
# Gateway Notification
# ============================================================================

# Tag sent as "updatedBy" with every status notification
SOURCE_TAG = "order-service"

DEFAULT_GATEWAY_URL = "http://localhost:8080"
GATEWAY_STATUS_PATH = "/api/gateway/orders/status"

# Seconds before the gateway POST is abandoned
DEFAULT_GATEWAY_TIMEOUT = 5.0

# ============================================================================
# Bulk Progression Steps
# ============================================================================

STEP_CONFIRMED_TO_PREPARING = "confirmed_to_preparing"
STEP_PREPARING_TO_READY = "preparing_to_ready"
STEP_READY_TO_OUT_FOR_DELIVERY = "ready_to_out_for_delivery"
STEP_OUT_FOR_DELIVERY_TO_DELIVERED = "out_for_delivery_to_delivered"

PROGRESSION_STEP_NAMES: List[str] = [
    STEP_CONFIRMED_TO_PREPARING,
    STEP_PREPARING_TO_READY,
    STEP_READY_TO_OUT_FOR_DELIVERY,
    STEP_OUT_FOR_DELIVERY_TO_DELIVERED,
]

# ============================================================================
# Validation Constants
# ============================================================================

# String length limits
MAX_ITEM_ID_LENGTH = 100
MAX_ITEM_NAME_LENGTH = 200

# Numeric column precision
PRICE_PRECISION = 10
TOTAL_PRECISION = 12
MONEY_SCALE = 4

# ============================================================================
# Database Constants
# ============================================================================

DATABASE_FILENAME = "foodybuddy_orders.db"

TABLE_ORDER = "orders"
TABLE_ORDER_ITEM = "order_items"

# ============================================================================
# Error Messages
# ============================================================================

ERROR_REQUIRED_FIELD = "This field is required"
ERROR_INVALID_NUMBER = "Please enter a valid number"
ERROR_INVALID_INTEGER = "Value must be a whole number"
ERROR_INVALID_POSITIVE = "Value must be greater than zero"
ERROR_INVALID_NON_NEGATIVE = "Value must be zero or greater"
ERROR_NO_ITEMS = "Order must contain at least one item"
