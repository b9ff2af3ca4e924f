"""
Input validation functions for order creation.

Each validator returns a ``(is_valid, error_message)`` tuple so callers can
collect every problem in a request before raising a single ValidationError.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

from .constants import (
    ERROR_INVALID_INTEGER,
    ERROR_INVALID_NON_NEGATIVE,
    ERROR_INVALID_NUMBER,
    ERROR_INVALID_POSITIVE,
    ERROR_NO_ITEMS,
    ERROR_REQUIRED_FIELD,
    MAX_ITEM_ID_LENGTH,
    MAX_ITEM_NAME_LENGTH,
    MONEY_SCALE,
)


def validate_required_string(value: Optional[str], field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a string field is not empty.

    Args:
        value: The string value to validate
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return False, f"{field_name}: {ERROR_REQUIRED_FIELD}"
    return True, ""


def validate_string_length(
    value: Optional[str], max_length: int, field_name: str = "Field"
) -> Tuple[bool, str]:
    """
    Validate that a string doesn't exceed maximum length.

    Args:
        value: The string value to validate
        max_length: Maximum allowed length
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if value and len(str(value)) > max_length:
        return False, f"{field_name}: Must be {max_length} characters or less"
    return True, ""


def validate_positive_integer(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a whole number greater than zero.

    Booleans are rejected even though they are ints in Python.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{field_name}: {ERROR_INVALID_INTEGER}"
    if value <= 0:
        return False, f"{field_name}: {ERROR_INVALID_POSITIVE}"
    return True, ""


def validate_non_negative_number(value: Any, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a value is a non-negative number (>= 0).

    Args:
        value: The value to validate (int, float, Decimal or numeric string)
        field_name: Name of the field for error messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(value, bool) or value is None:
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    try:
        num_value = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if not num_value.is_finite():
        return False, f"{field_name}: {ERROR_INVALID_NUMBER}"
    if num_value < 0:
        return False, f"{field_name}: {ERROR_INVALID_NON_NEGATIVE}"
    return True, ""


def validate_decimal_places(value: Any, places: int, field_name: str = "Field") -> Tuple[bool, str]:
    """
    Validate that a number has no more than places digits after the point.

    Values that are not numbers pass; validate_non_negative_number reports them.
    """
    try:
        num_value = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return True, ""
    if num_value.is_finite() and num_value.normalize().as_tuple().exponent < -places:
        return False, f"{field_name}: Must have at most {places} decimal places"
    return True, ""


def validate_order_items(items: Any) -> List[str]:
    """
    Validate the item requests of a new order.

    Args:
        items: Sequence of OrderItemRequest-like objects

    Returns:
        List of error messages (empty when the items are valid)
    """
    if not items:
        return [ERROR_NO_ITEMS]

    errors = []
    for index, item in enumerate(items, start=1):
        prefix = f"Item {index}"
        checks = [
            validate_required_string(item.item_id, f"{prefix} itemId"),
            validate_string_length(item.item_id, MAX_ITEM_ID_LENGTH, f"{prefix} itemId"),
            validate_required_string(item.item_name, f"{prefix} itemName"),
            validate_string_length(item.item_name, MAX_ITEM_NAME_LENGTH, f"{prefix} itemName"),
            validate_positive_integer(item.quantity, f"{prefix} quantity"),
            validate_non_negative_number(item.price, f"{prefix} price"),
            validate_decimal_places(item.price, MONEY_SCALE, f"{prefix} price"),
        ]
        errors.extend(message for is_valid, message in checks if not is_valid)
    return errors
