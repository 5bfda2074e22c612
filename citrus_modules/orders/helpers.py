"""
Order helpers -- pure input validation and parsing.

ZERO I/O.  Turns caller-supplied mappings into validated value objects or
raises ValidationError listing every failing field.
"""

from __future__ import annotations

from typing import Any, Mapping

from citrus_kernel.domain.dtos import NewOrder
from citrus_kernel.domain.validation import (
    FieldError,
    raise_if_errors,
    validate_enum,
    validate_non_empty_str,
    validate_non_negative_int,
    validate_positive_int,
)
from citrus_kernel.domain.values import ALL, OrderStatus, ProductVariant


def validate_new_order(data: Mapping[str, Any]) -> NewOrder:
    """
    Validate the fields of an order about to be created.

    Status is never taken from the caller; new orders start as pending.
    """
    errors: list[FieldError] = []
    errors += validate_non_empty_str(data, "customer_name")
    errors += validate_enum(data, "product_variant", ProductVariant)
    errors += validate_positive_int(data, "quantity")
    errors += validate_non_negative_int(data, "sell_price")
    raise_if_errors("order", errors)

    return NewOrder(
        customer_name=data["customer_name"],
        product_variant=ProductVariant(data["product_variant"]),
        quantity=data["quantity"],
        sell_price=data["sell_price"],
    )


def parse_order_status(value: OrderStatus | str) -> OrderStatus:
    """Parse a single status value, raising ValidationError if unknown."""
    raise_if_errors("order", validate_enum({"status": value}, "status", OrderStatus))
    return OrderStatus(value)


def parse_status_filter(value: OrderStatus | str | None) -> OrderStatus | None:
    """Status filter for listings.  ``None`` and ``"all"`` disable it."""
    if value is None or value == ALL:
        return None
    return parse_order_status(value)
