"""
Orders Module.

Order creation and the order status state machine
(pending -> shipped -> delivered | returned) with its audit trail.
"""

from citrus_modules.orders.config import OrdersConfig
from citrus_modules.orders.helpers import validate_new_order
from citrus_modules.orders.service import OrderService
from citrus_modules.orders.workflows import (
    ORDER_WORKFLOW,
    allowed_targets,
    validate_transition,
)

__all__ = [
    "ORDER_WORKFLOW",
    "OrderService",
    "OrdersConfig",
    "allowed_targets",
    "validate_new_order",
    "validate_transition",
]
