"""
ORM-Level Append-Only Enforcement.

===============================================================================
WHY THIS EXISTS
===============================================================================

The capital ledger and the order audit trail are only trustworthy if rows
cannot be rewritten after the fact.  Corrections are new transactions,
never edits.

SQLAlchemy fires events before UPDATE/DELETE operations reach the database.
We register listeners that intercept these events and check the rules:

    session.flush()
         |
         v
    [before_update event] --> _check_*_immutability() --> ImmutabilityViolationError
         |
         v
    [before_delete event] --> _check_*_delete() --------> ImmutabilityViolationError
         |
         v
    SQL sent to database (only if checks pass)

Core ``update()`` statements bypass these listeners.  The only one the
system issues is the conditional order status update in
``citrus_kernel.services.record_writer``, which touches ``status`` and
``updated_at`` only.

===============================================================================
PROTECTED ENTITIES
===============================================================================

Entity                      | When Immutable                    | Why
----------------------------|-----------------------------------|----------------------------------
TransactionModel            | ALWAYS (from creation)            | Append-only capital ledger
OrderStatusHistoryModel     | ALWAYS (from creation)            | Audit trail of transitions
OrderModel                  | Commercial fields, from creation  | Margin/revenue must not drift
OrderModel                  | Never deleted                     | History rows reference it
"""

from sqlalchemy import event, inspect

from citrus_kernel.exceptions import ImmutabilityViolationError
from citrus_kernel.logging_config import get_logger

logger = get_logger("db.immutability")

ORDER_IMMUTABLE_FIELDS = ("customer_name", "product_variant", "quantity", "sell_price", "created_by")


def _block(entity_type: str, target, operation: str, reason: str) -> None:
    logger.error(
        "immutability_violation_blocked",
        extra={
            "entity_type": entity_type,
            "entity_id": str(target.id),
            "operation": operation,
        },
    )
    raise ImmutabilityViolationError(
        entity_type=entity_type,
        entity_id=str(target.id),
        reason=reason,
    )


def _check_transaction_immutability(mapper, connection, target):
    _block("Transaction", target, "UPDATE", "Transactions are append-only and cannot be modified")


def _check_transaction_delete(mapper, connection, target):
    _block("Transaction", target, "DELETE", "Transactions are append-only and cannot be deleted")


def _check_status_history_immutability(mapper, connection, target):
    _block(
        "OrderStatusHistory", target, "UPDATE",
        "Order status history is append-only and cannot be modified",
    )


def _check_status_history_delete(mapper, connection, target):
    _block(
        "OrderStatusHistory", target, "DELETE",
        "Order status history is append-only and cannot be deleted",
    )


def _check_order_immutability(mapper, connection, target):
    """Allow status changes only; commercial fields are fixed at creation."""
    state = inspect(target)
    changed = [
        name for name in ORDER_IMMUTABLE_FIELDS
        if state.attrs[name].history.has_changes()
    ]
    if changed:
        _block(
            "Order", target, "UPDATE",
            f"Order fields are immutable after creation: {', '.join(changed)}",
        )


def _check_order_delete(mapper, connection, target):
    _block("Order", target, "DELETE", "Orders cannot be deleted")


def _listeners():
    from citrus_kernel.models.order import OrderModel, OrderStatusHistoryModel
    from citrus_kernel.models.transaction import TransactionModel

    return (
        (TransactionModel, "before_update", _check_transaction_immutability),
        (TransactionModel, "before_delete", _check_transaction_delete),
        (OrderStatusHistoryModel, "before_update", _check_status_history_immutability),
        (OrderStatusHistoryModel, "before_delete", _check_status_history_delete),
        (OrderModel, "before_update", _check_order_immutability),
        (OrderModel, "before_delete", _check_order_delete),
    )


def register_immutability_listeners() -> None:
    """
    Register all append-only enforcement listeners (idempotent).

    Call during application initialization, after models are importable and
    before any writes.
    """
    for model, name, fn in _listeners():
        if not event.contains(model, name, fn):
            event.listen(model, name, fn)
    logger.info("immutability_listeners_registered")


def unregister_immutability_listeners() -> None:
    """Remove the listeners.  FOR TESTING ONLY."""
    for model, name, fn in _listeners():
        if event.contains(model, name, fn):
            event.remove(model, name, fn)
