"""
Typed Exception Hierarchy for the Citrus Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Every rejection the core makes must be explicit and distinguishable.  A
caller that receives an error needs to know whether to fix its input,
re-fetch the order, or report a storage outage, without parsing messages.

Every exception:
  1. Is a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes

Example:
    try:
        orders.apply_transition(order_id, OrderStatus.DELIVERED, actor_id)
    except InvalidTransitionError as e:
        api_response(
            code=e.code,
            current=e.current_status,
            requested=e.requested_status,
        )

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    CitrusKernelError (base)
    |
    +-- ValidationError
    |
    +-- AuthorizationError
    |
    +-- OrderError
    |   +-- OrderNotFoundError
    |   +-- InvalidTransitionError
    |       +-- StaleOrderStatusError
    |
    +-- PersistenceError
    |   +-- AuditWriteError
    |
    +-- ImmutabilityError
        +-- ImmutabilityViolationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Validation      | VALIDATION_ERROR            | Malformed or out-of-domain input
----------------|-----------------------------|-----------------------------------------
Authorization   | UNAUTHORIZED                | Missing actor or actor not a partner
----------------|-----------------------------|-----------------------------------------
Order           | ORDER_NOT_FOUND             | Order ID doesn't exist
                | INVALID_STATUS_TRANSITION   | Status not reachable from current one
                | STALE_ORDER_STATUS          | Caller's view of the status is outdated
----------------|-----------------------------|-----------------------------------------
Persistence     | PERSISTENCE_ERROR           | Store failed a read or write
                | AUDIT_WRITE_FAILED          | Status history insert failed
----------------|-----------------------------|-----------------------------------------
Immutability    | IMMUTABILITY_VIOLATION      | Update/delete of an append-only record

===============================================================================
HANDLING PATTERNS
===============================================================================

1. InvalidTransitionError is recoverable: re-read the order and retry with
   its current status.  StaleOrderStatusError is the same signal raised
   when the caller's belief (or a concurrent writer) disagrees with the
   stored status.

2. PersistenceError is surfaced verbatim.  The original driver exception
   is chained as ``__cause__``.  The core never retries.

3. AuditWriteError means the status update and its history row were
   rolled back together.  It is logged separately from ordinary
   persistence failures so operators can watch for it.
"""


class CitrusKernelError(Exception):
    """
    Base exception for all citrus kernel errors.

    All subclasses must have a `code` class attribute for
    machine-readable error identification.
    """

    code: str = "CITRUS_KERNEL_ERROR"


# Validation


class ValidationError(CitrusKernelError):
    """
    Input failed domain validation before any write.

    ``field_errors`` is a list of ``{"field": ..., "message": ...}`` dicts,
    one per failing field.
    """

    code: str = "VALIDATION_ERROR"

    def __init__(self, entity_type: str, field_errors: list[dict]):
        self.entity_type = entity_type
        self.field_errors = field_errors
        fields = ", ".join(e["field"] for e in field_errors)
        super().__init__(
            f"Invalid {entity_type}: {len(field_errors)} error(s) ({fields})"
        )


# Authorization


class AuthorizationError(CitrusKernelError):
    """Caller is not authenticated or not allowed to act."""

    code: str = "UNAUTHORIZED"

    def __init__(self, actor_id: str | None, reason: str):
        self.actor_id = actor_id
        self.reason = reason
        super().__init__(f"Unauthorized actor {actor_id}: {reason}")


# Order-related exceptions


class OrderError(CitrusKernelError):
    """Base exception for order lifecycle errors."""

    code: str = "ORDER_ERROR"


class OrderNotFoundError(OrderError):
    """Order with given ID was not found."""

    code: str = "ORDER_NOT_FOUND"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class InvalidTransitionError(OrderError):
    """Requested status is not reachable from the current status."""

    code: str = "INVALID_STATUS_TRANSITION"

    def __init__(
        self,
        order_id: str | None,
        current_status: str,
        requested_status: str,
        message: str | None = None,
    ):
        self.order_id = order_id
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            message
            or f"Invalid status transition {current_status} -> {requested_status}"
            f" for order {order_id}"
        )


class StaleOrderStatusError(InvalidTransitionError):
    """
    The caller's expected status no longer matches the stored status.

    Raised when a caller-supplied expected status is outdated, or when the
    conditional status update matched no row because a concurrent request
    moved the order first.
    """

    code: str = "STALE_ORDER_STATUS"

    def __init__(
        self,
        order_id: str,
        expected_status: str,
        current_status: str,
        requested_status: str,
    ):
        self.expected_status = expected_status
        super().__init__(
            order_id,
            current_status,
            requested_status,
            message=(
                f"Order {order_id} is {current_status}, not {expected_status}; "
                f"cannot move to {requested_status}"
            ),
        )


# Persistence-related exceptions


class PersistenceError(CitrusKernelError):
    """The record store failed a read or write."""

    code: str = "PERSISTENCE_ERROR"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Persistence failure during {operation}: {reason}")


class AuditWriteError(PersistenceError):
    """
    The status history row could not be written after the status update.

    The status update is rolled back with it; the order keeps its previous
    status.
    """

    code: str = "AUDIT_WRITE_FAILED"

    def __init__(self, order_id: str, reason: str):
        self.order_id = order_id
        super().__init__("insert_status_history", reason)


# Immutability-related exceptions


class ImmutabilityError(CitrusKernelError):
    """Base exception for immutability-related errors."""

    code: str = "IMMUTABILITY_ERROR"


class ImmutabilityViolationError(ImmutabilityError):
    """
    Attempted to modify or delete an append-only record.

    Transactions and order status history rows are immutable from
    creation; orders keep their commercial fields fixed.
    """

    code: str = "IMMUTABILITY_VIOLATION"

    def __init__(self, entity_type: str, entity_id: str, reason: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(
            f"Immutability violation on {entity_type} {entity_id}: {reason}"
        )
