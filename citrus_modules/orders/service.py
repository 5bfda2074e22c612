"""
Orders Module Service (``citrus_modules.orders.service``).

Responsibility
--------------
Order creation, listing with net margin, and the order status state
machine: validating a requested status against the stored one, applying
it with a conditional update, and appending the status history row.

Architecture position
---------------------
**Modules layer** -- thin glue.  Reads through ``OrderSelector``, writes
through the flush-only ``RecordWriter``, validates with the pure functions
in ``helpers.py`` and ``workflows.py``.

Invariants enforced
-------------------
* Each public write method owns the transaction boundary (commit on
  success, rollback on any failure).
* A transition is validated against the *stored* status, never the
  caller's belief.
* The status update and its history row are committed together or not at
  all.  The update is conditioned on the stored status, so of two
  concurrent requests from the same state only one can succeed.
* A rejected transition writes nothing.

Failure modes
-------------
* Unknown order  -> ``OrderNotFoundError``.
* Pair outside the transition table  -> ``InvalidTransitionError``.
* Caller's expected status outdated, or a concurrent writer moved the
  order first  -> ``StaleOrderStatusError``.
* History insert failed  -> rollback, ``AuditWriteError``.
* Any other store failure  -> rollback, ``PersistenceError``.

Audit relevance
---------------
``order_transition_applied`` / ``order_transition_rejected`` are logged
for every request; every accepted transition leaves one
``order_status_history`` row with the acting partner and timestamp.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from citrus_kernel.domain.clock import Clock, SystemClock
from citrus_kernel.domain.dtos import Order, OrderStatusChange, OrderView
from citrus_kernel.domain.values import OrderStatus
from citrus_kernel.exceptions import (
    AuditWriteError,
    InvalidTransitionError,
    OrderNotFoundError,
    StaleOrderStatusError,
)
from citrus_kernel.logging_config import LogContext, get_logger
from citrus_kernel.selectors.order_selector import OrderSelector
from citrus_kernel.services.record_writer import RecordWriter
from citrus_modules._service_helpers import (
    commit_or_rollback,
    persistence_guard,
    require_partner,
)
from citrus_modules.orders.config import OrdersConfig
from citrus_modules.orders.helpers import (
    parse_order_status,
    parse_status_filter,
    validate_new_order,
)
from citrus_modules.orders.workflows import validate_transition
from citrus_modules.reporting.calculations import net_margin

logger = get_logger("modules.orders.service")


class OrderService:
    """
    Order lifecycle operations.

    Contract
    --------
    * ``create_order`` and ``apply_transition`` return the persisted
      ``Order`` DTO or raise a typed ``CitrusKernelError``.
    * Read methods never mutate.

    Guarantees
    ----------
    * Session is committed only after every write of the operation
      succeeded; otherwise rolled back.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: OrdersConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or OrdersConfig.with_defaults()
        self._orders = OrderSelector(session)
        self._writer = RecordWriter(session)

    # =========================================================================
    # Creation
    # =========================================================================

    def create_order(self, fields: Mapping[str, Any], actor_id: UUID | None) -> Order:
        """Validate and persist a new order in ``pending`` status."""
        actor = require_partner(self._session, actor_id)
        new_order = validate_new_order(fields)

        with persistence_guard(self._session, "insert_order"):
            order = self._writer.insert_order(new_order, actor, self._clock.now())
        commit_or_rollback(self._session, "create_order")

        logger.info(
            "order_created",
            extra={
                "order_id": str(order.id),
                "actor_id": str(actor),
                "product_variant": order.product_variant.value,
                "quantity": order.quantity,
                "sell_price": order.sell_price,
            },
        )
        return order

    # =========================================================================
    # Status transitions
    # =========================================================================

    def apply_transition(
        self,
        order_id: UUID,
        requested_status: OrderStatus | str,
        actor_id: UUID | None,
        expected_status: OrderStatus | str | None = None,
    ) -> Order:
        """
        Move an order to ``requested_status``.

        Args:
            expected_status: The status the caller believes the order is in.
                If given and outdated, the request is rejected as stale.

        Returns:
            The order as stored after the transition.
        """
        actor = require_partner(self._session, actor_id)
        requested = parse_order_status(requested_status)
        expected = parse_order_status(expected_status) if expected_status is not None else None

        with LogContext.bind(order_id=str(order_id), actor_id=str(actor)):
            with persistence_guard(self._session, "read_order_status"):
                current = self._orders.current_status(order_id)
            if current is None:
                raise OrderNotFoundError(str(order_id))

            if expected is not None and expected is not current:
                self._reject(order_id, current, requested, "stale_expected_status")
                raise StaleOrderStatusError(
                    str(order_id), expected.value, current.value, requested.value
                )

            try:
                transition = validate_transition(current, requested, str(order_id))
            except InvalidTransitionError:
                self._reject(order_id, current, requested, "not_in_transition_table")
                raise

            now = self._clock.now()
            with persistence_guard(self._session, "update_order_status"):
                matched = self._writer.update_order_status_if_current(
                    order_id, current, requested, now
                )
                if not matched:
                    self._session.rollback()
                    stored = self._orders.current_status(order_id)

            if not matched:
                self._reject(order_id, current, requested, "concurrent_update")
                raise StaleOrderStatusError(
                    str(order_id),
                    current.value,
                    stored.value if stored is not None else current.value,
                    requested.value,
                )

            self._insert_history(order_id, current, requested, actor, now)
            commit_or_rollback(self._session, "apply_transition")

            with persistence_guard(self._session, "read_order"):
                order = self._orders.get_order(order_id)

            logger.info(
                "order_transition_applied",
                extra={
                    "action": transition.action,
                    "from_status": current.value,
                    "to_status": requested.value,
                },
            )
        return order

    def _insert_history(
        self,
        order_id: UUID,
        old_status: OrderStatus,
        new_status: OrderStatus,
        actor: UUID,
        changed_at: datetime,
    ) -> None:
        try:
            self._writer.insert_status_history(
                order_id, old_status, new_status, actor, changed_at
            )
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error(
                "order_transition_audit_write_failed",
                extra={
                    "from_status": old_status.value,
                    "to_status": new_status.value,
                    "error_type": type(exc).__name__,
                },
            )
            raise AuditWriteError(str(order_id), str(exc)) from exc

    def _reject(
        self,
        order_id: UUID,
        current: OrderStatus,
        requested: OrderStatus,
        reason: str,
    ) -> None:
        logger.warning(
            "order_transition_rejected",
            extra={
                "from_status": current.value,
                "to_status": requested.value,
                "reason": reason,
            },
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def list_orders(self, status: OrderStatus | str | None = None) -> list[OrderView]:
        """Orders newest first with net margin.  ``"all"`` or None lists every order."""
        status_filter = parse_status_filter(status)
        with persistence_guard(self._session, "list_orders"):
            orders = self._orders.list_orders(status_filter)
        return [
            OrderView(
                order=o,
                net_margin=net_margin(
                    o.product_variant, o.sell_price, o.quantity, self._config.unit_costs
                ),
            )
            for o in orders
        ]

    def get_order(self, order_id: UUID) -> Order | None:
        with persistence_guard(self._session, "get_order"):
            return self._orders.get_order(order_id)

    def list_status_history(self, order_id: UUID | None = None) -> list[OrderStatusChange]:
        """Status history oldest first, for one order or all of them."""
        with persistence_guard(self._session, "list_status_history"):
            return self._orders.list_status_history(order_id)
