"""
Module: citrus_kernel.selectors.order_selector
Responsibility: Read access to orders and their status history.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - current_status() always reads the persisted row; it is the value the
      order state machine validates against, never the caller's belief.
    - Status history is returned oldest first (the order transitions
      happened in).
"""

from uuid import UUID

from sqlalchemy import select

from citrus_kernel.domain.dtos import Order, OrderStatusChange
from citrus_kernel.domain.values import OrderStatus
from citrus_kernel.models.order import OrderModel, OrderStatusHistoryModel
from citrus_kernel.selectors.base import BaseSelector


class OrderSelector(BaseSelector):
    """Queries over orders and order status history."""

    def all_orders(self) -> list[Order]:
        """Every order, oldest first.  Input for aggregation."""
        rows = self.session.scalars(
            select(OrderModel)
            .order_by(OrderModel.created_at, OrderModel.id)
            .execution_options(populate_existing=True)
        )
        return [row.to_dto() for row in rows]

    def list_orders(self, status: OrderStatus | None = None) -> list[Order]:
        """Orders newest first, optionally restricted to one status."""
        stmt = (
            select(OrderModel)
            .order_by(OrderModel.created_at.desc(), OrderModel.id)
            .execution_options(populate_existing=True)
        )
        if status is not None:
            stmt = stmt.where(OrderModel.status == status.value)
        return [row.to_dto() for row in self.session.scalars(stmt)]

    def get_order(self, order_id: UUID) -> Order | None:
        row = self.session.get(OrderModel, order_id, populate_existing=True)
        return row.to_dto() if row is not None else None

    def current_status(self, order_id: UUID) -> OrderStatus | None:
        value = self.session.scalar(
            select(OrderModel.status).where(OrderModel.id == order_id)
        )
        return OrderStatus(value) if value is not None else None

    def list_status_history(self, order_id: UUID | None = None) -> list[OrderStatusChange]:
        stmt = select(OrderStatusHistoryModel).order_by(
            OrderStatusHistoryModel.changed_at, OrderStatusHistoryModel.id
        )
        if order_id is not None:
            stmt = stmt.where(OrderStatusHistoryModel.order_id == order_id)
        return [row.to_dto() for row in self.session.scalars(stmt)]
