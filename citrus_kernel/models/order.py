"""
Module: citrus_kernel.models.order
Responsibility: ORM persistence for customer orders and their status
    history (the audit trail of accepted transitions).
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/ only.

Invariants enforced:
    - quantity > 0 and sell_price >= 0 (check constraints).
    - customer_name, product_variant, quantity and sell_price never change
      after creation (ORM listener in db/immutability.py).
    - status changes only through RecordWriter.update_order_status_if_current,
      a single UPDATE conditioned on the current status.
    - OrderStatusHistoryModel rows are append-only.

Failure modes:
    - IntegrityError on a check-constraint violation.  Services validate
      before writing, so this indicates a bypassed validation.

Audit relevance:
    One OrderStatusHistoryModel row exists per accepted transition, with
    the acting partner and timestamp.  Revenue recognition in reporting
    depends on the status column, so the history explains every figure.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from citrus_kernel.db.base import Base, TrackedBase, as_utc
from citrus_kernel.domain.dtos import Order, OrderStatusChange
from citrus_kernel.domain.values import OrderStatus, ProductVariant

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in OrderStatus)
_VARIANT_VALUES = ", ".join(f"'{v.value}'" for v in ProductVariant)


class OrderModel(TrackedBase):
    """A customer order.  New orders always start as ``pending``."""

    __tablename__ = "orders"

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_quantity_positive"),
        CheckConstraint("sell_price >= 0", name="ck_order_sell_price_non_negative"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_order_status"),
        CheckConstraint(
            f"product_variant IN ({_VARIANT_VALUES})", name="ck_order_variant"
        ),
        Index("idx_order_status", "status"),
        Index("idx_order_created_at", "created_at"),
    )

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_variant: Mapped[str] = mapped_column(String(10), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False)
    sell_price: Mapped[int] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OrderStatus.PENDING.value
    )
    created_by: Mapped[UUID] = mapped_column(ForeignKey("partners.id"), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(nullable=True)

    def to_dto(self) -> Order:
        return Order(
            id=self.id,
            customer_name=self.customer_name,
            product_variant=ProductVariant(self.product_variant),
            quantity=self.quantity,
            sell_price=self.sell_price,
            status=OrderStatus(self.status),
            created_by=self.created_by,
            created_at=as_utc(self.created_at),
        )

    def __repr__(self) -> str:
        return (
            f"<OrderModel {self.customer_name} {self.quantity}x{self.product_variant}"
            f" [{self.status}]>"
        )


class OrderStatusHistoryModel(Base):
    """One accepted order status transition."""

    __tablename__ = "order_status_history"

    __table_args__ = (
        Index("idx_order_status_history_order", "order_id"),
    )

    order_id: Mapped[UUID] = mapped_column(ForeignKey("orders.id"), nullable=False)
    old_status: Mapped[str] = mapped_column(String(20), nullable=False)
    new_status: Mapped[str] = mapped_column(String(20), nullable=False)
    changed_by: Mapped[UUID] = mapped_column(nullable=False)
    changed_at: Mapped[datetime] = mapped_column(nullable=False)

    def to_dto(self) -> OrderStatusChange:
        return OrderStatusChange(
            id=self.id,
            order_id=self.order_id,
            old_status=OrderStatus(self.old_status),
            new_status=OrderStatus(self.new_status),
            changed_by=self.changed_by,
            changed_at=as_utc(self.changed_at),
        )

    def __repr__(self) -> str:
        return f"<OrderStatusHistoryModel {self.order_id} {self.old_status}->{self.new_status}>"
