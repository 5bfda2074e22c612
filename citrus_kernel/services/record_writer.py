"""
RecordWriter -- the write half of the persistence gateway.

Responsibility:
    Single-row inserts for partners, transactions, orders, status history
    and journal entries, plus the one permitted update: an order status
    change conditioned on the current stored status.

Architecture position:
    Kernel > Services.  Imports from models/ and domain/.  Flush-only
    (see services/base.py).

Invariants enforced:
    - update_order_status_if_current issues exactly one
      ``UPDATE orders SET status = :new WHERE id = :id AND status = :current``
      and reports whether a row matched.  Two concurrent requests from the
      same state cannot both succeed.
    - Inserts take their timestamp from the caller (an injected Clock).

Failure modes:
    - sqlalchemy.exc.SQLAlchemyError propagates to the calling module
      service, which rolls back and raises PersistenceError.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import update

from citrus_kernel.domain.dtos import (
    JournalEntry,
    NewJournalEntry,
    NewOrder,
    NewTransaction,
    Order,
    OrderStatusChange,
    Partner,
    Transaction,
)
from citrus_kernel.domain.values import OrderStatus
from citrus_kernel.logging_config import get_logger
from citrus_kernel.models.journal import JournalEntryModel
from citrus_kernel.models.order import OrderModel, OrderStatusHistoryModel
from citrus_kernel.models.partner import PartnerModel
from citrus_kernel.models.transaction import TransactionModel
from citrus_kernel.services.base import BaseService

logger = get_logger("services.record_writer")


class RecordWriter(BaseService):
    """Flush-only writer for every persisted entity."""

    def insert_partner(self, name: str, email: str, created_at: datetime) -> Partner:
        row = PartnerModel(name=name, email=email, created_at=created_at)
        self.session.add(row)
        self.session.flush()
        return row.to_dto()

    def insert_transaction(
        self,
        partner_id: UUID,
        fields: NewTransaction,
        created_at: datetime,
    ) -> Transaction:
        row = TransactionModel(
            partner_id=partner_id,
            amount=fields.amount,
            category=fields.category.value,
            description=fields.description,
            receipt_url=fields.receipt_url,
            created_at=created_at,
        )
        self.session.add(row)
        self.session.flush()
        return row.to_dto()

    def insert_order(
        self,
        fields: NewOrder,
        created_by: UUID,
        created_at: datetime,
    ) -> Order:
        row = OrderModel(
            customer_name=fields.customer_name,
            product_variant=fields.product_variant.value,
            quantity=fields.quantity,
            sell_price=fields.sell_price,
            status=OrderStatus.PENDING.value,
            created_by=created_by,
            created_at=created_at,
        )
        self.session.add(row)
        self.session.flush()
        return row.to_dto()

    def update_order_status_if_current(
        self,
        order_id: UUID,
        current: OrderStatus,
        new: OrderStatus,
        updated_at: datetime,
    ) -> bool:
        """Set the new status only if the stored status is still ``current``.

        Returns True when exactly one row was updated.
        """
        result = self.session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == current.value)
            .values(status=new.value, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        # Loaded instances keep the old status until refreshed; order
        # selectors read with populate_existing.
        matched = result.rowcount == 1
        logger.debug(
            "order_status_conditional_update",
            extra={
                "order_id": str(order_id),
                "from_status": current.value,
                "to_status": new.value,
                "matched": matched,
            },
        )
        return matched

    def insert_status_history(
        self,
        order_id: UUID,
        old_status: OrderStatus,
        new_status: OrderStatus,
        changed_by: UUID,
        changed_at: datetime,
    ) -> OrderStatusChange:
        row = OrderStatusHistoryModel(
            order_id=order_id,
            old_status=old_status.value,
            new_status=new_status.value,
            changed_by=changed_by,
            changed_at=changed_at,
        )
        self.session.add(row)
        self.session.flush()
        return row.to_dto()

    def insert_journal_entry(
        self,
        partner_id: UUID,
        fields: NewJournalEntry,
        created_at: datetime,
    ) -> JournalEntry:
        row = JournalEntryModel(
            partner_id=partner_id,
            content=fields.content,
            image_urls=list(fields.image_urls) or None,
            created_at=created_at,
        )
        self.session.add(row)
        self.session.flush()
        return row.to_dto()
