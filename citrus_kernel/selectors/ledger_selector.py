"""
Module: citrus_kernel.selectors.ledger_selector
Responsibility: Read access to the capital ledger -- transactions and the
    partners who own them.
Architecture position: Kernel > Selectors.

Invariants enforced:
    - Listings are newest first (created_at DESC, id as tiebreaker).
    - A transaction whose partner row is missing is reported with the
      partner name "Unknown" rather than dropped.
    - No stored balances: contribution figures are computed by the caller
      from the full transaction list.
"""

from uuid import UUID

from sqlalchemy import select

from citrus_kernel.domain.dtos import (
    Partner,
    Transaction,
    TransactionFilter,
    TransactionView,
)
from citrus_kernel.models.partner import PartnerModel
from citrus_kernel.models.transaction import TransactionModel
from citrus_kernel.selectors.base import BaseSelector

UNKNOWN_PARTNER_NAME = "Unknown"


class LedgerSelector(BaseSelector):
    """Queries over transactions and partners."""

    def all_transactions(self) -> list[Transaction]:
        """Every transaction, oldest first.  Input for aggregation."""
        rows = self.session.scalars(
            select(TransactionModel).order_by(
                TransactionModel.created_at, TransactionModel.id
            )
        )
        return [row.to_dto() for row in rows]

    def list_transactions(
        self, filters: TransactionFilter | None = None
    ) -> list[TransactionView]:
        """Transactions matching every active filter, newest first."""
        filters = filters or TransactionFilter()
        stmt = (
            select(TransactionModel, PartnerModel.name)
            .outerjoin(PartnerModel, PartnerModel.id == TransactionModel.partner_id)
            .order_by(TransactionModel.created_at.desc(), TransactionModel.id)
        )
        if filters.category is not None:
            stmt = stmt.where(TransactionModel.category == filters.category.value)
        if filters.partner_id is not None:
            stmt = stmt.where(TransactionModel.partner_id == filters.partner_id)
        if filters.start is not None:
            stmt = stmt.where(TransactionModel.created_at >= filters.start)
        if filters.end is not None:
            stmt = stmt.where(TransactionModel.created_at <= filters.end)

        return [
            TransactionView(
                transaction=txn.to_dto(),
                partner_name=name or UNKNOWN_PARTNER_NAME,
            )
            for txn, name in self.session.execute(stmt)
        ]

    def get_transaction(self, transaction_id: UUID) -> TransactionView | None:
        row = self.session.execute(
            select(TransactionModel, PartnerModel.name)
            .outerjoin(PartnerModel, PartnerModel.id == TransactionModel.partner_id)
            .where(TransactionModel.id == transaction_id)
        ).first()
        if row is None:
            return None
        txn, name = row
        return TransactionView(
            transaction=txn.to_dto(), partner_name=name or UNKNOWN_PARTNER_NAME
        )

    def list_partners(self) -> list[Partner]:
        """All partners by name, without derived figures."""
        rows = self.session.scalars(
            select(PartnerModel).order_by(PartnerModel.name, PartnerModel.id)
        )
        return [row.to_dto() for row in rows]

    def get_partner(self, partner_id: UUID) -> Partner | None:
        row = self.session.get(PartnerModel, partner_id)
        return row.to_dto() if row is not None else None

    def partner_exists(self, partner_id: UUID) -> bool:
        return self.session.scalar(
            select(PartnerModel.id).where(PartnerModel.id == partner_id)
        ) is not None
