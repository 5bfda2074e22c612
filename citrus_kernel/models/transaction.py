"""
Module: citrus_kernel.models.transaction
Responsibility: ORM persistence for ledger transactions -- capital
    injections and out-of-pocket expenses recorded by partners.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/ only.

Invariants enforced:
    - Append-only: a transaction is never updated or deleted once flushed
      (ORM listeners in db/immutability.py).
    - amount > 0 (ck_transaction_amount_positive), smallest currency unit.
    - category is one of TransactionCategory (ck_transaction_category).

Audit relevance:
    The transaction table IS the capital ledger.  Every contribution,
    expense and pool figure in reporting is recomputed from these rows.
"""

from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from citrus_kernel.db.base import TrackedBase, as_utc
from citrus_kernel.domain.dtos import Transaction
from citrus_kernel.domain.values import TransactionCategory

_CATEGORY_VALUES = ", ".join(f"'{c.value}'" for c in TransactionCategory)


class TransactionModel(TrackedBase):
    """A single contribution or expense by one partner."""

    __tablename__ = "transactions"

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
        CheckConstraint(
            f"category IN ({_CATEGORY_VALUES})", name="ck_transaction_category"
        ),
        Index("idx_transaction_partner", "partner_id"),
        Index("idx_transaction_category", "category"),
        Index("idx_transaction_created_at", "created_at"),
    )

    partner_id: Mapped[UUID] = mapped_column(ForeignKey("partners.id"), nullable=False)
    amount: Mapped[int] = mapped_column(nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    receipt_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    def to_dto(self) -> Transaction:
        return Transaction(
            id=self.id,
            partner_id=self.partner_id,
            amount=self.amount,
            category=TransactionCategory(self.category),
            description=self.description,
            receipt_url=self.receipt_url,
            created_at=as_utc(self.created_at),
        )

    def __repr__(self) -> str:
        return f"<TransactionModel {self.category} {self.amount}>"
