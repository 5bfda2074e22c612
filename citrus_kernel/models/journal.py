"""
Module: citrus_kernel.models.journal
Responsibility: ORM persistence for the operations journal -- free-text
    notes and image references written by partners.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/ only.

Invariants enforced:
    - At least one of content or image_urls is non-empty (validated by the
      journal module before insert).
    - image_urls keeps the caller's order.  The references are opaque;
      storing the files themselves is outside this system.
"""

from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from citrus_kernel.db.base import TrackedBase, as_utc
from citrus_kernel.domain.dtos import JournalEntry


class JournalEntryModel(TrackedBase):
    """A journal note by one partner."""

    __tablename__ = "journal_entries"

    __table_args__ = (
        Index("idx_journal_entry_partner", "partner_id"),
        Index("idx_journal_entry_created_at", "created_at"),
    )

    partner_id: Mapped[UUID] = mapped_column(ForeignKey("partners.id"), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_urls: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    def to_dto(self) -> JournalEntry:
        return JournalEntry(
            id=self.id,
            partner_id=self.partner_id,
            content=self.content,
            image_urls=tuple(self.image_urls or ()),
            created_at=as_utc(self.created_at),
        )

    def __repr__(self) -> str:
        return f"<JournalEntryModel {self.partner_id} images={len(self.image_urls or ())}>"
