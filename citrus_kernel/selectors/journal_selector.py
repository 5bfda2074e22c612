"""
Module: citrus_kernel.selectors.journal_selector
Responsibility: Read access to the operations journal.
Architecture position: Kernel > Selectors.
"""

from sqlalchemy import select

from citrus_kernel.domain.dtos import JournalEntryView
from citrus_kernel.models.journal import JournalEntryModel
from citrus_kernel.models.partner import PartnerModel
from citrus_kernel.selectors.base import BaseSelector
from citrus_kernel.selectors.ledger_selector import UNKNOWN_PARTNER_NAME


class JournalSelector(BaseSelector):
    """Queries over journal entries."""

    def list_entries(self) -> list[JournalEntryView]:
        """All entries, newest first, with the author's name."""
        stmt = (
            select(JournalEntryModel, PartnerModel.name)
            .outerjoin(PartnerModel, PartnerModel.id == JournalEntryModel.partner_id)
            .order_by(JournalEntryModel.created_at.desc(), JournalEntryModel.id)
        )
        return [
            JournalEntryView(entry=entry.to_dto(), partner_name=name or UNKNOWN_PARTNER_NAME)
            for entry, name in self.session.execute(stmt)
        ]
