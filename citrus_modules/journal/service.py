"""
Journal Module Service (``citrus_modules.journal.service``).

Append-only operations journal: partners post free-text notes and image
references; everyone reads the timeline newest first.
"""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from sqlalchemy.orm import Session

from citrus_kernel.domain.clock import Clock, SystemClock
from citrus_kernel.domain.dtos import JournalEntry, JournalEntryView
from citrus_kernel.logging_config import get_logger
from citrus_kernel.selectors.journal_selector import JournalSelector
from citrus_kernel.services.record_writer import RecordWriter
from citrus_modules._service_helpers import (
    commit_or_rollback,
    persistence_guard,
    require_partner,
)
from citrus_modules.journal.helpers import validate_new_journal_entry

logger = get_logger("modules.journal.service")


class JournalService:
    """Journal writes and the timeline."""

    def __init__(self, session: Session, clock: Clock | None = None):
        self._session = session
        self._clock = clock or SystemClock()
        self._journal = JournalSelector(session)
        self._writer = RecordWriter(session)

    def create_entry(self, fields: Mapping[str, Any], actor_id: UUID | None) -> JournalEntry:
        """Write an entry authored by the acting partner."""
        actor = require_partner(self._session, actor_id)
        new_entry = validate_new_journal_entry(fields)

        with persistence_guard(self._session, "insert_journal_entry"):
            entry = self._writer.insert_journal_entry(actor, new_entry, self._clock.now())
        commit_or_rollback(self._session, "create_journal_entry")

        logger.info(
            "journal_entry_created",
            extra={
                "entry_id": str(entry.id),
                "partner_id": str(actor),
                "image_count": len(entry.image_urls),
            },
        )
        return entry

    def list_entries(self) -> list[JournalEntryView]:
        with persistence_guard(self._session, "list_journal_entries"):
            return self._journal.list_entries()
