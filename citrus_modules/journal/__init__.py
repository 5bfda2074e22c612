"""Journal Module: the operations timeline."""

from citrus_modules.journal.helpers import validate_new_journal_entry
from citrus_modules.journal.service import JournalService

__all__ = ["JournalService", "validate_new_journal_entry"]
