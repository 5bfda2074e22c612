"""Journal helpers -- pure input validation."""

from __future__ import annotations

from typing import Any, Mapping

from citrus_kernel.domain.dtos import NewJournalEntry
from citrus_kernel.domain.validation import (
    FieldError,
    raise_if_errors,
    validate_optional_str,
    validate_str_list,
)


def validate_new_journal_entry(data: Mapping[str, Any]) -> NewJournalEntry:
    """
    Validate a journal entry.  Needs text, at least one image reference,
    or both.  Image references are opaque strings kept in order.
    """
    errors: list[FieldError] = []
    errors += validate_optional_str(data, "content")
    errors += validate_str_list(data, "image_urls")
    raise_if_errors("journal_entry", errors)

    content = data.get("content") or None
    image_urls = tuple(data.get("image_urls") or ())
    if content is None and not image_urls:
        raise_if_errors(
            "journal_entry",
            [FieldError("content", "an entry needs text or at least one image")],
        )
    return NewJournalEntry(content=content, image_urls=image_urls)
