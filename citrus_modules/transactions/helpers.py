"""
Transaction helpers -- pure input validation and filter parsing.

ZERO I/O.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import UUID

from citrus_kernel.domain.dtos import NewTransaction, TransactionFilter
from citrus_kernel.domain.validation import (
    FieldError,
    raise_if_errors,
    validate_enum,
    validate_non_empty_str,
    validate_optional_str,
    validate_positive_int,
)
from citrus_kernel.domain.values import ALL, TransactionCategory


def validate_new_transaction(data: Mapping[str, Any]) -> NewTransaction:
    """Validate the fields of a transaction about to be recorded."""
    errors: list[FieldError] = []
    errors += validate_positive_int(data, "amount")
    errors += validate_enum(data, "category", TransactionCategory)
    errors += validate_non_empty_str(data, "description")
    errors += validate_optional_str(data, "receipt_url")
    raise_if_errors("transaction", errors)

    return NewTransaction(
        amount=data["amount"],
        category=TransactionCategory(data["category"]),
        description=data["description"],
        receipt_url=data.get("receipt_url") or None,
    )


def _is_disabled(value: Any) -> bool:
    return value is None or value == ALL


def parse_transaction_filter(
    category: TransactionCategory | str | None = None,
    partner_id: UUID | str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> TransactionFilter:
    """
    Build a TransactionFilter from loosely typed listing parameters.

    ``None`` or ``"all"`` disables the category and partner predicates.
    The date range is inclusive at both ends.
    """
    errors: list[FieldError] = []

    parsed_category: TransactionCategory | None = None
    if not _is_disabled(category):
        errors += validate_enum({"category": category}, "category", TransactionCategory)
        if not errors:
            parsed_category = TransactionCategory(category)

    parsed_partner: UUID | None = None
    if not _is_disabled(partner_id):
        if isinstance(partner_id, UUID):
            parsed_partner = partner_id
        else:
            try:
                parsed_partner = UUID(str(partner_id))
            except ValueError:
                errors.append(FieldError("partner_id", "partner_id must be a UUID"))

    bounds: dict[str, datetime | None] = {"start": None, "end": None}
    for name, value in (("start", start), ("end", end)):
        if value is None:
            continue
        if not isinstance(value, datetime):
            errors.append(FieldError(name, f"{name} must be a datetime"))
        elif value.tzinfo is None or value.utcoffset() is None:
            errors.append(FieldError(name, f"{name} must be timezone-aware"))
        else:
            # Stored timestamps are UTC; SQLite compares them as text.
            bounds[name] = value.astimezone(timezone.utc)
    if (
        bounds["start"] is not None
        and bounds["end"] is not None
        and bounds["start"] > bounds["end"]
    ):
        errors.append(FieldError("end", "end must not be before start"))

    raise_if_errors("transaction_filter", errors)
    return TransactionFilter(
        category=parsed_category,
        partner_id=parsed_partner,
        start=bounds["start"],
        end=bounds["end"],
    )
