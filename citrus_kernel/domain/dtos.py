"""
Data Transfer Objects for the citrus kernel.

Responsibility:
    Frozen dataclasses passed between the persistence gateway (models,
    selectors) and the modules.  ORM instances never leave the kernel;
    every read returns one of these.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.  May import domain/values.py only.

Invariants enforced:
    - All DTOs are frozen.
    - Amounts are int (smallest currency unit); ratios are Decimal.
    - Partner's derived fields are never persisted; they are filled in by
      the ledger aggregation on every read.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from citrus_kernel.domain.values import (
    OrderStatus,
    ProductVariant,
    TransactionCategory,
)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


def to_plain_dict(dto: Any) -> dict[str, Any]:
    """Shallow JSON-friendly dict of a DTO's fields."""
    return {f.name: _plain(getattr(dto, f.name)) for f in fields(dto)}


# =============================================================================
# Ledger records
# =============================================================================


@dataclass(frozen=True)
class Transaction:
    """A capital contribution or out-of-pocket expense by one partner."""

    id: UUID
    partner_id: UUID
    amount: int
    category: TransactionCategory
    description: str
    receipt_url: str | None
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


@dataclass(frozen=True)
class TransactionView:
    """A transaction joined with the owning partner's display name."""

    transaction: Transaction
    partner_name: str

    def to_dict(self) -> dict[str, Any]:
        return {**self.transaction.to_dict(), "partner_name": self.partner_name}


@dataclass(frozen=True)
class TransactionFilter:
    """Predicates for listing transactions.  ``None`` disables a predicate."""

    category: TransactionCategory | None = None
    partner_id: UUID | None = None
    start: datetime | None = None
    end: datetime | None = None


@dataclass(frozen=True)
class Partner:
    """A partner, with contribution figures derived from the transaction set."""

    id: UUID
    name: str
    email: str
    total_contribution: int = 0
    total_expenses: int = 0
    contribution_percentage: Decimal = Decimal("0")

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


# =============================================================================
# Orders
# =============================================================================


@dataclass(frozen=True)
class Order:
    """A customer order for boxes of one product variant."""

    id: UUID
    customer_name: str
    product_variant: ProductVariant
    quantity: int
    sell_price: int
    status: OrderStatus
    created_by: UUID
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


@dataclass(frozen=True)
class OrderView:
    """An order with its computed net margin."""

    order: Order
    net_margin: int

    def to_dict(self) -> dict[str, Any]:
        return {**self.order.to_dict(), "net_margin": self.net_margin}


@dataclass(frozen=True)
class OrderStatusChange:
    """One accepted order status transition (audit record)."""

    id: UUID
    order_id: UUID
    old_status: OrderStatus
    new_status: OrderStatus
    changed_by: UUID
    changed_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


# =============================================================================
# Journal
# =============================================================================


@dataclass(frozen=True)
class JournalEntry:
    """A free-text and/or image note in the operations journal."""

    id: UUID
    partner_id: UUID
    content: str | None
    image_urls: tuple[str, ...]
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


@dataclass(frozen=True)
class JournalEntryView:
    """A journal entry joined with the author's display name."""

    entry: JournalEntry
    partner_name: str

    def to_dict(self) -> dict[str, Any]:
        return {**self.entry.to_dict(), "partner_name": self.partner_name}


# =============================================================================
# Validated inputs
# =============================================================================


@dataclass(frozen=True)
class NewTransaction:
    """Validated fields for a transaction about to be recorded."""

    amount: int
    category: TransactionCategory
    description: str
    receipt_url: str | None = None


@dataclass(frozen=True)
class NewOrder:
    """Validated fields for an order about to be created."""

    customer_name: str
    product_variant: ProductVariant
    quantity: int
    sell_price: int


@dataclass(frozen=True)
class NewJournalEntry:
    """Validated fields for a journal entry about to be written."""

    content: str | None
    image_urls: tuple[str, ...]
