"""Selectors for the citrus kernel (read side)."""

from citrus_kernel.selectors.journal_selector import JournalSelector
from citrus_kernel.selectors.ledger_selector import LedgerSelector
from citrus_kernel.selectors.order_selector import OrderSelector

__all__ = [
    "JournalSelector",
    "LedgerSelector",
    "OrderSelector",
]
