"""Transactions Module: capital contributions and expenses."""

from citrus_modules.transactions.helpers import (
    parse_transaction_filter,
    validate_new_transaction,
)
from citrus_modules.transactions.service import TransactionService

__all__ = [
    "TransactionService",
    "parse_transaction_filter",
    "validate_new_transaction",
]
