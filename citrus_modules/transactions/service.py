"""
Transactions Module Service (``citrus_modules.transactions.service``).

Responsibility
--------------
Records capital contributions and expenses for the acting partner and
lists them with the owner's name.

Invariants enforced
-------------------
* The owning partner is always the acting partner.
* Transactions are append-only; this service never updates or deletes.
* Each write owns its transaction boundary.

Failure modes
-------------
* Missing or unknown actor  -> ``AuthorizationError``.
* Invalid fields  -> ``ValidationError`` before any write.
* Store failure  -> rollback, ``PersistenceError``.
"""

from __future__ import annotations

from typing import Any, Mapping
from uuid import UUID

from sqlalchemy.orm import Session

from citrus_kernel.domain.clock import Clock, SystemClock
from citrus_kernel.domain.dtos import Transaction, TransactionFilter, TransactionView
from citrus_kernel.logging_config import get_logger
from citrus_kernel.selectors.ledger_selector import LedgerSelector
from citrus_kernel.services.record_writer import RecordWriter
from citrus_modules._service_helpers import (
    commit_or_rollback,
    persistence_guard,
    require_partner,
)
from citrus_modules.transactions.helpers import validate_new_transaction

logger = get_logger("modules.transactions.service")


class TransactionService:
    """Capital ledger writes and listings."""

    def __init__(self, session: Session, clock: Clock | None = None):
        self._session = session
        self._clock = clock or SystemClock()
        self._ledger = LedgerSelector(session)
        self._writer = RecordWriter(session)

    def create_transaction(
        self, fields: Mapping[str, Any], actor_id: UUID | None
    ) -> Transaction:
        """Record a transaction owned by the acting partner."""
        actor = require_partner(self._session, actor_id)
        new_txn = validate_new_transaction(fields)

        with persistence_guard(self._session, "insert_transaction"):
            txn = self._writer.insert_transaction(actor, new_txn, self._clock.now())
        commit_or_rollback(self._session, "create_transaction")

        logger.info(
            "transaction_recorded",
            extra={
                "transaction_id": str(txn.id),
                "partner_id": str(actor),
                "category": txn.category.value,
                "amount": txn.amount,
            },
        )
        return txn

    def list_transactions(
        self, filters: TransactionFilter | None = None
    ) -> list[TransactionView]:
        """Transactions matching every active filter, newest first."""
        with persistence_guard(self._session, "list_transactions"):
            return self._ledger.list_transactions(filters)

    def get_transaction(self, transaction_id: UUID) -> TransactionView | None:
        with persistence_guard(self._session, "get_transaction"):
            return self._ledger.get_transaction(transaction_id)
