"""
Partners Module Service (``citrus_modules.partners.service``).

Registers partners and looks them up.  Contribution figures are not stored
on the partner; ``ReportingService.get_partner_ledger`` derives them.

Failure modes:
    - Invalid name or email  -> ``ValidationError``.
    - Duplicate email  -> ``ValidationError`` on ``email``.
    - Other store failure  -> rollback, ``PersistenceError``.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from citrus_kernel.domain.clock import Clock, SystemClock
from citrus_kernel.domain.dtos import Partner
from citrus_kernel.domain.validation import FieldError, raise_if_errors
from citrus_kernel.logging_config import get_logger
from citrus_kernel.selectors.ledger_selector import LedgerSelector
from citrus_kernel.services.record_writer import RecordWriter
from citrus_modules._service_helpers import commit_or_rollback, persistence_guard
from citrus_modules.partners.helpers import validate_partner_fields

logger = get_logger("modules.partners.service")


class PartnerService:
    """Partner registration and lookup."""

    def __init__(self, session: Session, clock: Clock | None = None):
        self._session = session
        self._clock = clock or SystemClock()
        self._ledger = LedgerSelector(session)
        self._writer = RecordWriter(session)

    def register_partner(self, name: str, email: str) -> Partner:
        name, email = validate_partner_fields(name, email)

        with persistence_guard(self._session, "insert_partner"):
            try:
                partner = self._writer.insert_partner(name, email, self._clock.now())
            except IntegrityError:
                self._session.rollback()
                raise_if_errors(
                    "partner", [FieldError("email", "email is already registered")]
                )
                raise
        commit_or_rollback(self._session, "register_partner")

        logger.info(
            "partner_registered",
            extra={"partner_id": str(partner.id)},
        )
        return partner

    def get_partner(self, partner_id: UUID) -> Partner | None:
        with persistence_guard(self._session, "get_partner"):
            return self._ledger.get_partner(partner_id)

    def list_partners(self) -> list[Partner]:
        with persistence_guard(self._session, "list_partners"):
            return self._ledger.list_partners()
