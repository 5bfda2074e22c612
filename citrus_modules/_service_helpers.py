"""
Shared helpers for module services.

Used by citrus_modules/*/service.py to reduce duplication around the
transaction boundary: translating store failures into PersistenceError,
committing a unit of work, and checking the acting partner.

Architecture: Modules layer. Imports only from citrus_kernel.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from citrus_kernel.exceptions import AuthorizationError, PersistenceError
from citrus_kernel.logging_config import get_logger
from citrus_kernel.selectors.ledger_selector import LedgerSelector

logger = get_logger("modules.service_helpers")


@contextmanager
def persistence_guard(session: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise store failures as PersistenceError.

    Citrus errors raised inside the block roll back too but propagate
    unchanged.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(
            "persistence_operation_failed",
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        raise PersistenceError(operation, str(exc)) from exc
    except Exception:
        session.rollback()
        raise


def commit_or_rollback(session: Session, operation: str) -> None:
    """Commit the unit of work; a failed commit is rolled back and wrapped."""
    with persistence_guard(session, f"{operation}.commit"):
        session.commit()


def require_partner(session: Session, actor_id: UUID | None) -> UUID:
    """Return ``actor_id`` if it names a registered partner.

    Raises:
        AuthorizationError: No actor, or the actor is not a partner.
        PersistenceError: The partner lookup failed.
    """
    if actor_id is None:
        raise AuthorizationError(None, "no authenticated actor")
    with persistence_guard(session, "partner_lookup"):
        exists = LedgerSelector(session).partner_exists(actor_id)
    if not exists:
        logger.warning(
            "actor_not_a_partner",
            extra={"actor_id": str(actor_id)},
        )
        raise AuthorizationError(str(actor_id), "actor is not a registered partner")
    return actor_id
