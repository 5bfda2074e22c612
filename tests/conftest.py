"""
Pytest fixtures for the citrus ledger test suite.

Provides:
- A fresh in-memory SQLite database per test (tables created, append-only
  listeners registered)
- Deterministic clock
- Registered partners to act as authenticated actors
- Captured structured logs

Environment Variables:
- DATABASE_URL: run against another database (e.g. PostgreSQL) instead of
  in-memory SQLite.  Tables are dropped and recreated around every test.
"""

import json
import logging
import os
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from citrus_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from citrus_kernel.db.immutability import (
    register_immutability_listeners,
    unregister_immutability_listeners,
)
from citrus_kernel.domain.clock import DeterministicClock
from citrus_kernel.domain.dtos import Partner
from citrus_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from citrus_modules.journal.service import JournalService
from citrus_modules.orders.service import OrderService
from citrus_modules.partners.service import PartnerService
from citrus_modules.reporting.service import ReportingService
from citrus_modules.transactions.service import TransactionService

DEFAULT_DATABASE_URL = "sqlite:///:memory:"


def get_database_url() -> str:
    return os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture citrus_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, order_service):
            order_service.create_order(...)
            logs = captured_logs()
            assert any(r["message"] == "order_created" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("citrus_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def _immutability_listeners():
    register_immutability_listeners()
    yield
    unregister_immutability_listeners()


@pytest.fixture
def db_engine():
    eng = init_engine_from_url(get_database_url(), echo=False)
    drop_tables()
    create_tables()
    yield eng
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    sess = get_session()
    yield sess
    sess.rollback()
    sess.close()


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


# =============================================================================
# Services and actors
# =============================================================================


@pytest.fixture
def partner_service(session, clock) -> PartnerService:
    return PartnerService(session, clock=clock)


@pytest.fixture
def transaction_service(session, clock) -> TransactionService:
    return TransactionService(session, clock=clock)


@pytest.fixture
def order_service(session, clock) -> OrderService:
    return OrderService(session, clock=clock)


@pytest.fixture
def journal_service(session, clock) -> JournalService:
    return JournalService(session, clock=clock)


@pytest.fixture
def reporting_service(session, clock) -> ReportingService:
    return ReportingService(session, clock=clock)


@pytest.fixture
def partners(partner_service, clock) -> list[Partner]:
    """Three registered partners, in name order."""
    registered = []
    for name in ("Amira", "Bilal", "Chloe"):
        registered.append(
            partner_service.register_partner(name, f"{name.lower()}@citrus.test")
        )
        clock.tick()
    return registered


@pytest.fixture
def actor_id(partners):
    """ID of a registered partner, used as the authenticated actor."""
    return partners[0].id
