"""
Reporting Module Service (``citrus_modules.reporting.service``).

Responsibility
--------------
Produces the dashboard snapshot and the partner ledger view by reading the
full transaction, order and partner sets through kernel selectors and
handing them to the pure builders in ``statements.py``.  This is a
**read-only** service.

Architecture position
---------------------
**Modules layer** -- thin glue.  Constructor: ``session`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- no mutations.
* Every call re-reads what it needs; nothing is cached between calls.
* A failed read yields ``ReportResult.unavailable(...)``, never a partially
  filled snapshot.

Failure modes
-------------
* Selector query failure  -> session rolled back, result status
  UNAVAILABLE with code ``PERSISTENCE_ERROR``, ``dashboard_snapshot_unavailable``
  logged.

Consistency
-----------
Reads are taken back to back in one session without a snapshot
transaction.  Under concurrent writes the figures are best effort: an
order delivered between the order read and the transaction read shows up
in one and not the other until the next call.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from citrus_kernel.domain.clock import Clock, SystemClock
from citrus_kernel.domain.dtos import Partner
from citrus_kernel.exceptions import PersistenceError
from citrus_kernel.logging_config import get_logger
from citrus_kernel.selectors.ledger_selector import LedgerSelector
from citrus_kernel.selectors.order_selector import OrderSelector
from citrus_modules._service_helpers import persistence_guard
from citrus_modules.reporting.config import ReportingConfig
from citrus_modules.reporting.models import DashboardReport, ReportResult
from citrus_modules.reporting.statements import build_dashboard, build_partner_ledger

logger = get_logger("modules.reporting.service")


class ReportingService:
    """
    Dashboard and partner ledger reporting.

    Contract
    --------
    * Every public method returns a ``ReportResult``; check ``is_success``
      before reading ``value``.
    * All methods are read-only.

    Guarantees
    ----------
    * No financial logic lives in this class; it delegates to
      ``statements.py``.
    * Clock is injectable for deterministic testing.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._ledger = LedgerSelector(session)
        self._orders = OrderSelector(session)

        logger.info(
            "reporting_service_initialized",
            extra={
                "payout_split": self._config.payout_split,
                "fixed_partner_count": self._config.fixed_partner_count,
            },
        )

    def get_dashboard_stats(self) -> ReportResult[DashboardReport]:
        """Pool totals, profit, ROI, return rate and per-partner payouts."""
        try:
            with persistence_guard(self._session, "dashboard_snapshot_read"):
                transactions = self._ledger.all_transactions()
                orders = self._orders.all_orders()
                partners = self._ledger.list_partners()
        except PersistenceError as exc:
            return self._unavailable("dashboard", exc)

        report = build_dashboard(
            transactions,
            orders,
            partners,
            self._clock.now(),
            unit_costs=self._config.unit_costs,
            payout_divisor=self._config.payout_divisor(len(partners)),
        )

        logger.info(
            "dashboard_snapshot_built",
            extra={
                "transaction_count": len(transactions),
                "order_count": len(orders),
                "partner_count": len(partners),
                "profit": report.stats.profit,
                "roi": str(report.stats.roi),
            },
        )
        return ReportResult.success(report)

    def get_partner_ledger(self) -> ReportResult[tuple[Partner, ...]]:
        """Every partner with contribution, expenses and pool percentage."""
        try:
            with persistence_guard(self._session, "partner_ledger_read"):
                transactions = self._ledger.all_transactions()
                partners = self._ledger.list_partners()
        except PersistenceError as exc:
            return self._unavailable("partner_ledger", exc)

        ledger = build_partner_ledger(transactions, partners)

        logger.info(
            "partner_ledger_built",
            extra={
                "transaction_count": len(transactions),
                "partner_count": len(ledger),
            },
        )
        return ReportResult.success(ledger)

    def _unavailable(self, report: str, exc: PersistenceError) -> ReportResult:
        logger.error(
            f"{report}_snapshot_unavailable",
            extra={
                "error_code": exc.code,
                "operation": exc.operation,
                "reason": exc.reason,
            },
        )
        return ReportResult.unavailable(exc.code, str(exc))
