"""
Reporting Module.

Calculation library and ledger aggregation: margin, profit, ROI, return
rate, per-partner payouts and the partner ledger view.

Usage:
    from citrus_modules.reporting import ReportingService

    service = ReportingService(session=session, clock=clock)
    result = service.get_dashboard_stats()
    if result.is_success:
        print(result.value.stats.profit)
"""

from citrus_modules.reporting.calculations import (
    contribution_percentage,
    fixed_cost,
    net_margin,
    partner_payout,
    profit,
    return_rate,
    roi,
)
from citrus_modules.reporting.config import ReportingConfig
from citrus_modules.reporting.models import (
    DashboardReport,
    DashboardStats,
    PartnerPayout,
    ReportResult,
    ReportStatus,
)
from citrus_modules.reporting.service import ReportingService
from citrus_modules.reporting.statements import (
    build_dashboard,
    build_partner_ledger,
    exclude_transactions,
    filter_transactions,
)

__all__ = [
    "DashboardReport",
    "DashboardStats",
    "PartnerPayout",
    "ReportResult",
    "ReportStatus",
    "ReportingConfig",
    "ReportingService",
    "build_dashboard",
    "build_partner_ledger",
    "contribution_percentage",
    "exclude_transactions",
    "filter_transactions",
    "fixed_cost",
    "net_margin",
    "partner_payout",
    "profit",
    "return_rate",
    "roi",
]
