"""
Reporting Domain Models (``citrus_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects returned by ``ReportingService``: the
dashboard statistics, per-partner payouts, and the ``ReportResult``
envelope that distinguishes a computed report from an unavailable one.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* Money fields are ``int``; ratio fields are ``Decimal`` -- NEVER ``float``.
* An UNAVAILABLE result never carries a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from citrus_kernel.domain.dtos import to_plain_dict

T = TypeVar("T")


class ReportStatus(str, Enum):
    """Outcome of a report request."""

    SUCCESS = "success"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class DashboardStats:
    """Pool-wide figures for the dashboard."""

    total_revenue: int
    total_expenses: int
    total_fixed_costs: int
    total_capital: int
    profit: int
    roi: Decimal
    return_rate: Decimal
    total_orders: int
    delivered_orders: int
    returned_orders: int
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


@dataclass(frozen=True)
class PartnerPayout:
    """What one partner would take out of the pool."""

    partner_id: UUID
    partner_name: str
    contribution: int
    profit_share: Decimal
    total_payout: Decimal

    def to_dict(self) -> dict[str, Any]:
        return to_plain_dict(self)


@dataclass(frozen=True)
class DashboardReport:
    """Dashboard statistics plus one payout line per partner."""

    stats: DashboardStats
    partner_payouts: tuple[PartnerPayout, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "stats": self.stats.to_dict(),
            "partner_payouts": [p.to_dict() for p in self.partner_payouts],
        }


@dataclass(frozen=True)
class ReportResult(Generic[T]):
    """
    Envelope for every reporting call.

    ``value`` is set only on SUCCESS.  On UNAVAILABLE, ``error_code`` and
    ``message`` say why the snapshot could not be produced.
    """

    status: ReportStatus
    value: T | None = None
    error_code: str | None = None
    message: str = ""

    def __post_init__(self) -> None:
        if self.status is ReportStatus.UNAVAILABLE and self.value is not None:
            raise ValueError("An unavailable report cannot carry a value")

    @property
    def is_success(self) -> bool:
        return self.status is ReportStatus.SUCCESS

    @classmethod
    def success(cls, value: T) -> ReportResult[T]:
        return cls(status=ReportStatus.SUCCESS, value=value)

    @classmethod
    def unavailable(cls, error_code: str, message: str) -> ReportResult[T]:
        return cls(
            status=ReportStatus.UNAVAILABLE,
            error_code=error_code,
            message=message,
        )
