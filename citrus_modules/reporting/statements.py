"""
Pure ledger aggregation functions.

These functions turn transaction, order and partner DTOs into dashboard
statistics, per-partner payouts and the partner ledger view.  ZERO I/O.
ZERO side effects.

Functions in this module follow the citrus_kernel/domain/ purity convention:
- No database access
- No clock access (the caller passes ``generated_at``)
- Deterministic: same inputs always produce same outputs

Money stays int; ratios are Decimal.
"""

from __future__ import annotations

import dataclasses
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from uuid import UUID

from citrus_kernel.domain.dtos import Order, Partner, Transaction, TransactionFilter
from citrus_kernel.domain.values import OrderStatus, ProductVariant
from citrus_modules.reporting.calculations import (
    contribution_percentage,
    fixed_cost,
    partner_payout,
    profit,
    return_rate,
    roi,
)
from citrus_modules.reporting.models import (
    DashboardReport,
    DashboardStats,
    PartnerPayout,
)

# =========================================================================
# Grouping
# =========================================================================


def contributions_by_partner(transactions: Iterable[Transaction]) -> dict[UUID, int]:
    """Sum of every transaction amount per partner, capital and expenses alike."""
    totals: dict[UUID, int] = defaultdict(int)
    for txn in transactions:
        totals[txn.partner_id] += txn.amount
    return dict(totals)


def expenses_by_partner(transactions: Iterable[Transaction]) -> dict[UUID, int]:
    """Sum of expense transactions (everything but capital injections) per partner."""
    totals: dict[UUID, int] = defaultdict(int)
    for txn in transactions:
        if txn.category.is_expense:
            totals[txn.partner_id] += txn.amount
    return dict(totals)


# =========================================================================
# Dashboard
# =========================================================================


def build_dashboard(
    transactions: Sequence[Transaction],
    orders: Sequence[Order],
    partners: Sequence[Partner],
    generated_at: datetime,
    *,
    unit_costs: Mapping[ProductVariant, int] | None = None,
    payout_divisor: int | None = None,
) -> DashboardReport:
    """
    Build dashboard statistics and one payout line per partner.

    Revenue and fixed costs accrue only from delivered orders.  Every
    transaction adds to its partner's contribution; all but capital
    injections are also expenses.

    Args:
        payout_divisor: Number of shares profit is split into.  Defaults to
            the number of partners.
    """
    total_revenue = 0
    total_fixed_costs = 0
    delivered = 0
    returned = 0
    for order in orders:
        if order.status is OrderStatus.DELIVERED:
            delivered += 1
            total_revenue += order.sell_price * order.quantity
            total_fixed_costs += fixed_cost(order.product_variant, unit_costs) * order.quantity
        elif order.status is OrderStatus.RETURNED:
            returned += 1

    contributions = contributions_by_partner(transactions)
    total_expenses = sum(expenses_by_partner(transactions).values())
    total_capital = sum(contributions.values())

    total_profit = profit(total_revenue, total_fixed_costs, total_expenses)

    stats = DashboardStats(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        total_fixed_costs=total_fixed_costs,
        total_capital=total_capital,
        profit=total_profit,
        roi=roi(total_profit, total_capital),
        return_rate=return_rate(returned, len(orders)),
        total_orders=len(orders),
        delivered_orders=delivered,
        returned_orders=returned,
        generated_at=generated_at,
    )

    divisor = payout_divisor if payout_divisor is not None else len(partners)
    payouts: list[PartnerPayout] = []
    for partner in partners:
        contribution = contributions.get(partner.id, 0)
        total_payout = partner_payout(contribution, total_profit, divisor)
        payouts.append(PartnerPayout(
            partner_id=partner.id,
            partner_name=partner.name,
            contribution=contribution,
            profit_share=total_payout - contribution,
            total_payout=total_payout,
        ))

    return DashboardReport(stats=stats, partner_payouts=tuple(payouts))


# =========================================================================
# Partner ledger
# =========================================================================


def build_partner_ledger(
    transactions: Sequence[Transaction],
    partners: Sequence[Partner],
) -> tuple[Partner, ...]:
    """
    Partners with their derived contribution figures filled in.

    The pool is the sum of contributions of the given partners only;
    transactions owned by a partner outside the set do not enter it.
    """
    contributions = contributions_by_partner(transactions)
    expenses = expenses_by_partner(transactions)
    pool = sum(contributions.get(p.id, 0) for p in partners)

    return tuple(
        dataclasses.replace(
            partner,
            total_contribution=contributions.get(partner.id, 0),
            total_expenses=expenses.get(partner.id, 0),
            contribution_percentage=contribution_percentage(
                contributions.get(partner.id, 0), pool
            ),
        )
        for partner in partners
    )


# =========================================================================
# Filtering
# =========================================================================


def transaction_matches(txn: Transaction, filters: TransactionFilter) -> bool:
    """True when ``txn`` satisfies every active predicate of ``filters``."""
    if filters.category is not None and txn.category is not filters.category:
        return False
    if filters.partner_id is not None and txn.partner_id != filters.partner_id:
        return False
    if filters.start is not None and txn.created_at < filters.start:
        return False
    if filters.end is not None and txn.created_at > filters.end:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    filters: TransactionFilter,
) -> list[Transaction]:
    """Transactions matching every active predicate, input order kept."""
    return [t for t in transactions if transaction_matches(t, filters)]


def exclude_transactions(
    transactions: Iterable[Transaction],
    filters: TransactionFilter,
) -> list[Transaction]:
    """Complement of filter_transactions, input order kept."""
    return [t for t in transactions if not transaction_matches(t, filters)]
