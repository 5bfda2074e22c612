"""
Reporting Calculations -- Pure Functions.

Margin, profit, ROI, return rate and partner payout.  Money in and out is
int (smallest currency unit); every ratio is Decimal.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from citrus_kernel.domain.values import DEFAULT_UNIT_COSTS, ProductVariant

_HUNDRED = Decimal("100")
_ZERO = Decimal("0")

# Legacy reports split profit between three partners.
LEGACY_PARTNER_COUNT = 3


def fixed_cost(
    variant: ProductVariant | str,
    unit_costs: Mapping[ProductVariant, int] | None = None,
) -> int:
    """
    Per-unit production cost of a product variant.

    Raises ValueError for a value that is not a ProductVariant and KeyError
    for a variant missing from ``unit_costs``.
    """
    table = DEFAULT_UNIT_COSTS if unit_costs is None else unit_costs
    return table[ProductVariant(variant)]


def net_margin(
    variant: ProductVariant | str,
    sell_price: int,
    quantity: int,
    unit_costs: Mapping[ProductVariant, int] | None = None,
) -> int:
    """
    Margin earned on an order.

    net_margin = (sell_price - fixed_cost(variant)) * quantity
    """
    return (sell_price - fixed_cost(variant, unit_costs)) * quantity


def profit(total_revenue, total_fixed_costs, total_expenses):
    """profit = revenue - fixed costs - expenses.  May be negative."""
    return total_revenue - total_fixed_costs - total_expenses


def partner_payout(
    contribution: int | Decimal,
    total_profit: int | Decimal,
    partner_count: int = LEGACY_PARTNER_COUNT,
) -> Decimal:
    """
    Amount returned to one partner: own contribution plus an equal share
    of profit.

    payout = contribution + total_profit / partner_count
    """
    if partner_count <= 0:
        raise ValueError(f"partner_count must be positive, got {partner_count}")
    return Decimal(contribution) + Decimal(total_profit) / Decimal(partner_count)


def roi(profit: int | Decimal, total_capital: int | Decimal) -> Decimal:
    """
    Return on invested capital, as a percentage.

    Returns 0 when no capital has been contributed.
    """
    if total_capital == 0:
        return _ZERO
    return (Decimal(profit) / Decimal(total_capital)) * _HUNDRED


def return_rate(returned_orders: int, total_orders: int) -> Decimal:
    """Share of orders that came back, as a percentage (0 with no orders)."""
    if total_orders == 0:
        return _ZERO
    return (Decimal(returned_orders) / Decimal(total_orders)) * _HUNDRED


def contribution_percentage(contribution: int, pool: int) -> Decimal:
    """Partner's share of the pool, as a percentage (0 for an empty pool)."""
    if pool == 0:
        return _ZERO
    return Decimal(contribution) / Decimal(pool) * _HUNDRED
