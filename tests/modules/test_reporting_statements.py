"""
Tests for the pure ledger aggregation builders.

build_dashboard, build_partner_ledger, filter_transactions and
exclude_transactions over in-memory DTOs.  No database.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from citrus_kernel.domain.dtos import Order, Partner, Transaction, TransactionFilter
from citrus_kernel.domain.values import OrderStatus, ProductVariant, TransactionCategory
from citrus_modules.reporting.statements import (
    build_dashboard,
    build_partner_ledger,
    exclude_transactions,
    filter_transactions,
)

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
PARTNER_IDS = [UUID(int=1), UUID(int=2), UUID(int=3)]


def _partners(ids=PARTNER_IDS) -> list[Partner]:
    return [Partner(id=pid, name=f"P{i}", email=f"p{i}@x.test") for i, pid in enumerate(ids)]


def _txn(partner_id, amount, category=TransactionCategory.MARKETING, offset=0) -> Transaction:
    return Transaction(
        id=uuid4(),
        partner_id=partner_id,
        amount=amount,
        category=category,
        description="test",
        receipt_url=None,
        created_at=T0 + timedelta(hours=offset),
    )


def _order(status, variant=ProductVariant.TEN_KG, price=3250, quantity=2) -> Order:
    return Order(
        id=uuid4(),
        customer_name="Customer",
        product_variant=variant,
        quantity=quantity,
        sell_price=price,
        status=status,
        created_by=PARTNER_IDS[0],
        created_at=T0,
    )


transactions_strategy = st.lists(
    st.builds(
        _txn,
        partner_id=st.sampled_from(PARTNER_IDS),
        amount=st.integers(min_value=1, max_value=10**9),
        category=st.sampled_from(list(TransactionCategory)),
        offset=st.integers(min_value=0, max_value=24 * 60),
    ),
    max_size=40,
)


# =============================================================================
# Dashboard
# =============================================================================


class TestBuildDashboard:

    def test_single_delivered_order_scenario(self):
        report = build_dashboard([], [_order(OrderStatus.DELIVERED)], [], T0)
        stats = report.stats

        assert stats.total_revenue == 6500
        assert stats.total_fixed_costs == 3440
        assert stats.total_expenses == 0
        assert stats.profit == 3060
        assert stats.roi == 0
        assert stats.return_rate == 0
        assert stats.delivered_orders == 1
        assert stats.generated_at == T0

    def test_only_delivered_orders_earn_revenue(self):
        orders = [
            _order(OrderStatus.PENDING),
            _order(OrderStatus.SHIPPED),
            _order(OrderStatus.RETURNED),
            _order(OrderStatus.DELIVERED, variant=ProductVariant.FIVE_KG, price=1500, quantity=4),
        ]
        stats = build_dashboard([], orders, [], T0).stats

        assert stats.total_revenue == 6000
        assert stats.total_fixed_costs == 3440
        assert stats.total_orders == 4
        assert stats.returned_orders == 1
        assert stats.return_rate == Decimal("25")

    def test_capital_injection_is_capital_not_expense(self):
        pid = PARTNER_IDS[0]
        transactions = [
            _txn(pid, 10000, TransactionCategory.CAPITAL_INJECTION),
            _txn(pid, 1500, TransactionCategory.PACKAGING),
        ]
        stats = build_dashboard(transactions, [], _partners(), T0).stats

        assert stats.total_expenses == 1500
        assert stats.total_capital == 11500
        assert stats.profit == -1500

    def test_roi_against_total_capital(self):
        pid = PARTNER_IDS[0]
        transactions = [_txn(pid, 3060, TransactionCategory.CAPITAL_INJECTION)]
        stats = build_dashboard(
            transactions, [_order(OrderStatus.DELIVERED)], _partners(), T0
        ).stats

        assert stats.profit == 3060
        assert stats.roi == Decimal("100")

    def test_payouts_split_by_partner_count(self):
        partners = _partners(PARTNER_IDS[:2])
        transactions = [_txn(PARTNER_IDS[0], 1000, TransactionCategory.CAPITAL_INJECTION)]
        report = build_dashboard(transactions, [_order(OrderStatus.DELIVERED)], partners, T0)

        first, second = report.partner_payouts
        assert first.contribution == 1000
        assert first.profit_share == Decimal("1530")
        assert first.total_payout == Decimal("2530")
        assert second.contribution == 0
        assert second.total_payout == Decimal("1530")

    def test_fixed_divisor_overrides_partner_count(self):
        partners = _partners(PARTNER_IDS[:2])
        report = build_dashboard(
            [], [_order(OrderStatus.DELIVERED)], partners, T0, payout_divisor=3
        )
        assert report.partner_payouts[0].profit_share == Decimal("1020")

    def test_unit_cost_override(self):
        costs = {ProductVariant.TEN_KG: 1000, ProductVariant.FIVE_KG: 500}
        stats = build_dashboard(
            [], [_order(OrderStatus.DELIVERED)], [], T0, unit_costs=costs
        ).stats
        assert stats.total_fixed_costs == 2000

    def test_empty_inputs(self):
        report = build_dashboard([], [], [], T0)
        assert report.stats.profit == 0
        assert report.stats.roi == 0
        assert report.partner_payouts == ()

    def test_to_dict_is_json_friendly(self):
        report = build_dashboard([], [_order(OrderStatus.DELIVERED)], _partners(), T0)
        data = report.to_dict()
        assert data["stats"]["roi"] == "0"
        assert data["stats"]["generated_at"] == T0.isoformat()
        assert data["partner_payouts"][0]["partner_id"] == str(PARTNER_IDS[0])


# =============================================================================
# Partner ledger
# =============================================================================


class TestBuildPartnerLedger:

    def test_contribution_and_expenses(self):
        pid = PARTNER_IDS[0]
        transactions = [
            _txn(pid, 6000, TransactionCategory.CAPITAL_INJECTION),
            _txn(pid, 2000, TransactionCategory.LOGISTICS),
            _txn(PARTNER_IDS[1], 2000, TransactionCategory.FRUIT_STOCK),
        ]
        ledger = build_partner_ledger(transactions, _partners())

        assert ledger[0].total_contribution == 8000
        assert ledger[0].total_expenses == 2000
        assert ledger[0].contribution_percentage == Decimal("80")
        assert ledger[1].contribution_percentage == Decimal("20")
        assert ledger[2].total_contribution == 0
        assert ledger[2].contribution_percentage == 0

    def test_empty_pool(self):
        ledger = build_partner_ledger([], _partners())
        assert all(p.contribution_percentage == 0 for p in ledger)

    def test_unknown_partner_outside_pool(self):
        transactions = [
            _txn(PARTNER_IDS[0], 1000),
            _txn(uuid4(), 9000),
        ]
        ledger = build_partner_ledger(transactions, _partners())
        assert ledger[0].contribution_percentage == Decimal("100")

    @given(transactions=transactions_strategy)
    def test_pool_conservation(self, transactions):
        ledger = build_partner_ledger(transactions, _partners())
        assert sum(p.total_contribution for p in ledger) == sum(t.amount for t in transactions)

    @given(transactions=transactions_strategy)
    def test_dashboard_capital_matches_ledger_pool(self, transactions):
        ledger = build_partner_ledger(transactions, _partners())
        stats = build_dashboard(transactions, [], _partners(), T0).stats
        assert stats.total_capital == sum(p.total_contribution for p in ledger)


# =============================================================================
# Filtering
# =============================================================================


filters_strategy = st.builds(
    TransactionFilter,
    category=st.none() | st.sampled_from(list(TransactionCategory)),
    partner_id=st.none() | st.sampled_from(PARTNER_IDS),
    start=st.none() | st.integers(0, 24 * 60).map(lambda h: T0 + timedelta(hours=h)),
    end=st.none() | st.integers(0, 24 * 60).map(lambda h: T0 + timedelta(hours=h)),
)


class TestFilterTransactions:

    def test_by_category(self):
        transactions = [
            _txn(PARTNER_IDS[0], 100, TransactionCategory.MARKETING),
            _txn(PARTNER_IDS[0], 200, TransactionCategory.PACKAGING),
        ]
        result = filter_transactions(
            transactions, TransactionFilter(category=TransactionCategory.PACKAGING)
        )
        assert [t.amount for t in result] == [200]

    def test_date_range_inclusive(self):
        transactions = [_txn(PARTNER_IDS[0], 100, offset=h) for h in (0, 1, 2, 3)]
        result = filter_transactions(
            transactions,
            TransactionFilter(start=T0 + timedelta(hours=1), end=T0 + timedelta(hours=2)),
        )
        assert [t.created_at for t in result] == [
            T0 + timedelta(hours=1),
            T0 + timedelta(hours=2),
        ]

    def test_no_predicates_keeps_everything(self):
        transactions = [_txn(PARTNER_IDS[0], 100), _txn(PARTNER_IDS[1], 100)]
        assert filter_transactions(transactions, TransactionFilter()) == transactions
        assert exclude_transactions(transactions, TransactionFilter()) == []

    @given(transactions=transactions_strategy, filters=filters_strategy)
    def test_only_matching_records_returned(self, transactions, filters):
        for txn in filter_transactions(transactions, filters):
            if filters.category is not None:
                assert txn.category is filters.category
            if filters.partner_id is not None:
                assert txn.partner_id == filters.partner_id
            if filters.start is not None:
                assert txn.created_at >= filters.start
            if filters.end is not None:
                assert txn.created_at <= filters.end

    @given(transactions=transactions_strategy, filters=filters_strategy)
    def test_filtered_and_excluded_reconstruct_input(self, transactions, filters):
        kept = filter_transactions(transactions, filters)
        dropped = exclude_transactions(transactions, filters)

        assert len(kept) + len(dropped) == len(transactions)
        assert {t.id for t in kept} | {t.id for t in dropped} == {t.id for t in transactions}
        assert not {t.id for t in kept} & {t.id for t in dropped}


@pytest.mark.parametrize("status", list(OrderStatus))
def test_revenue_counts_only_delivered(status):
    stats = build_dashboard([], [_order(status)], [], T0).stats
    expected = 6500 if status is OrderStatus.DELIVERED else 0
    assert stats.total_revenue == expected
