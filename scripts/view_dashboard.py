#!/usr/bin/env python3
"""
Seed a small partnership ledger and print the dashboard.

Uses an in-memory SQLite database unless --database-url or --config names
one, in which case tables are created if missing and demo rows are added
to whatever is already there.

Usage:
    python3 scripts/view_dashboard.py
    python3 scripts/view_dashboard.py --config citrus_config/sets/default.yaml
    python3 scripts/view_dashboard.py --database-url postgresql://... --no-seed
"""

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

PARTNERS = [
    ("Amira Haddad", "amira@citrus.example"),
    ("Bilal Osei", "bilal@citrus.example"),
    ("Chloe Martin", "chloe@citrus.example"),
]


def seed(session, clock) -> None:
    from citrus_modules.orders import OrderService
    from citrus_modules.partners import PartnerService
    from citrus_modules.transactions import TransactionService

    partners = PartnerService(session, clock)
    amira, bilal, chloe = (partners.register_partner(n, e) for n, e in PARTNERS)

    txns = TransactionService(session, clock)
    for actor, amount, category, description in [
        (amira, 50_000, "capital_injection", "Opening capital"),
        (bilal, 30_000, "capital_injection", "Opening capital"),
        (chloe, 20_000, "capital_injection", "Opening capital"),
        (amira, 4_500, "marketing", "Market stall flyers"),
        (bilal, 12_000, "packaging", "Cartons and tape"),
        (chloe, 2_300, "logistics", "Van hire"),
    ]:
        txns.create_transaction(
            {"amount": amount, "category": category, "description": description},
            actor.id,
        )

    orders = OrderService(session, clock)
    for customer, variant, qty, price, path in [
        ("Harbour Grocers", "10kg", 4, 3_200, ["shipped", "delivered"]),
        ("Sunday Market", "5kg", 10, 1_650, ["shipped", "delivered"]),
        ("Corner Cafe", "5kg", 2, 1_700, ["shipped", "returned"]),
        ("Hillside Deli", "10kg", 1, 3_100, []),
    ]:
        order = orders.create_order(
            {
                "customer_name": customer,
                "product_variant": variant,
                "quantity": qty,
                "sell_price": price,
            },
            amira.id,
        )
        for status in path:
            orders.apply_transition(order.id, status, bilal.id)


def print_dashboard(report) -> None:
    stats = report.stats
    print()
    print("=" * 60)
    print(f"  CITRUS DASHBOARD  ({stats.generated_at:%Y-%m-%d %H:%M} UTC)")
    print("=" * 60)
    rows = [
        ("Revenue", stats.total_revenue),
        ("Expenses", stats.total_expenses),
        ("Fixed costs", stats.total_fixed_costs),
        ("Capital", stats.total_capital),
        ("Profit", stats.profit),
    ]
    for label, value in rows:
        print(f"  {label:<20}{value:>14,}")
    print(f"  {'ROI %':<20}{stats.roi:>14.2f}")
    print(f"  {'Return rate %':<20}{stats.return_rate:>14.2f}")
    print(
        f"  Orders: {stats.total_orders} total, "
        f"{stats.delivered_orders} delivered, {stats.returned_orders} returned"
    )
    print()
    print(f"  {'Partner':<20}{'Contributed':>14}{'Share':>12}{'Payout':>12}")
    print("  " + "-" * 58)
    for payout in report.partner_payouts:
        print(
            f"  {payout.partner_name:<20}{payout.contribution:>14,}"
            f"{payout.profit_share:>12.2f}{payout.total_payout:>12.2f}"
        )
    print()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--config", help="Path to a citrus config YAML")
    parser.add_argument("--database-url", help="Override the configured database URL")
    parser.add_argument("--no-seed", action="store_true", help="Skip inserting demo rows")
    parser.add_argument("--verbose", action="store_true", help="Emit structured JSON logs")
    args = parser.parse_args()

    from citrus_config import get_active_config
    from citrus_kernel.db.engine import create_tables, init_engine_from_url, session_scope
    from citrus_kernel.db.immutability import register_immutability_listeners
    from citrus_kernel.domain.clock import SystemClock
    from citrus_kernel.logging_config import configure_logging
    from citrus_modules.reporting import ReportingConfig, ReportingService

    if args.verbose:
        configure_logging(level=logging.INFO, stream=sys.stderr)
    else:
        logging.disable(logging.CRITICAL)

    config = get_active_config(args.config)
    url = args.database_url or (
        "sqlite:///:memory:" if args.config is None else config.database.url
    )

    init_engine_from_url(
        url,
        echo=config.database.echo,
        pool_size=config.database.pool_size,
        pool_timeout=config.database.pool_timeout,
    )
    register_immutability_listeners()
    create_tables()
    clock = SystemClock()

    with session_scope() as session:
        if not args.no_seed:
            seed(session, clock)

        svc = ReportingService(session, clock, ReportingConfig.from_config(config))
        result = svc.get_dashboard_stats()
        if not result.is_success:
            print(f"  Dashboard unavailable: {result.message}", file=sys.stderr)
            return 1
        print_dashboard(result.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
