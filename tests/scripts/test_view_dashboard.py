"""
Smoke test for scripts/view_dashboard.py: seeds an in-memory ledger,
prints the dashboard, and leaves the append-only listeners attached.
"""

import importlib.util
import logging
import sys
from pathlib import Path

import pytest
from sqlalchemy import event

from citrus_kernel.db import immutability
from citrus_kernel.db.engine import reset_engine
from citrus_kernel.models.order import OrderStatusHistoryModel
from citrus_kernel.models.transaction import TransactionModel

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "view_dashboard.py"


@pytest.fixture
def view_dashboard(monkeypatch):
    spec = importlib.util.spec_from_file_location("view_dashboard", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    immutability.unregister_immutability_listeners()
    monkeypatch.setattr(sys, "argv", ["view_dashboard.py", "--verbose"])
    yield module
    reset_engine()
    logging.disable(logging.NOTSET)
    immutability.register_immutability_listeners()


def test_prints_seeded_dashboard(view_dashboard, capsys):
    assert view_dashboard.main() == 0

    out = capsys.readouterr().out
    assert "CITRUS DASHBOARD" in out
    for name, _ in view_dashboard.PARTNERS:
        assert name in out
    assert "2 delivered, 1 returned" in out


def test_attaches_append_only_listeners(view_dashboard):
    assert not event.contains(
        TransactionModel, "before_update", immutability._check_transaction_immutability
    )

    view_dashboard.main()

    assert event.contains(
        TransactionModel, "before_update", immutability._check_transaction_immutability
    )
    assert event.contains(
        OrderStatusHistoryModel, "before_delete", immutability._check_status_history_delete
    )
