"""
Citrus business modules.

Each module is a thin layer over citrus_kernel: pure calculation and
validation functions plus a service that reads through selectors, writes
through RecordWriter, and owns the commit/rollback boundary.

Modules:
    reporting     -- calculation library and ledger aggregation
    orders        -- order creation and the order status state machine
    transactions  -- capital contributions and expenses
    partners      -- partner registration and lookup
    journal       -- operations journal
"""
