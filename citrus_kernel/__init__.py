"""
Citrus Kernel

Persistence gateway and shared primitives for the citrus export ledger:
- Append-only transaction ledger
- Orders with an audited status lifecycle
- Partners and the operations journal
- Typed errors and structured logging
"""

__version__ = "0.1.0"
