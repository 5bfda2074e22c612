"""Database layer - engine, base classes, append-only enforcement."""

from citrus_kernel.db.base import UUID, Base, TrackedBase, UUIDString
from citrus_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    session_scope,
)

__all__ = [
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
    "UUID",
]
