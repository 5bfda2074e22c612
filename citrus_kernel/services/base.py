"""
BaseService -- abstract base for all kernel services.

Responsibility:
    Provides the common constructor and session-handling contract for
    every write service in the kernel layer.  Services receive a SQLAlchemy
    ``Session`` and use ``session.flush()`` -- never ``session.commit()``.

Invariants enforced:
    Transaction boundaries: services flush within the caller's transaction
    and never commit or rollback themselves.  The module service that
    called them owns commit/rollback.

Failure modes:
    - If a subclass calls ``session.commit()``, the transition + audit pair
      in the order module is no longer atomic.
"""

from abc import ABC

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide query methods -- those belong in
          ``citrus_kernel/selectors/``.
    """

    def __init__(self, session: Session):
        self.session = session
