"""
Module: citrus_kernel.models.partner
Responsibility: ORM persistence for the partners who run the business.
    Partner rows are the identity anchor for every write: transactions and
    journal entries belong to a partner, orders and status changes record
    the partner who made them.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/ only.

Invariants enforced:
    - email is unique (uq_partner_email).
    - Contribution totals are NOT stored here.  They are derived from the
      transaction set on every read (see citrus_modules.reporting).
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from citrus_kernel.db.base import TrackedBase
from citrus_kernel.domain.dtos import Partner


class PartnerModel(TrackedBase):
    """
    A partner in the business.

    Non-goals:
        - Authentication.  The actor id handed to services is trusted to
          come from an authenticated session; this table only tells whether
          the actor is a known partner.
    """

    __tablename__ = "partners"

    __table_args__ = (
        UniqueConstraint("email", name="uq_partner_email"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    def to_dto(self) -> Partner:
        return Partner(id=self.id, name=self.name, email=self.email)

    def __repr__(self) -> str:
        return f"<PartnerModel {self.name} <{self.email}>>"
