"""ORM models for the citrus kernel."""

from citrus_kernel.models.journal import JournalEntryModel
from citrus_kernel.models.order import OrderModel, OrderStatusHistoryModel
from citrus_kernel.models.partner import PartnerModel
from citrus_kernel.models.transaction import TransactionModel

__all__ = [
    "JournalEntryModel",
    "OrderModel",
    "OrderStatusHistoryModel",
    "PartnerModel",
    "TransactionModel",
]
