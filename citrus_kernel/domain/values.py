"""
Closed enumerations and the fixed-cost table.

Responsibility:
    Single definition of the enumerations shared by models, selectors and
    modules: transaction categories, product variants and order statuses,
    plus the immutable per-unit cost table keyed by product variant.

Architecture position:
    Kernel > Domain -- pure values, zero I/O.

Invariants enforced:
    - Enumeration values are the serialization contract; they never change.
    - DEFAULT_UNIT_COSTS is read-only (MappingProxyType).  New variants are
      added here and in configuration, never as literals in calculations.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class TransactionCategory(str, Enum):
    """Ledger transaction categories.

    Every category except CAPITAL_INJECTION is an expense paid out of a
    partner's pocket.
    """

    MARKETING = "marketing"
    PACKAGING = "packaging"
    FRUIT_STOCK = "fruit_stock"
    LOGISTICS = "logistics"
    FOOD_MISC = "food_misc"
    CAPITAL_INJECTION = "capital_injection"

    @property
    def is_expense(self) -> bool:
        return self is not TransactionCategory.CAPITAL_INJECTION


class ProductVariant(str, Enum):
    """Box sizes sold to customers."""

    TEN_KG = "10kg"
    FIVE_KG = "5kg"


class OrderStatus(str, Enum):
    """Order lifecycle states (see citrus_modules.orders.workflows)."""

    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    RETURNED = "returned"


# Per-unit production cost, smallest currency unit.
DEFAULT_UNIT_COSTS: Mapping[ProductVariant, int] = MappingProxyType({
    ProductVariant.TEN_KG: 1720,
    ProductVariant.FIVE_KG: 860,
})

# Filter sentinel accepted wherever a category/partner/status filter is taken.
ALL = "all"
