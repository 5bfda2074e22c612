"""
Citrus configuration schema.

Frozen dataclasses parsed from a YAML configuration set by
``citrus_config.loader``.  Validation lives in ``__post_init__`` so an
invalid set can never be constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from citrus_kernel.domain.values import DEFAULT_UNIT_COSTS, ProductVariant

VALID_PAYOUT_SPLITS = frozenset({"active_partners", "fixed"})


def _default_unit_costs() -> Mapping[str, int]:
    return MappingProxyType({v.value: cost for v, cost in DEFAULT_UNIT_COSTS.items()})


@dataclass(frozen=True)
class ProductCatalogDef:
    """Per-unit production cost for every product variant, keyed by value."""

    unit_costs: Mapping[str, int] = field(default_factory=_default_unit_costs)

    def __post_init__(self) -> None:
        known = {v.value for v in ProductVariant}
        unknown = set(self.unit_costs) - known
        if unknown:
            raise ValueError(f"Unknown product variant(s): {sorted(unknown)}")
        missing = known - set(self.unit_costs)
        if missing:
            raise ValueError(f"No unit cost for product variant(s): {sorted(missing)}")
        for variant, cost in self.unit_costs.items():
            if not isinstance(cost, int) or isinstance(cost, bool) or cost < 0:
                raise ValueError(
                    f"Unit cost for {variant} must be a non-negative integer, got {cost!r}"
                )
        object.__setattr__(self, "unit_costs", MappingProxyType(dict(self.unit_costs)))


@dataclass(frozen=True)
class ReportingDef:
    """How profit is split between partners."""

    payout_split: str = "active_partners"  # "active_partners" or "fixed"
    fixed_partner_count: int = 3

    def __post_init__(self) -> None:
        if self.payout_split not in VALID_PAYOUT_SPLITS:
            raise ValueError(
                f"Invalid payout_split {self.payout_split!r}; "
                f"expected one of {sorted(VALID_PAYOUT_SPLITS)}"
            )
        if self.fixed_partner_count <= 0:
            raise ValueError("fixed_partner_count must be positive")


@dataclass(frozen=True)
class DatabaseDef:
    """Connection settings handed to citrus_kernel.db.engine."""

    url: str = "sqlite:///citrus.db"
    echo: bool = False
    pool_size: int = 10
    pool_timeout: int = 30

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("database url cannot be empty")
        if self.pool_size <= 0:
            raise ValueError("pool_size must be positive")
        if self.pool_timeout <= 0:
            raise ValueError("pool_timeout must be positive")


@dataclass(frozen=True)
class CitrusConfig:
    """A complete, validated configuration set."""

    config_id: str
    version: int
    products: ProductCatalogDef = field(default_factory=ProductCatalogDef)
    reporting: ReportingDef = field(default_factory=ReportingDef)
    database: DatabaseDef = field(default_factory=DatabaseDef)
    checksum: str = ""
