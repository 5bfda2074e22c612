"""
Orders Configuration Schema.

Holds the per-unit cost table used to compute each order's net margin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Self

from citrus_kernel.domain.values import DEFAULT_UNIT_COSTS, ProductVariant
from citrus_kernel.logging_config import get_logger
from citrus_modules.reporting.config import unit_costs_from_config

if TYPE_CHECKING:
    from citrus_config.schema import CitrusConfig

logger = get_logger("modules.orders.config")


@dataclass
class OrdersConfig:
    """Configuration schema for the orders module."""

    unit_costs: Mapping[ProductVariant, int] = field(
        default_factory=lambda: DEFAULT_UNIT_COSTS,
    )

    def __post_init__(self):
        missing = [v.value for v in ProductVariant if v not in self.unit_costs]
        if missing:
            raise ValueError(f"unit_costs is missing variant(s): {missing}")
        if any(cost < 0 for cost in self.unit_costs.values()):
            raise ValueError("unit_costs cannot be negative")
        self.unit_costs = MappingProxyType(dict(self.unit_costs))

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("orders_config_created_with_defaults")
        return cls()

    @classmethod
    def from_config(cls, config: CitrusConfig) -> Self:
        """Create config from a loaded configuration set."""
        logger.info(
            "orders_config_loading_from_config_set",
            extra={"config_id": config.config_id},
        )
        return cls(unit_costs=unit_costs_from_config(config))
