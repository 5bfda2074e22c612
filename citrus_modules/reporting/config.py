"""
Reporting Configuration Schema.

Controls how profit is divided between partners and which per-unit cost
table feeds margin and fixed-cost figures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Self

from citrus_kernel.domain.values import DEFAULT_UNIT_COSTS, ProductVariant
from citrus_kernel.logging_config import get_logger

if TYPE_CHECKING:
    from citrus_config.schema import CitrusConfig

logger = get_logger("modules.reporting.config")

PAYOUT_SPLIT_ACTIVE_PARTNERS = "active_partners"
PAYOUT_SPLIT_FIXED = "fixed"
VALID_PAYOUT_SPLITS = {PAYOUT_SPLIT_ACTIVE_PARTNERS, PAYOUT_SPLIT_FIXED}


def unit_costs_from_config(config: CitrusConfig) -> Mapping[ProductVariant, int]:
    """Re-key the configured cost table by ProductVariant."""
    return MappingProxyType({
        ProductVariant(variant): cost
        for variant, cost in config.products.unit_costs.items()
    })


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    payout_split:
        ``active_partners`` divides profit by the number of partners in the
        partner set; ``fixed`` divides by ``fixed_partner_count``.
    """

    payout_split: str = PAYOUT_SPLIT_ACTIVE_PARTNERS
    fixed_partner_count: int = 3
    unit_costs: Mapping[ProductVariant, int] = field(
        default_factory=lambda: DEFAULT_UNIT_COSTS,
    )

    def __post_init__(self):
        if self.payout_split not in VALID_PAYOUT_SPLITS:
            raise ValueError(
                f"payout_split must be one of {sorted(VALID_PAYOUT_SPLITS)}, "
                f"got {self.payout_split!r}"
            )
        if self.fixed_partner_count <= 0:
            raise ValueError("fixed_partner_count must be positive")
        missing = [v.value for v in ProductVariant if v not in self.unit_costs]
        if missing:
            raise ValueError(f"unit_costs is missing variant(s): {missing}")
        if any(cost < 0 for cost in self.unit_costs.values()):
            raise ValueError("unit_costs cannot be negative")
        self.unit_costs = MappingProxyType(dict(self.unit_costs))

    def payout_divisor(self, partner_count: int) -> int:
        """Number of shares profit is split into for ``partner_count`` partners."""
        if self.payout_split == PAYOUT_SPLIT_FIXED:
            return self.fixed_partner_count
        return partner_count

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_config(cls, config: CitrusConfig) -> Self:
        """Create config from a loaded configuration set."""
        logger.info(
            "reporting_config_loading_from_config_set",
            extra={
                "config_id": config.config_id,
                "payout_split": config.reporting.payout_split,
            },
        )
        return cls(
            payout_split=config.reporting.payout_split,
            fixed_partner_count=config.reporting.fixed_partner_count,
            unit_costs=unit_costs_from_config(config),
        )
