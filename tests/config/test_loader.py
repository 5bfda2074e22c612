"""
Tests for citrus_config: YAML loading, validation, checksum and the
module config constructors derived from it.
"""

from pathlib import Path

import pytest

from citrus_config import get_active_config
from citrus_config.loader import compute_checksum, parse_config
from citrus_kernel.domain.values import ProductVariant
from citrus_modules.orders.config import OrdersConfig
from citrus_modules.reporting.config import ReportingConfig

VALID = """
config_id: test-set
version: 3
products:
  unit_costs:
    "10kg": 1800
    "5kg": 900
reporting:
  payout_split: fixed
  fixed_partner_count: 4
database:
  url: "sqlite:///:memory:"
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestGetActiveConfig:

    def test_default_set(self):
        config = get_active_config()
        assert config.config_id == "citrus-default"
        assert config.products.unit_costs == {"10kg": 1720, "5kg": 860}
        assert config.reporting.payout_split == "active_partners"
        assert config.reporting.fixed_partner_count == 3

    def test_custom_file(self, tmp_path):
        config = get_active_config(_write(tmp_path, VALID))
        assert config.version == 3
        assert config.products.unit_costs["10kg"] == 1800
        assert config.reporting.payout_split == "fixed"
        assert config.database.url == "sqlite:///:memory:"

    def test_missing_sections_use_defaults(self, tmp_path):
        config = get_active_config(_write(tmp_path, "config_id: bare\nversion: 1\n"))
        assert config.products.unit_costs == {"10kg": 1720, "5kg": 860}
        assert config.reporting.payout_split == "active_partners"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "nope.yaml")

    def test_missing_config_id(self, tmp_path):
        with pytest.raises(KeyError):
            get_active_config(_write(tmp_path, "version: 1\n"))

    def test_load_logged_with_checksum(self, tmp_path, captured_logs):
        config = get_active_config(_write(tmp_path, VALID))
        loaded = [r for r in captured_logs() if r["message"] == "citrus_config_loaded"]
        assert loaded[0]["checksum"] == config.checksum
        assert len(config.checksum) == 64


class TestValidation:

    @pytest.mark.parametrize(
        "override",
        [
            {"products": {"unit_costs": {"10kg": 1720, "5kg": 860, "20kg": 3000}}},
            {"products": {"unit_costs": {"10kg": 1720}}},
            {"products": {"unit_costs": {"10kg": -1, "5kg": 860}}},
            {"reporting": {"payout_split": "by_contribution"}},
            {"reporting": {"fixed_partner_count": 0}},
        ],
    )
    def test_out_of_domain_values_rejected(self, override):
        with pytest.raises(ValueError):
            parse_config({"config_id": "x", "version": 1, **override})

    def test_unit_costs_read_only(self):
        config = parse_config({"config_id": "x", "version": 1})
        with pytest.raises(TypeError):
            config.products.unit_costs["10kg"] = 1  # type: ignore[index]


class TestChecksum:

    def test_deterministic_and_order_independent(self):
        assert compute_checksum({"a": 1, "b": 2}) == compute_checksum({"b": 2, "a": 1})

    def test_changes_with_content(self):
        assert compute_checksum({"a": 1}) != compute_checksum({"a": 2})


class TestModuleConfigs:

    def test_reporting_from_config(self, tmp_path):
        reporting = ReportingConfig.from_config(get_active_config(_write(tmp_path, VALID)))
        assert reporting.payout_split == "fixed"
        assert reporting.payout_divisor(partner_count=2) == 4
        assert reporting.unit_costs[ProductVariant.TEN_KG] == 1800

    def test_reporting_defaults_follow_partner_count(self):
        reporting = ReportingConfig.with_defaults()
        assert reporting.payout_divisor(partner_count=2) == 2
        assert reporting.unit_costs[ProductVariant.FIVE_KG] == 860

    def test_orders_from_config(self, tmp_path):
        orders = OrdersConfig.from_config(get_active_config(_write(tmp_path, VALID)))
        assert orders.unit_costs[ProductVariant.FIVE_KG] == 900

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"payout_split": "weighted"},
            {"fixed_partner_count": -1},
            {"unit_costs": {ProductVariant.TEN_KG: 1720}},
        ],
    )
    def test_reporting_config_validation(self, kwargs):
        with pytest.raises(ValueError):
            ReportingConfig(**kwargs)

    def test_orders_config_validation(self):
        with pytest.raises(ValueError):
            OrdersConfig(unit_costs={ProductVariant.TEN_KG: 1720})
