"""
Configuration Loader (``citrus_config.loader``).

Responsibility
--------------
Loads a YAML configuration set and parses it into the frozen
``citrus_config.schema`` dataclasses.  Runtime callers go through
``citrus_config.get_active_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Out-of-domain values  -> ``ValueError`` from the schema.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from citrus_config.schema import (
    CitrusConfig,
    DatabaseDef,
    ProductCatalogDef,
    ReportingDef,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its contents as a dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_products(data: dict[str, Any]) -> ProductCatalogDef:
    if "unit_costs" not in data:
        return ProductCatalogDef()
    # YAML may read a bare key such as 5kg as a string already; normalise anyway.
    return ProductCatalogDef(
        unit_costs={str(k): v for k, v in data["unit_costs"].items()}
    )


def parse_reporting(data: dict[str, Any]) -> ReportingDef:
    return ReportingDef(
        payout_split=data.get("payout_split", "active_partners"),
        fixed_partner_count=data.get("fixed_partner_count", 3),
    )


def parse_database(data: dict[str, Any]) -> DatabaseDef:
    return DatabaseDef(
        url=data.get("url", DatabaseDef.url),
        echo=bool(data.get("echo", False)),
        pool_size=data.get("pool_size", 10),
        pool_timeout=data.get("pool_timeout", 30),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_config(data: dict[str, Any]) -> CitrusConfig:
    """
    Parse a full configuration set.

    ``config_id`` and ``version`` are required; every section is optional
    and falls back to the schema defaults.
    """
    return CitrusConfig(
        config_id=data["config_id"],
        version=int(data["version"]),
        products=parse_products(data.get("products") or {}),
        reporting=parse_reporting(data.get("reporting") or {}),
        database=parse_database(data.get("database") or {}),
        checksum=compute_checksum(data),
    )


def load_config(path: Path) -> CitrusConfig:
    return parse_config(load_yaml_file(path))
