"""
citrus_config -- single public entrypoint for citrus configuration.

Responsibility:
    ``get_active_config()`` is the one way to obtain configuration at
    runtime.  Module configs (``ReportingConfig``, ``OrdersConfig``) are
    derived from the returned ``CitrusConfig`` via ``from_config``.

Architecture position:
    Configuration -- sits above ``citrus_kernel`` and below
    ``citrus_modules``.  The kernel never imports from ``citrus_config``.

Audit relevance:
    Every successful call logs ``citrus_config_loaded`` with the config id,
    version and SHA-256 checksum of the parsed YAML.
"""

from __future__ import annotations

from pathlib import Path

from citrus_config.loader import load_config
from citrus_config.schema import (
    CitrusConfig,
    DatabaseDef,
    ProductCatalogDef,
    ReportingDef,
)
from citrus_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> CitrusConfig:
    """Load and validate a configuration set.

    Args:
        path: YAML file to load.  Defaults to citrus_config/sets/default.yaml.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If ``config_id`` or ``version`` is missing.
        ValueError: If a value is out of domain.
    """
    config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH
    config = load_config(config_path)

    _logger.info(
        "citrus_config_loaded",
        extra={
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "payout_split": config.reporting.payout_split,
            "source": str(config_path),
        },
    )
    return config


__all__ = [
    "CitrusConfig",
    "DatabaseDef",
    "ProductCatalogDef",
    "ReportingDef",
    "get_active_config",
]
