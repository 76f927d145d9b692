"""Configuration loading and adapter selection for ground-truth adapters."""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .base import BaseGroundTruthAdapter
from .exceptions import ConfigurationError


def load_config(config_path: str) -> dict[str, Any]:
    """Load adapter configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If the file is missing, invalid, or not a mapping
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Configuration must be a dictionary, got {type(config)}"
        )

    return config


def create_adapter(config_path: str) -> BaseGroundTruthAdapter:
    """Build the adapter named by the config's ``adapter.type`` key.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        An unconnected adapter instance
    """
    config = load_config(config_path)
    adapter_type = config.get("adapter", {}).get("type")

    if adapter_type == "postgres":
        from .postgres import PostgresGroundTruthAdapter

        return PostgresGroundTruthAdapter(config)
    if adapter_type == "sqlite":
        from .sqlite import SQLiteGroundTruthAdapter

        return SQLiteGroundTruthAdapter(config)

    raise ConfigurationError(
        f"Unsupported adapter type '{adapter_type}'. Supported types: postgres, sqlite"
    )
