from __future__ import annotations

"""Public configuration API for ElixirFinder."""

from ElixirFinder.config.api import ApiConfig
from ElixirFinder.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from ElixirFinder.config.filters import FiltersConfig
from ElixirFinder.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "ApiConfig",
    "FiltersConfig",
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
