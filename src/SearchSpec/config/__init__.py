from __future__ import annotations

"""Public configuration API for SearchSpec."""

from SearchSpec.config.app import (
    AppConfig,
    DEFAULT_CONFIG_PATH,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from SearchSpec.config.pagination import PaginationConfig
from SearchSpec.config.runtime import RuntimeConfig
from SearchSpec.config.schema import SchemaConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "PaginationConfig",
    "RuntimeConfig",
    "SchemaConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
