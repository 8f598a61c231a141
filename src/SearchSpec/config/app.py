from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from SearchSpec.config.pagination import PaginationConfig, check_pagination, load_pagination
from SearchSpec.config.runtime import RuntimeConfig, check_runtime, load_runtime
from SearchSpec.config.schema import SchemaConfig, check_schema, load_schema
from SearchSpec.utils.log import log

_ROOT_KEYS = frozenset({"log", "pagination", "schema"})
DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    schema: SchemaConfig = field(default_factory=SchemaConfig)


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse a raw mapping into AppConfig; absent sections use defaults."""
    unknown = sorted(str(key) for key in raw if key not in _ROOT_KEYS)
    if unknown:
        raise ValueError(f"Unknown config sections: {unknown}")

    runtime = load_runtime(raw)
    pagination = load_pagination(raw)
    schema = load_schema(raw)

    check_runtime(runtime)
    check_pagination(pagination)
    check_schema(schema)

    return AppConfig(runtime=runtime, pagination=pagination, schema=schema)


def load_config(path: Path) -> AppConfig:
    """Load a single YAML config file."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and an override file.

    A missing default file contributes nothing; the override must exist.
    """
    if default_path.is_file():
        base = parse_yaml(default_path.read_text(encoding="utf-8"))
    else:
        log.debug("Default config %s not found; using built-in defaults", default_path)
        base = {}
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; override wins on scalars and lists."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
