"""Runtime domain configuration (logging)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchSpec.config.common import (
    expect_bool,
    expect_str,
    get_section,
    get_value,
    reject_unknown_keys,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_KEYS = frozenset({"level", "to_file", "dir"})


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Logging settings for the CLI."""

    level: str = "INFO"
    to_file: bool = False
    dir: str = "log"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load the ``log`` section; missing keys keep their defaults."""
    section = get_section(raw, "log")
    reject_unknown_keys(section, _LOG_KEYS, "log")
    defaults = RuntimeConfig()
    return RuntimeConfig(
        level=expect_str(get_value(section, "level", "log.level", defaults.level), "log.level").upper(),
        to_file=expect_bool(get_value(section, "to_file", "log.to_file", defaults.to_file), "log.to_file"),
        dir=expect_str(get_value(section, "dir", "log.dir", defaults.dir), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime domain constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file=true")
