from __future__ import annotations

"""Shared helpers for configuration loading and validation."""

from typing import Any, Mapping

_REQUIRED: Any = object()


def get_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return a mapping section from root config, or an empty mapping.

    Raises:
        TypeError: If the section is present but not a mapping.
    """
    section = raw.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_value(section: Mapping[str, Any], field: str, config_key: str, default: Any = _REQUIRED) -> Any:
    """Return a field value, falling back to ``default`` when given.

    Raises:
        ValueError: If the field is missing and has no default.
    """
    if field in section and section[field] is not None:
        return section[field]
    if default is _REQUIRED:
        raise ValueError(f"Missing required config: {config_key}")
    return default


def reject_unknown_keys(section: Mapping[str, Any], allowed: frozenset[str], section_key: str) -> None:
    """Reject keys a section does not define, naming the first one."""
    for key in section:
        if key not in allowed:
            raise ValueError(f"{section_key} has unknown key: {key}")


def expect_str(value: Any, config_key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate and return integer value (excluding bool)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_str_list(value: Any, config_key: str) -> tuple[str, ...]:
    """Validate a list of strings, stripping blanks and duplicates."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        name = expect_str(item, f"{config_key}[{idx}]").strip()
        if name and name not in out:
            out.append(name)
    return tuple(out)
