"""Schema domain configuration.

The index schema itself lives with the search engine; this section only
records what the query layer needs to know about it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchSpec.config.common import (
    expect_str,
    expect_str_list,
    get_section,
    get_value,
    reject_unknown_keys,
)

_SCHEMA_KEYS = frozenset({"text_fields", "location_field"})


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    """Schema facts used when compiling engine parameters.

    Attributes:
        text_fields: Fields searched when keywords name none. Empty leaves
            the choice to the engine's configured default.
        location_field: Spatial field used by radius filters.
    """

    text_fields: tuple[str, ...] = ()
    location_field: str = "location"


def load_schema(raw: Mapping[str, Any]) -> SchemaConfig:
    section = get_section(raw, "schema")
    reject_unknown_keys(section, _SCHEMA_KEYS, "schema")
    return SchemaConfig(
        text_fields=expect_str_list(get_value(section, "text_fields", "schema.text_fields", []), "schema.text_fields"),
        location_field=expect_str(
            get_value(section, "location_field", "schema.location_field", "location"),
            "schema.location_field",
        ).strip(),
    )


def check_schema(config: SchemaConfig) -> None:
    if not config.location_field:
        raise ValueError("schema.location_field must not be empty")
    for name in config.text_fields:
        if any(ch.isspace() for ch in name):
            raise ValueError(f"schema.text_fields has invalid field name: {name!r}")
