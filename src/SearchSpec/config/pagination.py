"""Pagination domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SearchSpec.config.common import expect_int, get_section, get_value, reject_unknown_keys

DEFAULT_PER_PAGE = 30
_PAGINATION_KEYS = frozenset({"default_per_page"})


@dataclass(frozen=True, slots=True)
class PaginationConfig:
    """Process-wide pagination settings.

    Attributes:
        default_per_page: Page size used when ``paginate`` is not given
            ``per_page``, or is not called at all.
    """

    default_per_page: int = DEFAULT_PER_PAGE


def load_pagination(raw: Mapping[str, Any]) -> PaginationConfig:
    section = get_section(raw, "pagination")
    reject_unknown_keys(section, _PAGINATION_KEYS, "pagination")
    return PaginationConfig(
        default_per_page=expect_int(
            get_value(section, "default_per_page", "pagination.default_per_page", DEFAULT_PER_PAGE),
            "pagination.default_per_page",
        )
    )


def check_pagination(config: PaginationConfig) -> None:
    if config.default_per_page <= 0:
        raise ValueError("pagination.default_per_page must be positive")
