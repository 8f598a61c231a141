"""Pagination option validation."""

from __future__ import annotations

from typing import Any, Mapping

from SearchSpec.core.errors import InvalidArgument, MissingArgument
from SearchSpec.core.spec import Pagination
from SearchSpec.query.options import reject_unknown_options

PAGINATION_OPTIONS = frozenset({"page", "per_page"})


def validate_pagination(options: Mapping[str, Any], *, default_per_page: int) -> Pagination:
    """Validate ``paginate`` options into a pagination window.

    Solr results are always paginated; leaving out ``per_page`` uses the
    configured default, read at call time.

    Args:
        options: Mapping with ``page`` (required) and ``per_page`` (optional).
        default_per_page: Configured page size used when ``per_page`` is absent.

    Returns:
        Validated pagination window.

    Raises:
        MissingArgument: If ``page`` is absent, None or False.
        UnknownOption: If any other key is present.
        InvalidArgument: If a value is not a positive integer.
    """
    page = options.get("page")
    # False reads as an omitted page; 0 is still rejected as invalid below.
    if page is None or page is False:
        raise MissingArgument("paginate requires a 'page' argument")
    reject_unknown_options(options, PAGINATION_OPTIONS, "paginate")

    per_page = options.get("per_page")
    if per_page is None:
        per_page = default_per_page
    return Pagination(
        page=_expect_positive_int(page, "page"),
        per_page=_expect_positive_int(per_page, "per_page"),
    )


def _expect_positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"paginate {name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidArgument(f"paginate {name} must be positive, got {value}")
    return value
