"""Query DSL: the entry point for assembling a query specification.

Example::

    spec = build_query(lambda q: (
        q.keywords('"deep dish" pizza -anchovies', fields=["name", "menu"]),
        q.paginate(page=2),
        q.near((41.88, -87.63), 5),
    ))
"""

from __future__ import annotations

from typing import Any, Callable

from SearchSpec.config.pagination import PaginationConfig
from SearchSpec.core.errors import DuplicateFulltext, InvalidArgument
from SearchSpec.core.spec import FulltextSpec, Pagination, QuerySpec, Sort
from SearchSpec.dsl.fulltext import FulltextDSL
from SearchSpec.dsl.scope import ScopeDSL
from SearchSpec.dsl.util import instance_eval_or_call
from SearchSpec.query.escape import escape_keywords
from SearchSpec.query.options import reject_unknown_options
from SearchSpec.query.pagination import validate_pagination
from SearchSpec.utils.log import log

KEYWORDS_OPTIONS = frozenset({"fields"})
SORT_DIRECTIONS = frozenset({"asc", "desc"})


class QueryDSL(ScopeDSL):
    """Top-level query operations.

    Args:
        node: Root spec node being configured.
        pagination: Pagination settings supplying the default page size.
    """

    def __init__(self, node: QuerySpec, *, pagination: PaginationConfig) -> None:
        super().__init__(node)
        self._pagination = pagination

    def keywords(
        self,
        text: str | None,
        configurator: Callable[..., Any] | None = None,
        **options: Any,
    ) -> FulltextSpec | None:
        """Search ``text`` as fulltext using the dismax parser.

        Well-matched quotes group phrases and ``+``/``-`` work as expected;
        other boolean syntax is escaped and mismatched quotes are ignored.

        Args:
            text: Keyword phrase.
            configurator: Optional callable run against a ``FulltextDSL``.
                Skipped when ``text`` has nothing searchable.
            **options: ``fields``, the fields to search; defaults to all
                text fields of the types under search.

        Returns:
            The stored fulltext spec, or None when nothing was searchable.

        Raises:
            UnknownOption: For options other than ``fields``.
            DuplicateFulltext: If keywords were already set on this query.
        """
        self._node.ensure_open()
        reject_unknown_options(options, KEYWORDS_OPTIONS, "keywords")
        fields = options.get("fields") or ()
        if isinstance(fields, str):
            fields = (fields,)

        base = escape_keywords(text, fields)
        if not base.is_usable:
            log.debug("No searchable keywords in %r; fulltext and configurator skipped", text)
            return None
        if self._node.fulltext is not None:
            raise DuplicateFulltext("keywords may only be set once per query")

        fulltext = base
        if configurator is not None:
            fulltext_dsl = instance_eval_or_call(FulltextDSL(base), configurator)
            fulltext = fulltext_dsl.close()
        self._node.set_fulltext(fulltext)
        return fulltext

    def paginate(self, **options: Any) -> Pagination:
        """Request one page of results.

        Not calling this is the same as ``paginate(page=1)`` with the
        configured default page size.

        Args:
            **options: ``page`` (required) and ``per_page``.
        """
        self._node.ensure_open()
        pagination = validate_pagination(options, default_per_page=self._pagination.default_per_page)
        self._node.set_pagination(pagination)
        return pagination

    def order_by(self, field: str, direction: str = "asc") -> Sort:
        self._node.ensure_open()
        if not isinstance(field, str) or not field.strip():
            raise InvalidArgument(f"order_by field must be a non-empty string, got {field!r}")
        normalized = str(direction).strip().lower()
        if normalized not in SORT_DIRECTIONS:
            raise InvalidArgument(f"order_by direction must be asc or desc, got {direction!r}")
        sort = Sort(field=field.strip(), direction=normalized)  # type: ignore[arg-type]
        self._node.add_sort(sort)
        return sort


def build_query(
    configurator: Callable[..., Any] | None = None,
    *,
    pagination: PaginationConfig | None = None,
) -> QuerySpec:
    """Assemble and seal a query specification.

    Args:
        configurator: Callable run against a ``QueryDSL``, either taking it as
            its argument or using ``SearchSpec.dsl.receiver``.
        pagination: Pagination settings; defaults to ``PaginationConfig()``.

    Returns:
        Sealed root spec with pagination always set.
    """
    settings = pagination or PaginationConfig()
    root = QuerySpec("query")
    if configurator is not None:
        instance_eval_or_call(QueryDSL(root, pagination=settings), configurator)
    root.seal(default_pagination=Pagination(page=1, per_page=settings.default_per_page))
    log.debug(
        "Built query: keywords=%s page=%d per_page=%d scopes=%d",
        root.fulltext.expression if root.fulltext else None,
        root.pagination.page,
        root.pagination.per_page,
        len(root.scopes),
    )
    return root
