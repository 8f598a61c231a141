from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, Sequence

from SearchSpec.core.errors import DuplicateFulltext, SealedSpecError

ScopeKind = Literal["query", "text_fields"]
RestrictionOperator = Literal["equal_to", "less_than", "greater_than", "between", "any_of"]


@dataclass(frozen=True, slots=True)
class FulltextSpec:
    """Escaped keyword expression for a best-match (dismax) search.

    Attributes:
        expression: Escaped boolean expression passed to the engine as-is.
        fields: Text fields to search, in declaration order. Empty means the
            engine default (all text fields of the types under search).
        boosts: Per-field query boosts.
        phrase_fields: Per-field phrase boosts.
        phrase_slop: Allowed slop for phrase boosting.
        minimum_match: Dismax ``mm`` value.
        tie: Dismax tie breaker.
        highlight_fields: Fields to highlight; empty with ``highlight`` set
            means the engine default.
        highlight: Whether highlighting was requested.
    """

    expression: str
    fields: Sequence[str] = ()
    boosts: Mapping[str, float] = field(default_factory=dict)
    phrase_fields: Mapping[str, float] = field(default_factory=dict)
    phrase_slop: Optional[int] = None
    minimum_match: Optional[str] = None
    tie: Optional[float] = None
    highlight_fields: Sequence[str] = ()
    highlight: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "highlight_fields", tuple(self.highlight_fields))
        object.__setattr__(self, "boosts", MappingProxyType(dict(self.boosts)))
        object.__setattr__(self, "phrase_fields", MappingProxyType(dict(self.phrase_fields)))

    @property
    def is_usable(self) -> bool:
        return bool(self.expression.strip())


@dataclass(frozen=True, slots=True)
class Pagination:
    """Requested result window. ``page`` is 1-based."""

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True, slots=True)
class GeoRestriction:
    """Radius filter around a point."""

    latitude: float
    longitude: float
    radius_miles: float


@dataclass(frozen=True, slots=True)
class Restriction:
    """Field restriction, optionally negated."""

    field: str
    operator: RestrictionOperator
    value: Any
    negated: bool = False


@dataclass(frozen=True, slots=True)
class Sort:
    field: str
    direction: Literal["asc", "desc"] = "asc"


class QuerySpec:
    """One node of the query specification tree.

    A node is Open while its configuration pass runs and Sealed afterwards.
    Children keep a back-reference to their parent for read-only inheritance;
    all mutation goes through the node's own methods while it is Open.
    """

    __slots__ = (
        "kind",
        "parent",
        "fulltext",
        "pagination",
        "geo",
        "restrictions",
        "sorts",
        "scopes",
        "_sealed",
    )

    def __init__(self, kind: ScopeKind = "query", parent: QuerySpec | None = None) -> None:
        self.kind = kind
        self.parent = parent
        self.fulltext: FulltextSpec | None = None
        self.pagination: Pagination | None = None
        self.geo: GeoRestriction | None = None
        self.restrictions: tuple[Restriction, ...] = ()
        self.sorts: tuple[Sort, ...] = ()
        self.scopes: tuple[QuerySpec, ...] = ()
        self._sealed = False

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_sealed", False):
            raise SealedSpecError(f"{self.kind} spec is sealed; cannot set {name}")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if getattr(self, "_sealed", False):
            raise SealedSpecError(f"{self.kind} spec is sealed; cannot delete {name}")
        object.__delattr__(self, name)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"<QuerySpec kind={self.kind} {state} scopes={len(self.scopes)}>"

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def ensure_open(self) -> None:
        if self._sealed:
            raise SealedSpecError(f"{self.kind} spec is sealed and can no longer be configured")

    def default_fields(self) -> tuple[str, ...]:
        """Return the nearest explicit fulltext field list, walking up parents."""
        node: QuerySpec | None = self
        while node is not None:
            if node.fulltext is not None and node.fulltext.fields:
                return tuple(node.fulltext.fields)
            node = node.parent
        return ()

    def set_fulltext(self, fulltext: FulltextSpec) -> None:
        self.ensure_open()
        if self.fulltext is not None:
            raise DuplicateFulltext(f"keywords already set on this {self.kind} spec")
        self.fulltext = fulltext

    def set_pagination(self, pagination: Pagination) -> None:
        self.ensure_open()
        self.pagination = pagination

    def set_geo(self, geo: GeoRestriction) -> None:
        self.ensure_open()
        self.geo = geo

    def add_restriction(self, restriction: Restriction) -> None:
        self.ensure_open()
        self.restrictions = (*self.restrictions, restriction)

    def add_sort(self, sort: Sort) -> None:
        self.ensure_open()
        self.sorts = (*self.sorts, sort)

    def add_scope(self, child: QuerySpec) -> None:
        self.ensure_open()
        if child.parent is not self:
            raise ValueError("scope must be opened on this spec before it is attached")
        if not child.sealed:
            raise ValueError("scope must be sealed before it is attached")
        self.scopes = (*self.scopes, child)

    def seal(self, *, default_pagination: Pagination | None = None) -> None:
        """Close the node for configuration.

        Args:
            default_pagination: Window to fill in when ``paginate`` was never
                called on this node.
        """
        self.ensure_open()
        if self.pagination is None and default_pagination is not None:
            self.pagination = default_pagination
        self._sealed = True

    def as_dict(self) -> dict[str, Any]:
        """Render the node and its scopes as plain data."""
        fulltext = None
        if self.fulltext is not None:
            fulltext = {
                "expression": self.fulltext.expression,
                "fields": list(self.fulltext.fields),
                "boosts": dict(self.fulltext.boosts),
                "phrase_fields": dict(self.fulltext.phrase_fields),
                "phrase_slop": self.fulltext.phrase_slop,
                "minimum_match": self.fulltext.minimum_match,
                "tie": self.fulltext.tie,
                "highlight": self.fulltext.highlight,
                "highlight_fields": list(self.fulltext.highlight_fields),
            }
        pagination = None
        if self.pagination is not None:
            pagination = {"page": self.pagination.page, "per_page": self.pagination.per_page}
        geo = None
        if self.geo is not None:
            geo = {
                "latitude": self.geo.latitude,
                "longitude": self.geo.longitude,
                "radius_miles": self.geo.radius_miles,
            }
        return {
            "kind": self.kind,
            "default_fields": list(self.default_fields()),
            "fulltext": fulltext,
            "pagination": pagination,
            "geo": geo,
            "restrictions": [
                {
                    "field": r.field,
                    "operator": r.operator,
                    "value": _plain(r.value),
                    "negated": r.negated,
                }
                for r in self.restrictions
            ],
            "sorts": [{"field": s.field, "direction": s.direction} for s in self.sorts],
            "scopes": [child.as_dict() for child in self.scopes],
        }


def _plain(value: Any) -> Any:
    if isinstance(value, (tuple, list, frozenset, set)):
        return [_plain(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
