"""Scope DSL: field restrictions, geo filters and nested field scopes."""

from __future__ import annotations

from collections.abc import Set
from typing import Any, Callable

from SearchSpec.core.errors import InvalidArgument
from SearchSpec.core.spec import GeoRestriction, QuerySpec, Restriction, ScopeKind
from SearchSpec.dsl.util import instance_eval_or_call
from SearchSpec.query.geo import build_geo_restriction
from SearchSpec.utils.log import log


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


class RestrictionBuilder:
    """Pending restriction on one field, completed by an operator call."""

    def __init__(self, node: QuerySpec, field: str, *, negated: bool) -> None:
        self._node = node
        self._field = field
        self._negated = negated

    def equal_to(self, value: Any) -> Restriction:
        return self._add("equal_to", value)

    def less_than(self, value: Any) -> Restriction:
        return self._add("less_than", _expect_bound("less_than", value))

    def greater_than(self, value: Any) -> Restriction:
        return self._add("greater_than", _expect_bound("greater_than", value))

    def between(self, low: Any, high: Any = UNSET) -> Restriction:
        """Restrict to an inclusive range, given as two bounds or a ``range``.

        A ``None`` bound leaves that end open; at least one bound is required.
        """
        bounds = _range_bounds(low) if high is UNSET else (low, high)
        if bounds[0] is None and bounds[1] is None:
            raise InvalidArgument(f"between on {self._field} requires at least one bound")
        return self._add("between", bounds)

    def any_of(self, values: Any) -> Restriction:
        return self._add("any_of", _as_values(values))

    def _add(self, operator: Any, value: Any) -> Restriction:
        restriction = Restriction(field=self._field, operator=operator, value=value, negated=self._negated)
        self._node.add_restriction(restriction)
        return restriction


class ScopeDSL:
    """Operations available at every level of a query.

    ``QueryDSL`` extends this with keywords, pagination and sorting; field
    scopes opened by ``text_fields`` only expose these.
    """

    def __init__(self, node: QuerySpec) -> None:
        self._node = node

    @property
    def spec(self) -> QuerySpec:
        return self._node

    def with_(self, field: str, value: Any = UNSET) -> RestrictionBuilder | Restriction:
        """Restrict results to documents whose ``field`` matches.

        With a value, lists/tuples/sets match any member, a ``range`` matches
        its inclusive bounds and anything else matches exactly. Without a
        value, returns a builder for the other operators, e.g.
        ``with_("price").less_than(10)``.
        """
        return self._restrict(field, value, negated=False)

    def without(self, field: str, value: Any = UNSET) -> RestrictionBuilder | Restriction:
        """Exclude documents whose ``field`` matches; see ``with_``."""
        return self._restrict(field, value, negated=True)

    def near(self, coordinates: Any, radius_miles: Any) -> GeoRestriction:
        """Restrict results to within ``radius_miles`` of ``(lat, lon)``."""
        self._node.ensure_open()
        geo = build_geo_restriction(coordinates, radius_miles)
        if self._node.geo is not None:
            log.debug("Replacing geo restriction %s with %s", self._node.geo, geo)
        self._node.set_geo(geo)
        return geo

    def text_fields(self, configurator: Callable[..., Any]) -> QuerySpec:
        """Open a scope whose restrictions apply to text fields."""
        return compose_scope(self._node, "text_fields", configurator)

    def _restrict(self, field: str, value: Any, *, negated: bool) -> RestrictionBuilder | Restriction:
        self._node.ensure_open()
        if not isinstance(field, str) or not field.strip():
            raise InvalidArgument(f"restriction field must be a non-empty string, got {field!r}")
        builder = RestrictionBuilder(self._node, field.strip(), negated=negated)
        if value is UNSET:
            return builder
        if isinstance(value, range):
            return builder.between(value)
        if isinstance(value, (list, tuple, Set)):
            return builder.any_of(value)
        return builder.equal_to(value)


def open_scope(parent: QuerySpec, kind: ScopeKind) -> QuerySpec:
    """Create an open child node linked to ``parent``."""
    parent.ensure_open()
    return QuerySpec(kind, parent=parent)


def compose_scope(parent: QuerySpec, kind: ScopeKind, configurator: Callable[..., Any]) -> QuerySpec:
    """Open a child scope, configure it, seal it and attach it to ``parent``.

    The child is only attached once its configurator returns; if the
    configurator raises, the child is discarded.
    """
    child = open_scope(parent, kind)
    instance_eval_or_call(ScopeDSL(child), configurator)
    child.seal()
    parent.add_scope(child)
    log.debug(
        "Sealed %s scope at depth %d (restrictions=%d scopes=%d)",
        kind,
        child.depth,
        len(child.restrictions),
        len(child.scopes),
    )
    return child


def _as_values(values: Any) -> tuple[Any, ...]:
    if isinstance(values, (str, bytes)):
        return (values,)
    if isinstance(values, Set):
        return tuple(sorted(values, key=repr))
    try:
        return tuple(values)
    except TypeError:
        raise InvalidArgument(f"any_of requires an iterable of values, got {values!r}") from None


def _expect_bound(operator: str, value: Any) -> Any:
    if value is None:
        raise InvalidArgument(f"{operator} requires a bound, got None")
    return value


def _range_bounds(value: Any) -> tuple[Any, Any]:
    if isinstance(value, range):
        if value.step != 1 or len(value) == 0:
            raise InvalidArgument(f"between requires a non-empty range with step 1, got {value!r}")
        return (value.start, value.stop - 1)
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return (value[0], value[1])
    raise InvalidArgument(f"between requires two bounds or a range, got {value!r}")
