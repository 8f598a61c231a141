"""Solr request-parameter compiler.

Compiles a sealed `QuerySpec` tree into the parameter mapping of a Solr
``select`` request. Sending the request is left to the connector.

Mapping
- fulltext        -> defType=dismax, q, qf, pf, ps, mm, tie, hl, hl.fl
- no fulltext     -> q=*:* (standard parser)
- restrictions    -> fq, one per restriction, including nested scopes
- geo restriction -> fq={!geofilt sfield=<location_field> pt=lat,lon d=<km>}
- sorts           -> sort
- pagination      -> start, rows
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Sequence

from SearchSpec.config.schema import SchemaConfig
from SearchSpec.core.spec import FulltextSpec, GeoRestriction, QuerySpec, Restriction
from SearchSpec.query.escape import escape_term
from SearchSpec.utils.log import log

KM_PER_MILE = 1.609344
MATCH_ALL = "*:*"


def compile_solr_params(spec: QuerySpec, *, schema: SchemaConfig | None = None) -> dict[str, Any]:
    """Compile a sealed spec into Solr request parameters.

    Args:
        spec: Sealed root spec.
        schema: Schema facts; defaults to ``SchemaConfig()``.

    Returns:
        Parameter mapping. ``fq`` is a list when present.

    Raises:
        ValueError: If the spec is still open.
    """
    if not spec.sealed:
        raise ValueError("spec must be sealed before it is compiled")
    schema = schema or SchemaConfig()

    params: dict[str, Any] = {}
    if spec.fulltext is not None:
        params.update(_compile_fulltext(spec.fulltext, schema))
    else:
        params["q"] = MATCH_ALL

    filters = list(_filter_queries(spec, schema))
    if filters:
        params["fq"] = filters
    if spec.sorts:
        params["sort"] = ", ".join(f"{s.field} {s.direction}" for s in spec.sorts)
    if spec.pagination is not None:
        params["start"] = spec.pagination.offset
        params["rows"] = spec.pagination.per_page
    return params


def _compile_fulltext(fulltext: FulltextSpec, schema: SchemaConfig) -> dict[str, Any]:
    params: dict[str, Any] = {"defType": "dismax", "q": fulltext.expression}

    qf = _boosted_fields(fulltext.fields or schema.text_fields, fulltext.boosts)
    if qf:
        params["qf"] = qf
    pf = _boosted_fields(tuple(fulltext.phrase_fields), fulltext.phrase_fields)
    if pf:
        params["pf"] = pf
    if fulltext.phrase_slop is not None:
        params["ps"] = fulltext.phrase_slop
    if fulltext.minimum_match is not None:
        params["mm"] = fulltext.minimum_match
    if fulltext.tie is not None:
        params["tie"] = fulltext.tie
    if fulltext.highlight:
        params["hl"] = "on"
        if fulltext.highlight_fields:
            params["hl.fl"] = ",".join(fulltext.highlight_fields)
    return params


def _boosted_fields(fields: Sequence[str], boosts: Mapping[str, float]) -> str:
    """Render ``field^boost`` terms for ``fields``.

    Boosts never widen or narrow the searched fields, so a boost on a field
    outside ``fields`` has no effect.
    """
    ignored = [name for name in boosts if name not in fields]
    if ignored:
        log.warning("Ignoring boosts on fields that are not searched: %s", ", ".join(ignored))
    parts = []
    for name in fields:
        boost = boosts.get(name)
        parts.append(f"{name}^{_format_number(boost)}" if boost is not None else name)
    return " ".join(parts)


def _filter_queries(node: QuerySpec, schema: SchemaConfig) -> Iterator[str]:
    for restriction in node.restrictions:
        yield _compile_restriction(restriction)
    if node.geo is not None:
        yield _compile_geo(node.geo, schema.location_field)
    for child in node.scopes:
        yield from _filter_queries(child, schema)


def _compile_restriction(restriction: Restriction) -> str:
    field = restriction.field
    value = restriction.value
    negated = restriction.negated

    if restriction.operator == "equal_to" and value is None:
        # Matching "no value" is the negation of "any value".
        negated = not negated
        clause = f"{field}:[* TO *]"
    elif restriction.operator == "equal_to":
        clause = f"{field}:{escape_term(value)}"
    elif restriction.operator == "less_than":
        clause = f"{field}:{{* TO {escape_term(value)}}}"
    elif restriction.operator == "greater_than":
        clause = f"{field}:{{{escape_term(value)} TO *}}"
    elif restriction.operator == "between":
        low, high = (_range_bound(bound) for bound in value)
        clause = f"{field}:[{low} TO {high}]"
    elif restriction.operator == "any_of":
        if not value:
            raise ValueError(f"any_of restriction on {field} has no values")
        clause = f"{field}:(" + " OR ".join(escape_term(v) for v in value) + ")"
    else:
        raise ValueError(f"Unsupported restriction operator: {restriction.operator}")

    return f"-{clause}" if negated else clause


def _range_bound(value: Any) -> str:
    return "*" if value is None else escape_term(value)


def _compile_geo(geo: GeoRestriction, location_field: str) -> str:
    distance_km = geo.radius_miles * KM_PER_MILE
    return (
        f"{{!geofilt sfield={location_field} "
        f"pt={_format_number(geo.latitude)},{_format_number(geo.longitude)} "
        f"d={_format_number(distance_km)}}}"
    )


def _format_number(value: float) -> str:
    text = f"{float(value):.6f}".rstrip("0").rstrip(".")
    return text if text not in {"", "-0"} else "0"
