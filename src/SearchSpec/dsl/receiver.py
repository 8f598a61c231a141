"""Implicit-receiver DSL functions.

Inside a configurator that takes no arguments, these functions act on the DSL
currently being configured::

    from SearchSpec.dsl import build_query
    from SearchSpec.dsl import receiver as q

    def configure():
        q.keywords("pizza", lambda: q.phrase_fields(name=2.0))
        q.paginate(page=2)
        q.text_fields(lambda: q.with_("cuisine", "italian"))

    spec = build_query(configure)
"""

from __future__ import annotations

from typing import Any

from SearchSpec.dsl.util import current_receiver


def _dispatch(operation: str, *args: Any, **kwargs: Any) -> Any:
    dsl = current_receiver()
    method = getattr(dsl, operation, None)
    if method is None:
        raise AttributeError(f"{operation}() is not available inside {type(dsl).__name__}")
    return method(*args, **kwargs)


def keywords(text: str | None, configurator: Any = None, **options: Any) -> Any:
    return _dispatch("keywords", text, configurator, **options)


def paginate(**options: Any) -> Any:
    return _dispatch("paginate", **options)


def near(coordinates: Any, radius_miles: Any) -> Any:
    return _dispatch("near", coordinates, radius_miles)


def text_fields(configurator: Any) -> Any:
    return _dispatch("text_fields", configurator)


def with_(field: str, *value: Any) -> Any:
    return _dispatch("with_", field, *value)


def without(field: str, *value: Any) -> Any:
    return _dispatch("without", field, *value)


def order_by(field: str, direction: str = "asc") -> Any:
    return _dispatch("order_by", field, direction)


# Fulltext block operations


def fields(*names: str, **boosts: float) -> Any:
    return _dispatch("fields", *names, **boosts)


def boost_fields(**boosts: float) -> Any:
    return _dispatch("boost_fields", **boosts)


def phrase_fields(**boosts: float) -> Any:
    return _dispatch("phrase_fields", **boosts)


def query_phrase_slop(slop: int) -> Any:
    return _dispatch("query_phrase_slop", slop)


def minimum_match(value: int | str) -> Any:
    return _dispatch("minimum_match", value)


def tie(value: float) -> Any:
    return _dispatch("tie", value)


def highlight(*names: str) -> Any:
    return _dispatch("highlight", *names)
