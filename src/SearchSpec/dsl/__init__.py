"""Query-assembly DSL for SearchSpec.

``build_query`` creates a root spec, runs a configurator against a
``QueryDSL`` and seals the result.
"""

from __future__ import annotations

__all__ = [
    "FulltextDSL",
    "QueryDSL",
    "RestrictionBuilder",
    "ScopeDSL",
    "build_query",
    "compose_scope",
    "instance_eval_or_call",
    "open_scope",
]

from SearchSpec.dsl.fulltext import FulltextDSL
from SearchSpec.dsl.query import QueryDSL, build_query
from SearchSpec.dsl.scope import RestrictionBuilder, ScopeDSL, compose_scope, open_scope
from SearchSpec.dsl.util import instance_eval_or_call
