"""Command implementations for SearchSpec CLI.

Keeps query assembly separate from click parameter handling and output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from SearchSpec.config import AppConfig
from SearchSpec.dsl import QueryDSL, build_query
from SearchSpec.solr.params import compile_solr_params
from SearchSpec.utils.log import log


@dataclass(frozen=True, slots=True)
class BuildRequest:
    """Query description collected from CLI options."""

    keywords: str | None = None
    fields: tuple[str, ...] = ()
    page: int | None = None
    per_page: int | None = None
    near: tuple[float, float, float] | None = None
    output_format: str = "spec"


@dataclass(slots=True)
class BuildCommand:
    """Assemble one query spec and render it as plain data."""

    config: AppConfig
    request: BuildRequest

    def execute(self) -> dict[str, Any]:
        spec = build_query(self._configure, pagination=self.config.pagination)
        log.info(
            "Built query spec: keywords=%s page=%d per_page=%d",
            spec.fulltext.expression if spec.fulltext else None,
            spec.pagination.page,
            spec.pagination.per_page,
        )
        if self.request.output_format == "solr":
            return compile_solr_params(spec, schema=self.config.schema)
        return spec.as_dict()

    def _configure(self, query: QueryDSL) -> None:
        request = self.request
        if request.keywords is not None:
            query.keywords(request.keywords, fields=list(request.fields))
        if request.page is not None or request.per_page is not None:
            query.paginate(page=request.page if request.page is not None else 1, per_page=request.per_page)
        if request.near is not None:
            latitude, longitude, miles = request.near
            query.near((latitude, longitude), miles)
