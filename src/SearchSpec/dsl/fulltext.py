"""Fulltext DSL available inside a ``keywords`` configurator."""

from __future__ import annotations

import math
from dataclasses import replace
from decimal import Decimal
from numbers import Real
from typing import Any

from SearchSpec.core.errors import InvalidArgument, SealedSpecError
from SearchSpec.core.spec import FulltextSpec


class FulltextDSL:
    """Adjusts how one keywords block is searched.

    Example::

        def configure(q):
            q.keywords("great pizza", lambda text: (
                text.fields("name", description=0.5),
                text.phrase_fields(name=2.0),
                text.minimum_match(1),
            ))
    """

    def __init__(self, base: FulltextSpec) -> None:
        self._base = base
        self._fields: list[str] | None = None
        self._boosts: dict[str, float] = dict(base.boosts)
        self._phrase_fields: dict[str, float] = dict(base.phrase_fields)
        self._phrase_slop = base.phrase_slop
        self._minimum_match = base.minimum_match
        self._tie = base.tie
        self._highlight_fields: list[str] = list(base.highlight_fields)
        self._highlight = base.highlight
        self._closed = False

    def fields(self, *names: str, **boosts: float) -> None:
        """Search only the given fields, boosting those passed as keywords.

        Replaces any ``fields`` option given to ``keywords``; repeated calls
        add to the list.
        """
        self._ensure_open()
        if self._fields is None:
            self._fields = []
        for name in (*names, *boosts):
            if name not in self._fields:
                self._fields.append(name)
        self._boosts.update(_check_boosts(boosts))

    def boost_fields(self, **boosts: float) -> None:
        """Boost matches in fields that are already searched.

        Does not change which fields are searched; a boost on a field outside
        the searched list (explicit or the schema default) has no effect.
        """
        self._ensure_open()
        self._boosts.update(_check_boosts(boosts))

    def phrase_fields(self, **boosts: float) -> None:
        """Boost documents where all keywords appear close together in a field."""
        self._ensure_open()
        self._phrase_fields.update(_check_boosts(boosts))

    def query_phrase_slop(self, slop: int) -> None:
        self._ensure_open()
        if isinstance(slop, bool) or not isinstance(slop, int) or slop < 0:
            raise InvalidArgument(f"phrase slop must be a non-negative integer, got {slop!r}")
        self._phrase_slop = slop

    def minimum_match(self, value: int | str) -> None:
        """Set the dismax minimum-should-match, e.g. ``2`` or ``"75%"``."""
        self._ensure_open()
        if isinstance(value, bool) or not isinstance(value, (int, str)) or not str(value).strip():
            raise InvalidArgument(f"minimum match must be an integer or expression, got {value!r}")
        self._minimum_match = str(value).strip()

    def tie(self, value: float) -> None:
        self._ensure_open()
        if not _is_finite_number(value) or not 0 <= value <= 1:
            raise InvalidArgument(f"tie must be a number between 0 and 1, got {value!r}")
        self._tie = float(value)

    def highlight(self, *names: str) -> None:
        """Request highlighting, for the given fields or the engine default."""
        self._ensure_open()
        self._highlight = True
        for name in names:
            if name not in self._highlight_fields:
                self._highlight_fields.append(name)

    def close(self) -> FulltextSpec:
        """Freeze the adjustments into a new spec; the DSL rejects later calls."""
        self._ensure_open()
        self._closed = True
        return replace(
            self._base,
            fields=tuple(self._fields) if self._fields is not None else self._base.fields,
            boosts=self._boosts,
            phrase_fields=self._phrase_fields,
            phrase_slop=self._phrase_slop,
            minimum_match=self._minimum_match,
            tie=self._tie,
            highlight_fields=tuple(self._highlight_fields),
            highlight=self._highlight,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise SealedSpecError("keywords block has returned and can no longer be configured")


def _check_boosts(boosts: dict[str, Any]) -> dict[str, float]:
    checked: dict[str, float] = {}
    for name, boost in boosts.items():
        if not _is_finite_number(boost) or boost <= 0:
            raise InvalidArgument(f"boost for {name} must be a positive number, got {boost!r}")
        checked[name] = float(boost)
    return checked


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)
