"""Keyword escaping for dismax fulltext queries.

Dismax accepts a small subset of the Lucene boolean grammar:

- balanced double quotes group a phrase
- ``+term`` requires a term, ``-term`` excludes it

Everything else with meaning to the parser is escaped with a backslash so
user input can never change the query structure. Mismatched quotes cannot be
repaired reliably, so when the quote count is odd every quote is dropped and
the text is searched as plain terms.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from SearchSpec.core.spec import FulltextSpec
from SearchSpec.utils.log import log

RESERVED_CHARS = frozenset('\\+-!(){}[]^~*?:|&/"')
MODIFIERS = frozenset("+-")

_RE_WS = re.compile(r"\s+")


def escape_keywords(raw: str | None, fields: Iterable[str] = ()) -> FulltextSpec:
    """Parse raw keywords into an engine-safe fulltext spec.

    Args:
        raw: User-supplied keyword phrase.
        fields: Text fields to search. Empty defers to the engine default.

    Returns:
        Fulltext spec; ``is_usable`` is False when nothing searchable remains.
    """
    text = raw or ""
    if text.count('"') % 2:
        log.debug("Dropping quotes from keywords with unmatched quote: %r", text)
        text = text.replace('"', "")

    segments = _merge_segments(_split_phrases(text))
    pieces: list[str] = []
    for idx, (segment, quoted) in enumerate(segments):
        if quoted:
            pieces.append(segment)
            continue
        followed_by_phrase = idx + 1 < len(segments)
        pieces.append(
            _escape_segment(
                segment,
                at_input_start=idx == 0,
                followed_by_phrase=followed_by_phrase,
            )
        )

    expression = "".join(pieces).strip()
    return FulltextSpec(expression=expression, fields=_dedup_fields(fields))


def escape_term(value: object) -> str:
    """Escape a single value so it matches literally in a filter query."""
    if isinstance(value, bool):
        return "true" if value else "false"
    out: list[str] = []
    for ch in str(value):
        if ch in RESERVED_CHARS or ch.isspace():
            out.append("\\")
        out.append(ch)
    return "".join(out)


def _split_phrases(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(segment, quoted)`` pairs. Quoted segments keep their quotes.

    Assumes the quote count is even.
    """
    pos = 0
    while pos < len(text):
        start = text.find('"', pos)
        if start == -1:
            yield text[pos:], False
            return
        if start > pos:
            yield text[pos:start], False
        end = text.index('"', start + 1)
        yield text[start : end + 1], True
        pos = end + 1


def _merge_segments(segments: Iterable[tuple[str, bool]]) -> list[tuple[str, bool]]:
    """Drop empty phrases and merge adjacent plain segments."""
    merged: list[tuple[str, bool]] = []
    for segment, quoted in segments:
        if quoted and not segment[1:-1].strip():
            segment, quoted = " ", False
        if not quoted and merged and not merged[-1][1]:
            merged[-1] = (merged[-1][0] + segment, False)
            continue
        merged.append((segment, quoted))
    return merged


def _escape_segment(segment: str, *, at_input_start: bool, followed_by_phrase: bool) -> str:
    """Escape reserved characters outside a phrase.

    A segment that follows a phrase starts mid-term, so its first character
    is not a term start.
    """
    segment = _RE_WS.sub(" ", segment)
    out: list[str] = []
    for i, ch in enumerate(segment):
        if ch in MODIFIERS and _is_modifier(segment, i, at_input_start, followed_by_phrase):
            out.append(ch)
        elif ch in RESERVED_CHARS:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def _is_modifier(segment: str, i: int, at_input_start: bool, followed_by_phrase: bool) -> bool:
    term_start = segment[i - 1] == " " if i > 0 else at_input_start
    if not term_start:
        return False
    if i + 1 < len(segment):
        return segment[i + 1] != " "
    return followed_by_phrase


def _dedup_fields(fields: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for name in fields:
        name = str(name).strip()
        if not name or name in seen:
            continue
        seen.add(name)
        out.append(name)
    return tuple(out)
