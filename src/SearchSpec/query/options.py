"""Option-mapping checks shared by the DSL operations."""

from __future__ import annotations

from typing import AbstractSet, Any, Mapping

from SearchSpec.core.errors import UnknownOption


def reject_unknown_options(options: Mapping[str, Any], allowed: AbstractSet[str], operation: str) -> None:
    """Raise for the first key of ``options`` not in ``allowed``.

    Keys are checked in mapping iteration order, so with several unknown keys
    the first one encountered is reported.

    Raises:
        UnknownOption: If any key is not recognized.
    """
    for key in options:
        if key not in allowed:
            raise UnknownOption(key, operation)
