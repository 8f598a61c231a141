"""Errors raised while assembling a query specification."""

from __future__ import annotations


class QuerySpecError(Exception):
    """Base class for query-assembly errors."""


class MissingArgument(QuerySpecError, ValueError):
    """Raised when a required option is not supplied."""


class UnknownOption(QuerySpecError, ValueError):
    """Raised when an option mapping carries an unrecognized key."""

    def __init__(self, option: object, operation: str) -> None:
        self.option = option
        self.operation = operation
        super().__init__(f"unknown argument {option!r} passed to {operation}")


class InvalidArgument(QuerySpecError, ValueError):
    """Raised when a recognized option has an unusable value."""


class InvalidRestriction(QuerySpecError, ValueError):
    """Raised when geo coordinates or radius are malformed."""


class SealedSpecError(QuerySpecError, RuntimeError):
    """Raised when a sealed spec node is configured again."""


class DuplicateFulltext(QuerySpecError, RuntimeError):
    """Raised when keywords are set twice on the same spec node."""
