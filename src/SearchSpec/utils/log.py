"""Logging for query-spec assembly and the ``searchspec`` CLI.

The ``SearchSpec`` logger records what the builders change about a query
without raising:
- debug   -> quotes dropped from unbalanced keywords, empty keyword blocks
             skipped, geo restrictions replaced, scopes sealed
- warning -> boosts on fields outside the searched list
- info    -> the per-build summary printed by the CLI

Builders only emit records. ``configure_logging`` attaches the console and
optional per-action file handlers when the CLI starts a command.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("SearchSpec")
log.addHandler(logging.NullHandler())


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Attach console (and optionally file) handlers to the SearchSpec logger.

    Uses format: mm-dd HH:MM:SS [<LVL>] <message>
    where LVL is one of: DEBG/INFO/WARN/ERRO.

    Args:
        level: Console logging level (e.g., INFO, DEBUG).
        action: CLI action name, used for the log file path.
        log_to_file: Whether to mirror logs to a file at DEBUG level.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(
        fmt="%(asctime)s [%(levelabbr)s] %(message)s",
        datefmt="%m-%d %H:%M:%S",
    )

    log.handlers.clear()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(formatter)
    log.addHandler(stream_handler)

    log_path: Path | None = None
    if log_to_file and action:
        action_dir = Path(log_dir or "log") / action
        action_dir.mkdir(parents=True, exist_ok=True)
        log_path = action_dir / f"{action}_{datetime.now().strftime('%m%d%H%M%S')}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(logging.DEBUG if log_path else resolved_level)
    log.propagate = False
    return log_path
