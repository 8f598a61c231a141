"""CLI package for SearchSpec.

Builds a query spec from command-line options and prints it as JSON, either
as the spec tree or as compiled Solr parameters.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from dotenv import load_dotenv

from SearchSpec.cli.runner import CommandRunner
from SearchSpec.cli.ui import cli


def main() -> None:
    """Run SearchSpec CLI.

    Entry point referenced by console script in pyproject.toml. Variables in
    a local ``.env`` file (e.g. ``SEARCHSPEC_CONFIG``) are loaded first.
    """
    load_dotenv()
    cli()
