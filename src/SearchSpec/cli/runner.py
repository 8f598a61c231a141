"""Command runner for coordinating CLI execution.

Handles logging configuration, output and error mapping for commands.
"""

from __future__ import annotations

import json

import click

from SearchSpec.cli.commands import BuildCommand, BuildRequest
from SearchSpec.config import AppConfig
from SearchSpec.utils.log import configure_logging, log


class CommandRunner:
    """Runs CLI commands against a loaded configuration."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_build(self, action: str, request: BuildRequest) -> None:
        """Build a query spec and echo it as JSON.

        Args:
            action: The CLI command name (e.g., 'build').
            request: Query description from CLI options.

        Raises:
            click.Abort: When the spec cannot be built.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            payload = BuildCommand(config=self.config, request=request).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Build failed: %s", e)
            raise click.Abort from e
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
