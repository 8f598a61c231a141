"""Click CLI interface definitions."""

from __future__ import annotations

from pathlib import Path

import click

from SearchSpec.cli.commands import BuildRequest
from SearchSpec.cli.runner import CommandRunner
from SearchSpec.config import DEFAULT_CONFIG_PATH, load_config_with_defaults


@click.group(help="SearchSpec: assemble validated search-engine query specs.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    envvar="SEARCHSPEC_CONFIG",
    show_envvar=True,
    help=f"YAML config file, merged over {DEFAULT_CONFIG_PATH} when that file exists.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """CLI entry group; loads configuration into the context."""
    try:
        ctx.obj = load_config_with_defaults(config_path or DEFAULT_CONFIG_PATH)
    except (OSError, TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid config: {e}") from e


@cli.command("build")
@click.option("--keywords", "-k", default=None, help="Fulltext keywords (dismax syntax).")
@click.option("--field", "fields", multiple=True, help="Text field to search; repeatable.")
@click.option("--page", type=int, default=None, help="1-based page number.")
@click.option("--per-page", type=int, default=None, help="Results per page.")
@click.option(
    "--near",
    nargs=3,
    type=float,
    default=None,
    metavar="LAT LON MILES",
    help="Restrict to a radius around a point.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["spec", "solr"]),
    default="spec",
    show_default=True,
    help="Print the spec tree or compiled Solr parameters.",
)
@click.pass_context
def build_cmd(
    ctx: click.Context,
    keywords: str | None,
    fields: tuple[str, ...],
    page: int | None,
    per_page: int | None,
    near: tuple[float, float, float] | None,
    output_format: str,
) -> None:
    """Build a query spec and print it as JSON."""
    request = BuildRequest(
        keywords=keywords,
        fields=fields,
        page=page,
        per_page=per_page,
        near=near or None,
        output_format=output_format,
    )
    CommandRunner(ctx.obj).run_build(action=ctx.command.name, request=request)
