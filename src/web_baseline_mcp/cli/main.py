"""
Web Baseline MCP CLI - command line access to web feature compatibility data.

Provides direct lookups against the feature store, server management and
configuration utilities.
"""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from web_baseline_mcp.cli.commands.cache import cache_cmd
from web_baseline_mcp.cli.commands.config import config_cmd
from web_baseline_mcp.cli.commands.features import features
from web_baseline_mcp.cli.commands.server import server

console = Console(stderr=True)


def setup_logging(debug: bool = False) -> None:
    """Set up logging with Rich handler."""
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )

    logging.getLogger("web_baseline_mcp").setLevel(level)

    # Suppress noisy third-party loggers unless in debug mode
    if not debug:
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        logging.getLogger("web_baseline_mcp.store").setLevel(logging.WARNING)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default=None,
    help="Configuration file path (default: config.yaml)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--quiet", is_flag=True, help="Suppress non-error output")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], debug: bool, quiet: bool) -> None:
    """
    Web Baseline MCP - browser compatibility and Baseline data for AI agents

    Examples:
        web-baseline-mcp features show "css :has()"      # Support matrix
        web-baseline-mcp features search canvas          # Find feature ids
        web-baseline-mcp features baseline 2024          # Baseline features by year
        web-baseline-mcp features compare webusb fetch-streaming
        web-baseline-mcp server start --transport sse    # Start HTTP/SSE server
    """
    setup_logging(debug and not quiet)

    # Store shared options in context
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config or Path("config.yaml")
    ctx.obj["debug"] = debug
    ctx.obj["quiet"] = quiet

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(features)
cli.add_command(server)
cli.add_command(config_cmd, name="config")
cli.add_command(cache_cmd, name="cache")


if __name__ == "__main__":
    cli()
