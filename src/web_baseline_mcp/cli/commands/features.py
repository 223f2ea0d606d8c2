"""
Feature lookup CLI commands.

Commands that query the feature store directly, without a running server.
"""

import asyncio
from pathlib import Path

import click

from web_baseline_mcp.cli.formatters import OutputFormatter
from web_baseline_mcp.comparison import compare_features
from web_baseline_mcp.config.config import Config
from web_baseline_mcp.core.app import build_store
from web_baseline_mcp.store import DEFAULT_SEARCH_LIMIT, FeatureStore

format_option = click.option(
    "--format",
    "-f",
    "format_type",
    type=click.Choice(["human", "json", "table"]),
    default="human",
    help="Output format",
)


def load_config(config_path: Path) -> Config:
    """Load configuration with error handling."""
    try:
        return Config.from_file(str(config_path))
    except Exception as err:
        raise click.ClickException(f"Error loading configuration: {err}") from err


def load_store(ctx: click.Context) -> FeatureStore:
    """Build and populate a feature store from the CLI configuration."""
    config = load_config(ctx.obj["config_path"])
    store = build_store(config.dataset)
    asyncio.run(store.load())
    return store


def _formatter(ctx: click.Context, format_type: str) -> OutputFormatter:
    return OutputFormatter(format_type, ctx.obj.get("quiet", False))


@click.group(name="features")
def features():
    """Commands for looking up web feature compatibility data."""


@features.command("show")
@click.argument("name")
@format_option
@click.pass_context
def show_feature(ctx, name: str, format_type: str):
    """Show browser support and Baseline status for a feature."""
    store = load_store(ctx)
    feature = store.get_feature(name)
    if feature is None:
        available = ", ".join(record.id for record in store.get_all_features())
        raise click.ClickException(
            f'Feature "{name}" not found. Available features: {available}'
        )
    _formatter(ctx, format_type).output(feature, f"Feature: {feature.id}")


@features.command("search")
@click.argument("query")
@click.option(
    "--limit", "-n", type=int, default=DEFAULT_SEARCH_LIMIT, help="Maximum results"
)
@format_option
@click.pass_context
def search_features(ctx, query: str, limit: int, format_type: str):
    """Search feature ids, names and descriptions."""
    store = load_store(ctx)
    hits = store.search(query, limit)
    _formatter(ctx, format_type).output(hits, f"Search results for '{query}'")


@features.command("list")
@format_option
@click.pass_context
def list_features(ctx, format_type: str):
    """List every feature in the dataset."""
    store = load_store(ctx)
    records = store.get_all_features()
    if format_type == "table":
        rows = [
            {"id": r.id, "name": r.name, "baseline": r.baseline_year or ""}
            for r in records
        ]
        _formatter(ctx, format_type).output(rows, "Features")
    else:
        _formatter(ctx, format_type).output(records, "Features")


@features.command("baseline")
@click.argument("year", type=int)
@format_option
@click.pass_context
def baseline_features(ctx, year: int, format_type: str):
    """List the features that reached Baseline in YEAR."""
    store = load_store(ctx)
    entries = store.get_baseline_features(year)
    if not entries and format_type != "json":
        years = ", ".join(str(y) for y in store.available_years())
        click.echo(
            f"No Baseline features found for year {year}. Available years: {years}"
        )
        return
    _formatter(ctx, format_type).output(entries, f"Baseline {year}")


@features.command("compare")
@click.argument("feature_a")
@click.argument("feature_b")
@format_option
@click.pass_context
def compare_features_cmd(ctx, feature_a: str, feature_b: str, format_type: str):
    """Compare browser support between two features."""
    store = load_store(ctx)
    record_a = store.get_feature(feature_a)
    record_b = store.get_feature(feature_b)
    if record_a is None or record_b is None:
        raise click.ClickException(
            f'One or both features not found: "{feature_a}", "{feature_b}"'
        )
    _formatter(ctx, format_type).output(
        compare_features(record_a, record_b), "Support comparison"
    )
