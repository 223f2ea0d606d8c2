"""
Configuration management CLI commands.
"""

import click
import yaml

from web_baseline_mcp.config.config import Config

DEFAULT_CONFIG = {
    "dataset": {
        "source": None,
        "ttl_seconds": 3600,
        "timeout": 30,
        "verify_ssl": True,
        "use_disk_cache": True,
    },
    "mcp": {
        "transports": ["stdio"],
        "address": "127.0.0.1",
        "port": 3001,
        "debug": False,
    },
}


@click.group(name="config")
def config_cmd():
    """Commands for managing configuration."""
    pass


@config_cmd.command("init")
@click.option("--source", help="URL or path of a web-features data.json document")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
@click.pass_context
def init_config(ctx, source, force: bool):
    """Initialize a new configuration file."""
    config_path = ctx.obj["config_path"]

    if config_path.exists() and not force:
        if not click.confirm(
            f"Configuration file {config_path} already exists. Overwrite?"
        ):
            click.echo("Configuration initialization cancelled")
            return

    config_data = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    if source:
        config_data["dataset"]["source"] = source

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            yaml.safe_dump(config_data, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise click.ClickException(f"Error writing configuration: {e}") from e

    click.echo(f"✓ Configuration written to {config_path}")


@config_cmd.command("show")
@click.pass_context
def show_config(ctx):
    """Show the effective configuration (file plus environment overrides)."""
    config_path = ctx.obj["config_path"]

    try:
        config = Config.from_file(str(config_path))
    except Exception as e:
        raise click.ClickException(f"Error reading configuration: {e}") from e

    click.echo(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False))


@config_cmd.command("validate")
@click.pass_context
def validate_config(ctx):
    """Validate configuration file."""
    config_path = ctx.obj["config_path"]

    try:
        config = Config.from_file(str(config_path))
    except Exception as e:
        raise click.ClickException(f"Configuration validation failed: {e}") from e

    click.echo("✓ Configuration file is valid")
    if not config_path.exists():
        click.echo(f"⚠️  Warning: {config_path} not found, using defaults")
    if not config.dataset.source:
        click.echo("Dataset: bundled sample data")
    if config.dataset.ttl_seconds == 0:
        click.echo("⚠️  Warning: ttl_seconds is 0, data reloads on every request")
