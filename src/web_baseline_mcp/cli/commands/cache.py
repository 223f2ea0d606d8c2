"""
Cache management CLI commands.
"""

import click


@click.group(name="cache")
def cache_cmd():
    """Commands for managing the disk cache."""


@cache_cmd.command("clear")
def cache_clear():
    """Remove all cached dataset downloads."""
    from web_baseline_mcp.cache import clear_cache

    count = clear_cache()
    click.echo(f"Cleared {count} cached entries.")
