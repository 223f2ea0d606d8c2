"""
Server management CLI commands.

Commands for managing the MCP server lifecycle.
"""

from typing import Optional

import click

from web_baseline_mcp.config.config import Config


@click.group(name="server")
def server():
    """Commands for managing the MCP server."""
    pass


@server.command("start")
@click.option("--port", "-p", type=int, help="Port to run server on")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="Transport protocol",
)
@click.pass_context
def start_server(ctx, port: Optional[int], debug: bool, transport: Optional[str]):
    """Start the MCP server."""
    config_path = ctx.obj["config_path"]

    try:
        config = Config.from_file(str(config_path))

        # Override config with CLI options
        if port:
            config.mcp.port = port
        if debug:
            config.mcp.debug = True
        if transport:
            config.mcp.transports = [transport]

        from web_baseline_mcp.core import app

        click.echo(f"Starting MCP server on port {config.mcp.port}...", err=True)
        if debug:
            click.echo("Debug mode enabled", err=True)

        app.run(config)

    except KeyboardInterrupt:
        click.echo("\nServer stopped by user", err=True)
    except Exception as e:
        raise click.ClickException(f"Error starting server: {e}")


@server.command("status")
@click.pass_context
def status_server(ctx):
    """Show server status and configuration."""
    config_path = ctx.obj["config_path"]

    try:
        config = Config.from_file(str(config_path))

        click.echo("Server Configuration:")
        click.echo(f"  Config file: {config_path}")
        click.echo(f"  MCP address: {config.mcp.address}")
        click.echo(f"  MCP port: {config.mcp.port}")
        click.echo(f"  MCP transports: {', '.join(config.mcp.transports)}")
        click.echo(f"  Debug mode: {config.mcp.debug}")
        click.echo(f"  Allowed origins: {', '.join(config.mcp.allowed_origins)}")

        click.echo("\nDataset:")
        click.echo(f"  Source: {config.dataset.source or 'bundled sample data'}")
        click.echo(f"  TTL: {config.dataset.ttl_seconds}s")
        if config.dataset.source and not config.dataset.verify_ssl:
            click.echo("  SSL verification: disabled")

    except Exception as e:
        raise click.ClickException(f"Error getting server status: {e}")
