"""Main entry point for the Web Baseline MCP server."""

import json
import logging
import os
import sys

from web_baseline_mcp.config.config import Config
from web_baseline_mcp.core import app

# Configure logging; stdout carries the stdio protocol so logs go to stderr
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WBM_CONFIG"


def detect_cli_command():
    """Detect if CLI command is being used."""
    cli_commands = [
        "features",
        "server",
        "config",
        "cache",
        "show",
        "search",
        "baseline",
        "compare",
        "list",
        "start",
        "status",
        "init",
        "clear",
    ]
    return any(cmd in sys.argv for cmd in cli_commands)


def main():
    """Main entry point with CLI/server mode detection."""

    # CLI mode detection
    if "--cli" in sys.argv or detect_cli_command():
        from web_baseline_mcp.cli.main import cli

        # Remove --cli flag if present
        if "--cli" in sys.argv:
            sys.argv.remove("--cli")

        cli()
        return

    # Default: MCP server mode; "sse" selects the HTTP/SSE server
    try:
        logger.info("Starting Web Baseline MCP server...")
        config = Config.from_file(os.getenv(CONFIG_ENV_VAR, "config.yaml"))

        if len(sys.argv) > 1 and sys.argv[1] == "sse":
            config.mcp.transports = ["sse"]
            if os.getenv("PORT"):
                config.mcp.port = int(os.environ["PORT"])

        if config.mcp.debug:
            logger.setLevel(logging.DEBUG)
        logger.debug(json.dumps(json.loads(config.model_dump_json()), indent=4))
        app.run(config)
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
