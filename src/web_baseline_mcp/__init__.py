"""Web platform compatibility data over MCP and HTTP."""

__version__ = "1.0.0"
