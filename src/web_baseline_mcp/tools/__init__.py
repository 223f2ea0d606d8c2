"""MCP tools for web feature compatibility data."""

from .features import (
    TOOLS,
    compare_support,
    find_feature_id,
    get_feature_support,
    list_baseline_features,
    register_tools,
)

__all__ = [
    "TOOLS",
    "compare_support",
    "find_feature_id",
    "get_feature_support",
    "list_baseline_features",
    "register_tools",
]
