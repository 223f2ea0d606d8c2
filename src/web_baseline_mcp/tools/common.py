"""
Shared helpers for MCP tools.

This module centralizes:
- Store resolution from the MCP request context
- JSON text payloads returned to tool callers
- Hint strings listing what is available when a lookup misses
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from web_baseline_mcp.store import FeatureStore


def get_store(ctx) -> FeatureStore:
    """Resolve the feature store from an MCP context."""
    if ctx is None:
        raise ValueError("MCP context is not available outside of a request")
    return ctx.request_context.lifespan_context.store


def to_payload(data: Any) -> str:
    """Serialize a tool result as indented JSON text."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def join_hint(values: Iterable[Any]) -> str:
    return ", ".join(str(v) for v in values) or "none"


def available_features_hint(store: FeatureStore) -> str:
    return join_hint(record.id for record in store.get_all_features())


def available_years_hint(store: FeatureStore) -> str:
    return join_hint(store.available_years())
