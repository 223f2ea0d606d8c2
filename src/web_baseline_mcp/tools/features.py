"""
Feature compatibility tools for the MCP server.

Each tool loads the store if its data is stale, answers from memory and
returns a JSON text payload. Lookups that miss return an explanatory message
instead of raising.
"""

from typing import Optional, Union

from mcp.server.fastmcp import Context, FastMCP

from web_baseline_mcp.comparison import compare_features
from web_baseline_mcp.store import DEFAULT_SEARCH_LIMIT
from web_baseline_mcp.tools.common import (
    available_features_hint,
    available_years_hint,
    get_store,
    to_payload,
)


async def get_feature_support(featureName: str, ctx: Context) -> str:  # noqa: N803
    """
    Get browser support and Baseline data for a web feature.

    Args:
        featureName: Name of the web feature (e.g. "css-has-selector",
            "offscreen-canvas", "CSS :has()")

    Returns:
        JSON with the support matrix, Baseline status and reference links
    """
    store = get_store(ctx)
    await store.load()

    feature = store.get_feature(featureName)
    if feature is None:
        return (
            f'Feature "{featureName}" not found. '
            f"Available features: {available_features_hint(store)}"
        )

    raw = store.get_raw_feature(featureName)
    record = feature.to_json_dict()

    result = {
        "id": feature.id,
        "name": feature.name,
        "description": feature.description,
        "descriptionHtml": feature.description_html,
        "group": feature.group,
        "baseline": record.get("baseline"),
        "baselineYear": feature.baseline_year,
        "baselineStatus": "Baseline" if feature.baseline else "Not in Baseline",
        "browserSupport": record["support"],
        "compatFeatures": list(feature.compat_features) or None,
        "links": {"mdn": feature.mdn_url, "spec": feature.spec_url},
        "status": record["status"],
        "raw": raw,
    }
    # Keys that only external datasets provide are dropped when empty
    for key in ("descriptionHtml", "group", "compatFeatures", "raw"):
        if result[key] is None:
            del result[key]

    return to_payload(result)


async def find_feature_id(
    query: str, ctx: Context, limit: Optional[int] = None
) -> str:
    """
    Search for feature ids by free-text query.

    Matches case-insensitively against feature ids, names and descriptions.

    Args:
        query: Text to look for (e.g. "canvas", "selector")
        limit: Maximum number of results (default 10)

    Returns:
        JSON with the query, result count and matching features
    """
    store = get_store(ctx)
    await store.load()

    results = store.search(query, limit if limit is not None else DEFAULT_SEARCH_LIMIT)
    return to_payload(
        {
            "query": query,
            "count": len(results),
            "results": [hit.model_dump(exclude_none=True) for hit in results],
        }
    )


async def list_baseline_features(year: Union[int, str], ctx: Context) -> str:
    """
    List all features included in a specific Baseline year.

    Args:
        year: Baseline year (e.g. 2024, 2023)

    Returns:
        JSON with the year, feature count and the features with their quarter
    """
    store = get_store(ctx)
    await store.load()

    try:
        year_value = int(year)
    except (TypeError, ValueError):
        return (
            f'Invalid year "{year}". '
            f"Available years: {available_years_hint(store)}"
        )

    entries = store.get_baseline_features(year_value)
    if not entries:
        return (
            f"No Baseline features found for year {year_value}. "
            f"Available years: {available_years_hint(store)}"
        )

    return to_payload(
        {
            "year": year_value,
            "count": len(entries),
            "features": [
                entry.model_dump(by_alias=True, exclude={"year"}) for entry in entries
            ],
        }
    )


async def compare_support(featureA: str, featureB: str, ctx: Context) -> str:  # noqa: N803
    """
    Compare browser support between two web features.

    Args:
        featureA: First feature name
        featureB: Second feature name

    Returns:
        JSON with both features, a per-browser support table and, when both
        features are in Baseline, the difference in Baseline years
    """
    store = get_store(ctx)
    await store.load()

    feature_a = store.get_feature(featureA)
    feature_b = store.get_feature(featureB)
    if feature_a is None or feature_b is None:
        return f'One or both features not found: "{featureA}", "{featureB}"'

    return to_payload(compare_features(feature_a, feature_b).to_json_dict())


TOOLS = (
    ("getFeatureSupport", get_feature_support),
    ("findFeatureId", find_feature_id),
    ("listBaselineFeatures", list_baseline_features),
    ("compareSupport", compare_support),
)


def register_tools(mcp: FastMCP) -> None:
    """Register the feature tools on *mcp* under their protocol names."""
    for name, fn in TOOLS:
        mcp.tool(name=name)(fn)
