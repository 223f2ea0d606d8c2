"""
REST and SSE routes served next to the MCP HTTP transports.

Routes are registered on the FastMCP instance so they share its Starlette
application, host and port.
"""

import functools
import logging
import time
from typing import Awaitable, Callable, Optional, Sequence

from mcp.server.fastmcp import FastMCP
from sse_starlette.sse import EventSourceResponse
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from web_baseline_mcp import __version__
from web_baseline_mcp.comparison import compare_features
from web_baseline_mcp.config.config import DEFAULT_ALLOWED_ORIGINS
from web_baseline_mcp.core.events import EventBroadcaster
from web_baseline_mcp.store import DEFAULT_SEARCH_LIMIT, FeatureStore

logger = logging.getLogger(__name__)

SERVER_NAME = "Web Baseline MCP Server"

Handler = Callable[[Request], Awaitable[Response]]


def index_document(transports: Sequence[str] = ()) -> dict:
    return {
        "name": SERVER_NAME,
        "version": __version__,
        "transports": list(transports),
        "mcp": {
            "streamable-http": "POST /mcp",
            "sse": "GET /sse",
        },
        "api": {
            "features": "/api/features/{name}",
            "baseline": "/api/baseline/{year}",
            "compare": "/api/compare/{featureA}/{featureB}",
            "search": "/api/search?q={query}&limit={limit}",
            "events": "/events",
            "health": "/health",
        },
        "examples": {
            "feature": "/api/features/css-has-selector",
            "baseline": "/api/baseline/2024",
            "compare": "/api/compare/css-has-selector/offscreen-canvas",
            "search": "/api/search?q=canvas",
        },
    }


def origin_allowed(origin: Optional[str], allowed_origins: Sequence[str]) -> bool:
    """Requests without an Origin header are allowed."""
    if not origin:
        return True
    return origin.startswith(tuple(allowed_origins))


def register_routes(
    mcp: FastMCP,
    store: FeatureStore,
    events: EventBroadcaster,
    allowed_origins: Optional[Sequence[str]] = None,
    transports: Sequence[str] = (),
) -> None:
    """Attach the REST API, health check and event stream to *mcp*."""
    origins = list(allowed_origins or DEFAULT_ALLOWED_ORIGINS)

    def guarded(handler: Handler) -> Handler:
        @functools.wraps(handler)
        async def wrapper(request: Request) -> Response:
            origin = request.headers.get("origin")
            if not origin_allowed(origin, origins):
                logger.warning(f"Rejected request from origin {origin}")
                return JSONResponse({"error": "Invalid origin"}, status_code=403)
            try:
                return await handler(request)
            except Exception:
                logger.exception(f"Error handling {request.url.path}")
                return JSONResponse(
                    {"error": "Internal server error"}, status_code=500
                )

        return wrapper

    @mcp.custom_route("/", methods=["GET"])
    @guarded
    async def index(request: Request) -> Response:
        return JSONResponse(index_document(transports))

    @mcp.custom_route("/health", methods=["GET"])
    @guarded
    async def health(request: Request) -> Response:
        return JSONResponse(
            {
                "status": "ok",
                "timestamp": int(time.time() * 1000),
                "features": len(store),
                "source": store.source_name,
            }
        )

    @mcp.custom_route("/api/features/{name}", methods=["GET"])
    @guarded
    async def feature(request: Request) -> Response:
        await store.load()
        record = store.get_feature(request.path_params["name"])
        if record is None:
            return JSONResponse({"error": "Feature not found"}, status_code=404)
        return JSONResponse(record.to_json_dict())

    @mcp.custom_route("/api/baseline/{year}", methods=["GET"])
    @guarded
    async def baseline(request: Request) -> Response:
        await store.load()
        try:
            year = int(request.path_params["year"])
        except ValueError:
            return JSONResponse({"error": "Invalid year"}, status_code=400)
        entries = store.get_baseline_features(year)
        return JSONResponse(
            {
                "year": year,
                "features": [
                    entry.model_dump(by_alias=True, exclude_none=True)
                    for entry in entries
                ],
            }
        )

    @mcp.custom_route("/api/compare/{featureA}/{featureB}", methods=["GET"])
    @guarded
    async def compare(request: Request) -> Response:
        await store.load()
        feature_a = store.get_feature(request.path_params["featureA"])
        feature_b = store.get_feature(request.path_params["featureB"])
        if feature_a is None or feature_b is None:
            return JSONResponse(
                {"error": "One or both features not found"}, status_code=404
            )
        return JSONResponse(compare_features(feature_a, feature_b).to_json_dict())

    @mcp.custom_route("/api/search", methods=["GET"])
    @guarded
    async def search(request: Request) -> Response:
        await store.load()
        query = request.query_params.get("q", "")
        try:
            limit = int(request.query_params.get("limit", DEFAULT_SEARCH_LIMIT))
        except ValueError:
            return JSONResponse({"error": "Invalid limit"}, status_code=400)
        results = store.search(query, limit)
        return JSONResponse(
            {
                "query": query,
                "count": len(results),
                "results": [hit.model_dump(exclude_none=True) for hit in results],
            }
        )

    @mcp.custom_route("/events", methods=["GET"])
    @guarded
    async def event_stream(request: Request) -> Response:
        client_id = request.headers.get("mcp-session-id")
        return EventSourceResponse(events.stream(client_id))
