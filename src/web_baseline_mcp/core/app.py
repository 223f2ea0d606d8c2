import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import FastMCP

from web_baseline_mcp.api.routes import register_routes
from web_baseline_mcp.config.config import Config, DatasetConfig
from web_baseline_mcp.core.events import EventBroadcaster
from web_baseline_mcp.data.sources import Dataset, WebFeaturesSource
from web_baseline_mcp.store import FeatureStore
from web_baseline_mcp.tools import register_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "web-baseline-server"


@dataclass
class AppContext:
    store: FeatureStore
    events: EventBroadcaster


def build_store(dataset_config: DatasetConfig) -> FeatureStore:
    """Create a feature store backed by the configured dataset source."""
    source = None
    if dataset_config.source:
        source = WebFeaturesSource(
            dataset_config.source,
            timeout=dataset_config.timeout,
            verify_ssl=dataset_config.verify_ssl,
            use_disk_cache=dataset_config.use_disk_cache,
        )
    return FeatureStore(source=source, ttl_seconds=dataset_config.ttl_seconds)


def create_app(
    config: Config,
    store: Optional[FeatureStore] = None,
    events: Optional[EventBroadcaster] = None,
) -> FastMCP:
    """Build the MCP server around a store owned by the caller."""
    if store is None:
        store = build_store(config.dataset)
    if events is None:
        events = EventBroadcaster()

    def announce_reload(dataset: Dataset) -> None:
        events.publish(
            "update",
            {"source": dataset.source, "features": len(dataset.features)},
        )

    store.add_listener(announce_reload)

    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
        # Data must be loaded before the first request is served
        await store.load()
        yield AppContext(store=store, events=events)

    mcp = FastMCP(SERVER_NAME, lifespan=app_lifespan)
    register_tools(mcp)
    register_routes(
        mcp,
        store,
        events,
        allowed_origins=config.mcp.allowed_origins,
        transports=config.mcp.transports,
    )
    return mcp


def run(config: Config) -> None:
    mcp = create_app(config)
    mcp.settings.host = config.mcp.address
    mcp.settings.port = int(config.mcp.port)
    mcp.settings.debug = bool(config.mcp.debug)

    default_transport = config.mcp.transports[0] if config.mcp.transports else "stdio"
    transport = os.getenv("WBM_MCP_TRANSPORT", default_transport)
    logger.info(f"Running {SERVER_NAME} with {transport} transport")
    mcp.run(transport=transport)
