import pytest

from web_baseline_mcp.store import FeatureStore


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's cache directory and WBM_ settings."""
    monkeypatch.setattr("web_baseline_mcp.cache.CACHE_DIR", tmp_path / "cache")
    for var in ("WBM_MCP_TRANSPORT", "WBM_CONFIG", "PORT"):
        monkeypatch.delenv(var, raising=False)


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def loaded_store():
    """A store populated from the bundled sample dataset."""
    import asyncio

    store = FeatureStore()
    asyncio.run(store.load())
    return store
