"""
Tests for the REST routes served next to the MCP HTTP transports.
"""

import pytest
from starlette.testclient import TestClient

from web_baseline_mcp.api.routes import index_document, origin_allowed
from web_baseline_mcp.config.config import Config
from web_baseline_mcp.core.app import create_app
from web_baseline_mcp.core.events import EventBroadcaster
from web_baseline_mcp.store import FeatureStore


@pytest.fixture
def store():
    return FeatureStore()


@pytest.fixture
def client(store):
    mcp = create_app(Config(), store=store, events=EventBroadcaster())
    return TestClient(mcp.sse_app())


class TestOriginAllowed:
    def test_missing_origin_allowed(self):
        assert origin_allowed(None, ["http://localhost"])

    def test_localhost_prefix_allowed(self):
        assert origin_allowed("http://localhost:5173", ["http://localhost"])

    def test_foreign_origin_rejected(self):
        assert not origin_allowed("https://evil.example", ["http://localhost"])


class TestRoutes:
    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body == index_document(["stdio"])
        assert body["api"]["features"] == "/api/features/{name}"

    def test_health(self, client, store):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert isinstance(body["timestamp"], int)

    def test_feature(self, client):
        response = client.get("/api/features/offscreen-canvas")
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "offscreen-canvas"
        assert body["support"]["safari"] == "16.4"
        assert body["baseline"]["high"] == "2022-03-01"

    def test_feature_alias(self, client):
        response = client.get("/api/features/css has")
        assert response.json()["id"] == "css-has-selector"

    def test_feature_not_found(self, client):
        response = client.get("/api/features/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Feature not found"}

    def test_baseline(self, client):
        body = client.get("/api/baseline/2024").json()
        assert body == {
            "year": 2024,
            "features": [
                {
                    "featureId": "css-has-selector",
                    "year": 2024,
                    "quarter": "Q1",
                    "description": "CSS :has() pseudo-class selector",
                }
            ],
        }

    def test_baseline_empty_year(self, client):
        assert client.get("/api/baseline/1999").json() == {"year": 1999, "features": []}

    def test_baseline_invalid_year(self, client):
        response = client.get("/api/baseline/abc")
        assert response.status_code == 400

    def test_compare(self, client):
        body = client.get("/api/compare/css-has-selector/offscreen-canvas").json()
        assert body["baselineDifference"] == {"yearDiff": 1, "aFirst": False}
        assert [row["browser"] for row in body["supportDifference"]] == [
            "chrome",
            "edge",
            "firefox",
            "safari",
        ]

    def test_compare_not_found(self, client):
        response = client.get("/api/compare/webusb/missing")
        assert response.status_code == 404

    def test_search(self, client):
        body = client.get("/api/search", params={"q": "fetch", "limit": 5}).json()
        assert body["count"] == 1
        assert body["results"][0]["id"] == "fetch-streaming"

    def test_search_invalid_limit(self, client):
        response = client.get("/api/search", params={"q": "fetch", "limit": "x"})
        assert response.status_code == 400

    def test_foreign_origin_forbidden(self, client):
        response = client.get(
            "/api/features/webusb", headers={"Origin": "https://evil.example"}
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid origin"}

    def test_local_origin_allowed(self, client):
        response = client.get(
            "/api/features/webusb", headers={"Origin": "http://127.0.0.1:8080"}
        )
        assert response.status_code == 200

    def test_routes_load_the_store(self, client, store):
        assert len(store) == 0
        client.get("/api/features/webusb")
        assert len(store) == 4
        assert client.get("/health").json()["source"] == "bundled"
