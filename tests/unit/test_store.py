"""
Tests for web_baseline_mcp.store.
"""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest

from web_baseline_mcp.data.sources import BundledSource, Dataset, DatasetError
from web_baseline_mcp.models.feature_types import FeatureRecord
from web_baseline_mcp.store import FeatureStore, normalize_feature_name


def _external_dataset(source: str = "https://example.test/data.json") -> Dataset:
    records = {
        "dialog": FeatureRecord(
            id="dialog",
            name="<dialog>",
            description="The dialog element",
            group="html-elements",
            search_terms=["html-elements", "dialog"],
        ),
        "grid": FeatureRecord(id="grid", name="Grid", description="CSS grid layout"),
    }
    return Dataset(
        features=records,
        baseline_by_year={},
        source=source,
        raw={"dialog": {"name": "<dialog>", "group": "html-elements"}},
    )


def _source(dataset=None, error=None):
    source = MagicMock()
    source.name = "https://example.test/data.json"
    if error is not None:
        source.fetch.side_effect = error
    else:
        source.fetch.return_value = dataset
    return source


class TestNormalize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("CSS :has()", "css-has-selector"),
            ("css has", "css-has-selector"),
            ("  Offscreen Canvas ", "offscreen-canvas"),
            ("web usb", "webusb"),
            ("Fetch Streaming", "fetch-streaming"),
        ],
    )
    def test_alias_table(self, raw, expected):
        assert normalize_feature_name(raw) == expected

    def test_unmatched_passes_through_unchanged(self):
        assert normalize_feature_name("Some Feature") == "Some Feature"
        assert normalize_feature_name("  grid ") == "  grid "


class TestLoad:
    def test_bundled_fallback_without_source(self, loaded_store):
        ids = [record.id for record in loaded_store.get_all_features()]
        assert ids == [
            "css-has-selector",
            "offscreen-canvas",
            "webusb",
            "fetch-streaming",
        ]
        assert loaded_store.source_name == "bundled"

    def test_external_source_populates_store(self):
        store = FeatureStore(source=_source(_external_dataset()))
        asyncio.run(store.load())

        assert [r.id for r in store.get_all_features()] == ["dialog", "grid"]
        # No partial merge with the bundled data
        assert store.get_feature("css-has-selector") is None
        assert store.source_name == "https://example.test/data.json"

    def test_external_failure_falls_back_to_bundled(self, caplog):
        store = FeatureStore(source=_source(error=DatasetError("boom")))
        with caplog.at_level(logging.WARNING):
            asyncio.run(store.load())

        assert store.get_feature("webusb") is not None
        assert store.source_name == "bundled"
        assert "falling back to bundled data" in caplog.text

    def test_load_within_ttl_is_noop(self, clock):
        source = _source(_external_dataset())
        store = FeatureStore(source=source, ttl_seconds=60, clock=clock)

        asyncio.run(store.load())
        first = store.get_all_features()
        clock.advance(30)
        asyncio.run(store.load())

        assert source.fetch.call_count == 1
        assert store.get_all_features() == first
        assert store.loaded_at == 1000.0

    def test_load_after_ttl_reloads(self, clock):
        source = _source(_external_dataset())
        store = FeatureStore(source=source, ttl_seconds=60, clock=clock)

        asyncio.run(store.load())
        clock.advance(61)
        asyncio.run(store.load())

        assert source.fetch.call_count == 2
        assert store.loaded_at == 1061.0

    def test_total_failure_keeps_previous_state(self, clock):
        fallback = MagicMock(wraps=BundledSource())
        store = FeatureStore(ttl_seconds=0, fallback=fallback, clock=clock)
        asyncio.run(store.load())
        assert len(store) == 4

        fallback.fetch.side_effect = RuntimeError("broken")
        clock.advance(1)
        asyncio.run(store.load())

        assert len(store) == 4
        assert store.loaded_at == 1000.0

    def test_listeners_notified_after_reload(self):
        store = FeatureStore()
        seen = []
        store.add_listener(lambda dataset: seen.append(dataset.source))
        asyncio.run(store.load())
        assert seen == ["bundled"]

    def test_failing_listener_does_not_break_load(self):
        store = FeatureStore()
        store.add_listener(MagicMock(side_effect=RuntimeError("listener")))
        asyncio.run(store.load())
        assert len(store) == 4


class TestGetFeature:
    def test_normalized_names_resolve_to_same_record(self, loaded_store):
        a = loaded_store.get_feature("CSS :has()")
        b = loaded_store.get_feature("css has")
        c = loaded_store.get_feature("css-has-selector")
        assert a is not None
        assert a == b == c

    def test_missing_feature_returns_none(self, loaded_store):
        assert loaded_store.get_feature("does-not-exist") is None

    def test_case_folded_id_lookup(self, loaded_store):
        assert loaded_store.get_feature("WebUSB").id == "webusb"

    def test_sample_safari_version(self, loaded_store):
        assert loaded_store.get_feature("offscreen-canvas").support.safari == "16.4"

    def test_explicit_non_support(self, loaded_store):
        webusb = loaded_store.get_feature("webusb")
        assert webusb.support.firefox is False
        assert webusb.support.chrome_android is None
        assert webusb.baseline is None

    def test_raw_feature_only_for_external_data(self, loaded_store):
        assert loaded_store.get_raw_feature("css-has-selector") is None

        store = FeatureStore(source=_source(_external_dataset()))
        asyncio.run(store.load())
        assert store.get_raw_feature("dialog") == {
            "name": "<dialog>",
            "group": "html-elements",
        }


class TestBaselineFeatures:
    def test_single_entry_for_2024(self, loaded_store):
        entries = loaded_store.get_baseline_features(2024)
        assert len(entries) == 1
        assert entries[0].feature_id == "css-has-selector"
        assert entries[0].quarter == "Q1"

    def test_multiple_entries_share_a_year(self, loaded_store):
        ids = [e.feature_id for e in loaded_store.get_baseline_features(2022)]
        assert ids == ["offscreen-canvas", "fetch-streaming"]

    def test_absent_year_is_empty(self, loaded_store):
        assert loaded_store.get_baseline_features(1999) == []

    def test_available_years_sorted(self, loaded_store):
        assert loaded_store.available_years() == [2022, 2023, 2024]


class TestSearch:
    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_returns_nothing(self, loaded_store, query):
        assert loaded_store.search(query) == []

    def test_limit_truncates(self, loaded_store):
        assert len(loaded_store.search("e")) == 4
        assert len(loaded_store.search("e", 1)) == 1
        assert len(loaded_store.search("css", 1)) <= 1

    def test_case_insensitive_substring(self, loaded_store):
        hits = loaded_store.search("CANVAS")
        assert [h.id for h in hits] == ["offscreen-canvas"]
        assert hits[0].name == "OffscreenCanvas"

    def test_matches_description(self, loaded_store):
        hits = loaded_store.search("readablestream")
        assert [h.id for h in hits] == ["fetch-streaming"]

    def test_preserves_dataset_order(self, loaded_store):
        hits = loaded_store.search("e", 10)
        assert [h.id for h in hits] == [r.id for r in loaded_store.get_all_features()]

    def test_non_positive_limit(self, loaded_store):
        assert loaded_store.search("css", 0) == []

    def test_extended_search_terms(self):
        store = FeatureStore(source=_source(_external_dataset()))
        asyncio.run(store.load())
        hits = store.search("html-elements")
        assert [h.id for h in hits] == ["dialog"]
        assert hits[0].group == "html-elements"
