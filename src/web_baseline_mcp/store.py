"""
In-memory feature store.

Owns the feature and Baseline-by-year tables, resolves user-supplied feature
names to records and answers free-text searches. The tables are replaced as a
whole on each successful load and are read-only in between.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Protocol

from web_baseline_mcp.data.sources import BundledSource, Dataset
from web_baseline_mcp.models.feature_types import (
    BaselineYearEntry,
    FeatureRecord,
    SearchHit,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60
DEFAULT_SEARCH_LIMIT = 10

FEATURE_ALIASES = {
    "css :has()": "css-has-selector",
    "css has": "css-has-selector",
    "offscreen canvas": "offscreen-canvas",
    "web usb": "webusb",
    "fetch streaming": "fetch-streaming",
}


class DatasetSource(Protocol):
    name: str

    def fetch(self) -> Dataset: ...


ReloadListener = Callable[[Dataset], None]


def normalize_feature_name(name: str) -> str:
    """Map common spellings of a feature to its canonical id.

    Unknown names are returned unchanged.
    """
    return FEATURE_ALIASES.get(name.strip().lower(), name)


def _search_haystack(record: FeatureRecord) -> str:
    parts = [record.id, record.name, record.description or ""]
    parts.extend(record.search_terms)
    return " ".join(parts).lower()


class FeatureStore:
    """Feature and Baseline lookups over a TTL-refreshed dataset.

    ``get_feature`` tries these lookup keys in order and returns the first hit:

    1. the normalized name (alias table applied)
    2. the name exactly as given
    3. the name lowercased and trimmed
    """

    def __init__(
        self,
        source: Optional[DatasetSource] = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        fallback: Optional[DatasetSource] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.fallback = fallback or BundledSource()
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._features: Dict[str, FeatureRecord] = {}
        self._haystacks: Dict[str, str] = {}
        self._raw: Dict[str, Dict[str, Any]] = {}
        self._baseline_by_year: Dict[int, List[BaselineYearEntry]] = {}
        self._loaded_at: Optional[float] = None
        self._source_name: Optional[str] = None
        self._listeners: List[ReloadListener] = []
        self._lookup_strategies: List[Callable[[str], str]] = [
            normalize_feature_name,
            lambda name: name,
            lambda name: name.strip().lower(),
        ]

    @property
    def source_name(self) -> Optional[str]:
        return self._source_name

    @property
    def loaded_at(self) -> Optional[float]:
        return self._loaded_at

    def __len__(self) -> int:
        return len(self._features)

    def add_listener(self, listener: ReloadListener) -> None:
        """Register a callback invoked after every successful reload."""
        self._listeners.append(listener)

    def is_fresh(self) -> bool:
        if not self._features or self._loaded_at is None:
            return False
        return self._clock() - self._loaded_at < self.ttl_seconds

    async def load(self) -> None:
        """Populate the store unless the current data is still fresh.

        Tries the external source first and falls back to the bundled
        dataset. Never raises; on total failure the previous state is kept.
        """
        if self.is_fresh():
            return

        dataset = None
        if self.source is not None:
            try:
                dataset = await asyncio.to_thread(self.source.fetch)
            except Exception as e:
                logger.warning(
                    f"Failed to load dataset from {self.source.name}: {e}; "
                    "falling back to bundled data"
                )

        if dataset is None:
            try:
                dataset = self.fallback.fetch()
            except Exception:
                logger.exception("Failed to load bundled dataset")
                return

        self._install(dataset)

    def _install(self, dataset: Dataset) -> None:
        # Tables are built first and swapped in without yielding to the loop
        haystacks = {
            feature_id: _search_haystack(record)
            for feature_id, record in dataset.features.items()
        }
        baseline_by_year = {
            year: list(entries) for year, entries in dataset.baseline_by_year.items()
        }

        self._features = dict(dataset.features)
        self._haystacks = haystacks
        self._raw = dict(dataset.raw)
        self._baseline_by_year = baseline_by_year
        self._source_name = dataset.source
        self._loaded_at = self._clock()
        logger.info(
            f"Loaded {len(self._features)} features from {dataset.source} dataset"
        )

        for listener in self._listeners:
            try:
                listener(dataset)
            except Exception:
                logger.exception("Reload listener failed")

    def _resolve_key(self, name: str, table: Dict[str, Any]) -> Optional[str]:
        for strategy in self._lookup_strategies:
            key = strategy(name)
            if key in table:
                return key
        return None

    def normalize(self, name: str) -> str:
        return normalize_feature_name(name)

    def get_feature(self, name: str) -> Optional[FeatureRecord]:
        key = self._resolve_key(name, self._features)
        return self._features[key] if key is not None else None

    def get_raw_feature(self, name: str) -> Optional[Dict[str, Any]]:
        """Source entry exactly as read from an external dataset, if any."""
        key = self._resolve_key(name, self._raw)
        return self._raw[key] if key is not None else None

    def get_baseline_features(self, year: int) -> List[BaselineYearEntry]:
        return list(self._baseline_by_year.get(year, []))

    def available_years(self) -> List[int]:
        return sorted(self._baseline_by_year)

    def get_all_features(self) -> List[FeatureRecord]:
        return list(self._features.values())

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[SearchHit]:
        """Case-insensitive substring search over ids, names and descriptions."""
        needle = (query or "").strip().lower()
        if not needle or limit <= 0:
            return []

        hits = []
        for feature_id, haystack in self._haystacks.items():
            if needle not in haystack:
                continue
            record = self._features[feature_id]
            hits.append(
                SearchHit(
                    id=record.id,
                    name=record.name,
                    description=record.description,
                    group=record.group,
                )
            )
            if len(hits) >= limit:
                break
        return hits
