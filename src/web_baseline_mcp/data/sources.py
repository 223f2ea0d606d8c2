"""
Dataset sources for the feature store.

Each source produces a :class:`Dataset` of typed :class:`FeatureRecord` values
through its own mapping function, so the store never needs to know which
source populated it.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests
from pydantic import ValidationError

from web_baseline_mcp import cache
from web_baseline_mcp.data.samples import SAMPLE_BASELINE, SAMPLE_FEATURES
from web_baseline_mcp.models.feature_types import (
    ALL_BROWSERS,
    BaselineStatus,
    BaselineYearEntry,
    BrowserSupport,
    FeatureRecord,
    FeatureStatus,
)

logger = logging.getLogger(__name__)

BUNDLED_SOURCE_NAME = "bundled"


class DatasetError(Exception):
    """Raised when a dataset is unavailable or malformed."""


@dataclass
class Dataset:
    features: Dict[str, FeatureRecord]
    baseline_by_year: Dict[int, List[BaselineYearEntry]]
    source: str
    raw: Dict[str, Dict[str, Any]] = field(default_factory=dict)


def map_bundled_feature(feature_id: str, data: Mapping[str, Any]) -> FeatureRecord:
    """Map one bundled sample entry to a FeatureRecord."""
    status = data.get("status") or {}
    baseline = data.get("baseline")
    return FeatureRecord(
        id=feature_id,
        name=data["name"],
        description=data.get("description"),
        mdn_url=data.get("mdn_url"),
        spec_url=data.get("spec_url"),
        baseline=BaselineStatus(**baseline) if baseline else None,
        support=BrowserSupport(**data.get("support", {})),
        status=FeatureStatus(
            experimental=status.get("experimental", False),
            standard_track=status.get("standard_track", False),
            deprecated=status.get("deprecated", False),
        ),
    )


class BundledSource:
    """The hardcoded sample dataset."""

    name = BUNDLED_SOURCE_NAME

    def fetch(self) -> Dataset:
        features = {
            feature_id: map_bundled_feature(feature_id, data)
            for feature_id, data in SAMPLE_FEATURES.items()
        }
        baseline_by_year = {
            year: [BaselineYearEntry(year=year, **entry) for entry in entries]
            for year, entries in SAMPLE_BASELINE.items()
        }
        return Dataset(
            features=features, baseline_by_year=baseline_by_year, source=self.name
        )


def parse_baseline_date(value: Any) -> Optional[date]:
    """Parse a web-features date such as ``2023-12-01`` or ``≤2020-03-24``."""
    if not value or not isinstance(value, str):
        return None
    cleaned = value.lstrip("≤<= ").strip()
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        logger.debug(f"Ignoring unparsable baseline date: {value!r}")
        return None


def quarter_of(day: date) -> str:
    return f"Q{(day.month - 1) // 3 + 1}"


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def map_web_features_entry(
    feature_id: str, entry: Mapping[str, Any]
) -> FeatureRecord:
    """Map one web-features ``data.json`` entry to a FeatureRecord."""
    status = entry.get("status") or {}

    support = {
        browser: version
        for browser, version in (status.get("support") or {}).items()
        if browser in ALL_BROWSERS
    }

    high = parse_baseline_date(status.get("baseline_high_date"))
    low = parse_baseline_date(status.get("baseline_low_date"))
    baseline = BaselineStatus(high=high, low=low) if (high or low) else None

    specs = _as_list(entry.get("spec"))
    groups = _as_list(entry.get("group"))
    compat_features = _as_list(entry.get("compat_features"))
    search_terms = groups + _as_list(entry.get("caniuse")) + compat_features

    discouraged = entry.get("discouraged")

    return FeatureRecord(
        id=feature_id,
        name=entry.get("name") or feature_id,
        description=entry.get("description"),
        description_html=entry.get("description_html"),
        mdn_url=entry.get("mdn_url"),
        spec_url=specs[0] if specs else None,
        group=groups[0] if groups else None,
        compat_features=compat_features,
        search_terms=search_terms,
        baseline=baseline,
        support=BrowserSupport(**support),
        status=FeatureStatus(
            experimental=bool(entry.get("experimental", False)),
            standard_track=bool(specs),
            deprecated=bool(discouraged),
        ),
    )


def map_web_features_dataset(payload: Any, source: str) -> Dataset:
    """Map a whole web-features document to a Dataset.

    Accepts either ``{"features": {...}}`` or a bare ``{id: entry}`` mapping.
    Redirect entries (``kind`` of ``moved`` or ``split``) are skipped.
    """
    if not isinstance(payload, Mapping):
        raise DatasetError("Dataset root must be a JSON object")

    entries = payload.get("features", payload)
    if not isinstance(entries, Mapping):
        raise DatasetError("Dataset 'features' must be a JSON object")

    features: Dict[str, FeatureRecord] = {}
    raw: Dict[str, Dict[str, Any]] = {}
    baseline_by_year: Dict[int, List[BaselineYearEntry]] = {}

    for feature_id, entry in entries.items():
        if not isinstance(entry, Mapping):
            continue
        if entry.get("kind", "feature") != "feature":
            continue
        try:
            record = map_web_features_entry(feature_id, entry)
        except ValidationError as e:
            logger.debug(f"Skipping malformed feature {feature_id}: {e}")
            continue

        features[feature_id] = record
        raw[feature_id] = dict(entry)

        if record.baseline and record.baseline.high:
            high = record.baseline.high
            baseline_by_year.setdefault(high.year, []).append(
                BaselineYearEntry(
                    feature_id=feature_id,
                    year=high.year,
                    quarter=quarter_of(high),
                    description=record.name,
                )
            )

    if not features:
        raise DatasetError("Dataset contains no usable features")

    return Dataset(
        features=features,
        baseline_by_year=baseline_by_year,
        source=source,
        raw=raw,
    )


class WebFeaturesSource:
    """A web-features ``data.json`` document read from a URL or a local file."""

    def __init__(
        self,
        location: str,
        timeout: int = 30,
        verify_ssl: bool = True,
        use_disk_cache: bool = True,
    ):
        self.location = location
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.use_disk_cache = use_disk_cache

    @property
    def name(self) -> str:
        return self.location

    @property
    def is_remote(self) -> bool:
        return self.location.startswith(("http://", "https://"))

    def _download(self) -> str:
        response = requests.get(
            self.location,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
            verify=self.verify_ssl,
        )
        response.raise_for_status()
        return response.text

    def _read_remote(self) -> Tuple[str, bool]:
        """Return the document text and whether it was freshly downloaded."""
        try:
            return self._download(), True
        except requests.RequestException as e:
            cached = cache.disk_get(self.location) if self.use_disk_cache else None
            if cached is None:
                raise DatasetError(f"Failed to download {self.location}: {e}") from e
            logger.warning(
                f"Download of {self.location} failed ({e}); using cached copy"
            )
            return cached, False

    def _read_local(self) -> str:
        try:
            return Path(self.location).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetError(f"Failed to read {self.location}: {e}") from e

    def fetch(self) -> Dataset:
        if self.is_remote:
            text, downloaded = self._read_remote()
        else:
            text, downloaded = self._read_local(), False
        try:
            payload = json.loads(text)
        except ValueError as e:
            raise DatasetError(f"Invalid JSON in {self.location}: {e}") from e
        dataset = map_web_features_dataset(payload, source=self.name)

        # only a document that mapped cleanly replaces the cached copy
        if downloaded and self.use_disk_cache:
            cache.disk_set(self.location, text)
        return dataset
