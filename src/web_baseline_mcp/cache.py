"""
Disk cache for downloaded compatibility datasets.

Stores JSON documents in ~/.cache/web-baseline-mcp/ keyed by a SHA256 hash of
the dataset location. A cached copy is only read back when a fresh download
fails.
"""

from __future__ import annotations

import hashlib
import logging
import shutil
from pathlib import Path
from typing import Optional

CACHE_DIR = Path.home() / ".cache" / "web-baseline-mcp"

logger = logging.getLogger(__name__)


def _key_to_path(key: str) -> Path:
    h = hashlib.sha256(key.encode()).hexdigest()
    return CACHE_DIR / f"{h}.json"


def disk_get(key: str) -> Optional[str]:
    """Read the cached JSON document for *key*, or None if missing."""
    path = _key_to_path(key)
    try:
        return path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return None


def disk_set(key: str, data: str) -> None:
    """Write *data* (JSON string) to disk for *key*."""
    path = _key_to_path(key)
    try:
        CACHE_DIR.mkdir(parents=True, exist_ok=True)
        path.write_text(data, encoding="utf-8")
    except OSError as e:
        # non-fatal; the in-memory store still holds the data
        logger.debug(f"Could not write dataset cache {path}: {e}")


def clear_cache() -> int:
    """Remove all cached files. Returns the number of files removed."""
    if not CACHE_DIR.exists():
        return 0
    count = sum(1 for _ in CACHE_DIR.glob("*.json"))
    shutil.rmtree(CACHE_DIR, ignore_errors=True)
    return count
