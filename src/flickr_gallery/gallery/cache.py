"""Time-limited cache of raw Flickr photo listings, one slot per gallery."""

import copy
import json
import logging
import threading
import time
from collections.abc import Callable
from typing import Any, Protocol

import duckdb

from flickr_gallery.config import CACHE_KEY_PREFIX

logger = logging.getLogger(__name__)


class GalleryCache(Protocol):
    """Storage for photo payloads keyed by gallery."""

    def get(self, key: str) -> dict | None: ...

    def set(self, key: str, payload: dict, ttl: int) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


def cache_key(gallery_id: int | None) -> str:
    """Cache slot of a gallery record. Records sharing an id share a slot."""
    return f"{CACHE_KEY_PREFIX}{gallery_id or 0}"


def flush(cache: GalleryCache) -> None:
    """Drop every cached gallery payload."""
    cache.clear()
    logger.info("Gallery cache flushed")


class MemoryGalleryCache:
    """In-process cache guarded by a lock. Payloads are copied in and out."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return copy.deepcopy(payload)

    def set(self, key: str, payload: dict, ttl: int) -> None:
        with self._lock:
            if ttl <= 0:
                self._entries.pop(key, None)
                return
            self._entries[key] = (self._clock() + ttl, copy.deepcopy(payload))

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class DuckDBGalleryCache:
    """Cache persisted in the ``gallery_cache`` table.

    Database errors are logged and treated as a cache miss, so a broken cache
    degrades to fetching from Flickr on every render.
    """

    def __init__(
        self, conn: duckdb.DuckDBPyConnection, clock: Callable[[], float] = time.time
    ) -> None:
        self._conn = conn
        self._clock = clock
        self._lock = threading.Lock()

    def get(self, key: str) -> dict | None:
        try:
            with self._lock:
                row = self._conn.execute(
                    "SELECT payload, expires_at FROM gallery_cache WHERE cache_key = ?", [key]
                ).fetchone()
                if row is None:
                    return None
                if row[1] <= self._clock():
                    self._conn.execute("DELETE FROM gallery_cache WHERE cache_key = ?", [key])
                    return None
        except duckdb.Error as e:
            logger.warning("Gallery cache read failed for %s: %s", key, e)
            return None
        return _load_payload(row[0])

    def set(self, key: str, payload: dict, ttl: int) -> None:
        try:
            with self._lock:
                if ttl <= 0:
                    self._conn.execute("DELETE FROM gallery_cache WHERE cache_key = ?", [key])
                    return
                self._conn.execute(
                    "INSERT OR REPLACE INTO gallery_cache (cache_key, payload, expires_at) "
                    "VALUES (?, ?, ?)",
                    [key, json.dumps(payload), self._clock() + ttl],
                )
        except duckdb.Error as e:
            logger.warning("Gallery cache write failed for %s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            with self._lock:
                self._conn.execute("DELETE FROM gallery_cache WHERE cache_key = ?", [key])
        except duckdb.Error as e:
            logger.warning("Gallery cache delete failed for %s: %s", key, e)

    def clear(self) -> None:
        try:
            with self._lock:
                self._conn.execute("DELETE FROM gallery_cache")
        except duckdb.Error as e:
            logger.warning("Gallery cache clear failed: %s", e)


def _load_payload(raw: Any) -> dict | None:
    if isinstance(raw, dict):
        return raw
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        return None
    return payload if isinstance(payload, dict) else None
