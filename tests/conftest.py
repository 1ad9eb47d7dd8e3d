"""Shared test fixtures."""

import duckdb
import httpx
import pytest

from flickr_gallery.manager.api_key import ApiKeySource
from flickr_gallery.manager.flickr_client import FlickrClient
from flickr_gallery.manager.schema import ensure_schema


@pytest.fixture
def db_conn():
    """In-memory DuckDB connection with schema initialized."""
    conn = duckdb.connect(":memory:")
    ensure_schema(conn)
    yield conn
    conn.close()


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_photo(n: int) -> dict:
    """Helper to create a raw photo record as found in flickr.photos.search."""
    return {
        "id": str(53900000000 + n),
        "owner": "12345678@N01",
        "secret": f"secret{n}",
        "server": "65535",
        "farm": 66,
        "title": f"Photo {n}",
        "ispublic": 1,
    }


def make_search_body(count: int) -> dict:
    """Helper to create a successful flickr.photos.search reply."""
    return {
        "photos": {
            "page": 1,
            "pages": 1,
            "perpage": 100,
            "total": count,
            "photo": [make_photo(n) for n in range(count)],
        },
        "stat": "ok",
    }


def make_client(handler, api_key: str = "test-key", **kwargs) -> FlickrClient:
    """FlickrClient whose HTTP requests are answered by ``handler``."""
    return FlickrClient(
        ApiKeySource(fallback=api_key),
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class RecordingHandler:
    """MockTransport handler that returns a fixed JSON body and keeps requests."""

    def __init__(self, body: dict | None = None, status_code: int = 200) -> None:
        self.body = body if body is not None else make_search_body(0)
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)
