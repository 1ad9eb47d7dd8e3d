"""Tests for the Flickr client."""

import httpx
import pytest
from conftest import RecordingHandler, make_client, make_photo, make_search_body

from flickr_gallery.manager.api_key import ApiKeySource
from flickr_gallery.manager.flickr_client import (
    FlickrClient,
    build_photo_url,
    get_status_message,
)
from flickr_gallery.manager.response import FlickrResponse, Outcome


def test_build_photo_url():
    url = build_photo_url("1", "2", "3", "abc", "q")
    assert url == "https://farm1.staticflickr.com/2/3_abc_q.jpg"


def test_build_photo_url_default_size():
    url = build_photo_url(66, "65535", "53912345678", "abc123")
    assert url == "https://farm66.staticflickr.com/65535/53912345678_abc123_m.jpg"


def test_get_photo_source():
    client = FlickrClient(ApiKeySource(fallback="k"))
    photo = {"farm": 1, "server": "1234", "id": "12345", "secret": "xyz", "title": "Test"}
    assert client.get_photo_source(photo, "z") == "https://farm1.staticflickr.com/1234/12345_xyz_z.jpg"


@pytest.mark.parametrize("missing", ["farm", "server", "id", "secret"])
def test_get_photo_source_incomplete_photo(missing):
    client = FlickrClient(ApiKeySource(fallback="k"))
    photo = make_photo(1)
    del photo[missing]
    assert client.get_photo_source(photo, "b") is None


def test_call_sends_query():
    handler = RecordingHandler(make_search_body(1))
    client = make_client(handler)

    client.call("flickr.photos.search", {"user_id": "12345678@N01", "tags": "a,b", "tag_mode": "all"})

    assert len(handler.requests) == 1
    request = handler.requests[0]
    assert request.method == "GET"
    assert str(request.url).startswith("https://api.flickr.com/services/rest")
    params = request.url.params
    assert params["api_key"] == "test-key"
    assert params["format"] == "json"
    assert params["nojsoncallback"] == "1"
    assert params["method"] == "flickr.photos.search"
    assert params["user_id"] == "12345678@N01"
    assert params["tags"] == "a,b"
    assert params["tag_mode"] == "all"


def test_call_caller_params_win():
    handler = RecordingHandler()
    client = make_client(handler)

    client.call("flickr.photos.search", {"api_key": "override", "method": "flickr.test.echo"})

    params = handler.requests[0].url.params
    assert params["api_key"] == "override"
    assert params["method"] == "flickr.test.echo"


def test_call_uses_configured_endpoint():
    handler = RecordingHandler()
    client = make_client(handler, endpoint="https://flickr.example.test/rest")

    client.call("flickr.photos.search")

    assert handler.requests[0].url.host == "flickr.example.test"


def test_call_success():
    client = make_client(RecordingHandler(make_search_body(3)))

    response = client.call("flickr.photos.search", {"user_id": "u"})

    assert response.outcome is Outcome.OK
    assert response.ok
    assert response.code == 200
    assert response.status == "ok"
    assert response.error is None
    assert response.message is None
    assert len(response.get("photos")["photo"]) == 3
    assert response.get("missing") is None


def test_call_service_error():
    body = {"stat": "fail", "code": 100, "message": "Invalid API Key (Key has invalid format)"}
    client = make_client(RecordingHandler(body))

    response = client.call("flickr.photos.search")

    assert response.outcome is Outcome.REMOTE_ERROR
    assert response.code == 200
    assert response.status == "fail"
    assert response.error == 100
    assert response.message == "Invalid API Key (Key has invalid format)"
    assert response.get("photos") is None


@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
def test_call_http_error(status_code):
    client = make_client(RecordingHandler({"stat": "fail", "code": 1}, status_code=status_code))

    response = client.call("flickr.photos.search")

    assert isinstance(response, FlickrResponse)
    assert response.outcome is Outcome.REMOTE_ERROR
    assert response.status == "fail"
    assert response.code == status_code
    assert response.error is None
    assert response.message is None
    assert response.content == {}


@pytest.mark.parametrize(
    "exc_type", [httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout]
)
def test_call_transport_error(exc_type):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("network unreachable", request=request)

    response = make_client(handler).call("flickr.photos.search")

    assert isinstance(response, FlickrResponse)
    assert response.outcome is Outcome.TRANSPORT_ERROR
    assert response.code is None
    assert response.status is None
    assert response.content == {}
    assert response.get("photos") is None


@pytest.mark.parametrize(
    ("params", "kwargs"),
    [
        ("user_id=12345678@N01", {}),
        (42, {}),
        (None, {"endpoint": "http://[::1"}),
    ],
)
def test_call_unbuildable_request(params, kwargs):
    handler = RecordingHandler(make_search_body(1))

    response = make_client(handler, **kwargs).call("flickr.photos.search", params)

    assert isinstance(response, FlickrResponse)
    assert response.outcome is Outcome.TRANSPORT_ERROR
    assert response.code is None
    assert response.content == {}
    assert handler.requests == []


def test_call_follows_redirect():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/services/rest":
            return httpx.Response(
                301, headers={"Location": "https://api.flickr.com/services/rest/"}
            )
        return httpx.Response(200, json=make_search_body(2))

    response = make_client(handler).call("flickr.photos.search")

    assert response.outcome is Outcome.OK
    assert response.code == 200
    assert response.status == "ok"
    assert len(response.get("photos")["photo"]) == 2


@pytest.mark.parametrize("body", [b"", b"{not json", b"a:1:{s:4:\"stat\";s:2:\"ok\";}", b"[1, 2]"])
def test_call_undecodable_body(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    response = make_client(handler).call("flickr.photos.search")

    assert response.outcome is Outcome.DECODE_ERROR
    assert response.code == 200
    assert response.content == {}
    assert response.status is None


def test_call_unknown_format():
    handler = RecordingHandler(make_search_body(2))
    client = make_client(handler, response_format="rest")

    response = client.call("flickr.photos.search")

    assert handler.requests[0].url.params["format"] == "rest"
    assert "nojsoncallback" not in handler.requests[0].url.params
    assert response.content == {}


def test_call_without_api_key_still_requests():
    handler = RecordingHandler()
    client = make_client(handler, api_key="")

    assert not client.has_api_key()
    client.call("flickr.photos.search")

    assert handler.requests[0].url.params["api_key"] == ""


def test_api_key_prefers_site_override():
    source = ApiKeySource(site_lookup=lambda: "site-key", fallback="env-key")
    assert source.resolve() == "site-key"


@pytest.mark.parametrize("site_value", [None, "", "   "])
def test_api_key_falls_back(site_value):
    source = ApiKeySource(site_lookup=lambda: site_value, fallback="env-key")
    assert source.resolve() == "env-key"
    assert source.has_key()


def test_api_key_missing():
    source = ApiKeySource(site_lookup=lambda: None, fallback="")
    assert source.resolve() == ""
    assert not source.has_key()


def test_status_message():
    assert get_status_message(FlickrClient(ApiKeySource(fallback=""))) is not None
    assert get_status_message(FlickrClient(ApiKeySource(fallback="key"))) is None
