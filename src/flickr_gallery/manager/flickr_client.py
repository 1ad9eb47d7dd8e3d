"""Flickr REST API client."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from flickr_gallery.config import (
    FLICKR_API_ENDPOINT,
    FLICKR_API_TIMEOUT,
    FLICKR_RESPONSE_FORMAT,
    PHOTO_SIZE_DEFAULT,
    PHOTO_SOURCE_URL,
)
from flickr_gallery.manager.api_key import ApiKeySource
from flickr_gallery.manager.response import FlickrResponse, Outcome

logger = logging.getLogger(__name__)

PHOTO_SOURCE_FIELDS = ("farm", "server", "id", "secret")


class FlickrClient:
    """Client for Flickr REST API.

    ``call`` never raises: transport failures, HTTP error statuses and
    undecodable bodies all come back as a ``FlickrResponse`` whose
    ``outcome`` tells them apart.
    """

    def __init__(
        self,
        api_key_source: ApiKeySource | None = None,
        endpoint: str = FLICKR_API_ENDPOINT,
        timeout: float = FLICKR_API_TIMEOUT,
        response_format: str = FLICKR_RESPONSE_FORMAT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key_source = api_key_source or ApiKeySource()
        self.endpoint = endpoint
        self.timeout = timeout
        self.response_format = response_format
        self.transport = transport

    @property
    def api_key(self) -> str:
        return self.api_key_source.resolve()

    def has_api_key(self) -> bool:
        return self.api_key_source.has_key()

    def call(self, method: str, params: Mapping[str, Any] | None = None) -> FlickrResponse:
        """Call a Flickr API method and return the decoded response envelope."""
        logger.debug("Calling %s on %s", method, self.endpoint)
        try:
            query = self._build_query(method, params or {})
            with httpx.Client(
                timeout=self.timeout, transport=self.transport, follow_redirects=True
            ) as client:
                resp = client.get(self.endpoint, params=query)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Flickr API %s returned HTTP %s", method, e.response.status_code)
            return FlickrResponse.from_data(
                {"code": e.response.status_code, "status": "fail"},
                outcome=Outcome.REMOTE_ERROR,
            )
        except httpx.RequestError as e:
            logger.warning("Flickr API %s request failed: %s", method, e)
            return FlickrResponse(outcome=Outcome.TRANSPORT_ERROR)
        except (TypeError, ValueError, httpx.InvalidURL) as e:
            logger.warning("Flickr API %s request could not be built: %s", method, e)
            return FlickrResponse(outcome=Outcome.TRANSPORT_ERROR)

        content = self._process_body(resp)
        if content is None:
            logger.warning(
                "Could not decode Flickr API %s response as %s", method, self.response_format
            )
            return FlickrResponse(code=resp.status_code, outcome=Outcome.DECODE_ERROR)

        outcome = Outcome.REMOTE_ERROR if content.get("stat") == "fail" else Outcome.OK
        if outcome is Outcome.REMOTE_ERROR:
            logger.warning(
                "Flickr API %s failed: %s %s", method, content.get("code"), content.get("message")
            )
        return FlickrResponse.from_data(
            {
                "code": resp.status_code,
                "error": content.get("code"),
                "status": content.get("stat"),
                "message": content.get("message"),
                "content": content,
            },
            outcome=outcome,
        )

    def get_photo_source(
        self, photo: Mapping[str, Any], size: str = PHOTO_SIZE_DEFAULT
    ) -> str | None:
        """Return the static URL of a photo, or None if the record is incomplete."""
        if any(photo.get(name) is None for name in PHOTO_SOURCE_FIELDS):
            return None
        return build_photo_url(photo["farm"], photo["server"], photo["id"], photo["secret"], size)

    def _build_query(self, method: str, params: Mapping[str, Any]) -> dict[str, Any]:
        query: dict[str, Any] = {
            "api_key": self.api_key,
            "format": self.response_format,
        }
        if self.response_format == "json":
            query["nojsoncallback"] = "1"
        query["method"] = method
        query.update(params)
        return query

    def _process_body(self, resp: httpx.Response) -> dict | None:
        if self.response_format == "json":
            try:
                data = resp.json()
            except ValueError:
                return None
            return data if isinstance(data, dict) else None
        return None


def build_photo_url(
    farm: int | str, server: str, photo_id: str, secret: str, size: str = PHOTO_SIZE_DEFAULT
) -> str:
    """Build the static Flickr photo URL.

    Size suffixes: s=75sq, q=150sq, t=100, m=240, z=640,
    b=1024, h=1600, k=2048, o=original
    """
    return PHOTO_SOURCE_URL.format(farm=farm, server=server, id=photo_id, secret=secret, size=size)


def get_status_message(client: FlickrClient) -> str | None:
    """Return an operator warning when no API key is configured."""
    if not client.has_api_key():
        return "Flickr API key has not been entered into site configuration."
    return None
