"""Decoded result of a single Flickr API call."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any


class Outcome(StrEnum):
    """How a Flickr API call ended."""

    OK = "ok"
    TRANSPORT_ERROR = "transport_error"
    REMOTE_ERROR = "remote_error"
    DECODE_ERROR = "decode_error"


@dataclass(frozen=True)
class FlickrResponse:
    """Response envelope returned by ``FlickrClient.call``.

    ``code`` is the HTTP status code, ``error`` the service-level error code
    (the ``code`` field of a failed reply), ``status`` the ``stat`` field and
    ``content`` the whole decoded document. Any of them may be missing.
    ``content`` is a read-only view.
    """

    code: int | None = None
    error: int | None = None
    status: str | None = None
    message: str | None = None
    content: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    outcome: Outcome = Outcome.OK

    @classmethod
    def from_data(cls, data: Mapping[str, Any], outcome: Outcome = Outcome.OK) -> "FlickrResponse":
        """Build a response from a loosely typed mapping, skipping absent fields."""
        content = data.get("content")
        return cls(
            code=_to_int(data.get("code")),
            error=_to_int(data.get("error")),
            status=None if data.get("status") is None else str(data["status"]),
            message=None if data.get("message") is None else str(data["message"]),
            content=MappingProxyType(dict(content) if isinstance(content, Mapping) else {}),
            outcome=outcome,
        )

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.OK

    def get(self, name: str) -> Any | None:
        """Look up a top-level field of the decoded content."""
        return self.content.get(name)


def _to_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
