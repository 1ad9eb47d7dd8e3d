"""Flickr API key lookup: site configuration first, then the environment."""

from collections.abc import Callable

from flickr_gallery.config import FLICKR_API_KEY


class ApiKeySource:
    """Resolve the API key from a site-level override with a static fallback.

    ``site_lookup`` is called on every resolution so that a key saved in the
    site configuration takes effect without rebuilding the client.
    """

    def __init__(
        self,
        site_lookup: Callable[[], str | None] | None = None,
        fallback: str | None = None,
    ) -> None:
        self.site_lookup = site_lookup
        self.fallback = FLICKR_API_KEY if fallback is None else fallback

    def resolve(self) -> str:
        key = self.site_lookup() if self.site_lookup else None
        if not key or not key.strip():
            key = self.fallback or ""
        return key.strip()

    def has_key(self) -> bool:
        return bool(self.resolve())
