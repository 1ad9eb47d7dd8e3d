"""Assemble the photo list of a gallery from the cache or the Flickr API."""

import logging
from collections.abc import Mapping
from typing import Any

from flickr_gallery.config import FLICKR_SEARCH_METHOD, PHOTO_SIZE_FULL, PHOTO_SIZE_THUMBNAIL
from flickr_gallery.gallery.cache import GalleryCache, cache_key
from flickr_gallery.manager.flickr_client import FlickrClient
from flickr_gallery.models import GalleryConfig, GalleryPhoto

logger = logging.getLogger(__name__)


class GalleryQueryPlanner:
    """Resolve gallery photos through a cache in front of the Flickr client.

    Two renders of the same gallery may both miss the cache and both call
    Flickr; the later write wins.
    """

    def __init__(self, client: FlickrClient, cache: GalleryCache) -> None:
        self.client = client
        self.cache = cache

    def get_photos(self, config: GalleryConfig) -> list[GalleryPhoto]:
        """Return up to ``config.number_of_photos`` photos in Flickr's order.

        An empty list means there is nothing to show: no user configured, a
        failed request, or a search without results.
        """
        if not config.user:
            return []

        key = cache_key(config.id)
        photos = self.cache.get(key)
        if _has_photos(photos):
            logger.debug("Cache hit for %s", key)
        else:
            logger.debug("Cache miss for %s", key)
            photos = self._fetch(config)
            if _has_photos(photos):
                self.cache.set(key, photos, int(config.cache_duration))

        if not _has_photos(photos):
            return []

        sliced = photos["photo"][: max(int(config.number_of_photos), 0)]
        return [self._to_gallery_photo(p) for p in sliced if isinstance(p, Mapping)]

    def _fetch(self, config: GalleryConfig) -> dict | None:
        response = self.client.call(
            FLICKR_SEARCH_METHOD,
            {
                "user_id": config.user,
                "tags": config.tags,
                "tag_mode": config.tag_mode,
            },
        )
        photos = response.get("photos")
        if not _has_photos(photos):
            logger.info(
                "No photos for gallery %s (outcome=%s, code=%s)",
                config.id,
                response.outcome,
                response.code,
            )
            return None
        return dict(photos)

    def _to_gallery_photo(self, photo: Mapping[str, Any]) -> GalleryPhoto:
        return GalleryPhoto(
            title=str(photo.get("title") or ""),
            url=self.client.get_photo_source(photo, PHOTO_SIZE_FULL),
            thumbnail_url=self.client.get_photo_source(photo, PHOTO_SIZE_THUMBNAIL),
        )


def _has_photos(payload: Any) -> bool:
    return (
        isinstance(payload, Mapping)
        and isinstance(payload.get("photo"), list)
        and len(payload["photo"]) > 0
    )
