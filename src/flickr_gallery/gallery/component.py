"""Record-level behaviour of a Flickr photos gallery.

Field cleaning before a record is saved, the cache invalidation decision,
and the small presentation helpers a template needs (profile link, title
attributes, empty-state message).
"""

import dataclasses
import html
import logging
import re

from flickr_gallery.config import FLICKR_URL, FLICKR_URL_TAGS
from flickr_gallery.gallery.cache import GalleryCache, cache_key
from flickr_gallery.models import (
    TAG_MODE_ALL,
    TAG_MODE_ANY,
    TITLE_MODE_FOOTER,
    TITLE_MODE_NONE,
    TITLE_MODE_TITLE,
    GalleryConfig,
)

logger = logging.getLogger(__name__)

TAG_MODE_OPTIONS = {TAG_MODE_ANY: "Any", TAG_MODE_ALL: "All"}
TITLE_MODE_OPTIONS = {
    TITLE_MODE_NONE: "None",
    TITLE_MODE_TITLE: "Title",
    TITLE_MODE_FOOTER: "Footer",
}

NO_DATA_MESSAGE = "No data available."

# Fields that change what Flickr returns for a gallery
QUERY_FIELDS = ("user", "tags", "tag_mode")


def clean_user(user: str | None) -> str:
    return (user or "").strip()


def normalize_tags(tags: str | None) -> str:
    """Split on commas and whitespace, drop empty entries, rejoin with commas.

    Example:
        '  a, b ,,c' -> 'a,b,c'
    """
    return ",".join(t for t in re.split(r"[\s,]+", tags or "") if t)


def clean_config(config: GalleryConfig) -> GalleryConfig:
    """Return a copy with user and tags normalized and a non-negative photo count."""
    return dataclasses.replace(
        config,
        user=clean_user(config.user),
        tags=normalize_tags(config.tags),
        number_of_photos=abs(int(config.number_of_photos)),
    )


def requires_invalidation(old: GalleryConfig | None, new: GalleryConfig) -> bool:
    """Whether saving ``new`` over ``old`` makes the cached listing stale."""
    if old is None:
        return False
    return any(getattr(old, name) != getattr(new, name) for name in QUERY_FIELDS)


def before_write(
    old: GalleryConfig | None, new: GalleryConfig, cache: GalleryCache
) -> GalleryConfig:
    """Clean ``new`` and drop its cache entry if the query changed.

    Must run before the record is persisted.
    """
    cleaned = clean_config(new)
    if requires_invalidation(old, cleaned):
        logger.debug("Query of gallery %s changed, dropping cached photos", cleaned.id)
        cache.delete(cache_key(cleaned.id))
    return cleaned


def has_tags(config: GalleryConfig) -> bool:
    return config.tags != ""


def flickr_link(config: GalleryConfig) -> str:
    """Link to the user's photostream, narrowed to the gallery tags when set."""
    if has_tags(config):
        return FLICKR_URL_TAGS.format(user=config.user, tags=config.tags)
    return FLICKR_URL.format(user=config.user)


def flickr_link_title(config: GalleryConfig) -> str:
    return config.link_title


def flickr_logo_width(config: GalleryConfig) -> int:
    """Display width of the Flickr logo beside the link, in pixels. Never negative."""
    return max(int(config.logo_width), 0)


def title_mode_attribute(title_mode: str, title: str | None = None) -> str:
    """HTML attribute carrying the photo title for the popup viewer."""
    value = html.escape(title or "", quote=True)
    if title_mode == TITLE_MODE_TITLE:
        return f' data-title="{value}"'
    if title_mode == TITLE_MODE_FOOTER:
        return f' data-footer="{value}"'
    return ""


def no_data_message_shown(config: GalleryConfig) -> bool:
    return not config.hide_no_data_message
