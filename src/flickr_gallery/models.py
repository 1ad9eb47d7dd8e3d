"""Data models for gallery records and photos."""

from dataclasses import dataclass

TAG_MODE_ANY = "any"
TAG_MODE_ALL = "all"

TITLE_MODE_NONE = "none"
TITLE_MODE_TITLE = "title"
TITLE_MODE_FOOTER = "footer"


@dataclass(frozen=True)
class GalleryConfig:
    """Settings of a single Flickr photos gallery record."""

    id: int | None = None
    user: str = ""
    tags: str = ""
    tag_mode: str = TAG_MODE_ANY
    title_mode: str = TITLE_MODE_NONE
    link_title: str = "More photos on Flickr"
    logo_width: int = 50
    cache_duration: int = 1800
    number_of_photos: int = 20
    thumbnail_size: int = 50  # pixels
    hide_no_data_message: bool = False


@dataclass(frozen=True)
class GalleryPhoto:
    """A photo ready for display in a gallery."""

    title: str
    url: str | None
    thumbnail_url: str | None
