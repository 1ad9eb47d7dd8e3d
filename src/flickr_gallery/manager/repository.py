"""CRUD operations for gallery records and site configuration in DuckDB."""

import dataclasses

import duckdb

from flickr_gallery.gallery.cache import GalleryCache
from flickr_gallery.gallery.component import before_write, clean_config
from flickr_gallery.models import GalleryConfig

_GALLERY_COLUMNS = """
    id, flickr_user, tags, tag_mode, title_mode, link_title, logo_width,
    cache_duration, number_of_photos, thumbnail_size, hide_no_data_message
"""


def insert_gallery(conn: duckdb.DuckDBPyConnection, config: GalleryConfig) -> GalleryConfig:
    """Insert a new gallery record and return it with its assigned id."""
    cleaned = clean_config(config)
    row = conn.execute(
        """
        INSERT INTO galleries (
            flickr_user, tags, tag_mode, title_mode, link_title, logo_width,
            cache_duration, number_of_photos, thumbnail_size, hide_no_data_message
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        RETURNING id
        """,
        _gallery_values(cleaned),
    ).fetchone()
    return dataclasses.replace(cleaned, id=row[0])


def update_gallery(
    conn: duckdb.DuckDBPyConnection, config: GalleryConfig, cache: GalleryCache
) -> GalleryConfig:
    """Save changes to an existing gallery.

    The cached photo listing is dropped before the write when the Flickr query
    (user, tags or tag mode) changed.
    """
    if config.id is None:
        raise ValueError("Cannot update a gallery without an id")
    old = get_gallery(conn, config.id)
    if old is None:
        raise ValueError(f"Gallery {config.id} does not exist")

    cleaned = before_write(old, config, cache)
    conn.execute(
        """
        UPDATE galleries SET
            flickr_user = ?, tags = ?, tag_mode = ?, title_mode = ?, link_title = ?,
            logo_width = ?, cache_duration = ?, number_of_photos = ?,
            thumbnail_size = ?, hide_no_data_message = ?
        WHERE id = ?
        """,
        [*_gallery_values(cleaned), cleaned.id],
    )
    return cleaned


def get_gallery(conn: duckdb.DuckDBPyConnection, gallery_id: int) -> GalleryConfig | None:
    """Look up a single gallery by id."""
    result = conn.execute(
        f"SELECT {_GALLERY_COLUMNS} FROM galleries WHERE id = ?", [gallery_id]
    ).fetchone()
    if result is None:
        return None
    return _row_to_config(result)


def list_galleries(conn: duckdb.DuckDBPyConnection) -> list[GalleryConfig]:
    """List all galleries in id order."""
    rows = conn.execute(f"SELECT {_GALLERY_COLUMNS} FROM galleries ORDER BY id").fetchall()
    return [_row_to_config(row) for row in rows]


def get_site_api_key(conn: duckdb.DuckDBPyConnection) -> str | None:
    """Return the API key saved in the site configuration, if any."""
    result = conn.execute("SELECT flickr_api_key FROM site_config WHERE id = 1").fetchone()
    if result is None:
        return None
    return result[0]


def set_site_api_key(conn: duckdb.DuckDBPyConnection, api_key: str | None) -> None:
    """Save the site-level API key. Surrounding whitespace is stripped."""
    conn.execute(
        "INSERT OR REPLACE INTO site_config (id, flickr_api_key) VALUES (1, ?)",
        [(api_key or "").strip()],
    )


def _gallery_values(config: GalleryConfig) -> list:
    return [
        config.user,
        config.tags,
        config.tag_mode,
        config.title_mode,
        config.link_title,
        config.logo_width,
        config.cache_duration,
        config.number_of_photos,
        config.thumbnail_size,
        config.hide_no_data_message,
    ]


def _row_to_config(row: tuple) -> GalleryConfig:
    """Convert a DB row tuple to GalleryConfig.

    Column order matches _GALLERY_COLUMNS:
    0:id, 1:flickr_user, 2:tags, 3:tag_mode, 4:title_mode, 5:link_title,
    6:logo_width, 7:cache_duration, 8:number_of_photos, 9:thumbnail_size,
    10:hide_no_data_message
    """
    return GalleryConfig(
        id=row[0],
        user=row[1],
        tags=row[2],
        tag_mode=row[3],
        title_mode=row[4],
        link_title=row[5],
        logo_width=row[6],
        cache_duration=row[7],
        number_of_photos=row[8],
        thumbnail_size=row[9],
        hide_no_data_message=bool(row[10]),
    )
