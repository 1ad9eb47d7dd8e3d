"""Gallery management CLI: site API key, gallery records, photo listings and cache."""

import argparse
from typing import TYPE_CHECKING

import duckdb

if TYPE_CHECKING:
    from flickr_gallery.gallery.planner import GalleryQueryPlanner


def main() -> None:
    """CLI entry point for gallery management."""
    from flickr_gallery.config import LOG_LEVEL

    parser = argparse.ArgumentParser(description="Flickr photo gallery manager")
    parser.add_argument("--db", help="DuckDB file (default: flickr_gallery.duckdb in project root)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help=f"Log level (default: {LOG_LEVEL})")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Initialize the database schema")

    # set-api-key
    key_parser = subparsers.add_parser("set-api-key", help="Save the site-level Flickr API key")
    key_parser.add_argument("api_key", help="Flickr API key (empty string clears it)")

    # status
    subparsers.add_parser("status", help="Show API key configuration status")

    # add-gallery
    add_parser = subparsers.add_parser("add-gallery", help="Create a gallery record")
    add_parser.add_argument("--user", required=True, help="Flickr user ID (e.g. 12345678@N01)")
    _add_gallery_options(add_parser)

    # update-gallery
    upd_parser = subparsers.add_parser("update-gallery", help="Change a gallery record")
    upd_parser.add_argument("gallery_id", type=int, help="Gallery ID")
    upd_parser.add_argument("--user", help="Flickr user ID")
    _add_gallery_options(upd_parser)

    # list
    subparsers.add_parser("list", help="List gallery records")

    # photos
    photos_parser = subparsers.add_parser("photos", help="Show the photos of a gallery")
    photos_parser.add_argument("gallery_id", type=int, help="Gallery ID")

    # flush
    subparsers.add_parser("flush", help="Clear the cached photo listings of all galleries")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from flickr_gallery.logging_config import configure_logging

    configure_logging(args.log_level)

    from flickr_gallery.db import get_connection

    conn = get_connection(args.db)
    try:
        if args.command == "init-db":
            print("Database initialized successfully.")
        elif args.command == "set-api-key":
            from flickr_gallery.manager.repository import set_site_api_key

            set_site_api_key(conn, args.api_key)
            print("Site API key saved.")
        elif args.command == "status":
            _cmd_status(conn)
        elif args.command == "add-gallery":
            _cmd_add_gallery(conn, args)
        elif args.command == "update-gallery":
            _cmd_update_gallery(conn, args)
        elif args.command == "list":
            _cmd_list(conn)
        elif args.command == "photos":
            _cmd_photos(conn, args)
        elif args.command == "flush":
            from flickr_gallery.gallery.cache import DuckDBGalleryCache, flush

            flush(DuckDBGalleryCache(conn))
            print("Gallery cache cleared.")
    finally:
        conn.close()


def _add_gallery_options(parser: argparse.ArgumentParser) -> None:
    """Options shared by add-gallery and update-gallery. Unset options keep their value."""
    from flickr_gallery.gallery.component import TAG_MODE_OPTIONS, TITLE_MODE_OPTIONS

    parser.add_argument("--tags", help="Comma-separated photo tags")
    parser.add_argument("--tag-mode", choices=list(TAG_MODE_OPTIONS), help="Tag match mode")
    parser.add_argument(
        "--title-mode",
        choices=list(TITLE_MODE_OPTIONS),
        help="Popup title mode",
    )
    parser.add_argument("--number", type=int, dest="number_of_photos", help="Number of photos")
    parser.add_argument("--cache-duration", type=int, help="Cache duration in seconds")
    parser.add_argument("--link-title", help="Title of the 'more photos' link")
    parser.add_argument("--logo-width", type=int, help="Logo width in pixels")
    parser.add_argument("--thumbnail-size", type=int, help="Thumbnail size in pixels")
    parser.add_argument(
        "--hide-no-data-message",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Hide the message shown when there are no photos",
    )


def _gallery_changes(args: argparse.Namespace) -> dict:
    fields = (
        "user",
        "tags",
        "tag_mode",
        "title_mode",
        "number_of_photos",
        "cache_duration",
        "link_title",
        "logo_width",
        "thumbnail_size",
        "hide_no_data_message",
    )
    return {f: getattr(args, f) for f in fields if getattr(args, f, None) is not None}


def _build_planner(conn: duckdb.DuckDBPyConnection) -> "GalleryQueryPlanner":
    from flickr_gallery.gallery.cache import DuckDBGalleryCache
    from flickr_gallery.gallery.planner import GalleryQueryPlanner
    from flickr_gallery.manager.api_key import ApiKeySource
    from flickr_gallery.manager.flickr_client import FlickrClient
    from flickr_gallery.manager.repository import get_site_api_key

    client = FlickrClient(ApiKeySource(site_lookup=lambda: get_site_api_key(conn)))
    return GalleryQueryPlanner(client, DuckDBGalleryCache(conn))


def _cmd_status(conn: duckdb.DuckDBPyConnection) -> None:
    """Report whether an API key is available."""
    from flickr_gallery.manager.flickr_client import get_status_message

    message = get_status_message(_build_planner(conn).client)
    print(message or "Flickr API key is configured.")


def _cmd_add_gallery(conn: duckdb.DuckDBPyConnection, args: argparse.Namespace) -> None:
    from flickr_gallery.manager.repository import insert_gallery
    from flickr_gallery.models import GalleryConfig

    gallery = insert_gallery(conn, GalleryConfig(**_gallery_changes(args)))
    print(f"Created gallery {gallery.id} for user {gallery.user}.")


def _cmd_update_gallery(conn: duckdb.DuckDBPyConnection, args: argparse.Namespace) -> None:
    import dataclasses

    from flickr_gallery.gallery.cache import DuckDBGalleryCache
    from flickr_gallery.manager.repository import get_gallery, update_gallery

    gallery = get_gallery(conn, args.gallery_id)
    if gallery is None:
        print(f"Error: gallery {args.gallery_id} not found")
        return
    gallery = update_gallery(
        conn, dataclasses.replace(gallery, **_gallery_changes(args)), DuckDBGalleryCache(conn)
    )
    print(f"Updated gallery {gallery.id}.")


def _cmd_list(conn: duckdb.DuckDBPyConnection) -> None:
    from flickr_gallery.gallery.component import flickr_link
    from flickr_gallery.manager.repository import list_galleries

    for g in list_galleries(conn):
        print(f"  {g.id:>4}  {g.number_of_photos:>3} photos  {g.tag_mode:<3}  {flickr_link(g)}")


def _cmd_photos(conn: duckdb.DuckDBPyConnection, args: argparse.Namespace) -> None:
    """Print the photos a gallery would render."""
    from rich.console import Console
    from rich.table import Table

    from flickr_gallery.gallery.component import (
        NO_DATA_MESSAGE,
        flickr_link,
        flickr_link_title,
        flickr_logo_width,
        no_data_message_shown,
    )
    from flickr_gallery.manager.repository import get_gallery

    gallery = get_gallery(conn, args.gallery_id)
    if gallery is None:
        print(f"Error: gallery {args.gallery_id} not found")
        return

    photos = _build_planner(conn).get_photos(gallery)
    console = Console()
    if not photos:
        if no_data_message_shown(gallery):
            console.print(NO_DATA_MESSAGE)
        return

    caption = f"{flickr_link_title(gallery)}: {flickr_link(gallery)}"
    caption += f" (logo {flickr_logo_width(gallery)}px)"
    table = Table(title=f"Gallery {gallery.id}", caption=caption)
    table.add_column("Title")
    table.add_column("URL")
    table.add_column("Thumbnail")
    for photo in photos:
        table.add_row(photo.title, photo.url or "", photo.thumbnail_url or "")
    console.print(table)
