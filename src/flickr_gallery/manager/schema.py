"""DuckDB schema definition."""

import duckdb


def ensure_schema(conn: duckdb.DuckDBPyConnection) -> None:
    """Create tables if they do not exist."""
    conn.execute("CREATE SEQUENCE IF NOT EXISTS galleries_id_seq START 1")
    conn.execute("""
        CREATE TABLE IF NOT EXISTS galleries (
            id                   INTEGER PRIMARY KEY DEFAULT nextval('galleries_id_seq'),
            flickr_user          VARCHAR NOT NULL DEFAULT '',
            tags                 VARCHAR NOT NULL DEFAULT '',
            tag_mode             VARCHAR NOT NULL DEFAULT 'any',
            title_mode           VARCHAR NOT NULL DEFAULT 'none',
            link_title           VARCHAR,
            logo_width           INTEGER DEFAULT 50,
            cache_duration       INTEGER DEFAULT 1800,
            number_of_photos     INTEGER DEFAULT 20,
            thumbnail_size       INTEGER DEFAULT 50,
            hide_no_data_message BOOLEAN DEFAULT false,
            created_at           TIMESTAMP DEFAULT current_timestamp
        )
    """)

    # Single-row site configuration (id is always 1)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS site_config (
            id             INTEGER PRIMARY KEY,
            flickr_api_key VARCHAR
        )
    """)

    # expires_at is a Unix timestamp in seconds
    conn.execute("""
        CREATE TABLE IF NOT EXISTS gallery_cache (
            cache_key  VARCHAR PRIMARY KEY,
            payload    JSON NOT NULL,
            expires_at DOUBLE NOT NULL
        )
    """)
