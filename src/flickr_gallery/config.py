"""Project-wide configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("FLICKR_GALLERY_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")

DB_PATH = PROJECT_ROOT / "flickr_gallery.duckdb"

LOG_LEVEL = os.environ.get("FLICKR_GALLERY_LOG_LEVEL", "INFO")

# Flickr API
FLICKR_API_KEY = os.environ.get("FLICKR_API_KEY", "")
FLICKR_API_ENDPOINT = os.environ.get("FLICKR_API_ENDPOINT", "https://api.flickr.com/services/rest")
FLICKR_API_TIMEOUT = float(os.environ.get("FLICKR_API_TIMEOUT", "10"))
FLICKR_RESPONSE_FORMAT = "json"
FLICKR_SEARCH_METHOD = "flickr.photos.search"

# Static photo and profile URLs
PHOTO_SOURCE_URL = "https://farm{farm}.staticflickr.com/{server}/{id}_{secret}_{size}.jpg"
FLICKR_URL = "https://www.flickr.com/photos/{user}"
FLICKR_URL_TAGS = "https://www.flickr.com/photos/{user}/tags/{tags}"

# Photo sizes used by the gallery: b=1024 for the popup, q=150sq for thumbnails
PHOTO_SIZE_DEFAULT = "m"
PHOTO_SIZE_FULL = "b"
PHOTO_SIZE_THUMBNAIL = "q"

# Gallery cache
CACHE_KEY_PREFIX = "flickr-photos-component-"
