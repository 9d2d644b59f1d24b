"""
Configuration constants and small helpers shared by the watchlist modules.
"""

import logging
import os
import uuid

# Board categories in display order: (key, title, short label)
CATEGORY_CONFIG = [
    ("currentlyWatching", "Currently Watching", "now"),
    ("planning", "Planning to Watch", "next"),
    ("watched", "Watched", "done"),
    ("dropped", "Dropped", "skip"),
]

CATEGORY_KEYS = tuple(key for key, _, _ in CATEGORY_CONFIG)
CATEGORY_TITLES = {key: title for key, title, _ in CATEGORY_CONFIG}
CATEGORY_LABELS = {key: label for key, _, label in CATEGORY_CONFIG}
DEFAULT_CATEGORY = "planning"

MEDIA_TYPES = ("movie", "tv")
TYPE_FILTERS = ("all",) + MEDIA_TYPES

# Fields the edit panel may change on an existing item
EDITABLE_FIELDS = ("title", "poster", "notes", "rating", "type", "year")

RATING_MIN = 1
RATING_MAX = 10
TOP_RATED_THRESHOLD = 8

# Search limits
MIN_QUERY_LENGTH = 2
PROVIDER_RESULT_LIMIT = 8
SEARCH_RESULT_LIMIT = 12

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
TVMAZE_SEARCH_URL = "https://api.tvmaze.com/search/shows"

FALLBACK_POSTER = (
    "https://images.unsplash.com/photo-1485846234645-a62644f84728"
    "?auto=format&fit=crop&w=400&q=80"
)

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"
LOG_HANDLER_NAME = "watchlist"


def get_str(key, default=""):
    return os.getenv(key, default)


def get_int(key, default=0):
    """Read an integer environment variable, falling back to the default on bad values."""
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Environment variable %s must be an integer, got %r", key, raw
        )
        return default


HTTP_TIMEOUT = get_int("WATCHLIST_HTTP_TIMEOUT", 10)
SEARCH_CACHE_TTL = get_int("WATCHLIST_SEARCH_CACHE_TTL", 60)
LOG_LEVEL = get_str("WATCHLIST_LOG_LEVEL", "INFO")


def configure_logging(level=None):
    """
    Attach a single stream handler to the root logger.

    Safe to call on every Streamlit rerun; the handler is only added once.

    Args:
        level: Logging level name or number, defaults to WATCHLIST_LOG_LEVEL

    Returns:
        The root logger
    """
    root = logging.getLogger()
    if not any(handler.get_name() == LOG_HANDLER_NAME for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(LOG_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level or LOG_LEVEL.upper())
    return root


def create_item_id():
    """Generate a fresh opaque item id."""
    return str(uuid.uuid4())


def is_valid_category(value):
    return value in CATEGORY_KEYS


def is_valid_media_type(value):
    return value in MEDIA_TYPES


# Board shown on first load
SAMPLE_ITEMS = [
    {
        "id": "sample-severance",
        "title": "Severance",
        "type": "tv",
        "poster": "",
        "year": "2022",
        "rating": 9,
        "notes": "season two finale pending",
        "category": "currentlyWatching",
    },
    {
        "id": "sample-dune-part-two",
        "title": "Dune: Part Two",
        "type": "movie",
        "poster": "",
        "year": "2024",
        "rating": None,
        "notes": "",
        "category": "planning",
    },
    {
        "id": "sample-past-lives",
        "title": "Past Lives",
        "type": "movie",
        "poster": "",
        "year": "2023",
        "rating": None,
        "notes": "",
        "category": "planning",
    },
    {
        "id": "sample-arrival",
        "title": "Arrival",
        "type": "movie",
        "poster": "",
        "year": "2016",
        "rating": 8,
        "notes": "rewatch with commentary",
        "category": "watched",
    },
    {
        "id": "sample-lost",
        "title": "Lost",
        "type": "tv",
        "poster": "",
        "year": "2004",
        "rating": 5,
        "notes": "stopped in season three",
        "category": "dropped",
    },
]
