"""
Catalog provider calls and normalization into SearchResult dicts.

Two read-only providers are supported:
- itunes: iTunes Search API, movies only
- tvmaze: TVmaze show search, TV only

Fetch functions raise on network errors and non-success responses; the
aggregator decides what to do with failures.
"""

import logging

import requests

from watchlist_utils import (
    HTTP_TIMEOUT,
    ITUNES_SEARCH_URL,
    PROVIDER_RESULT_LIMIT,
    TVMAZE_SEARCH_URL,
)

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {"Content-Type": "application/json"}


def _year_from_date(value):
    """First four characters of a release/premiere date, or None."""
    if not value or not isinstance(value, str):
        return None
    return value[:4]


def normalize_itunes_entry(entry):
    """
    Map one iTunes result to a SearchResult.

    The 100x100 artwork thumbnail is swapped for the 400x600 variant.

    Args:
        entry: Raw iTunes result dict

    Returns:
        SearchResult dict, or None when trackId or trackName is missing
    """
    track_id = entry.get("trackId")
    title = entry.get("trackName")
    if track_id is None or not title:
        return None

    artwork = entry.get("artworkUrl100")
    return {
        "id": f"itunes-{track_id}",
        "source": "itunes",
        "title": title,
        "year": _year_from_date(entry.get("releaseDate")),
        "poster": artwork.replace("100x100", "400x600") if isinstance(artwork, str) and artwork else None,
        "type": "movie",
    }


def normalize_tvmaze_entry(entry):
    """
    Map one TVmaze search hit to a SearchResult.

    Args:
        entry: Raw TVmaze hit dict ({"score": ..., "show": {...}})

    Returns:
        SearchResult dict, or None when the show id or name is missing
    """
    show = entry.get("show")
    if not isinstance(show, dict):
        return None
    show_id = show.get("id")
    title = show.get("name")
    if show_id is None or not title:
        return None

    image = show.get("image")
    if not isinstance(image, dict):
        image = {}
    return {
        "id": f"tvmaze-{show_id}",
        "source": "tvmaze",
        "title": title,
        "year": _year_from_date(show.get("premiered")),
        "poster": image.get("original") or image.get("medium"),
        "type": "tv",
    }


def _normalize_all(raw_entries, normalizer, source):
    results = []
    for entry in raw_entries[:PROVIDER_RESULT_LIMIT]:
        if not isinstance(entry, dict):
            continue
        result = normalizer(entry)
        if result is None:
            logger.debug("Skipping %s entry without id or title: %r", source, entry)
            continue
        results.append(result)
    return results


def fetch_itunes_movies(query, timeout=HTTP_TIMEOUT):
    """
    Search iTunes for movies.

    Args:
        query: Trimmed search text
        timeout: Request timeout in seconds

    Returns:
        List of SearchResult dicts (at most 8)
    """
    params = {"term": query, "media": "movie", "limit": PROVIDER_RESULT_LIMIT}
    response = requests.get(
        ITUNES_SEARCH_URL, params=params, headers=REQUEST_HEADERS, timeout=timeout
    )
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError("Unexpected iTunes payload")
    return _normalize_all(data.get("results") or [], normalize_itunes_entry, "itunes")


def fetch_tvmaze_shows(query, timeout=HTTP_TIMEOUT):
    """
    Search TVmaze for shows.

    Args:
        query: Trimmed search text
        timeout: Request timeout in seconds

    Returns:
        List of SearchResult dicts (at most 8)
    """
    response = requests.get(
        TVMAZE_SEARCH_URL, params={"q": query}, headers=REQUEST_HEADERS, timeout=timeout
    )
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, list):
        raise ValueError("Unexpected TVmaze payload")
    return _normalize_all(data, normalize_tvmaze_entry, "tvmaze")


# Order defines rank precedence when results are merged
PROVIDERS = [
    ("itunes", fetch_itunes_movies),
    ("tvmaze", fetch_tvmaze_shows),
]
