"""
Board model: the four-category watchlist and its mutation primitives.

A board is a dict mapping every category key to an ordered list of item dicts.
Functions here never modify the board or the lists they are given; they return
a new board that may share untouched category lists with the old one.
"""

import logging

from watchlist_utils import (
    CATEGORY_KEYS,
    DEFAULT_CATEGORY,
    EDITABLE_FIELDS,
    RATING_MAX,
    RATING_MIN,
    create_item_id,
    is_valid_category,
    is_valid_media_type,
)

logger = logging.getLogger(__name__)


def empty_board():
    """Return a board with all four categories present and empty."""
    return {key: [] for key in CATEGORY_KEYS}


def build_board(items):
    """
    Group a flat sequence of items into a board, keeping input order.

    Items with an unknown category are skipped.

    Args:
        items: Iterable of item dicts carrying a 'category' key

    Returns:
        Board dict
    """
    board = empty_board()
    for item in items:
        category = item.get("category")
        if is_valid_category(category):
            board[category].append(dict(item))
    return board


def add_item(board, item, category):
    """Insert an item at the head of a category; its category field is overwritten."""
    if not is_valid_category(category):
        category = DEFAULT_CATEGORY
    new_item = dict(item)
    new_item["category"] = category
    updated = dict(board)
    updated[category] = [new_item] + list(board.get(category, []))
    return updated


def update_item(board, updated_item):
    """
    Replace an item in place within the category it claims to occupy.

    Only the category named by updated_item['category'] is searched. If the id
    is not there the board is returned unchanged.

    Args:
        board: Current board
        updated_item: Full item dict with the new field values

    Returns:
        New board, or the same board when nothing matched
    """
    category = updated_item.get("category")
    if not is_valid_category(category):
        return board

    items = board[category]
    for index, entry in enumerate(items):
        if entry.get("id") == updated_item.get("id"):
            new_items = list(items)
            new_items[index] = dict(updated_item)
            updated = dict(board)
            updated[category] = new_items
            return updated

    logger.debug("update_item: %s not found in %s", updated_item.get("id"), category)
    return board


def delete_item(board, item_id):
    """Remove the first item with the given id, scanning categories in board order."""
    for key in CATEGORY_KEYS:
        items = board[key]
        for index, entry in enumerate(items):
            if entry.get("id") == item_id:
                updated = dict(board)
                updated[key] = items[:index] + items[index + 1:]
                return updated
    return board


def _as_text(value):
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _coerce_imported(item):
    coerced = dict(item)
    for field in ("title", "notes"):
        if not isinstance(coerced.get(field), str):
            coerced[field] = _as_text(coerced.get(field))
    if not is_valid_media_type(coerced.get("type")):
        coerced["type"] = "movie"
    if "poster" in coerced and not isinstance(coerced["poster"], str):
        coerced["poster"] = ""
    if "year" in coerced and coerced["year"] is not None and not isinstance(coerced["year"], str):
        coerced["year"] = _clean_year(coerced["year"])
    rating = normalize_rating(coerced.get("rating"))
    if "rating" not in coerced or rating != coerced["rating"]:
        coerced["rating"] = rating
    return coerced


def replace_all(items):
    """
    Rebuild the whole board from an imported sequence of items.

    Items with a missing or unknown category go to 'planning'; items without
    an id get a freshly generated one. Missing or mistyped display fields are
    filled in so every imported item can be rendered; valid fields are kept
    exactly as given.

    Args:
        items: Iterable of item dicts

    Returns:
        New board
    """
    board = empty_board()
    for item in items:
        category = item.get("category")
        if not is_valid_category(category):
            category = DEFAULT_CATEGORY
        new_item = _coerce_imported(item)
        new_item["id"] = item.get("id") or create_item_id()
        new_item["category"] = category
        board[category].append(new_item)
    return board


def locate_item(board, item_id):
    """
    Find where an item sits on the board.

    Returns:
        Tuple of (category, index), or (None, -1) when absent
    """
    for key in CATEGORY_KEYS:
        for index, entry in enumerate(board[key]):
            if entry.get("id") == item_id:
                return key, index
    return None, -1


def find_item(board, item_id):
    category, index = locate_item(board, item_id)
    if category is None:
        return None
    return board[category][index]


def flatten_board(board):
    """All items in board order, each copy annotated with its category."""
    flattened = []
    for key in CATEGORY_KEYS:
        for entry in board[key]:
            item = dict(entry)
            item["category"] = key
            flattened.append(item)
    return flattened


def normalize_rating(value):
    """Coerce a rating to an int in [1, 10], or None for unrated/invalid values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rating = int(value)
    except (TypeError, ValueError):
        return None
    if rating != value and not isinstance(value, str):
        # reject fractional ratings such as 7.5
        return None
    if RATING_MIN <= rating <= RATING_MAX:
        return rating
    return None


def _clean_year(value):
    if value is None:
        return None
    year = str(value).strip()
    return year or None


def item_from_search_result(result):
    """
    Build a new planning item from a search result.

    Args:
        result: SearchResult dict

    Returns:
        WatchItem dict with a fresh id and source_id set to the result id
    """
    return {
        "id": create_item_id(),
        "title": result.get("title", ""),
        "type": result.get("type", "movie"),
        "poster": result.get("poster") or "",
        "year": result.get("year"),
        "rating": None,
        "notes": "",
        "category": DEFAULT_CATEGORY,
        "source_id": result.get("id"),
    }


def create_manual_item(title, media_type, category, poster=None, year=None):
    """
    Build an item from manual entry.

    Args:
        title: Display title, required
        media_type: 'movie' or 'tv'
        category: Target category key
        poster: Optional image URL
        year: Optional year string

    Returns:
        WatchItem dict, or None if the title is blank
    """
    title = (title or "").strip()
    if not title:
        return None
    return {
        "id": create_item_id(),
        "title": title,
        "type": media_type if is_valid_media_type(media_type) else "movie",
        "poster": (poster or "").strip(),
        "year": _clean_year(year),
        "rating": None,
        "notes": "",
        "category": category if is_valid_category(category) else DEFAULT_CATEGORY,
    }


def edit_item(item, **changes):
    """Return a copy of the item with editable fields changed; other keys are ignored."""
    edited = dict(item)
    for field, value in changes.items():
        if field not in EDITABLE_FIELDS:
            continue
        if field == "rating":
            value = normalize_rating(value)
        elif field == "year":
            value = _clean_year(value)
        elif field == "poster":
            value = (value or "").strip()
        elif field == "type" and not is_valid_media_type(value):
            continue
        edited[field] = value
    return edited
