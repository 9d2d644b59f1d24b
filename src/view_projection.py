"""
Read-only projections of the board for display.
"""

from watchlist_utils import CATEGORY_KEYS, TOP_RATED_THRESHOLD


def default_category_filters():
    return {key: "all" for key in CATEGORY_KEYS}


def matches_type_filter(item, type_filter):
    """True when the item passes a type filter ('all', 'movie' or 'tv')."""
    if type_filter in (None, "all"):
        return True
    return item.get("type") == type_filter


def filter_board(board, category_filters=None, global_filter="all"):
    """
    Build the filtered board shown to the user.

    An item is kept only if it passes both its category's filter and the
    global filter. The source board is left untouched and order is preserved.

    Args:
        board: Current board
        category_filters: Dict of category key -> type filter; missing keys mean 'all'
        global_filter: Type filter applied to every category

    Returns:
        New board dict with filtered lists
    """
    category_filters = category_filters or {}
    filtered = {}
    for key in CATEGORY_KEYS:
        category_filter = category_filters.get(key, "all")
        filtered[key] = [
            item for item in board[key]
            if matches_type_filter(item, global_filter)
            and matches_type_filter(item, category_filter)
        ]
    return filtered


def is_top_rated(item):
    rating = item.get("rating")
    return rating is not None and rating >= TOP_RATED_THRESHOLD


def category_counts(board):
    return {key: len(board[key]) for key in CATEGORY_KEYS}
