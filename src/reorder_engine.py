"""
Reorder engine: turns a completed drag gesture into a new board.

The presentation layer reports a gesture as (active_id, over_id), where
over_id is either another item's id or a category key. Every geometry is
handled without raising; unresolved references degrade to a no-op or to
appending at the end of a list.
"""

import logging

from board_model import locate_item
from watchlist_utils import is_valid_category

logger = logging.getLogger(__name__)


def _clamp(index, length):
    return max(0, min(index, length))


def describe_target(board, over_id):
    """
    Resolve a drop target to a position on the board.

    Args:
        board: Current board
        over_id: Item id or category key

    Returns:
        Tuple of (category, index). A category key resolves to the end of that
        category; an unknown id resolves to (None, -1).
    """
    if is_valid_category(over_id):
        return over_id, len(board[over_id])
    return locate_item(board, over_id)


def apply_drag(board, active_id, over_id):
    """
    Apply a drag gesture to the board.

    Geometries:
        - no target, or dropped on itself: board returned unchanged
        - dropped on a category key: moved to the end of that category
        - dropped on an item in the same category: the dragged item takes the
          target's original index, so [A, B, C] with A on C becomes [B, C, A]
        - dropped on an item in another category: inserted at the target's
          index in the destination list and its category updated
        - dropped on an unknown id: appended to the end of its own category

    Args:
        board: Current board
        active_id: Id of the dragged item
        over_id: Id of the item or category under the pointer at drop time

    Returns:
        New board, or the same board object when nothing moves
    """
    if not over_id or active_id == over_id:
        return board

    from_category, from_index = locate_item(board, active_id)
    if from_category is None:
        logger.debug("Drag ignored, %s is not on the board", active_id)
        return board

    to_category, over_index = describe_target(board, over_id)
    if to_category is None:
        logger.debug("Drop target %s not found, appending to %s", over_id, from_category)
        to_category = from_category
        over_index = len(board[from_category])

    source = board[from_category]
    moving = source[from_index]
    remaining = source[:from_index] + source[from_index + 1:]

    if from_category == to_category:
        # over_index was measured before removal; landing on it in the
        # shortened list puts the item on the far side of the target.
        insert_at = _clamp(over_index, len(remaining))
        if insert_at == from_index:
            return board
        reordered = list(remaining)
        reordered.insert(insert_at, moving)
        updated = dict(board)
        updated[from_category] = reordered
        return updated

    destination = list(board[to_category])
    insert_at = _clamp(over_index, len(destination))
    moved = dict(moving)
    moved["category"] = to_category
    destination.insert(insert_at, moved)

    updated = dict(board)
    updated[from_category] = remaining
    updated[to_category] = destination
    return updated


def move_to_category(board, item_id, category):
    """Move an item to the end of a category, as if dropped on its empty area."""
    return apply_drag(board, item_id, category)
