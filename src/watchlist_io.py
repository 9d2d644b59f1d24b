"""
JSON import/export of the board and a tabular overview.
"""

import json
import logging

import pandas as pd

from board_model import flatten_board, replace_all

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "watchlist.json"
FRAME_COLUMNS = ["category", "title", "type", "year", "rating", "notes"]
IMPORT_FAILED = "import failed"


class WatchlistImportError(ValueError):
    """Raised when an import payload cannot be turned into items."""


def export_board_json(board):
    """Serialize every item, categories concatenated in board order."""
    return json.dumps(flatten_board(board), indent=2, ensure_ascii=False)


def parse_import_payload(text):
    """
    Parse an uploaded watchlist file.

    Args:
        text: File contents as str or bytes

    Returns:
        List of item dicts

    Raises:
        WatchlistImportError: Payload is not JSON or not a JSON array
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise WatchlistImportError("File is not UTF-8 text") from e
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise WatchlistImportError(f"Invalid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise WatchlistImportError("Invalid format, expected a list of items")

    items = []
    for index, entry in enumerate(parsed):
        if isinstance(entry, dict):
            items.append(entry)
        else:
            logger.warning("Skipping import entry %d, not an object: %r", index, entry)
    return items


def import_board(board, text):
    """
    Replace the board with the contents of an import file.

    Args:
        board: Current board, kept when the import fails
        text: File contents

    Returns:
        Tuple of (board, error). error is None on success, otherwise
        'import failed' and the original board is returned.
    """
    try:
        items = parse_import_payload(text)
    except WatchlistImportError as e:
        logger.warning("Import rejected: %s", e)
        return board, IMPORT_FAILED
    return replace_all(items), None


def board_to_frame(board):
    """One row per item, in board order, for the overview table."""
    rows = [
        {column: item.get(column) for column in FRAME_COLUMNS}
        for item in flatten_board(board)
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
