"""
Unit tests for import/export and the overview table.
"""

import json
import unittest
import sys
import os

import pandas as pd

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from board_model import build_board, empty_board, flatten_board
from watchlist_io import (
    EXPORT_FILENAME,
    FRAME_COLUMNS,
    IMPORT_FAILED,
    WatchlistImportError,
    export_board_json,
    parse_import_payload,
    import_board,
    board_to_frame,
)


def sample_board():
    return build_board([
        {"id": "a", "title": "Severance", "type": "tv", "rating": 9, "notes": "", "category": "currentlyWatching"},
        {"id": "b", "title": "Heat", "type": "movie", "rating": None, "notes": "", "category": "planning"},
        {"id": "c", "title": "Ran", "type": "movie", "rating": 8, "notes": "wow", "category": "watched"},
    ])


class TestExport(unittest.TestCase):

    def test_export_flattens_in_board_order(self):
        """Export is a JSON array with every item and its category."""
        payload = json.loads(export_board_json(sample_board()))
        self.assertIsInstance(payload, list)
        self.assertEqual([item["id"] for item in payload], ["a", "b", "c"])
        self.assertEqual(payload[2]["category"], "watched")

    def test_export_then_import_round_trip(self):
        """Exported text imports back to the same board."""
        board = sample_board()
        restored, error = import_board(empty_board(), export_board_json(board))
        self.assertIsNone(error)
        self.assertEqual(flatten_board(restored), flatten_board(board))

    def test_export_filename(self):
        self.assertEqual(EXPORT_FILENAME, "watchlist.json")


class TestImport(unittest.TestCase):

    def test_parse_rejects_non_array(self):
        """Objects and scalars at the top level are rejected."""
        for text in ('{"items": []}', '42', '"text"', 'null'):
            with self.subTest(text=text):
                with self.assertRaises(WatchlistImportError):
                    parse_import_payload(text)

    def test_parse_rejects_invalid_json(self):
        with self.assertRaises(WatchlistImportError):
            parse_import_payload("not json [")

    def test_parse_accepts_bytes(self):
        items = parse_import_payload(b'[{"title": "Heat"}]')
        self.assertEqual(items, [{"title": "Heat"}])

    def test_parse_skips_non_objects(self):
        """Array entries that are not objects are dropped."""
        with self.assertLogs('watchlist_io', level='WARNING'):
            items = parse_import_payload('[{"title": "Heat"}, 3, "x", null]')
        self.assertEqual(items, [{"title": "Heat"}])

    def test_import_failure_keeps_board(self):
        """A bad payload leaves the board as it was and reports failure."""
        board = sample_board()
        with self.assertLogs('watchlist_io', level='WARNING'):
            result, error = import_board(board, '{"not": "a list"}')
        self.assertIs(result, board)
        self.assertEqual(error, IMPORT_FAILED)

    def test_import_coerces_items(self):
        """Missing ids are generated and bad categories become planning."""
        text = json.dumps([
            {"title": "No id", "type": "movie", "category": "watched"},
            {"id": "x", "title": "Bad category", "type": "tv", "category": "someday"},
        ])
        board, error = import_board(empty_board(), text)
        self.assertIsNone(error)
        self.assertEqual(len(board["watched"]), 1)
        self.assertTrue(board["watched"][0]["id"])
        self.assertEqual([item["id"] for item in board["planning"]], ["x"])

    def test_import_empty_object_is_renderable(self):
        """An empty object imports as a complete planning item."""
        board, error = import_board(empty_board(), b'[{}]')
        self.assertIsNone(error)
        item = board["planning"][0]
        self.assertEqual(item["title"], "")
        self.assertEqual(item["type"], "movie")
        self.assertEqual(item["notes"], "")
        self.assertIsNone(item["rating"])

    def test_import_empty_array_clears_board(self):
        board, error = import_board(sample_board(), "[]")
        self.assertIsNone(error)
        self.assertEqual(flatten_board(board), [])


class TestOverviewFrame(unittest.TestCase):

    def test_frame_rows_and_columns(self):
        """One row per item with the overview columns."""
        frame = board_to_frame(sample_board())
        self.assertIsInstance(frame, pd.DataFrame)
        self.assertEqual(list(frame.columns), FRAME_COLUMNS)
        self.assertEqual(len(frame), 3)
        self.assertEqual(frame.iloc[0]["category"], "currentlyWatching")
        self.assertEqual(list(frame["title"]), ["Severance", "Heat", "Ran"])

    def test_empty_board_frame(self):
        frame = board_to_frame(empty_board())
        self.assertTrue(frame.empty)
        self.assertEqual(list(frame.columns), FRAME_COLUMNS)


if __name__ == '__main__':
    unittest.main()
