"""
Unit tests for the card markup used by the Streamlit UI.
"""

import unittest
import sys
import os

# Add repo root and src to path for imports
root_dir = os.path.join(os.path.dirname(__file__), '..')
sys.path.insert(0, os.path.join(root_dir, 'src'))
sys.path.insert(0, root_dir)

from main_app import card_markup


class TestCardMarkup(unittest.TestCase):

    def test_item_text_is_escaped(self):
        """Titles, meta and notes from imports or providers cannot inject HTML."""
        item = {
            "title": "<script>alert(1)</script>",
            "type": "movie",
            "year": "<img src=x onerror=alert(1)>",
            "rating": None,
            "notes": "<b>bold</b>",
        }
        title_html, meta_html, notes_html = card_markup(item)

        self.assertIn("&lt;script&gt;", title_html)
        self.assertNotIn("<script>", title_html)
        self.assertNotIn("<img", meta_html)
        self.assertIn("&lt;img", meta_html)
        self.assertIn("&lt;b&gt;bold&lt;/b&gt;", notes_html)

    def test_plain_card(self):
        title_html, meta_html, notes_html = card_markup(
            {"title": "Heat", "type": "movie", "year": "1995", "rating": 9, "notes": ""}
        )
        self.assertEqual(title_html, "<strong>Heat</strong>")
        self.assertIn("movie · 1995 · 9", meta_html)
        self.assertIn("notes waiting", notes_html)

    def test_spotlight_wraps_title(self):
        """Top-rated cards get the spotlight wrapper around the escaped title."""
        title_html, _, _ = card_markup({"title": "A & B", "type": "tv", "rating": 9}, spotlight=True)
        self.assertEqual(title_html, '<div class="spotlight"><strong>A &amp; B</strong></div>')


if __name__ == '__main__':
    unittest.main()
