"""
Unit tests for lexer.py

Tests string/comment stripping and brace-depth tracking.
"""

import unittest

from customizer.lexer import ScopeTracker, strip_line


class TestStripLine(unittest.TestCase):
    """Test removal of strings and comments."""

    def test_plain_code_unchanged(self):
        stripped, in_block = strip_line("module a() {", False)
        self.assertEqual(stripped, "module a() {")
        self.assertFalse(in_block)

    def test_line_comment_truncates(self):
        stripped, in_block = strip_line("x = 1; // { brace", False)
        self.assertEqual(stripped, "x = 1; ")
        self.assertFalse(in_block)

    def test_string_content_blanked(self):
        stripped, _ = strip_line('s = "{";', False)
        self.assertNotIn("{", stripped)
        self.assertEqual(stripped, "s =    ;")

    def test_single_quoted_string(self):
        stripped, _ = strip_line("s = '}';", False)
        self.assertNotIn("}", stripped)

    def test_escaped_quote_inside_string(self):
        stripped, _ = strip_line(r's = "a\"{"; {', False)
        self.assertEqual(stripped.count("{"), 1)
        self.assertTrue(stripped.rstrip().endswith("{"))

    def test_comment_markers_inside_string_ignored(self):
        stripped, in_block = strip_line('s = "// /* not comment"; {', False)
        self.assertFalse(in_block)
        self.assertIn("{", stripped)

    def test_block_comment_opens(self):
        stripped, in_block = strip_line("a = 1; /* { start", False)
        self.assertTrue(in_block)
        self.assertEqual(stripped, "a = 1; ")

    def test_block_comment_closes_midline(self):
        stripped, in_block = strip_line("still comment } */ {", True)
        self.assertFalse(in_block)
        self.assertEqual(stripped, " {")

    def test_block_comment_without_close_drops_line(self):
        stripped, in_block = strip_line("inside { comment }", True)
        self.assertTrue(in_block)
        self.assertEqual(stripped, "")

    def test_inline_block_comment(self):
        stripped, in_block = strip_line("a /* { */ b", False)
        self.assertFalse(in_block)
        self.assertEqual(stripped, "a  b")

    def test_unterminated_string_ends_at_eol(self):
        stripped, in_block = strip_line('s = "{ open', False)
        self.assertFalse(in_block)
        self.assertNotIn("{", stripped)


class TestScopeTracker(unittest.TestCase):
    """Test depth tracking across lines."""

    def test_initial_state(self):
        tracker = ScopeTracker()
        self.assertEqual(tracker.depth, 0)
        self.assertTrue(tracker.at_top_level)

    def test_balanced_braces_return_to_zero(self):
        tracker = ScopeTracker()
        lines = [
            "module box() {",
            "  if (true) {",
            '    echo("}");',
            "  }",
            "}",
        ]
        depths = []
        for line in lines:
            tracker.feed(line)
            depths.append(tracker.depth)
        self.assertEqual(depths, [1, 2, 2, 1, 0])
        self.assertTrue(tracker.at_top_level)

    def test_underflow_clamps_at_zero(self):
        tracker = ScopeTracker()
        with self.assertLogs("customizer.lexer", level="WARNING"):
            tracker.feed("} }")
        self.assertEqual(tracker.depth, 0)
        self.assertEqual(tracker.underflows, 2)
        tracker.feed("{")
        self.assertEqual(tracker.depth, 1)

    def test_block_comment_not_top_level(self):
        tracker = ScopeTracker()
        tracker.feed("/* open")
        self.assertEqual(tracker.depth, 0)
        self.assertFalse(tracker.at_top_level)
        tracker.feed("{ ignored } */")
        self.assertTrue(tracker.at_top_level)

    def test_braces_in_comments_ignored(self):
        tracker = ScopeTracker()
        tracker.feed("x = 1; // {")
        tracker.feed("/* { */")
        self.assertEqual(tracker.depth, 0)


if __name__ == "__main__":
    unittest.main()
