"""Tests for cell shaping and ANSI-aware clipping.

Covers exact cell widths, overflow marker placement, and escape-sequence
preservation when rows are clipped to the terminal width.
"""

from __future__ import annotations

import unittest

from dirtable.ansi import clip_ansi_line, max_cell_scroll, render_cell


class RenderCellTests(unittest.TestCase):
    def test_non_positive_width_renders_nothing(self) -> None:
        self.assertEqual(render_cell("name", 0, 0), "")
        self.assertEqual(render_cell("name", -3, 2), "")

    def test_short_text_is_left_justified_and_padded(self) -> None:
        self.assertEqual(render_cell("abc", 6, 0), "abc   ")

    def test_fitting_text_ignores_scroll_offset(self) -> None:
        for offset in (0, 1, 5, 100):
            self.assertEqual(render_cell("abcd", 4, offset), "abcd")
            self.assertEqual(render_cell("ab", 5, offset), "ab   ")

    def test_result_always_has_requested_width(self) -> None:
        text = "0123456789abcdef"
        for width in range(1, 20):
            for offset in range(0, 20):
                self.assertEqual(len(render_cell(text, width, offset)), width)

    def test_offset_zero_shows_only_right_marker(self) -> None:
        cell = render_cell("abcdefghij", 4, 0)
        self.assertEqual(cell, "abc>")
        self.assertFalse(cell.startswith("<"))

    def test_max_offset_shows_only_left_marker(self) -> None:
        cell = render_cell("abcdefghij", 4, 6)
        self.assertEqual(cell, "<hij")
        self.assertFalse(cell.endswith(">"))

    def test_middle_offset_shows_both_markers(self) -> None:
        cell = render_cell("abcdefghij", 4, 3)
        self.assertEqual(cell, "<ef>")

    def test_offset_beyond_end_is_clamped(self) -> None:
        self.assertEqual(render_cell("abcdefghij", 4, 50), "<hij")
        self.assertEqual(render_cell("abcdefghij", 4, -2), "abc>")

    def test_multibyte_text_is_sliced_by_code_point(self) -> None:
        self.assertEqual(render_cell("привет мир", 5, 0), "прив>")
        self.assertEqual(render_cell("привет мир", 5, 5), "< мир")

    def test_max_cell_scroll(self) -> None:
        self.assertEqual(max_cell_scroll("abcdefghij", 4), 6)
        self.assertEqual(max_cell_scroll("abc", 4), 0)


class ClipAnsiLineTests(unittest.TestCase):
    def test_clip_keeps_escape_sequences_and_trailing_reset(self) -> None:
        line = "\033[1mabcdef\033[0m"
        self.assertEqual(clip_ansi_line(line, 3), "\033[1mabc\033[0m")

    def test_clip_returns_empty_for_non_positive_width(self) -> None:
        self.assertEqual(clip_ansi_line("abc", 0), "")

    def test_clip_does_not_split_wide_characters(self) -> None:
        self.assertEqual(clip_ansi_line("a界b", 2), "a")


if __name__ == "__main__":
    unittest.main()
