"""Tests for table geometry helpers."""

from __future__ import annotations

import unittest

from dirtable.file_table_model import FileKind, FileRecord
from dirtable.layout import (
    COLUMN_TITLES,
    column_scroll_limits,
    compute_column_widths,
    path_scroll_limit,
    viewport_height,
    visible_range,
)


def _record(name: str, owner: str = "root") -> FileRecord:
    return FileRecord(
        display_name=name,
        raw_name=name,
        kind=FileKind.REGULAR_FILE,
        owner=owner,
        group="root",
        permissions="-rw-r--r--",
        mtime="01.01.2000  12:30",
        atime="01.01.2000  12:30",
    )


class ColumnWidthTests(unittest.TestCase):
    def test_eighty_columns(self) -> None:
        self.assertEqual(compute_column_widths(80), (24, 8, 8, 8, 8, 8, 8))

    def test_widths_floor_and_leave_padding_unused(self) -> None:
        widths = compute_column_widths(57)
        self.assertEqual(widths, (17, 5, 5, 5, 5, 5, 5))
        self.assertLess(sum(widths), 57)

    def test_tiny_terminal_produces_zero_widths(self) -> None:
        self.assertEqual(compute_column_widths(5), (1, 0, 0, 0, 0, 0, 0))
        self.assertEqual(compute_column_widths(0), (0,) * 7)


class ViewportGeometryTests(unittest.TestCase):
    def test_height_reserves_three_rows_and_floors_at_one(self) -> None:
        self.assertEqual(viewport_height(24), 21)
        self.assertEqual(viewport_height(3), 1)
        self.assertEqual(viewport_height(1), 1)

    def test_visible_range_is_clamped_to_count(self) -> None:
        self.assertEqual(list(visible_range(0, 5, 3)), [0, 1, 2])
        self.assertEqual(list(visible_range(4, 3, 10)), [4, 5, 6])
        self.assertEqual(list(visible_range(0, 5, 0)), [])


class ScrollLimitTests(unittest.TestCase):
    def test_column_limits_use_longest_visible_cell_and_titles(self) -> None:
        widths = compute_column_widths(80)
        limits = column_scroll_limits(
            [_record("short"), _record("a-rather-long-file-name-for-column.txt", owner="someone-long")],
            widths,
        )
        self.assertEqual(len(limits), len(COLUMN_TITLES))
        self.assertEqual(limits[0], len("a-rather-long-file-name-for-column.txt") - 24)
        self.assertEqual(limits[2], len("someone-long") - 8)
        # "permissions" title is wider than its 8-character column.
        self.assertEqual(limits[4], len("permissions") - 8)
        self.assertEqual(limits[5], len("01.01.2000  12:30") - 8)

    def test_path_scroll_limit(self) -> None:
        self.assertEqual(path_scroll_limit("/a/b", 80), 0)
        self.assertEqual(path_scroll_limit("/" + "x" * 99, 80), 20)


if __name__ == "__main__":
    unittest.main()
