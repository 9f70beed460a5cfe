"""Screen geometry for the directory table.

Column widths are fixed fractions of the terminal width; the vertical layout
reserves the path line, the header line, and the status row.
"""

from __future__ import annotations

from collections.abc import Sequence

from .ansi import max_cell_scroll
from .file_table_model import FileRecord

COLUMN_TITLES: tuple[str, ...] = ("name", "type", "owner", "group", "permissions", "mtime", "atime")
COLUMN_COUNT = len(COLUMN_TITLES)
COLUMN_SEPARATOR = "|"
EXPORT_COLUMN_WIDTHS: tuple[int, ...] = (57, 19, 19, 19, 19, 19, 19)
NAME_COLUMN_TENTHS = 3
OTHER_COLUMN_TENTHS = 1
RESERVED_ROWS = 3


def compute_column_widths(terminal_width: int) -> tuple[int, ...]:
    """Return the seven column widths for ``terminal_width``.

    The name column gets 30% and every other column 10%, floored. Whatever is
    left over stays blank.
    """
    width = max(0, terminal_width)
    name_width = width * NAME_COLUMN_TENTHS // 10
    other_width = width * OTHER_COLUMN_TENTHS // 10
    return (name_width,) + (other_width,) * (COLUMN_COUNT - 1)


def viewport_height(terminal_rows: int) -> int:
    """Number of table rows that fit below the path and header lines."""
    return max(1, terminal_rows - RESERVED_ROWS)


def visible_range(scroll_offset: int, height: int, count: int) -> range:
    end = min(count, scroll_offset + max(1, height))
    return range(min(scroll_offset, end), end)


def column_scroll_limits(
    visible_entries: Sequence[FileRecord],
    widths: Sequence[int],
) -> tuple[int, ...]:
    """Largest useful horizontal offset per column over the drawn cells.

    Header titles count as drawn cells, so a narrow column can still scroll
    through its own title.
    """
    limits = [max_cell_scroll(title, widths[idx]) for idx, title in enumerate(COLUMN_TITLES)]
    for record in visible_entries:
        for idx, value in enumerate(record.column_values()):
            limits[idx] = max(limits[idx], max_cell_scroll(value, widths[idx]))
    return tuple(limits)


def path_scroll_limit(path_text: str, terminal_width: int) -> int:
    return max_cell_scroll(path_text, terminal_width)


__all__ = [
    "COLUMN_TITLES",
    "COLUMN_COUNT",
    "COLUMN_SEPARATOR",
    "EXPORT_COLUMN_WIDTHS",
    "RESERVED_ROWS",
    "compute_column_widths",
    "viewport_height",
    "visible_range",
    "column_scroll_limits",
    "path_scroll_limit",
]
