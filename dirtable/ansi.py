"""Text measurement, clipping, and fixed-width cell shaping.

``render_cell`` shapes one field into a table cell with ``<``/``>`` overflow
markers. ``clip_ansi_line`` trims a fully styled row to the terminal width
without cutting escape sequences in half.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
SCROLL_LEFT_MARKER = "<"
SCROLL_RIGHT_MARKER = ">"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        if col >= max_cols:
            # Keep trailing style resets, drop visible overflow.
            i += 1
            continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            col = max_cols
            i += 1
            continue
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def max_cell_scroll(text: str, width: int) -> int:
    """Largest useful scroll offset for ``text`` in a cell of ``width``."""
    return max(0, len(text) - max(0, width))


def render_cell(text: str, width: int, scroll_offset: int) -> str:
    """Shape ``text`` into exactly ``width`` characters.

    Text that fits is left-justified and space padded; ``scroll_offset`` is
    ignored. Longer text shows the ``width`` characters starting at the
    clamped offset, with ``<`` over the first character when text is hidden on
    the left and ``>`` over the last when text is hidden on the right.
    Lengths count code points.
    """
    if width <= 0:
        return ""
    length = len(text)
    if length <= width:
        return text.ljust(width)

    offset = max(0, min(scroll_offset, length - width))
    visible = list(text[offset : offset + width])
    if offset > 0:
        visible[0] = SCROLL_LEFT_MARKER
    if offset + width < length:
        visible[-1] = SCROLL_RIGHT_MARKER
    return "".join(visible).ljust(width)


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "SCROLL_LEFT_MARKER",
    "SCROLL_RIGHT_MARKER",
    "char_display_width",
    "clip_ansi_line",
    "max_cell_scroll",
    "render_cell",
]
