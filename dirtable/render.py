"""Rendering engine for the directory table view.

Defines render context data and builds fully composed ANSI frames. Building
is pure so frames can be inspected in tests; ``render_frame`` writes them.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from .ansi import clip_ansi_line, render_cell
from .file_table_model import DirectorySnapshot, FileRecord
from .layout import COLUMN_SEPARATOR, COLUMN_TITLES, compute_column_widths, viewport_height, visible_range
from .ui_theme import DEFAULT_THEME, UITheme
from .viewport import ViewportState

CLEAR_SCREEN = "\033[2J\033[H"


@dataclass
class RenderContext:
    path_text: str
    snapshot: DirectorySnapshot
    viewport: ViewportState
    columns: int
    rows: int
    theme: UITheme = DEFAULT_THEME
    status_message: str = ""
    status_is_error: bool = True


def _styled(style: str, text: str, reset: str) -> str:
    if not style:
        return text
    return f"{style}{text}{reset}"


def format_path_line(context: RenderContext) -> str:
    text = render_cell(context.path_text, context.columns, context.viewport.path_scroll)
    return _styled(context.theme.path, text, context.theme.reset)


def format_header_line(context: RenderContext, widths: tuple[int, ...]) -> str:
    theme = context.theme
    separator = _styled(theme.separator, COLUMN_SEPARATOR, theme.reset)
    cells: list[str] = []
    for idx, title in enumerate(COLUMN_TITLES):
        style = theme.header_active if idx == context.viewport.active_column else theme.header
        cell = render_cell(title, widths[idx], context.viewport.column_scroll[idx])
        cells.append(_styled(style, cell, theme.reset))
    return separator.join(cells)


def format_entry_line(
    record: FileRecord,
    widths: tuple[int, ...],
    column_scroll: list[int],
    theme: UITheme,
    selected: bool,
) -> str:
    cells = [
        render_cell(value, widths[idx], column_scroll[idx])
        for idx, value in enumerate(record.column_values())
    ]
    if selected:
        return _styled(theme.cursor_row, COLUMN_SEPARATOR.join(cells), theme.reset)
    separator = _styled(theme.separator, COLUMN_SEPARATOR, theme.reset)
    return separator.join(cells)


def format_status_line(context: RenderContext) -> str:
    theme = context.theme
    style = theme.status_error if context.status_is_error else theme.status_info
    return _styled(style, context.status_message, theme.reset)


def build_frame(context: RenderContext) -> str:
    """Compose one full screen: path, headers, visible rows, status row."""
    widths = compute_column_widths(context.columns)
    height = viewport_height(context.rows)
    viewport = context.viewport
    snapshot = context.snapshot

    lines = [format_path_line(context), format_header_line(context, widths)]
    for idx in visible_range(viewport.scroll_offset, height, snapshot.count):
        lines.append(
            format_entry_line(
                snapshot.entries[idx],
                widths,
                viewport.column_scroll,
                context.theme,
                selected=idx == viewport.cursor_index,
            )
        )

    out: list[str] = [CLEAR_SCREEN]
    out.append("\r\n".join(clip_ansi_line(line, context.columns) for line in lines))
    if context.status_message:
        out.append(f"\033[{max(1, context.rows)};1H")
        out.append(clip_ansi_line(format_status_line(context), context.columns))
    return "".join(out)


def render_frame(context: RenderContext, stdout_fd: int | None = None) -> None:
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, build_frame(context).encode("utf-8", errors="replace"))


def render_bottom_message(message: str, rows: int, stdout_fd: int | None = None) -> None:
    """Write a single diagnostic line on the bottom row."""
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, f"\033[{max(1, rows)};1H{message}\r\n".encode("utf-8", errors="replace"))


__all__ = [
    "CLEAR_SCREEN",
    "RenderContext",
    "format_path_line",
    "format_header_line",
    "format_entry_line",
    "format_status_line",
    "build_frame",
    "render_frame",
    "render_bottom_message",
]
