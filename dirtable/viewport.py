"""Viewport state machine: cursor, vertical scroll, and horizontal offsets.

Transitions are total over valid state and report whether anything changed so
the loop can skip redundant redraws. Upper bounds that depend on terminal
size and visible text are applied by ``clamp_to_limits`` before each draw.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .input import Command
from .layout import COLUMN_COUNT


def _zero_scrolls() -> list[int]:
    return [0] * COLUMN_COUNT


@dataclass
class ViewportState:
    cursor_index: int = 0
    scroll_offset: int = 0
    column_scroll: list[int] = field(default_factory=_zero_scrolls)
    path_scroll: int = 0
    active_column: int = 0

    def reset(self) -> None:
        """Return every field to its default, as after a directory change."""
        self.cursor_index = 0
        self.scroll_offset = 0
        self.column_scroll = _zero_scrolls()
        self.path_scroll = 0
        self.active_column = 0

    def as_tuple(self) -> tuple[int, int, tuple[int, ...], int, int]:
        """Hashable copy of all fields, used for change detection."""
        return (
            self.cursor_index,
            self.scroll_offset,
            tuple(self.column_scroll),
            self.path_scroll,
            self.active_column,
        )


def move_cursor_up(state: ViewportState) -> bool:
    if state.cursor_index <= 0:
        return False
    state.cursor_index -= 1
    if state.cursor_index < state.scroll_offset:
        state.scroll_offset = state.cursor_index
    return True


def move_cursor_down(state: ViewportState, count: int, height: int) -> bool:
    if state.cursor_index >= count - 1:
        return False
    state.cursor_index += 1
    height = max(1, height)
    if state.cursor_index >= state.scroll_offset + height:
        state.scroll_offset = state.cursor_index - height + 1
    return True


def scroll_active_column(state: ViewportState, delta: int) -> bool:
    current = state.column_scroll[state.active_column]
    updated = max(0, current + delta)
    if updated == current:
        return False
    state.column_scroll[state.active_column] = updated
    return True


def select_column(state: ViewportState, delta: int) -> bool:
    updated = state.active_column + delta
    if updated < 0 or updated >= COLUMN_COUNT:
        return False
    state.active_column = updated
    return True


def scroll_path(state: ViewportState, delta: int) -> bool:
    updated = max(0, state.path_scroll + delta)
    if updated == state.path_scroll:
        return False
    state.path_scroll = updated
    return True


def apply_viewport_command(state: ViewportState, command: Command, count: int, height: int) -> bool:
    """Apply a pure viewport command; return whether the state changed.

    Navigation, quit, and resize are handled by the session, so they leave
    the state untouched here and return ``False``.
    """
    if command is Command.CURSOR_UP:
        return move_cursor_up(state)
    if command is Command.CURSOR_DOWN:
        return move_cursor_down(state, count, height)
    if command is Command.COLUMN_LEFT:
        return scroll_active_column(state, -1)
    if command is Command.COLUMN_RIGHT:
        return scroll_active_column(state, 1)
    if command is Command.SELECT_PREV_COLUMN:
        return select_column(state, -1)
    if command is Command.SELECT_NEXT_COLUMN:
        return select_column(state, 1)
    if command is Command.PATH_SCROLL_LEFT:
        return scroll_path(state, -1)
    if command is Command.PATH_SCROLL_RIGHT:
        return scroll_path(state, 1)
    return False


def ensure_cursor_visible(state: ViewportState, count: int, height: int) -> None:
    """Re-establish cursor and scroll bounds for ``count`` rows and ``height``.

    Needed after a resize shrinks the viewport or when the list fits entirely.
    """
    height = max(1, height)
    if count <= 0:
        state.cursor_index = 0
        state.scroll_offset = 0
        return
    state.cursor_index = max(0, min(state.cursor_index, count - 1))
    if state.cursor_index < state.scroll_offset:
        state.scroll_offset = state.cursor_index
    elif state.cursor_index >= state.scroll_offset + height:
        state.scroll_offset = state.cursor_index - height + 1
    state.scroll_offset = max(0, min(state.scroll_offset, max(0, count - height)))


def clamp_to_limits(
    state: ViewportState,
    column_limits: Sequence[int],
    path_limit: int,
) -> None:
    """Clamp horizontal offsets to the limits of the text about to be drawn."""
    for idx, limit in enumerate(column_limits):
        state.column_scroll[idx] = max(0, min(state.column_scroll[idx], limit))
    state.path_scroll = max(0, min(state.path_scroll, path_limit))


__all__ = [
    "ViewportState",
    "move_cursor_up",
    "move_cursor_down",
    "scroll_active_column",
    "select_column",
    "scroll_path",
    "apply_viewport_command",
    "ensure_cursor_visible",
    "clamp_to_limits",
]
