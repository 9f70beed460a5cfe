"""Browser session state and directory navigation.

``BrowserSession`` is the single owner of the current path, snapshot, viewport,
and status message. Commands flow in through ``handle_command``; recoverable
errors become status messages instead of propagating.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import DirectoryAccessError, DirectoryOpenError, WorkingDirectoryError
from ..file_table_model import DirectorySnapshot, load_snapshot
from ..input import Command
from ..layout import column_scroll_limits, compute_column_widths, path_scroll_limit, viewport_height, visible_range
from ..viewport import ViewportState, apply_viewport_command, clamp_to_limits, ensure_cursor_visible

logger = logging.getLogger(__name__)


def resolve_working_directory() -> Path:
    """Return the process working directory or raise ``WorkingDirectoryError``."""
    try:
        return Path(os.getcwd())
    except OSError as exc:
        raise WorkingDirectoryError(f"cannot resolve working directory: {exc}") from exc


def skipped_entries_message(snapshot: DirectorySnapshot) -> str:
    if not snapshot.skipped:
        return ""
    noun = "entry" if len(snapshot.skipped) == 1 else "entries"
    first = snapshot.skipped[0]
    return f"skipped {len(snapshot.skipped)} {noun} (first: {first.raw_name}: {first.error})"


@dataclass
class BrowserSession:
    current_path: Path
    snapshot: DirectorySnapshot
    viewport: ViewportState = field(default_factory=ViewportState)
    columns: int = 80
    rows: int = 24
    status_message: str = ""
    status_is_error: bool = True
    load: Callable[[Path], DirectorySnapshot] = load_snapshot

    @classmethod
    def open(
        cls,
        path: Path,
        columns: int,
        rows: int,
        load: Callable[[Path], DirectorySnapshot] = load_snapshot,
    ) -> BrowserSession:
        """Create a session listing ``path``.

        A listing failure is not fatal: the session starts with an empty
        snapshot and the error on the status row.
        """
        session = cls(
            current_path=path,
            snapshot=DirectorySnapshot(path=path),
            columns=columns,
            rows=rows,
            load=load,
        )
        try:
            session.snapshot = load(path)
        except DirectoryOpenError as exc:
            session.set_status(str(exc))
        else:
            session.set_status(skipped_entries_message(session.snapshot), is_error=False)
        return session

    @property
    def height(self) -> int:
        return viewport_height(self.rows)

    @property
    def path_text(self) -> str:
        return str(self.current_path)

    def set_status(self, message: str, *, is_error: bool = True) -> None:
        self.status_message = message
        self.status_is_error = is_error

    def resize(self, columns: int, rows: int) -> bool:
        changed = (columns, rows) != (self.columns, self.rows)
        self.columns = columns
        self.rows = rows
        return changed

    def selected_entry(self):
        return self.snapshot.entry_at(self.viewport.cursor_index)

    def change_directory(self, target: Path) -> bool:
        """Switch the process and session into ``target``.

        On failure the previous path, snapshot, and viewport stay in place and
        the reason is shown on the status row.
        """
        previous = self.current_path
        try:
            try:
                os.chdir(target)
            except OSError as exc:
                raise DirectoryAccessError(target, exc.strerror or str(exc)) from exc
            new_path = resolve_working_directory()
            snapshot = self.load(new_path)
        except (DirectoryAccessError, DirectoryOpenError, WorkingDirectoryError) as exc:
            logger.warning("navigation to %s failed: %s", target, exc)
            self._return_to(previous)
            self.set_status(str(exc))
            return True

        logger.debug("entered %s (%d entries)", new_path, snapshot.count)
        self.current_path = new_path
        self.snapshot = snapshot
        self.viewport.reset()
        self.set_status(skipped_entries_message(snapshot), is_error=False)
        return True

    def _return_to(self, previous: Path) -> None:
        try:
            if Path(os.getcwd()) != previous:
                os.chdir(previous)
        except OSError as exc:
            logger.warning("cannot return to %s: %s", previous, exc)

    def enter_selected_directory(self) -> bool:
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        return self.change_directory(self.current_path / entry.raw_name)

    def enter_parent_directory(self) -> bool:
        return self.change_directory(self.current_path / "..")

    def handle_command(self, command: Command) -> bool:
        """Apply ``command``; return whether the screen needs a redraw."""
        if command is Command.ENTER_DIRECTORY:
            return self.enter_selected_directory()
        if command is Command.PARENT_DIRECTORY:
            return self.enter_parent_directory()
        if command is Command.RESIZE:
            return True
        before = self.viewport.as_tuple()
        apply_viewport_command(self.viewport, command, self.snapshot.count, self.height)
        self.fit_viewport()
        if self.viewport.as_tuple() == before:
            return False
        if self.status_message:
            self.set_status("")
        return True

    def fit_viewport(self) -> None:
        """Apply size-dependent bounds before drawing."""
        ensure_cursor_visible(self.viewport, self.snapshot.count, self.height)
        widths = compute_column_widths(self.columns)
        rows = visible_range(self.viewport.scroll_offset, self.height, self.snapshot.count)
        visible = [self.snapshot.entries[idx] for idx in rows]
        clamp_to_limits(
            self.viewport,
            column_scroll_limits(visible, widths),
            path_scroll_limit(self.path_text, self.columns),
        )


__all__ = [
    "BrowserSession",
    "resolve_working_directory",
    "skipped_entries_message",
]
