"""Non-interactive recursive dump used when output is not a terminal.

Writes the absolute root path, a header line, and then every directory's
files followed by a depth-first descent into its subdirectories. Cells are
padded to fixed widths and never truncated.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .errors import DirectoryOpenError
from .file_table_model import DirectorySnapshot, load_snapshot
from .layout import COLUMN_SEPARATOR, COLUMN_TITLES, EXPORT_COLUMN_WIDTHS

logger = logging.getLogger(__name__)


def format_export_row(values: tuple[str, ...], widths: tuple[int, ...] = EXPORT_COLUMN_WIDTHS) -> str:
    return COLUMN_SEPARATOR.join(value.ljust(widths[idx]) for idx, value in enumerate(values))


def _directory_identity(path: Path) -> tuple[int, int] | None:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return (st.st_dev, st.st_ino)


def _write_snapshot(
    snapshot: DirectorySnapshot,
    write: Callable[[str], object],
    load: Callable[[Path], DirectorySnapshot],
    visited: set[tuple[int, int]],
) -> None:
    for record in snapshot.entries:
        if not record.is_dir:
            write(format_export_row(record.column_values()) + "\n")
    for record in snapshot.entries:
        if record.is_dir:
            dump_directory(snapshot.path / record.raw_name, write, load, visited)


def dump_directory(
    path: Path,
    write: Callable[[str], object],
    load: Callable[[Path], DirectorySnapshot] = load_snapshot,
    _visited: set[tuple[int, int]] | None = None,
) -> None:
    """Write rows for ``path`` and, recursively, its subdirectories.

    Unreadable directories are logged and skipped. A directory reachable
    twice through symlinks is only descended into once.
    """
    visited = set() if _visited is None else _visited
    identity = _directory_identity(path)
    if identity is not None:
        if identity in visited:
            logger.warning("not descending into %s again", path)
            return
        visited.add(identity)

    try:
        snapshot = load(path)
    except DirectoryOpenError as exc:
        logger.warning("%s", exc)
        return
    _write_snapshot(snapshot, write, load, visited)


def dump_tree(
    root: Path,
    write: Callable[[str], object],
    load: Callable[[Path], DirectorySnapshot] = load_snapshot,
) -> None:
    """Write the full export for ``root``.

    Raises ``DirectoryOpenError`` when ``root`` itself cannot be listed.
    """
    root = Path(os.path.abspath(root))
    snapshot = load(root)
    write(f"{root}\n")
    write(format_export_row(COLUMN_TITLES) + "\n")
    visited: set[tuple[int, int]] = set()
    identity = _directory_identity(root)
    if identity is not None:
        visited.add(identity)
    _write_snapshot(snapshot, write, load, visited)


__all__ = [
    "format_export_row",
    "dump_directory",
    "dump_tree",
]
