"""Domain datatypes for one listed directory and its entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileKind(Enum):
    """Filesystem object type; values are the labels shown in the type column."""

    DIRECTORY = "directory"
    REGULAR_FILE = "regular file"
    SYMLINK = "symlink"
    BLOCK_DEVICE = "block device"
    CHARACTER_DEVICE = "character device"
    FIFO = "FIFO"
    SOCKET = "socket"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EntryMetadata:
    """Display strings resolved for one path by the metadata collaborator."""

    kind: FileKind
    owner: str
    group: str
    permissions: str
    mtime: str
    atime: str


@dataclass(frozen=True)
class FileRecord:
    """One directory entry, ready for display."""

    display_name: str
    raw_name: str
    kind: FileKind
    owner: str
    group: str
    permissions: str
    mtime: str
    atime: str

    @property
    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    def column_values(self) -> tuple[str, str, str, str, str, str, str]:
        """Return cell texts in table column order."""
        return (
            self.display_name,
            self.kind.value,
            self.owner,
            self.group,
            self.permissions,
            self.mtime,
            self.atime,
        )


@dataclass(frozen=True)
class SkippedEntry:
    """Entry dropped from a snapshot because its metadata lookup failed."""

    raw_name: str
    error: Exception


@dataclass(frozen=True)
class DirectorySnapshot:
    """Sorted, immutable listing of one directory."""

    path: Path
    entries: tuple[FileRecord, ...] = ()
    skipped: tuple[SkippedEntry, ...] = ()

    @property
    def count(self) -> int:
        return len(self.entries)

    def entry_at(self, index: int) -> FileRecord | None:
        """Return entry at ``index`` or ``None`` when out of range."""
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None


__all__ = [
    "FileKind",
    "EntryMetadata",
    "FileRecord",
    "SkippedEntry",
    "DirectorySnapshot",
]
