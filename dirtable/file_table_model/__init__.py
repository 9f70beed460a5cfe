"""Domain model for one directory listing.

This package contains non-UI primitives:
- file record and snapshot datatypes
- stat-to-display metadata conversion
- directory loading, name escaping, and directories-first ordering
"""

from __future__ import annotations

from .types import DirectorySnapshot, EntryMetadata, FileKind, FileRecord, SkippedEntry
from .metadata import describe_path, format_timestamp, kind_for_mode, permissions_for_mode
from .snapshot import build_record, escape_angle_brackets, load_snapshot, snapshot_sort_key

__all__ = [
    "DirectorySnapshot",
    "EntryMetadata",
    "FileKind",
    "FileRecord",
    "SkippedEntry",
    "describe_path",
    "format_timestamp",
    "kind_for_mode",
    "permissions_for_mode",
    "build_record",
    "escape_angle_brackets",
    "load_snapshot",
    "snapshot_sort_key",
]
