"""Directory listing into sorted, immutable snapshots."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from ..errors import DirectoryOpenError, MetadataError
from .metadata import describe_path
from .types import DirectorySnapshot, EntryMetadata, FileRecord, SkippedEntry

logger = logging.getLogger(__name__)


def escape_angle_brackets(name: str) -> str:
    """Prefix ``<`` and ``>`` with a backslash.

    The bare glyphs are reserved for truncation markers. Not idempotent:
    escaping ``a\\<b`` yields ``a\\\\<b``, so only raw on-disk names go in.
    """
    return name.replace("<", "\\<").replace(">", "\\>")


def snapshot_sort_key(record: FileRecord) -> tuple[bool, bytes]:
    """Directories first, then byte-wise by on-disk name."""
    return (not record.is_dir, os.fsencode(record.raw_name))


def build_record(raw_name: str, metadata: EntryMetadata) -> FileRecord:
    return FileRecord(
        display_name=escape_angle_brackets(raw_name),
        raw_name=raw_name,
        kind=metadata.kind,
        owner=metadata.owner,
        group=metadata.group,
        permissions=metadata.permissions,
        mtime=metadata.mtime,
        atime=metadata.atime,
    )


def load_snapshot(
    path: Path,
    describe: Callable[[Path], EntryMetadata] = describe_path,
) -> DirectorySnapshot:
    """List ``path`` into a sorted snapshot.

    Entries whose metadata cannot be resolved are recorded in ``skipped`` and
    left out of ``entries``. Raises ``DirectoryOpenError`` when the directory
    itself cannot be enumerated.
    """
    records: list[FileRecord] = []
    skipped: list[SkippedEntry] = []
    try:
        with os.scandir(path) as entries:
            for child in entries:
                child_path = Path(path) / child.name
                try:
                    metadata = describe(child_path)
                except MetadataError as exc:
                    logger.warning("skipping %s: %s", child_path, exc.reason)
                    skipped.append(SkippedEntry(raw_name=child.name, error=exc))
                    continue
                records.append(build_record(child.name, metadata))
    except OSError as exc:
        logger.warning("cannot list %s: %s", path, exc)
        raise DirectoryOpenError(Path(path), exc.strerror or str(exc)) from exc

    records.sort(key=snapshot_sort_key)
    return DirectorySnapshot(path=Path(path), entries=tuple(records), skipped=tuple(skipped))


__all__ = [
    "escape_angle_brackets",
    "snapshot_sort_key",
    "build_record",
    "load_snapshot",
]
