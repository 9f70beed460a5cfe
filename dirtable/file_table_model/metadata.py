"""Stat-record to display-string conversion for directory entries.

Each helper raises a typed ``MetadataError`` subclass so snapshot loading can
drop the entry and keep going.
"""

from __future__ import annotations

import grp
import os
import pwd
import stat
import time
from pathlib import Path

from ..errors import GroupLookupError, OwnerLookupError, StatError, TimeConversionError
from .types import EntryMetadata, FileKind

TIMESTAMP_FORMAT = "%d.%m.%Y  %H:%M"

_KIND_BY_FORMAT: dict[int, FileKind] = {
    stat.S_IFBLK: FileKind.BLOCK_DEVICE,
    stat.S_IFCHR: FileKind.CHARACTER_DEVICE,
    stat.S_IFDIR: FileKind.DIRECTORY,
    stat.S_IFIFO: FileKind.FIFO,
    stat.S_IFLNK: FileKind.SYMLINK,
    stat.S_IFREG: FileKind.REGULAR_FILE,
    stat.S_IFSOCK: FileKind.SOCKET,
}

_TYPE_GLYPHS: dict[FileKind, str] = {
    FileKind.DIRECTORY: "d",
    FileKind.FIFO: "p",
    FileKind.SYMLINK: "l",
    FileKind.BLOCK_DEVICE: "b",
    FileKind.CHARACTER_DEVICE: "c",
    FileKind.SOCKET: "s",
}

_PERMISSION_BITS: tuple[tuple[int, str], ...] = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)


def kind_for_mode(mode: int) -> FileKind:
    return _KIND_BY_FORMAT.get(stat.S_IFMT(mode), FileKind.UNKNOWN)


def permissions_for_mode(mode: int) -> str:
    """Return the 10-character ``drwxr-xr-x`` style permission string.

    Only the nine plain access bits are shown; setuid, setgid and sticky bits
    do not alter the glyphs.
    """
    glyph = _TYPE_GLYPHS.get(kind_for_mode(mode), "-")
    bits = "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)
    return glyph + bits


def format_timestamp(path: Path, seconds: float) -> str:
    try:
        return time.strftime(TIMESTAMP_FORMAT, time.localtime(seconds))
    except (OverflowError, OSError, ValueError) as exc:
        raise TimeConversionError(path, f"cannot convert timestamp {seconds!r}: {exc}") from exc


def owner_name(path: Path, uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError as exc:
        raise OwnerLookupError(path, f"no user entry for uid {uid}") from exc


def group_name(path: Path, gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError as exc:
        raise GroupLookupError(path, f"no group entry for gid {gid}") from exc


def describe_path(path: Path) -> EntryMetadata:
    """Resolve display metadata for ``path``, following symlinks.

    Raises ``StatError``, ``OwnerLookupError``, ``GroupLookupError`` or
    ``TimeConversionError`` when a field cannot be produced.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        raise StatError(path, exc.strerror or str(exc)) from exc

    return EntryMetadata(
        kind=kind_for_mode(st.st_mode),
        owner=owner_name(path, st.st_uid),
        group=group_name(path, st.st_gid),
        permissions=permissions_for_mode(st.st_mode),
        mtime=format_timestamp(path, st.st_mtime),
        atime=format_timestamp(path, st.st_atime),
    )


__all__ = [
    "TIMESTAMP_FORMAT",
    "kind_for_mode",
    "permissions_for_mode",
    "format_timestamp",
    "owner_name",
    "group_name",
    "describe_path",
]
