"""Error taxonomy for the directory browser.

Recoverable errors are reported inline on the status row and the session
keeps running. ``FatalSessionError`` subclasses end the session and carry the
process exit code that ``run_browser`` returns.
"""

from __future__ import annotations

from pathlib import Path

EXIT_OK = 0
EXIT_TERMINAL_QUERY = 2
EXIT_TERMINAL_MODE = 3
EXIT_TERMINAL_RESTORE = 4
EXIT_RESIZE_HANDLER = 5
EXIT_WORKING_DIRECTORY = 6
EXIT_OUT_OF_MEMORY = 7
EXIT_DIRECTORY_LISTING = 8


class DirTableError(Exception):
    """Base class for all errors raised by dirtable."""


class DirectoryOpenError(DirTableError):
    """A directory could not be opened or enumerated."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot open directory {path}: {reason}")
        self.path = path
        self.reason = reason


class DirectoryAccessError(DirTableError):
    """Changing into a directory was refused."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"access denied: {path} ({reason})")
        self.path = path
        self.reason = reason


class MetadataError(DirTableError):
    """Metadata for one entry could not be resolved."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class StatError(MetadataError):
    pass


class OwnerLookupError(MetadataError):
    pass


class GroupLookupError(MetadataError):
    pass


class TimeConversionError(MetadataError):
    pass


class FatalSessionError(DirTableError):
    """Unrecoverable session failure mapped to a distinct exit code."""

    exit_code = 1


class TerminalQueryError(FatalSessionError):
    exit_code = EXIT_TERMINAL_QUERY


class TerminalModeError(FatalSessionError):
    exit_code = EXIT_TERMINAL_MODE


class TerminalRestoreError(FatalSessionError):
    exit_code = EXIT_TERMINAL_RESTORE


class ResizeHandlerError(FatalSessionError):
    exit_code = EXIT_RESIZE_HANDLER


class WorkingDirectoryError(FatalSessionError):
    exit_code = EXIT_WORKING_DIRECTORY


__all__ = [
    "EXIT_OK",
    "EXIT_TERMINAL_QUERY",
    "EXIT_TERMINAL_MODE",
    "EXIT_TERMINAL_RESTORE",
    "EXIT_RESIZE_HANDLER",
    "EXIT_WORKING_DIRECTORY",
    "EXIT_OUT_OF_MEMORY",
    "EXIT_DIRECTORY_LISTING",
    "DirTableError",
    "DirectoryOpenError",
    "DirectoryAccessError",
    "MetadataError",
    "StatError",
    "OwnerLookupError",
    "GroupLookupError",
    "TimeConversionError",
    "FatalSessionError",
    "TerminalQueryError",
    "TerminalModeError",
    "TerminalRestoreError",
    "ResizeHandlerError",
    "WorkingDirectoryError",
]
