"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into browser commands.
Only the plain ANSI arrow sequences are recognized; anything else is a no-op.
"""

from __future__ import annotations

import os
import select
from collections.abc import Callable
from enum import Enum, auto

ESC_SEQUENCE_TIMEOUT_MS = 25


class Command(Enum):
    QUIT = auto()
    CURSOR_UP = auto()
    CURSOR_DOWN = auto()
    COLUMN_LEFT = auto()
    COLUMN_RIGHT = auto()
    SELECT_PREV_COLUMN = auto()
    SELECT_NEXT_COLUMN = auto()
    PATH_SCROLL_LEFT = auto()
    PATH_SCROLL_RIGHT = auto()
    ENTER_DIRECTORY = auto()
    PARENT_DIRECTORY = auto()
    RESIZE = auto()
    NOOP = auto()


SINGLE_BYTE_COMMANDS: dict[bytes, Command] = {
    b"q": Command.QUIT,
    b"Q": Command.QUIT,
    b"\x04": Command.QUIT,
    b"<": Command.PATH_SCROLL_LEFT,
    b">": Command.PATH_SCROLL_RIGHT,
    b"[": Command.SELECT_PREV_COLUMN,
    b"]": Command.SELECT_NEXT_COLUMN,
    b"^": Command.PARENT_DIRECTORY,
    b"\n": Command.ENTER_DIRECTORY,
    b"\r": Command.ENTER_DIRECTORY,
}

ARROW_COMMANDS: dict[bytes, Command] = {
    b"[A": Command.CURSOR_UP,
    b"[B": Command.CURSOR_DOWN,
    b"[C": Command.COLUMN_RIGHT,
    b"[D": Command.COLUMN_LEFT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def decode_bytes(first: bytes, read_next: Callable[[], bytes | None]) -> Command:
    """Classify one input byte, pulling escape-sequence bytes via ``read_next``."""
    if not first:
        return Command.QUIT
    if first != b"\x1b":
        return SINGLE_BYTE_COMMANDS.get(first, Command.NOOP)

    second = read_next()
    if second is None:
        return Command.NOOP
    third = read_next()
    if third is None:
        return Command.NOOP
    return ARROW_COMMANDS.get(second + third, Command.NOOP)


def _drain(fd: int) -> None:
    try:
        while os.read(fd, 512):
            pass
    except BlockingIOError:
        pass


def read_command(fd: int, wakeup_fd: int | None = None) -> Command:
    """Block until input or a resize wake-up, then return one command.

    End of input reads as ``QUIT``. When ``wakeup_fd`` becomes readable first it
    is drained and ``RESIZE`` is returned without consuming input.
    """
    if wakeup_fd is not None:
        ready, _, _ = select.select([fd, wakeup_fd], [], [])
        if wakeup_fd in ready:
            _drain(wakeup_fd)
            return Command.RESIZE

    first = os.read(fd, 1)
    return decode_bytes(first, lambda: _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS))


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Command",
    "SINGLE_BYTE_COMMANDS",
    "ARROW_COMMANDS",
    "decode_bytes",
    "read_command",
]
