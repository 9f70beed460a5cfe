"""Terminal control helpers for the browser session.

Owns the input-mode lifecycle, alternate-screen switching, geometry queries,
and the SIGWINCH dirty flag. Every failure here is fatal to the session.
"""

from __future__ import annotations

import contextlib
import logging
import os
import signal
import termios
import tty

from ..errors import ResizeHandlerError, TerminalModeError, TerminalQueryError, TerminalRestoreError

logger = logging.getLogger(__name__)


class TerminalController:
    """Manage terminal mode transitions and geometry for one session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalModeError(f"cannot read terminal settings: {exc}") from exc
        self._tui_mode_enabled = False

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the output terminal."""
        try:
            geometry = os.get_terminal_size(self.stdout_fd)
        except OSError as exc:
            raise TerminalQueryError(f"cannot query terminal size: {exc}") from exc
        return geometry.columns, geometry.lines

    def enable_tui_mode(self) -> None:
        """Disable line buffering and echo, then enter the alternate screen."""
        try:
            tty.setcbreak(self.stdin_fd, termios.TCSANOW)
        except termios.error as exc:
            raise TerminalModeError(f"cannot set terminal mode: {exc}") from exc
        self._tui_mode_enabled = True
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        logger.debug("terminal switched to cbreak mode")

    def disable_tui_mode(self) -> None:
        """Restore the saved terminal state and the main screen buffer."""
        if not self._tui_mode_enabled:
            return
        self._tui_mode_enabled = False
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSANOW, self._saved_tty_state)
        except termios.error as exc:
            raise TerminalRestoreError(f"cannot restore terminal mode: {exc}") from exc
        logger.debug("terminal mode restored")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


class ResizeWatcher:
    """SIGWINCH listener that only raises a dirty flag.

    The handler assigns one boolean and nothing else. A non-blocking self-pipe
    registered with ``signal.set_wakeup_fd`` makes a blocked ``select`` on stdin
    return, so the main loop can consume the flag and redraw.
    """

    def __init__(self) -> None:
        self.dirty = False
        self.wakeup_read_fd: int | None = None
        self._wakeup_write_fd: int | None = None
        self._previous_handler = None
        self._previous_wakeup_fd = -1
        self._installed = False

    def _on_resize(self, signum, frame) -> None:
        self.dirty = True

    def consume(self) -> bool:
        """Return and clear the dirty flag."""
        was_dirty = self.dirty
        self.dirty = False
        return was_dirty

    def install(self) -> None:
        try:
            read_fd, write_fd = os.pipe()
            os.set_blocking(read_fd, False)
            os.set_blocking(write_fd, False)
        except OSError as exc:
            raise ResizeHandlerError(f"cannot create resize wake-up pipe: {exc}") from exc
        self.wakeup_read_fd = read_fd
        self._wakeup_write_fd = write_fd
        try:
            self._previous_handler = signal.signal(signal.SIGWINCH, self._on_resize)
            self._previous_wakeup_fd = signal.set_wakeup_fd(write_fd, warn_on_full_buffer=False)
        except (OSError, ValueError) as exc:
            self._close_pipe()
            raise ResizeHandlerError(f"cannot install SIGWINCH handler: {exc}") from exc
        self._installed = True
        logger.debug("resize handler installed")

    def uninstall(self) -> None:
        if not self._installed:
            return
        self._installed = False
        try:
            signal.set_wakeup_fd(self._previous_wakeup_fd)
            signal.signal(signal.SIGWINCH, self._previous_handler or signal.SIG_DFL)
        finally:
            self._close_pipe()

    def _close_pipe(self) -> None:
        for fd in (self.wakeup_read_fd, self._wakeup_write_fd):
            if fd is not None:
                os.close(fd)
        self.wakeup_read_fd = None
        self._wakeup_write_fd = None

    @contextlib.contextmanager
    def installed(self):
        self.install()
        try:
            yield self
        finally:
            self.uninstall()


__all__ = [
    "TerminalController",
    "ResizeWatcher",
]
