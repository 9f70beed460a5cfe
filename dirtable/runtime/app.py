"""Runtime composition layer for the interactive browser.

Builds the session, wires terminal mode, resize handling, and the loop, and
maps fatal failures to process exit codes after restoring the terminal.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..errors import EXIT_OK, EXIT_OUT_OF_MEMORY, FatalSessionError
from ..render import render_bottom_message
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopDeps, run_main_loop
from .session import BrowserSession, resolve_working_directory
from .terminal import ResizeWatcher, TerminalController

logger = logging.getLogger(__name__)

FALLBACK_ROWS = 24


def run_browser(
    theme_name: str | None = None,
    no_color: bool = False,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
    deps: RuntimeLoopDeps | None = None,
) -> int:
    """Browse the process working directory until the user quits.

    Returns ``0`` on a normal quit or the fatal error's exit code. The
    terminal mode is restored on every path out of the session.
    """
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    theme = resolve_theme(theme_name, no_color=no_color)
    rows = FALLBACK_ROWS

    try:
        start_path: Path = resolve_working_directory()
        terminal = TerminalController(stdin_fd, stdout_fd)
        columns, rows = terminal.size()
        session = BrowserSession.open(start_path, columns, rows)
        with ResizeWatcher().installed() as resize_watcher, terminal.raw_mode():
            run_main_loop(session, terminal, resize_watcher, theme, deps)
            rows = session.rows
    except FatalSessionError as exc:
        logger.error("fatal: %s", exc)
        render_bottom_message(str(exc), rows, stdout_fd)
        return exc.exit_code
    except MemoryError:
        logger.error("fatal: out of memory")
        render_bottom_message("out of memory", rows, stdout_fd)
        return EXIT_OUT_OF_MEMORY
    return EXIT_OK


__all__ = [
    "run_browser",
]
