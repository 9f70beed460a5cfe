"""Main interactive event loop for the browser.

Blocks on one command at a time, applies it to the session, and redraws
only when state changed or a resize was signalled.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..input import Command, read_command
from ..render import RenderContext, render_frame
from ..ui_theme import DEFAULT_THEME, UITheme
from .session import BrowserSession
from .terminal import ResizeWatcher, TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopDeps:
    """Injected I/O used by ``run_main_loop`` so tests can drive it."""

    read_command: Callable[[int, int | None], Command] = read_command
    render: Callable[[RenderContext, int], None] = render_frame


def build_render_context(session: BrowserSession, theme: UITheme) -> RenderContext:
    return RenderContext(
        path_text=session.path_text,
        snapshot=session.snapshot,
        viewport=session.viewport,
        columns=session.columns,
        rows=session.rows,
        theme=theme,
        status_message=session.status_message,
        status_is_error=session.status_is_error,
    )


def redraw(
    session: BrowserSession,
    terminal: TerminalController,
    theme: UITheme,
    deps: RuntimeLoopDeps,
) -> None:
    """Refresh geometry, re-fit the viewport, and draw a full frame."""
    columns, rows = terminal.size()
    session.resize(columns, rows)
    session.fit_viewport()
    deps.render(build_render_context(session, theme), terminal.stdout_fd)


def run_main_loop(
    session: BrowserSession,
    terminal: TerminalController,
    resize_watcher: ResizeWatcher,
    theme: UITheme = DEFAULT_THEME,
    deps: RuntimeLoopDeps | None = None,
) -> None:
    """Run the interactive loop until a quit command arrives.

    The first frame is drawn before waiting for input. Afterwards a frame is
    drawn when a command changed the session or the resize flag was set.
    """
    deps = deps or RuntimeLoopDeps()
    redraw(session, terminal, theme, deps)
    while True:
        try:
            command = deps.read_command(terminal.stdin_fd, resize_watcher.wakeup_read_fd)
        except KeyboardInterrupt:
            # Ctrl+C is not a quit key; keep the session alive.
            continue
        if command is Command.QUIT:
            logger.debug("quit requested")
            break

        needs_redraw = session.handle_command(command)
        if resize_watcher.consume():
            logger.debug("terminal resized")
            needs_redraw = True
        if needs_redraw:
            redraw(session, terminal, theme, deps)


__all__ = [
    "RuntimeLoopDeps",
    "build_render_context",
    "redraw",
    "run_main_loop",
]
