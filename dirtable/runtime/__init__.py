"""Public runtime orchestration entry points.

This package groups the interactive browser bootstrap (`run_browser`) and the
lower-level event loop used by tests and composition code.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import browser entrypoint to keep package imports lightweight."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = [
    "run_browser",
    "run_main_loop",
]
