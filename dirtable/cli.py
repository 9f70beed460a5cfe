"""Command-line front door for dirtable.

Parses CLI options, configures logging, and moves into the requested
directory. Then dispatches into the interactive browser or, when output is
not a terminal, the recursive export.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import load_no_color, load_theme_name
from .errors import EXIT_DIRECTORY_LISTING, DirectoryOpenError, FatalSessionError
from .export import dump_tree
from .runtime import run_browser
from .runtime.session import resolve_working_directory
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Browse a directory as a scrollable table of file metadata."
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--nopager",
        action="store_true",
        help="Print a recursive listing instead of starting the interactive browser.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write log records to PATH.")
    return parser.parse_args(args)


def configure_logging(debug: bool, log_file: str | None, interactive: bool) -> None:
    """Attach handlers to the package logger.

    Handlers from an earlier call are replaced, not stacked. The interactive
    screen must never receive log output, so stderr logging is only enabled
    for the non-interactive export.
    """
    package_logger = logging.getLogger("dirtable")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.addHandler(logging.NullHandler())
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file:
        # Undecodable file names arrive as surrogate escapes.
        file_handler = logging.FileHandler(log_file, encoding="utf-8", errors="backslashreplace")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    if not interactive:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(logging.WARNING)
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)


def _stdout_is_terminal() -> bool:
    try:
        return os.isatty(sys.stdout.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def write_stdout(text: str) -> None:
    """Write to stdout bytes, replacing what UTF-8 cannot encode."""
    sys.stdout.buffer.write(text.encode("utf-8", errors="replace"))


def run_export() -> int:
    """Dump the working directory recursively to stdout."""
    try:
        root = resolve_working_directory()
        try:
            dump_tree(root, write_stdout)
        finally:
            sys.stdout.buffer.flush()
    except DirectoryOpenError as exc:
        logger.error("%s", exc)
        return EXIT_DIRECTORY_LISTING
    except FatalSessionError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch dirtable.

    The process changes into ``path`` first so that navigation and the
    export both work relative to the process working directory.
    """
    args = parse_args(argv)
    interactive = not args.nopager and _stdout_is_terminal()
    configure_logging(args.debug, args.log_file, interactive)

    if args.path is not None:
        target = Path(args.path)
        if not target.is_dir():
            raise SystemExit(f"Not a directory: {target}")
        try:
            os.chdir(target)
        except OSError as exc:
            raise SystemExit(f"Cannot open {target}: {exc.strerror or exc}") from exc

    if not interactive:
        exit_code = run_export()
    else:
        theme_name = args.theme if args.theme is not None else load_theme_name()
        no_color = args.no_color or load_no_color()
        exit_code = run_browser(theme_name, no_color)

    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
