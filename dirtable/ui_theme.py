"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the path line, column headers, cursor row, and
status row.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    path: str
    header: str
    header_active: str
    cursor_row: str
    separator: str
    status_error: str
    status_info: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    path="\033[1;38;5;200m",
    header="\033[3;38;5;198m",
    header_active="\033[1;3;48;5;198m",
    cursor_row="\033[1;48;5;212m",
    separator="",
    status_error="\033[1;38;5;203m",
    status_info="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    path="\033[1;38;5;45m",
    header="\033[3;38;5;117m",
    header_active="\033[1;3;48;5;31m",
    cursor_row="\033[1;48;5;24m",
    separator="\033[2;38;5;31m",
    status_error="\033[1;38;5;215m",
    status_info="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    path="",
    header="",
    header_active="\033[7m",
    cursor_row="\033[7m",
    separator="",
    status_error="",
    status_info="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if not candidate:
        return DEFAULT_THEME.name
    if candidate == PLAIN_THEME.name:
        return DEFAULT_THEME.name
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    normalized = normalize_theme_name(name)
    return _THEMES.get(normalized, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
