"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the entry list, details pane and status row.
Preview syntax colors come from Pygments and are not part of a theme.
"""

from __future__ import annotations

from dataclasses import dataclass

from .directory.types import EntryKind


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    entry_dir: str
    entry_symlink: str
    entry_special: str
    entry_file: str
    details_label: str
    details_error: str
    status_message: str
    status_error: str
    empty_hint: str

    def entry_color(self, kind: EntryKind) -> str:
        if kind is EntryKind.DIRECTORY:
            return self.entry_dir
        if kind is EntryKind.SYMLINK:
            return self.entry_symlink
        if kind is EntryKind.REGULAR_FILE:
            return self.entry_file
        return self.entry_special


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    entry_dir="\033[1;34m",
    entry_symlink="\033[35m",
    entry_special="",
    entry_file="",
    details_label="\033[1;38;5;81m",
    details_error="\033[38;5;203m",
    status_message="\033[7;38;5;229m",
    status_error="\033[7;38;5;203m",
    empty_hint="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    entry_dir="\033[1;38;5;45m",
    entry_symlink="\033[38;5;177m",
    entry_special="\033[38;5;215m",
    entry_file="\033[38;5;252m",
    details_label="\033[1;38;5;45m",
    details_error="\033[38;5;210m",
    status_message="\033[7;38;5;153m",
    status_error="\033[7;38;5;210m",
    empty_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    entry_dir="",
    entry_symlink="",
    entry_special="",
    entry_file="",
    details_label="",
    details_error="",
    status_message="\033[7m",
    status_error="\033[7m",
    empty_hint="",
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
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
