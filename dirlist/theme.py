"""Listing theme definitions and selection helpers.

Themes map abstract ``StyleTag`` values to ANSI sequences. Colors come from
``pygments.console`` so palettes share its naming. The plain theme maps
every tag to nothing and is used for non-terminal output.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.console import codes

from .styles import Segment, StyledText, StyleTag


@dataclass(frozen=True)
class ListingTheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    directory: str
    link: str
    executable: str
    reset: str

    def sequence_for(self, style: StyleTag) -> str:
        if style is StyleTag.DIRECTORY:
            return self.directory
        if style is StyleTag.LINK:
            return self.link
        if style is StyleTag.EXECUTABLE:
            return self.executable
        return ""

    def paint_segment(self, segment: Segment) -> str:
        sequence = self.sequence_for(segment.style)
        if not sequence:
            return segment.text
        return f"{sequence}{segment.text}{self.reset}"

    def paint(self, styled: StyledText) -> str:
        return "".join(self.paint_segment(segment) for segment in styled)


DEFAULT_THEME = ListingTheme(
    name="default",
    directory=codes["blue"],
    link=codes["cyan"],
    executable=codes["green"],
    # Full SGR reset; pygments' codes["reset"] only restores default colors.
    reset="\033[0m",
)

BRIGHT_THEME = ListingTheme(
    name="bright",
    directory=codes["bold"] + codes["brightblue"],
    link=codes["brightcyan"],
    executable=codes["bold"] + codes["brightgreen"],
    reset=codes["reset"],
)

PLAIN_THEME = ListingTheme(
    name="plain",
    directory="",
    link="",
    executable="",
    reset="",
)

_THEMES: dict[str, ListingTheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    BRIGHT_THEME.name: BRIGHT_THEME,
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


def resolve_theme(name: str | None, *, no_color: bool = False) -> ListingTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "ListingTheme",
    "DEFAULT_THEME",
    "BRIGHT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
