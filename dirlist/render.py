"""Render entry names in short, column, and inline-long forms.

``Renderer.describe`` decides what to show as styled segments; the theme turns
segments into text. With sorting disabled the renderer takes the raw path:
names are shown unstyled.
"""

from __future__ import annotations

import logging

from .collector import DirectoryEntry
from .diagnostics import Diagnostics
from .errors import MetadataError
from .metadata import MetadataProvider, MetadataRecord
from .request import ListingRequest
from .styles import Segment, StyledText, StyleTag, style_for_link_target, style_for_record
from .theme import DEFAULT_THEME, ListingTheme

logger = logging.getLogger(__name__)

SHORT_TERMINATOR = "   "
COLUMN_TERMINATOR = "\n"
LINK_ARROW = " -> "
INODE_WIDTH = 6


class Renderer:
    """Produce the visual form of single entries for one listing request."""

    def __init__(
        self,
        request: ListingRequest,
        provider: MetadataProvider,
        theme: ListingTheme = DEFAULT_THEME,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.request = request
        self.provider = provider
        self.theme = theme
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def describe(self, entry: DirectoryEntry) -> StyledText | None:
        """Return styled segments for ``entry`` or ``None`` after a diagnostic."""
        try:
            record = self.provider.stat_no_follow(entry.path)
        except MetadataError as exc:
            self.diagnostics.report_error("Failed to retrieve file information", exc)
            return None

        if self.request.no_sort:
            return self._describe_raw(entry, record)

        style = style_for_record(record)
        if record.is_symlink and self.request.long_format:
            target = self._link_target(entry)
            if target is not None:
                return (
                    Segment(entry.name, StyleTag.LINK),
                    Segment(LINK_ARROW),
                    Segment(target, style_for_link_target(self._target_record(entry))),
                )
        return (Segment(entry.name, style),)

    def _describe_raw(self, entry: DirectoryEntry, record: MetadataRecord) -> StyledText:
        if record.is_symlink and self.request.long_format:
            target = self._link_target(entry)
            if target is not None:
                return (Segment(f"{entry.name}{LINK_ARROW}{target}"),)
        return (Segment(entry.name),)

    def _link_target(self, entry: DirectoryEntry) -> str | None:
        try:
            return self.provider.read_link(entry.path)
        except MetadataError as exc:
            logger.debug("cannot read link %s: %s", entry.path, exc)
            return None

    def _target_record(self, entry: DirectoryEntry) -> MetadataRecord | None:
        try:
            return self.provider.stat_follow(entry.path)
        except MetadataError as exc:
            logger.debug("dangling link %s: %s", entry.path, exc)
            return None

    def render_name(self, entry: DirectoryEntry) -> str | None:
        styled = self.describe(entry)
        if styled is None:
            return None
        return self.theme.paint(styled)

    def render_short(self, entry: DirectoryEntry) -> str | None:
        name = self.render_name(entry)
        return None if name is None else name + SHORT_TERMINATOR

    def render_column(self, entry: DirectoryEntry) -> str | None:
        name = self.render_name(entry)
        return None if name is None else name + COLUMN_TERMINATOR

    def render_entry(self, entry: DirectoryEntry) -> str | None:
        """Short or column form, whichever the request selects."""
        if self.request.one_column:
            return self.render_column(entry)
        return self.render_short(entry)

    def inode_prefix(self, entry: DirectoryEntry) -> str:
        """Right-aligned inode column, or nothing when the entry cannot be stat'ed."""
        try:
            record = self.provider.stat_no_follow(entry.path)
        except MetadataError:
            return ""
        return f"{record.inode:>{INODE_WIDTH}} "


__all__ = [
    "SHORT_TERMINATOR",
    "COLUMN_TERMINATOR",
    "LINK_ARROW",
    "Renderer",
]
