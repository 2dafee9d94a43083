"""Abstract display styles for entry names.

Type-to-style decisions live here as pure functions over metadata records.
Turning a ``StyleTag`` into terminal output is the theme's job.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .metadata import MetadataRecord


class StyleTag(enum.Enum):
    PLAIN = "plain"
    DIRECTORY = "directory"
    LINK = "link"
    EXECUTABLE = "executable"


@dataclass(frozen=True)
class Segment:
    """A run of text drawn in one style."""

    text: str
    style: StyleTag = StyleTag.PLAIN


StyledText = tuple[Segment, ...]


def style_for_record(record: MetadataRecord) -> StyleTag:
    """Style for an entry as seen without following its final symlink."""
    if record.is_directory:
        return StyleTag.DIRECTORY
    if record.is_symlink:
        return StyleTag.LINK
    if record.is_regular and record.owner_executable:
        return StyleTag.EXECUTABLE
    return StyleTag.PLAIN


def style_for_link_target(target: MetadataRecord | None) -> StyleTag:
    """Style for a symlink target resolved by following the link.

    Unresolvable targets draw plain.
    """
    if target is None:
        return StyleTag.PLAIN
    if target.is_directory:
        return StyleTag.DIRECTORY
    if target.owner_executable:
        return StyleTag.EXECUTABLE
    return StyleTag.PLAIN


def plain_text(styled: StyledText) -> str:
    return "".join(segment.text for segment in styled)


__all__ = [
    "StyleTag",
    "Segment",
    "StyledText",
    "style_for_record",
    "style_for_link_target",
    "plain_text",
]
