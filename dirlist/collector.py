"""Entry collection for one requested path.

A directory yields its children in filesystem enumeration order. A regular
file yields a one-element collection flagged ``is_plain_file``. Anything else
is a path resolution error.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import PathResolutionError
from .metadata import MetadataProvider
from .request import ListingRequest

logger = logging.getLogger(__name__)

DOT_ENTRIES = (".", "..")


@dataclass(frozen=True)
class DirectoryEntry:
    """A name plus the path it was found at; metadata is fetched at render time.

    ``path`` is a plain string: ``pathlib`` collapses a trailing ``.``, and
    ``link/.`` must resolve through the link rather than name the link itself.
    """

    name: str
    path: str

    @classmethod
    def for_argument(cls, path: Path | str) -> "DirectoryEntry":
        """Build the entry for a path given directly rather than found in a directory."""
        raw = os.fspath(path)
        name = os.path.basename(os.path.normpath(raw)) or raw
        return cls(name=name, path=raw)

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")


@dataclass(frozen=True)
class Collection:
    """Result of collecting one requested path."""

    entries: tuple[DirectoryEntry, ...]
    is_plain_file: bool = False


def _enumerate_names(directory: Path) -> list[str]:
    """Return child names in enumeration order; the handle is closed on every path."""
    with os.scandir(directory) as entries:
        return [entry.name for entry in entries]


def collect(path: Path | str, request: ListingRequest, provider: MetadataProvider) -> Collection:
    """Collect the entries to list for ``path``.

    Raises ``PathResolutionError`` when ``path`` is neither a readable
    directory nor a regular file and ``MetadataError`` when the fallback stat
    of a non-directory fails.
    """
    base = os.fspath(path)
    directory = Path(base)
    try:
        names = _enumerate_names(directory)
    except OSError as exc:
        logger.debug("cannot enumerate %s: %s", directory, exc)
        record = provider.stat_follow(directory)
        if not record.is_regular:
            raise PathResolutionError(path) from exc
        return Collection(entries=(DirectoryEntry.for_argument(path),), is_plain_file=True)

    if request.include_dot_entries:
        names = [*DOT_ENTRIES, *(name for name in names if name not in DOT_ENTRIES)]

    keep_hidden = request.dotfiles_visible
    entries = tuple(
        DirectoryEntry(name=name, path=os.path.join(base, name))
        for name in names
        if keep_hidden or not name.startswith(".")
    )
    logger.debug("collected %d entries from %s", len(entries), directory)
    return Collection(entries=entries)


__all__ = [
    "DOT_ENTRIES",
    "DirectoryEntry",
    "Collection",
    "collect",
]
