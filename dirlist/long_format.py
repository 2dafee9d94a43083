"""Detailed (long) listing lines.

A long line is, left to right and single-space separated: type character and
permission string, link count, owner, group, size in bytes, modification date,
and the entry name drawn exactly as the short form draws it.
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Iterable

from .collector import DirectoryEntry
from .diagnostics import Diagnostics
from .errors import IdentityError, MetadataError
from .metadata import FileKind, IdentityResolver, MetadataProvider
from .render import Renderer
from .timefmt import TimestampFormatter

logger = logging.getLogger(__name__)

UNKNOWN_TYPE_MARKER = "Unknown type"
PERMISSION_TEMPLATE = "rwxrwxrwx"
KILOBYTE = 1024

_TYPE_CHARS = {
    FileKind.REGULAR: "-",
    FileKind.DIRECTORY: "d",
    FileKind.BLOCK_DEVICE: "b",
    FileKind.CHAR_DEVICE: "c",
    FileKind.SYMLINK: "l",
    FileKind.FIFO: "p",
    FileKind.SOCKET: "s",
}

# (bit, position in the template, special bit that swaps the letter, replacement)
_PERMISSION_BITS = (
    (stat.S_IRUSR, 0, 0, ""),
    (stat.S_IWUSR, 1, 0, ""),
    (stat.S_IXUSR, 2, stat.S_ISUID, "s"),
    (stat.S_IRGRP, 3, 0, ""),
    (stat.S_IWGRP, 4, 0, ""),
    (stat.S_IXGRP, 5, stat.S_ISGID, "s"),
    (stat.S_IROTH, 6, 0, ""),
    (stat.S_IWOTH, 7, 0, ""),
    (stat.S_IXOTH, 8, stat.S_ISVTX, "t"),
)


def type_char(kind: FileKind) -> str:
    return _TYPE_CHARS.get(kind, UNKNOWN_TYPE_MARKER)


def permission_string(mode: int) -> str:
    """Nine-character ``rwxrwxrwx`` rendering of ``mode``.

    Execute positions show ``s``/``s``/``t`` when the setuid, setgid, or sticky
    bit accompanies the execute bit. Unset bits render as ``-``.
    """
    chars = ["-"] * len(PERMISSION_TEMPLATE)
    for bit, position, special, replacement in _PERMISSION_BITS:
        if not mode & bit:
            continue
        if special and mode & special:
            chars[position] = replacement
        else:
            chars[position] = PERMISSION_TEMPLATE[position]
    return "".join(chars)


class LongFormatFormatter:
    """Decode metadata into long listing lines."""

    def __init__(
        self,
        provider: MetadataProvider,
        renderer: Renderer,
        timestamps: TimestampFormatter | None = None,
        identities: IdentityResolver | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.provider = provider
        self.renderer = renderer
        self.timestamps = timestamps if timestamps is not None else TimestampFormatter()
        self.identities = identities if identities is not None else IdentityResolver()
        self.diagnostics = diagnostics if diagnostics is not None else renderer.diagnostics

    def format_long(self, entry: DirectoryEntry) -> str | None:
        """Return the long line for ``entry`` without a line break.

        Returns ``None`` after writing a diagnostic when the entry's metadata,
        owner, or group cannot be resolved.
        """
        try:
            record = self.provider.stat_no_follow(entry.path)
        except MetadataError as exc:
            self.diagnostics.report_error("lstat failed", exc)
            return None

        try:
            owner = self.identities.user_name(record.uid)
            group = self.identities.group_name(record.gid)
        except IdentityError as exc:
            self.diagnostics.report_error(str(entry.path), exc)
            return None

        name = self.renderer.render_name(entry)
        if name is None:
            return None

        date = self.timestamps.format(record.mtime_ns)
        return (
            f"{type_char(record.kind)}{permission_string(record.mode)} "
            f"{record.nlink:<2} {owner:>6} {group:>6} {record.size:>5} {date:>16} {name}"
        )

    def total_kilobytes(self, entries: Iterable[DirectoryEntry]) -> int:
        """Sum of entry sizes in bytes, floor-divided by 1024.

        Sizes come from following stat, falling back to the link itself when
        the target is missing. Entries with no metadata at all count as zero.
        """
        total = 0
        for entry in entries:
            try:
                record = self.provider.stat_follow(entry.path)
            except MetadataError:
                try:
                    record = self.provider.stat_no_follow(entry.path)
                except MetadataError as exc:
                    logger.debug("no size for %s: %s", entry.path, exc)
                    continue
            total += record.size
        return total // KILOBYTE

    def total_line(self, entries: Iterable[DirectoryEntry]) -> str:
        return f"total {self.total_kilobytes(entries)}"


__all__ = [
    "UNKNOWN_TYPE_MARKER",
    "type_char",
    "permission_string",
    "LongFormatFormatter",
]
