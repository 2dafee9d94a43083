"""Filesystem metadata records and the providers that produce them.

The listing pipeline never calls ``os.stat`` directly. It goes through a
``MetadataProvider`` so tests can substitute canned records, and so every OS
failure arrives as a ``MetadataError`` with a coarse reason attached.
"""

from __future__ import annotations

import enum
import grp
import os
import pwd
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import IdentityError, MetadataError


class FileKind(enum.Enum):
    """File type decoded from the ``S_IFMT`` bits of a mode."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    BLOCK_DEVICE = "block"
    CHAR_DEVICE = "char"
    FIFO = "fifo"
    SOCKET = "socket"
    UNKNOWN = "unknown"


_KIND_BY_FORMAT = {
    stat.S_IFREG: FileKind.REGULAR,
    stat.S_IFDIR: FileKind.DIRECTORY,
    stat.S_IFLNK: FileKind.SYMLINK,
    stat.S_IFBLK: FileKind.BLOCK_DEVICE,
    stat.S_IFCHR: FileKind.CHAR_DEVICE,
    stat.S_IFIFO: FileKind.FIFO,
    stat.S_IFSOCK: FileKind.SOCKET,
}


def kind_from_mode(mode: int) -> FileKind:
    """Return the ``FileKind`` encoded in ``mode``."""
    return _KIND_BY_FORMAT.get(stat.S_IFMT(mode), FileKind.UNKNOWN)


@dataclass(frozen=True)
class MetadataRecord:
    """Snapshot of one path's metadata at one instant."""

    kind: FileKind
    mode: int
    nlink: int
    uid: int
    gid: int
    size: int
    mtime_ns: int
    atime_ns: int
    ctime_ns: int
    inode: int

    @classmethod
    def from_stat_result(cls, result: os.stat_result) -> "MetadataRecord":
        return cls(
            kind=kind_from_mode(result.st_mode),
            mode=int(result.st_mode),
            nlink=int(result.st_nlink),
            uid=int(result.st_uid),
            gid=int(result.st_gid),
            size=int(result.st_size),
            mtime_ns=int(result.st_mtime_ns),
            atime_ns=int(result.st_atime_ns),
            ctime_ns=int(result.st_ctime_ns),
            inode=int(result.st_ino),
        )

    @property
    def permission_bits(self) -> int:
        """Permission and special bits (``0o7777`` mask) of the mode."""
        return stat.S_IMODE(self.mode)

    @property
    def is_directory(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is FileKind.SYMLINK

    @property
    def is_regular(self) -> bool:
        return self.kind is FileKind.REGULAR

    @property
    def owner_executable(self) -> bool:
        return bool(self.mode & stat.S_IXUSR)


class MetadataProvider(Protocol):
    """OS capability consumed by the listing pipeline.

    Every method raises ``MetadataError`` on failure.
    """

    def stat_follow(self, path: Path | str) -> MetadataRecord:
        ...

    def stat_no_follow(self, path: Path | str) -> MetadataRecord:
        ...

    def read_link(self, path: Path | str) -> str:
        ...


class OsMetadataProvider:
    """``MetadataProvider`` backed by ``os.stat``, ``os.lstat`` and ``os.readlink``."""

    def stat_follow(self, path: Path | str) -> MetadataRecord:
        try:
            return MetadataRecord.from_stat_result(os.stat(path))
        except OSError as exc:
            raise MetadataError.from_os_error(path, exc) from exc

    def stat_no_follow(self, path: Path | str) -> MetadataRecord:
        try:
            return MetadataRecord.from_stat_result(os.lstat(path))
        except OSError as exc:
            raise MetadataError.from_os_error(path, exc) from exc

    def read_link(self, path: Path | str) -> str:
        try:
            return os.readlink(path)
        except OSError as exc:
            raise MetadataError.from_os_error(path, exc) from exc


class IdentityResolver:
    """Map numeric owner and group ids to names through ``pwd``/``grp``."""

    def user_name(self, uid: int) -> str:
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError as exc:
            raise IdentityError("owner", uid) from exc

    def group_name(self, gid: int) -> str:
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError as exc:
            raise IdentityError("group", gid) from exc


__all__ = [
    "FileKind",
    "kind_from_mode",
    "MetadataRecord",
    "MetadataProvider",
    "OsMetadataProvider",
    "IdentityResolver",
]
