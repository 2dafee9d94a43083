"""Failure taxonomy for directory listings.

Each error class maps to the smallest unit it abandons: one entry, one
requested path, or the whole invocation.
"""

from __future__ import annotations

import enum
from pathlib import Path


class ListingError(Exception):
    """Base class for every failure raised by the listing pipeline."""


class MetadataFailure(enum.Enum):
    """Coarse reason attached to a failed metadata lookup."""

    NOT_FOUND = "not-found"
    DENIED = "denied"
    OTHER = "other"


class MetadataError(ListingError):
    """A stat-like call or link read failed for one path."""

    def __init__(self, path: Path | str, reason: MetadataFailure, strerror: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        self.strerror = strerror or reason.value
        super().__init__(f"{self.path}: {self.strerror}")

    @classmethod
    def from_os_error(cls, path: Path | str, exc: OSError) -> "MetadataError":
        if isinstance(exc, FileNotFoundError):
            reason = MetadataFailure.NOT_FOUND
        elif isinstance(exc, PermissionError):
            reason = MetadataFailure.DENIED
        else:
            reason = MetadataFailure.OTHER
        return cls(path, reason, exc.strerror)


class PathResolutionError(ListingError):
    """Requested path is neither an openable directory nor a regular file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot open directory: {path}")


class IdentityError(ListingError):
    """Numeric owner or group id has no name on this system."""

    def __init__(self, kind: str, ident: int) -> None:
        self.kind = kind
        self.ident = ident
        super().__init__(f"cannot resolve {kind} id {ident}")


class CapacityError(ListingError):
    """Too many paths were requested for one invocation."""

    def __init__(self, requested: int, limit: int) -> None:
        self.requested = requested
        self.limit = limit
        super().__init__(f"too many arguments ({requested} > {limit})")


__all__ = [
    "ListingError",
    "MetadataFailure",
    "MetadataError",
    "PathResolutionError",
    "IdentityError",
    "CapacityError",
]
