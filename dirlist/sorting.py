"""Ordering strategies for collected entries.

Each ``SortPolicy`` is a sort key over ``DirectoryEntry`` values. Keys end in
the raw encoded name, so every policy is a total order and equal primary keys
resolve deterministically. Time keys never raise: a failed lookup sorts the
entry as older than any entry whose timestamp is known.
"""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from .collector import DirectoryEntry
from .errors import MetadataError
from .metadata import MetadataProvider, MetadataRecord
from .request import ListingRequest

logger = logging.getLogger(__name__)


class SortPolicy(enum.Enum):
    NONE = "none"
    LEXICOGRAPHIC = "lexicographic"
    HIDDEN_FIRST = "hidden-first"
    CASE_INSENSITIVE = "case-insensitive"
    MODIFICATION_TIME = "mtime"
    ACCESS_TIME = "atime"
    CHANGE_TIME = "ctime"


TIME_POLICIES = frozenset({SortPolicy.MODIFICATION_TIME, SortPolicy.ACCESS_TIME, SortPolicy.CHANGE_TIME})

_TIME_FIELDS: dict[SortPolicy, Callable[[MetadataRecord], int]] = {
    SortPolicy.MODIFICATION_TIME: lambda record: record.mtime_ns,
    SortPolicy.ACCESS_TIME: lambda record: record.atime_ns,
    SortPolicy.CHANGE_TIME: lambda record: record.ctime_ns,
}

_HIDDEN_RANKS = {".": 0, "..": 1}


def encoded_name(name: str) -> bytes:
    """Return ``name`` as filesystem bytes, the unit of byte-order comparison."""
    return os.fsencode(name)


def lexicographic_key(entry: DirectoryEntry) -> bytes:
    return encoded_name(entry.name)


def hidden_first_key(entry: DirectoryEntry) -> tuple[int, bytes]:
    """``.`` then ``..`` then every other name in byte order."""
    return _HIDDEN_RANKS.get(entry.name, 2), encoded_name(entry.name)


def case_insensitive_key(entry: DirectoryEntry) -> tuple[bytes, bytes]:
    """ASCII-folded byte order with the raw name as tie-break."""
    raw = encoded_name(entry.name)
    return raw.lower(), raw


def select_policy(request: ListingRequest, *, long_listing: bool = False) -> SortPolicy:
    """Choose the ordering for a directory listing.

    Time-based flags win in the order modification, access, change. Without
    one, the detailed listing path sorts case-insensitively and every other
    path sorts hidden-first.
    """
    if request.no_sort:
        return SortPolicy.NONE
    if request.sort_by_mod_time:
        return SortPolicy.MODIFICATION_TIME
    if request.sort_by_access_time:
        return SortPolicy.ACCESS_TIME
    if request.sort_by_change_time:
        return SortPolicy.CHANGE_TIME
    if long_listing:
        return SortPolicy.CASE_INSENSITIVE
    return SortPolicy.HIDDEN_FIRST


def _time_key(
    field: Callable[[MetadataRecord], int],
    provider: MetadataProvider,
) -> Callable[[DirectoryEntry], tuple[int, int, bytes]]:
    def key(entry: DirectoryEntry) -> tuple[int, int, bytes]:
        try:
            record = provider.stat_follow(entry.path)
        except MetadataError as exc:
            logger.debug("sorting %s as oldest: %s", entry.path, exc)
            return 1, 0, encoded_name(entry.name)
        return 0, -field(record), encoded_name(entry.name)

    return key


def key_for_policy(
    policy: SortPolicy,
    provider: MetadataProvider | None = None,
) -> Callable[[DirectoryEntry], object]:
    """Return the sort key implementing ``policy``."""
    if policy is SortPolicy.LEXICOGRAPHIC:
        return lexicographic_key
    if policy is SortPolicy.HIDDEN_FIRST:
        return hidden_first_key
    if policy is SortPolicy.CASE_INSENSITIVE:
        return case_insensitive_key
    if policy in TIME_POLICIES:
        if provider is None:
            raise ValueError(f"{policy.value} ordering needs a metadata provider")
        return _time_key(_TIME_FIELDS[policy], provider)
    raise ValueError(f"no sort key for {policy.value}")


def sort_entries(
    entries: Iterable[DirectoryEntry],
    policy: SortPolicy,
    provider: MetadataProvider | None = None,
) -> list[DirectoryEntry]:
    """Return ``entries`` ordered by ``policy``; ``NONE`` keeps enumeration order."""
    ordered = list(entries)
    if policy is SortPolicy.NONE:
        return ordered
    # Time keys stat each entry once per sort, not once per comparison.
    ordered.sort(key=key_for_policy(policy, provider))
    return ordered


def sort_paths(paths: Sequence[Path | str]) -> list[Path | str]:
    """Order command-line paths byte-wise, as given."""
    return sorted(paths, key=lambda path: os.fsencode(path))


__all__ = [
    "SortPolicy",
    "TIME_POLICIES",
    "encoded_name",
    "lexicographic_key",
    "hidden_first_key",
    "case_insensitive_key",
    "select_policy",
    "key_for_policy",
    "sort_entries",
    "sort_paths",
]
