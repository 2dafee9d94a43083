"""Compose collection, ordering, and rendering for every requested path.

Requested paths are split into non-directories and directories. Each group is
ordered byte-wise; non-directories are listed first, then each directory,
with a ``<path>:`` header whenever the output holds more than one block.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from .collector import Collection, DirectoryEntry, collect
from .diagnostics import Diagnostics, write_text
from .errors import CapacityError, MetadataError, PathResolutionError
from .long_format import LongFormatFormatter
from .metadata import MetadataProvider
from .render import Renderer
from .request import ListingRequest
from .sorting import select_policy, sort_entries, sort_paths

logger = logging.getLogger(__name__)

CURRENT_DIRECTORY = "."


class ListingOrchestrator:
    """Run one listing invocation and stream its text to ``out``."""

    def __init__(
        self,
        request: ListingRequest,
        provider: MetadataProvider,
        renderer: Renderer,
        long_formatter: LongFormatFormatter,
        out: TextIO | None = None,
        diagnostics: Diagnostics | None = None,
        max_paths: int | None = None,
    ) -> None:
        self.request = request
        self.provider = provider
        self.renderer = renderer
        self.long_formatter = long_formatter
        self._out = out
        self.diagnostics = diagnostics if diagnostics is not None else renderer.diagnostics
        self.max_paths = max_paths

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def write(self, text: str) -> None:
        write_text(self.out, text)

    def run(self, paths: Sequence[str]) -> int:
        """List ``paths`` (the current directory when empty) and return the exit status.

        Per-entry and per-path failures are reported and never change the
        status. Raises ``CapacityError`` before writing anything when more
        paths were requested than ``max_paths`` allows.
        """
        requested = list(paths)
        if self.max_paths is not None and len(requested) > self.max_paths:
            raise CapacityError(len(requested), self.max_paths)

        if self.request.directory_only:
            if requested:
                self.list_directories(requested)
            else:
                self.list_current_directory()
        elif not requested:
            self.list_path(CURRENT_DIRECTORY)
        else:
            self.list_arguments(requested)
        return 0

    def _is_directory(self, path: str) -> bool:
        try:
            return self.provider.stat_follow(path).is_directory
        except MetadataError:
            return False

    def list_arguments(self, paths: Sequence[str]) -> None:
        files: list[str] = []
        directories: list[str] = []
        for path in paths:
            (directories if self._is_directory(path) else files).append(path)

        for path in sort_paths(files):
            self.list_path(path)

        show_headers = bool(files) or len(paths) > 1
        for path in sort_paths(directories):
            if show_headers:
                self.write(f"\n{path}:\n")
            self.list_path(path)

    def list_path(self, path: str) -> None:
        """List one requested path: a directory's contents or a plain file itself."""
        try:
            collection = collect(path, self.request, self.provider)
        except PathResolutionError as exc:
            self.diagnostics.report(str(exc))
            return
        except MetadataError as exc:
            self.diagnostics.report_error("stat failed", exc)
            return

        if self.request.long_format:
            self._write_long(collection)
        else:
            self._write_short(collection)

    def _write_short(self, collection: Collection) -> None:
        entries = list(collection.entries)
        if not collection.is_plain_file:
            policy = select_policy(self.request)
            logger.debug("short listing ordered by %s", policy.value)
            entries = sort_entries(entries, policy, self.provider)
        for entry in entries:
            self._write_entry(entry, self.renderer.render_entry)
        if not self.request.one_column:
            self.write("\n")

    def _write_long(self, collection: Collection) -> None:
        entries = list(collection.entries)
        if not collection.is_plain_file:
            policy = select_policy(self.request, long_listing=True)
            logger.debug("long listing ordered by %s", policy.value)
            self.write(self.long_formatter.total_line(entries) + "\n")
            entries = sort_entries(entries, policy, self.provider)
        for entry in entries:
            self._write_entry(entry, self._long_line)

    def _long_line(self, entry: DirectoryEntry) -> str | None:
        line = self.long_formatter.format_long(entry)
        return None if line is None else line + "\n"

    def _write_entry(self, entry: DirectoryEntry, render: Callable[[DirectoryEntry], str | None]) -> None:
        text = render(entry)
        if text is None:
            return
        prefix = self.renderer.inode_prefix(entry) if self.request.show_inode else ""
        self.write(prefix + text)

    def list_current_directory(self) -> None:
        """Directory-only mode without paths: the current directory alone on one line."""
        entry = DirectoryEntry.for_argument(CURRENT_DIRECTORY)
        if self.request.long_format:
            self._write_entry(entry, self._long_line)
        else:
            self._write_entry(entry, self.renderer.render_column)

    def list_directories(self, paths: Sequence[str]) -> None:
        """Render each path itself rather than its contents."""
        for path in sort_paths(paths):
            try:
                self.provider.stat_follow(path)
            except MetadataError as exc:
                self.diagnostics.report_error("stat failed", exc)
                continue
            entry = DirectoryEntry.for_argument(path)
            if self.request.long_format:
                self._write_entry(entry, self._long_line)
            else:
                self._write_entry(entry, self.renderer.render_entry)

        if not self.request.long_format and not self.request.one_column:
            self.write("\n")


__all__ = [
    "CURRENT_DIRECTORY",
    "ListingOrchestrator",
]
