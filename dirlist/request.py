"""Immutable per-invocation listing options."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ListingRequest:
    """Listing options built once from the command line and passed everywhere.

    ``include_dot_entries`` adds the ``.`` and ``..`` pseudo-entries to
    directory collections; they are still subject to hidden-file filtering.
    """

    long_format: bool = False
    show_hidden: bool = False
    sort_by_mod_time: bool = False
    sort_by_access_time: bool = False
    sort_by_change_time: bool = False
    no_sort: bool = False
    directory_only: bool = False
    show_inode: bool = False
    one_column: bool = False
    include_dot_entries: bool = False

    @property
    def dotfiles_visible(self) -> bool:
        """Whether names starting with ``.`` survive collection.

        Disabling sorting also disables hidden-file filtering.
        """
        return self.show_hidden or self.no_sort


__all__ = ["ListingRequest"]
