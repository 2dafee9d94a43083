"""Timestamp formatting with an explicit locale and fallback locale.

``LC_TIME`` is switched only for the duration of one ``strftime`` call and then
restored, so formatting never leaks locale state into the rest of the process.
"""

from __future__ import annotations

import contextlib
import locale
import logging
from collections.abc import Iterator
from datetime import datetime, tzinfo

logger = logging.getLogger(__name__)

DEFAULT_TIME_PATTERN = "%A %d %H:%M"
DEFAULT_TIME_LOCALE = "C"
DEFAULT_FALLBACK_LOCALE = "C"


@contextlib.contextmanager
def time_locale(name: str) -> Iterator[None]:
    """Activate ``name`` for ``LC_TIME`` inside the block.

    Raises ``locale.Error`` when the locale is not installed.
    """
    previous = locale.setlocale(locale.LC_TIME)
    locale.setlocale(locale.LC_TIME, name)
    try:
        yield
    finally:
        locale.setlocale(locale.LC_TIME, previous)


def locale_available(name: str) -> bool:
    try:
        with time_locale(name):
            return True
    except locale.Error:
        return False


class TimestampFormatter:
    """Format nanosecond timestamps for the long listing date column."""

    def __init__(
        self,
        locale_name: str = DEFAULT_TIME_LOCALE,
        fallback_locale: str = DEFAULT_FALLBACK_LOCALE,
        pattern: str = DEFAULT_TIME_PATTERN,
        tz: tzinfo | None = None,
    ) -> None:
        self.locale_name = locale_name
        self.fallback_locale = fallback_locale
        self.pattern = pattern
        self.tz = tz
        self._active_locale: str | None = None

    @property
    def active_locale(self) -> str:
        """The configured locale if it can be activated, otherwise the fallback."""
        if self._active_locale is None:
            if locale_available(self.locale_name):
                self._active_locale = self.locale_name
            else:
                logger.debug("time locale %r unavailable, using %r", self.locale_name, self.fallback_locale)
                self._active_locale = self.fallback_locale
        return self._active_locale

    def format(self, timestamp_ns: int) -> str:
        moment = datetime.fromtimestamp(timestamp_ns / 1_000_000_000, tz=self.tz)
        try:
            with time_locale(self.active_locale):
                return moment.strftime(self.pattern)
        except locale.Error:
            # Fallback locale missing too; use whatever LC_TIME is current.
            return moment.strftime(self.pattern)


__all__ = [
    "DEFAULT_TIME_PATTERN",
    "DEFAULT_TIME_LOCALE",
    "DEFAULT_FALLBACK_LOCALE",
    "time_locale",
    "locale_available",
    "TimestampFormatter",
]
