"""Command-line front door for dirlist.

Parses single-character listing flags into a ``ListingRequest``, merges
display options over the persisted settings, and runs the orchestrator.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import TextIO

from .config import COLOR_MODES, DisplaySettings, load_display_settings, save_display_settings
from .diagnostics import Diagnostics, setup_logging
from .errors import CapacityError
from .long_format import LongFormatFormatter
from .metadata import IdentityResolver, OsMetadataProvider
from .orchestrator import ListingOrchestrator
from .render import Renderer
from .request import ListingRequest
from .theme import available_theme_names, resolve_theme
from .timefmt import TimestampFormatter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirlist",
        description="List directory contents with type colors and symlink targets.",
    )
    parser.add_argument("-l", dest="long_format", action="store_true", help="Long listing: permissions, owner, size, date.")
    parser.add_argument("-a", dest="show_hidden", action="store_true", help="Include entries starting with '.'.")
    parser.add_argument("-t", dest="sort_by_mod_time", action="store_true", help="Sort newest first by modification time.")
    parser.add_argument("-u", dest="sort_by_access_time", action="store_true", help="Sort newest first by access time.")
    parser.add_argument("-c", dest="sort_by_change_time", action="store_true", help="Sort newest first by status change time.")
    parser.add_argument("-f", dest="no_sort", action="store_true", help="Do not sort; list entries in directory order.")
    parser.add_argument("-d", dest="directory_only", action="store_true", help="List directories themselves, not their contents.")
    parser.add_argument("-i", dest="show_inode", action="store_true", help="Print the inode number of each entry.")
    parser.add_argument("-1", dest="one_column", action="store_true", help="List one entry per line.")
    parser.add_argument("paths", nargs="*", metavar="path", help="Files or directories to list. Defaults to '.'.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Color theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--color", choices=COLOR_MODES, default=None, help="When to use color (default: auto).")
    parser.add_argument("--no-color", action="store_true", help="Alias for --color=never.")
    parser.add_argument("--time-locale", default=None, help="Locale for the long listing date column.")
    parser.add_argument("--time-fallback-locale", default=None, help="Locale used when --time-locale is unavailable.")
    parser.add_argument("--save-settings", action="store_true", help="Persist the display options given on this command line.")
    parser.add_argument("--debug", action="store_true", help="Log debug tracing to stderr.")
    return parser


def request_from_args(args: argparse.Namespace) -> ListingRequest:
    return ListingRequest(
        long_format=args.long_format,
        show_hidden=args.show_hidden,
        sort_by_mod_time=args.sort_by_mod_time,
        sort_by_access_time=args.sort_by_access_time,
        sort_by_change_time=args.sort_by_change_time,
        no_sort=args.no_sort,
        directory_only=args.directory_only,
        show_inode=args.show_inode,
        one_column=args.one_column,
        include_dot_entries=args.show_hidden or args.no_sort,
    )


def settings_from_args(args: argparse.Namespace, base: DisplaySettings) -> DisplaySettings:
    """Overlay command-line display options onto persisted ``base`` settings."""
    settings = base
    if args.theme is not None:
        settings = replace(settings, theme=args.theme.strip().lower())
    if args.color is not None:
        settings = replace(settings, color=args.color)
    if args.no_color:
        settings = replace(settings, color="never")
    if args.time_locale is not None:
        settings = replace(settings, time_locale=args.time_locale)
    if args.time_fallback_locale is not None:
        settings = replace(settings, time_fallback_locale=args.time_fallback_locale)
    return settings


def build_orchestrator(
    request: ListingRequest,
    settings: DisplaySettings,
    *,
    out: TextIO | None = None,
    diagnostics: Diagnostics | None = None,
    is_tty: bool | None = None,
) -> ListingOrchestrator:
    """Wire provider, renderer, and formatters for one invocation."""
    if is_tty is None:
        stream = out if out is not None else sys.stdout
        is_tty = bool(getattr(stream, "isatty", lambda: False)())
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    provider = OsMetadataProvider()
    theme = resolve_theme(settings.theme, no_color=not settings.use_color(is_tty))
    renderer = Renderer(request, provider, theme=theme, diagnostics=diagnostics)
    long_formatter = LongFormatFormatter(
        provider,
        renderer,
        timestamps=TimestampFormatter(
            locale_name=settings.time_locale,
            fallback_locale=settings.time_fallback_locale,
            pattern=settings.time_pattern,
        ),
        identities=IdentityResolver(),
        diagnostics=diagnostics,
    )
    return ListingOrchestrator(
        request,
        provider,
        renderer,
        long_formatter,
        out=out,
        diagnostics=diagnostics,
        max_paths=settings.max_paths,
    )


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, list the requested paths, and return the exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)

    settings = settings_from_args(args, load_display_settings())
    if args.save_settings:
        save_display_settings(settings)

    orchestrator = build_orchestrator(request_from_args(args), settings)
    try:
        return orchestrator.run(args.paths)
    except CapacityError as exc:
        orchestrator.diagnostics.report(str(exc))
        return 1


__all__ = [
    "build_parser",
    "request_from_args",
    "settings_from_args",
    "build_orchestrator",
    "main",
]
