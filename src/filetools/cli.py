"""Command-line entry point for filetools.

The library functions are small, so the command line front end is mostly a
dispatcher.  Each sub-command maps onto one library call:

1. ``stamp``  - find timestamps embedded in file names.
2. ``mtime``  - show when files were last modified.
3. ``size``   - render byte counts as short strings such as ``4.0 M``.
4. ``parse``  - turn strings such as ``4M`` back into byte counts.

Every result is printed as ``<input>\\t<result>`` so the output can be piped
into ``cut`` or ``sort``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from filetools import __version__
from filetools.byte_size import InvalidFormatError, format_byte_count, parse_byte_count
from filetools.config import get_display_locale, get_log_level
from filetools.timestamps import extract_timestamps, get_timestamp

logger = logging.getLogger(__name__)

# Placeholder printed when a name carries no timestamp
MISSING = "-"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr at the configured level (DEBUG with ``--verbose``)."""
    level = logging.DEBUG if verbose else get_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run_stamp(args: argparse.Namespace) -> int:
    status = 0
    for name in args.names:
        found = extract_timestamps(name)
        if not found:
            print(f"{name}\t{MISSING}")
            status = 1
            continue
        for value in found if args.all else found[:1]:
            print(f"{name}\t{value.isoformat(sep=' ')}")
    return status


def _run_mtime(args: argparse.Namespace) -> int:
    status = 0
    for path in args.paths:
        modified = get_timestamp(path)
        if modified is None:
            print(f"No such file: {path}", file=sys.stderr)
            status = 1
            continue
        print(f"{path}\t{modified.isoformat(sep=' ')}")
    return status


def _run_size(args: argparse.Namespace) -> int:
    status = 0
    locale = args.locale or get_display_locale()
    for byte_count in args.byte_counts:
        try:
            rendered = format_byte_count(byte_count, locale)
        except ValueError as err:
            print(f"Could not format size: {err}", file=sys.stderr)
            status = 1
            continue
        print(f"{byte_count}\t{rendered}")
    return status


def _run_parse(args: argparse.Namespace) -> int:
    status = 0
    for text in args.sizes:
        try:
            byte_count = parse_byte_count(text)
        except InvalidFormatError as err:
            print(f"Could not parse size: {err}", file=sys.stderr)
            status = 1
            continue
        print(f"{text}\t{byte_count}")
    return status


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Turn the command-line text into a namespace with a ``handler`` attribute."""
    parser = argparse.ArgumentParser(
        prog="filetools",
        description="Read timestamps from file names and convert human-readable sizes.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    stamp = commands.add_parser("stamp", help="Print timestamps embedded in file names.")
    stamp.add_argument("names", nargs="+", help="File names or paths to inspect.")
    stamp.add_argument(
        "--all",
        action="store_true",
        help="Print every matching timestamp instead of only the first.",
    )
    stamp.set_defaults(handler=_run_stamp)

    mtime = commands.add_parser("mtime", help="Print last-modified times of files.")
    mtime.add_argument("paths", nargs="+", help="Files to inspect.")
    mtime.set_defaults(handler=_run_mtime)

    size = commands.add_parser("size", help="Render byte counts as human-readable sizes.")
    size.add_argument("byte_counts", nargs="+", type=int, metavar="BYTES", help="Byte counts.")
    size.add_argument(
        "--locale",
        default=None,
        help="Locale for the decimal separator (default: from config, en_US).",
    )
    size.set_defaults(handler=_run_size)

    parse = commands.add_parser("parse", help="Convert sizes such as 4M into byte counts.")
    parse.add_argument("sizes", nargs="+", metavar="SIZE", help="Sizes such as 1024B or 1G.")
    parse.set_defaults(handler=_run_parse)

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, set up logging and run the chosen sub-command."""
    try:
        args = parse_args(argv)
        configure_logging(args.verbose)
        logger.debug("Running %s", args.command)
        return args.handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    raise SystemExit(main())
