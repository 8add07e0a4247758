from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from browscap_json_cache.errors import ConfigurationError
from browscap_json_cache.logging import configure_logging

from .commands import COMMANDS, open_session


DESCRIPTION = """
Inspect and edit a browscap JSON file cache.
"""

EXAMPLES = """Examples:
  # Show the data version, release date and type
  browscap-cache --dir ./cache info

  # Read a versioned entry
  browscap-cache --dir ./cache get browscap.patterns

  # Write the data version itself (unversioned key)
  browscap-cache --dir ./cache --no-version set browscap.version 6001008

  # Read a file exactly as stored, without envelope or version suffix
  browscap-cache --dir ./cache --raw get browscap.version
"""


def _directory(value: str) -> Path:
    if not value.strip():
        raise argparse.ArgumentTypeError("cache directory must not be empty")
    return Path(value)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="browscap-cache",
        description=DESCRIPTION,
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dir",
        type=_directory,
        help="Cache directory (default: $BROWSCAP_CACHE_DIR)",
    )
    parser.add_argument(
        "--readonly",
        action="store_true",
        help="Do not require a writable cache directory",
    )
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--raw",
        action="store_true",
        help="Access stored documents directly, without envelope or version",
    )
    mode_group.add_argument(
        "--no-version",
        action="store_true",
        help="Do not append the data version to keys",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("get", "Print the value stored under KEY"),
        ("has", "Report whether KEY is stored"),
        ("remove", "Delete KEY"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("key", help="Cache key")

    set_parser = subparsers.add_parser("set", help="Store a JSON VALUE under KEY")
    set_parser.add_argument("key", help="Cache key")
    set_parser.add_argument("value", help="JSON-encoded value")

    subparsers.add_parser("flush", help="Delete the whole cache directory")
    subparsers.add_parser("info", help="Show data version, release date and type")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    level = "DEBUG" if args.verbose else os.getenv("BROWSCAP_LOG_LEVEL", "WARNING")
    configure_logging(level)

    try:
        session = open_session(args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    return COMMANDS[args.command](session, args)


if __name__ == "__main__":
    sys.exit(main())
