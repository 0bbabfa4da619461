"""
Command-line option parsing and server resolution.

``parse_options`` turns ``argv`` into a frozen :class:`Options`.  The
``help`` pseudo-location prints the location table and exits with status
2; an unknown location raises :class:`OptionsError`.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .constants import DEFAULT_DATA_SIZE, DEFAULT_LOCATION, TMN_DOMAIN
from .errors import OptionsError
from .locations import HELP_LOCATION, is_known, location_list

FORCE_FLAG = "--I-WANT-TO-GET-BANNED"


@dataclass(frozen=True)
class Options:
    """Resolved configuration for a single run."""

    csv: bool = False
    server: str = ""
    location: str = DEFAULT_LOCATION
    size: int = DEFAULT_DATA_SIZE
    dry_run: bool = False
    force: bool = False
    verbose: int = 0


def resolve_server(location: str, server: Optional[str] = None) -> str:
    """Explicit *server* wins; otherwise derive it from *location*."""
    if server:
        return server
    return f"http://{location}.{TMN_DOMAIN}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testmynet",
        description="CLI based network bandwidth tester using testmy.net",
        allow_abbrev=False,
    )
    # Output
    parser.add_argument("--csv", action="store_true", help="Output results in csv")

    # Server selection
    parser.add_argument("--server", type=str, default="", metavar="URL", help="TestMyNet server (overrides location)")
    parser.add_argument("--location", type=str, default=DEFAULT_LOCATION, metavar="CODE", help="TestMyNet location (use 'help' to list them)")

    # Test parameters
    parser.add_argument("--size", type=int, default=DEFAULT_DATA_SIZE, metavar="KB", help=f"Test size in KBytes (default: {DEFAULT_DATA_SIZE})")
    parser.add_argument("--dry-run", action="store_true", help="Dry-run mode")
    parser.add_argument(
        FORCE_FLAG,
        dest="force",
        action="store_true",
        help="Allow program to hit testmy.net more often than it should.",
    )
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Verbose mode (use multiple times to increase level)")
    return parser


def parse_options(argv: Optional[List[str]] = None, *, stdout: Optional[TextIO] = None) -> Options:
    """
    Parse *argv* (defaults to ``sys.argv[1:]``) into :class:`Options`.

    ``--location help`` writes the location table to *stdout* and raises
    ``SystemExit(2)``.
    """
    args = build_parser().parse_args(argv)

    if args.location == HELP_LOCATION:
        out = stdout if stdout is not None else sys.stdout
        out.write(location_list())
        out.flush()
        raise SystemExit(2)

    if not is_known(args.location):
        raise OptionsError(
            f"unable to find location {args.location!r}. "
            f'Use "--location {HELP_LOCATION}" to see all locations'
        )

    return Options(
        csv=args.csv,
        server=resolve_server(args.location, args.server),
        location=args.location,
        size=args.size,
        dry_run=args.dry_run,
        force=args.force,
        verbose=args.verbose,
    )
