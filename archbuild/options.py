# SPDX-License-Identifier: MIT
"""Command-line option parsing for archbuild.

parse_args() turns argv into an immutable Options value that is passed
explicitly to every pipeline function.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from archbuild.configure.config import DEFAULT_CONFIG_PATH
from archbuild.core.errors import UsageError


@dataclass(frozen=True)
class Options:
    """Options for a single archbuild run.

    Attributes:
        target: Architecture target name (a key of 'architectures').
        clean: Run the clean pipeline before building.
        increment: Bump the build number after a non-dry-run build.
        verbose: Echo executed commands in human-readable mode.
        dry_run: Log external commands instead of running them.
        json_log: Emit log records as JSON lines.
        config_path: Path to the configuration document.
    """

    target: str
    clean: bool = False
    increment: bool = False
    verbose: bool = False
    dry_run: bool = False
    json_log: bool = False
    config_path: Path = DEFAULT_CONFIG_PATH


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as UsageError instead of exiting 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(f"Error: {message}")


def build_parser() -> ArgumentParser:
    """Create the archbuild argument parser."""
    from archbuild import __version__

    parser = ArgumentParser(
        prog="archbuild",
        usage="%(prog)s -t <target> [options]",
        description="Build a cross-compilation target described in a JSON "
        "configuration file.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-t", "--target", metavar="<name>", help="Build target (required)"
    )
    parser.add_argument(
        "-c", "--clean", action="store_true", help="Clean before building"
    )
    parser.add_argument(
        "--inc",
        dest="increment",
        action="store_true",
        help="Increment build number after successful build",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show actions without executing them",
    )
    parser.add_argument(
        "--json-log", action="store_true", help="Output logs in JSON format"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


# Exact option strings; nothing else is accepted, including bundled short
# flags (-cv), attached values (-tarm) and --opt=value forms.
VALUED_OPTIONS = {"-t": "--target", "--target": "--target", "--config": "--config"}
FLAG_OPTIONS = frozenset(
    ["-c", "--clean", "--inc", "-v", "--verbose", "--dry-run", "--json-log"]
)
EXIT_OPTIONS = frozenset(["-h", "--help", "--version"])


def scan_args(argv: Sequence[str], parser: ArgumentParser) -> list[str]:
    """Check argv token by token, left to right.

    A valued option takes the following token as its value whatever it
    looks like, so '-t --dry-run' selects a target named '--dry-run'.
    Help and version are acted on when reached; an unknown token earlier
    in argv is reported first.

    Returns:
        Arguments rewritten so argparse reads every value verbatim.

    Raises:
        UsageError: On the first unknown token or a missing value.
        SystemExit: With status 0 after printing --help or --version.
    """
    normalized: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token in VALUED_OPTIONS:
            value = next(tokens, None)
            if value is None:
                raise UsageError(f"Error: option {token} requires a value")
            normalized.append(f"{VALUED_OPTIONS[token]}={value}")
        elif token in FLAG_OPTIONS:
            normalized.append(token)
        elif token in EXIT_OPTIONS:
            parser.parse_args([token])
        else:
            raise UsageError(f"Unknown option: {token}")
    return normalized


def parse_args(
    argv: Sequence[str] | None = None,
    parser: ArgumentParser | None = None,
) -> Options:
    """Parse command-line arguments.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:]).
        parser: Parser to use (default: build_parser()).

    Returns:
        The parsed options.

    Raises:
        UsageError: On an unknown option, a missing option value or a
            missing target.
        SystemExit: With status 0 after printing --help or --version.
    """
    if parser is None:
        parser = build_parser()

    if argv is None:
        argv = sys.argv[1:]

    args = parser.parse_args(scan_args(argv, parser))
    if not args.target:
        raise UsageError("Error: -t <target> is required")

    return Options(
        target=args.target,
        clean=args.clean,
        increment=args.increment,
        verbose=args.verbose,
        dry_run=args.dry_run,
        json_log=args.json_log,
        config_path=args.config,
    )
