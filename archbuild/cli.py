# SPDX-License-Identifier: MIT
"""Command-line interface for archbuild.

Runs: parse arguments, validate the target, optionally clean, build,
optionally increment the build number. The first failure ends the run.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from archbuild.configure.config import BuildConfig
from archbuild.core.errors import (
    ArchbuildError,
    UnknownTargetError,
    UsageError,
)
from archbuild.log import setup_logging
from archbuild.options import Options, build_parser, parse_args
from archbuild.pipeline import BuildResult, build_pipeline, clean_pipeline
from archbuild.util.commands import CommandRunner
from archbuild.version import increment_build_number

logger = logging.getLogger("archbuild")


def validate_target(options: Options, config: BuildConfig) -> None:
    """Check that the selected target is defined in the configuration.

    Raises:
        UnknownTargetError: With the list of valid target names.
    """
    if not config.has_architecture(options.target):
        raise UnknownTargetError(options.target, config.architecture_names())


def run(
    options: Options,
    config: BuildConfig | None = None,
    runner: CommandRunner | None = None,
) -> BuildResult:
    """Run the clean, build and increment steps for parsed options.

    Args:
        options: Parsed command-line options.
        config: Configuration accessor (default: from options.config_path).
        runner: Command runner (default: configured from options).

    Returns:
        The result of the build pipeline.
    """
    if config is None:
        config = BuildConfig(options.config_path)
    if runner is None:
        runner = CommandRunner(
            dry_run=options.dry_run,
            verbose=options.verbose,
            json_log=options.json_log,
        )

    validate_target(options, config)

    if options.dry_run:
        logger.info("Dry-run mode enabled")
    if options.json_log:
        logger.info("JSON log mode enabled")

    if options.clean:
        clean_pipeline(options, config, runner)

    result = build_pipeline(options, config, runner)

    if options.increment and not options.dry_run:
        increment_build_number(config)

    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the archbuild CLI."""
    parser = build_parser()

    try:
        options = parse_args(argv, parser)
    except UsageError as e:
        print(e.message, file=sys.stderr)
        parser.print_help(sys.stderr)
        return e.exit_code

    setup_logging(json_log=options.json_log, target=options.target)

    try:
        run(options)
    except UnknownTargetError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        print("Available targets:", file=sys.stderr)
        for name in e.available:
            print(name, file=sys.stderr)
        parser.print_help(sys.stderr)
        return e.exit_code
    except ArchbuildError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
