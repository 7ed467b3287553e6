# SPDX-License-Identifier: MIT
"""External command execution.

Commands are argument vectors run without a shell. In a dry run they are
logged instead of executed.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence

from archbuild.core.environment import Environment
from archbuild.core.errors import CommandError
from archbuild.log import DRYRUN, EXEC

logger = logging.getLogger(__name__)

# Exit status a POSIX shell reports for a command it cannot find
COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Run external commands, or log them in a dry run.

    Attributes:
        dry_run: Log commands as "Would run" instead of executing them.
        verbose: Echo each command before running it (human log mode).
        json_log: Log each command as an exec record before running it.
    """

    def __init__(
        self,
        *,
        dry_run: bool = False,
        verbose: bool = False,
        json_log: bool = False,
    ) -> None:
        self.dry_run = dry_run
        self.verbose = verbose
        self.json_log = json_log

    def run(self, cmd: Sequence[str], env: Environment | None = None) -> int:
        """Run a command and wait for it.

        Args:
            cmd: Argument vector; cmd[0] is looked up on PATH.
            env: Variables exported to the command on top of os.environ.

        Returns:
            0 (the command succeeded or was only logged).

        Raises:
            CommandError: If the command exits non-zero or cannot start.
        """
        cmd = list(cmd)
        cmdline = shlex.join(cmd)

        if self.dry_run:
            logger.info("Would run: %s", cmdline, extra={"kind": DRYRUN})
            return 0

        if self.json_log:
            logger.info("Running: %s", cmdline, extra={"kind": EXEC})
        elif self.verbose:
            logger.info("%s", cmdline, extra={"kind": EXEC})

        try:
            result = subprocess.run(
                cmd, env=env.merged() if env is not None else None
            )
        except OSError as e:
            raise CommandError(
                cmd, COMMAND_NOT_FOUND, reason=e.strerror or str(e)
            ) from e

        if result.returncode != 0:
            raise CommandError(cmd, result.returncode)
        return result.returncode
