# SPDX-License-Identifier: MIT
"""Custom exceptions for archbuild.

All archbuild exceptions inherit from ArchbuildError. Every error is
terminal: the CLI maps each one to an exit status and stops.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence


class ArchbuildError(Exception):
    """Base class for all archbuild exceptions.

    Attributes:
        message: The error message.
        exit_code: Process exit status the CLI reports for this error.
    """

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(ArchbuildError):
    """Invalid command line: unknown option or missing required value."""


class ConfigError(ArchbuildError):
    """Error reading or interpreting the configuration document."""


class ConfigFileError(ConfigError):
    """Configuration file is missing, unreadable or not valid JSON.

    Attributes:
        path: The configuration file path.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot load configuration {path}: {reason}")


class ConfigKeyError(ConfigError):
    """Requested key path is absent from the configuration document.

    Attributes:
        key: Dotted key path that was looked up (e.g. 'version.major').
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"configuration key not found: {key}")


class ConfigValueError(ConfigError):
    """Configuration value has the wrong type."""


class UnknownTargetError(ConfigError):
    """Architecture target is not defined in the configuration.

    Attributes:
        target: The requested target name.
        available: Target names the configuration does define.
    """

    def __init__(self, target: str, available: Sequence[str]) -> None:
        self.target = target
        self.available = list(available)
        super().__init__(f"Invalid target '{target}'")


class CommandError(ArchbuildError):
    """External command exited with a non-zero status or could not start.

    The exit status is propagated unchanged as the process exit code.

    Attributes:
        cmd: The argument vector that was run.
        returncode: Exit status of the command.
        reason: Why the command could not be started, or None if it ran.
    """

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int,
        reason: str | None = None,
    ) -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.reason = reason
        # Killed by signal N: report 128+N like a shell does
        self.exit_code = 128 - returncode if returncode < 0 else returncode
        cmdline = shlex.join(self.cmd)
        if reason is not None:
            message = f"cannot run {cmdline}: {reason}"
        else:
            message = f"command failed with exit status {returncode}: {cmdline}"
        super().__init__(message)
