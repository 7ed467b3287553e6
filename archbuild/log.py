# SPDX-License-Identifier: MIT
"""Logging setup for archbuild.

Records are written to standard output in one of two formats chosen once
at startup:

Human-readable:
    [LOG] Loading configuration for target: arm
    [DRY-RUN] Would run: make
    [EXEC] make

JSON lines:
    {"timestamp": "2026-01-02T10:00:00+01:00", "level": "info",
     "target": "arm", "message": "Loading configuration for target: arm"}

The record kind (info, dryrun, exec) is passed with extra={"kind": ...};
records without one are treated as info.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime

logger = logging.getLogger("archbuild")

INFO = "info"
DRYRUN = "dryrun"
EXEC = "exec"

HUMAN_PREFIXES = {
    INFO: "[LOG]",
    DRYRUN: "[DRY-RUN]",
    EXEC: "[EXEC]",
}


def record_kind(record: logging.LogRecord) -> str:
    return getattr(record, "kind", INFO)


class TargetFilter(logging.Filter):
    """Attach the current architecture target to every record."""

    def __init__(self, target: str = "") -> None:
        super().__init__()
        self.target = target

    def filter(self, record: logging.LogRecord) -> bool:
        record.target = self.target
        return True


class HumanFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        prefix = HUMAN_PREFIXES.get(record_kind(record), HUMAN_PREFIXES[INFO])
        return f"{prefix} {record.getMessage()}"


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Messages are serialized with json.dumps, so embedded quotes and
    backslashes are escaped.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = (
            datetime.fromtimestamp(record.created)
            .astimezone()
            .isoformat(timespec="seconds")
        )
        return json.dumps(
            {
                "timestamp": timestamp,
                "level": record_kind(record),
                "target": getattr(record, "target", ""),
                "message": record.getMessage(),
            },
            ensure_ascii=False,
        )


def setup_logging(json_log: bool = False, target: str = "") -> logging.Handler:
    """Configure the archbuild logger.

    Replaces any handler installed by a previous call, so it is safe to
    call more than once per process.

    Args:
        json_log: Emit JSON lines instead of prefixed text.
        target: Architecture target reported in JSON records.

    Returns:
        The installed handler.
    """
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if json_log else HumanFormatter())
    handler.addFilter(TargetFilter(target))

    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return handler
