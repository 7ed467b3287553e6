# SPDX-License-Identifier: MIT
"""Build number increment."""

from __future__ import annotations

import logging
from typing import Any

from archbuild.configure.config import BuildConfig
from archbuild.core.errors import ConfigKeyError, ConfigValueError

logger = logging.getLogger(__name__)


def increment_build_number(config: BuildConfig) -> tuple[int, int]:
    """Add one to version.build_number and rewrite the document atomically.

    The value is re-read inside the update, so the increment applies to
    what is on disk at write time.

    Returns:
        The (old, new) build numbers.

    Raises:
        ConfigKeyError: If version.build_number is absent.
        ConfigValueError: If it is not a non-negative integer.
    """
    numbers: list[int] = []

    def bump(data: dict[str, Any]) -> None:
        version = data.get("version")
        if not isinstance(version, dict) or "build_number" not in version:
            raise ConfigKeyError("version.build_number")
        current = version["build_number"]
        if isinstance(current, bool) or not isinstance(current, int) or current < 0:
            raise ConfigValueError(
                "version.build_number must be a non-negative integer"
            )
        version["build_number"] = current + 1
        numbers.extend((current, current + 1))

    config.update(bump)

    old, new = numbers
    logger.info("Incremented build number: %d → %d", old, new)
    return old, new
