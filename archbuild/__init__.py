# SPDX-License-Identifier: MIT
"""
archbuild: cross-compilation build wrapper.

Reads architecture targets from a JSON configuration file, exports the
matching toolchain environment and drives make and readelf.
"""

from __future__ import annotations

__version__ = "0.1.0"

from archbuild.configure.config import BuildConfig  # noqa: E402
from archbuild.options import Options, parse_args  # noqa: E402
from archbuild.util.commands import CommandRunner  # noqa: E402

__all__ = [
    "__version__",
    "BuildConfig",
    "CommandRunner",
    "Options",
    "parse_args",
]
