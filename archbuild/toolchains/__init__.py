# SPDX-License-Identifier: MIT
"""Toolchain definitions."""

from archbuild.toolchains.gcc import GccCrossToolchain

__all__ = [
    "GccCrossToolchain",
]
