# SPDX-License-Identifier: MIT
"""Exported build environment.

An Environment collects the variables handed to the external build tool
(CC, CFLAGS, BUILD_DIR, ...). It never touches os.environ; commands get
the caller's environment with these variables layered on top.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping

from archbuild.toolchains.gcc import GccCrossToolchain


class Environment:
    """Ordered set of exported variables.

    Example:
        env = Environment()
        env.export("ARCH", "arm")
        env.set_toolchain(GccCrossToolchain("arm-none-eabi-"))
        subprocess.run(["make"], env=env.merged())
    """

    __slots__ = ("_vars",)

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        self._vars: dict[str, str] = dict(variables or {})

    def export(self, name: str, value: str) -> None:
        self._vars[name] = str(value)

    def set_toolchain(self, toolchain: GccCrossToolchain) -> None:
        """Export the compiler, assembler and size tool of a toolchain."""
        self.export("CC", toolchain.cc)
        self.export("AS", toolchain.as_)
        self.export("SIZE", toolchain.size)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._vars.get(name, default)

    def __getitem__(self, name: str) -> str:
        return self._vars[name]

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def as_dict(self) -> dict[str, str]:
        return dict(self._vars)

    def merged(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Get a full process environment with the exports applied.

        Args:
            base: Environment to start from (default: os.environ).

        Returns:
            A new dict; neither base nor this environment is modified.
        """
        result = dict(os.environ if base is None else base)
        result.update(self._vars)
        return result

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self._vars.items())
        return f"Environment({items})"
