# SPDX-License-Identifier: MIT
"""GNU cross toolchain naming.

A cross toolchain is selected by a prefix prepended to the standard GNU
tool basenames:
- C compiler (gcc)
- Assembler (as)
- Size tool (size)
- ELF inspector (readelf)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GccCrossToolchain:
    """GNU toolchain addressed by a tool prefix.

    An empty prefix selects the host tools.

    Example:
        tc = GccCrossToolchain("arm-none-eabi-")
        tc.cc       # 'arm-none-eabi-gcc'
        tc.readelf  # 'arm-none-eabi-readelf'

    Attributes:
        prefix: String prepended to each tool basename.
    """

    prefix: str = ""

    def tool(self, basename: str) -> str:
        """Get the command name for a tool basename."""
        return f"{self.prefix}{basename}"

    @property
    def cc(self) -> str:
        return self.tool("gcc")

    @property
    def as_(self) -> str:
        return self.tool("as")

    @property
    def size(self) -> str:
        return self.tool("size")

    @property
    def readelf(self) -> str:
        return self.tool("readelf")

    def readelf_cmd(self, path: str) -> list[str]:
        """Command listing program headers and sections of an ELF file."""
        return [self.readelf, "-l", "-S", path]
