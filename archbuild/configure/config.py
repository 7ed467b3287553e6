# SPDX-License-Identifier: MIT
"""Configuration document access for archbuild.

The BuildConfig class wraps the JSON document describing architecture
targets, the build directory, the artifact name prefix and the version
triple. Every lookup re-reads the file; nothing is cached between calls.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from archbuild.core.errors import (
    ConfigFileError,
    ConfigKeyError,
    ConfigValueError,
    UnknownTargetError,
)

DEFAULT_CONFIG_PATH = Path("config") / "config.json"


@dataclass(frozen=True)
class Version:
    """Semantic version triple stored under the 'version' key."""

    major: int
    minor: int
    build_number: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.build_number}"


@dataclass(frozen=True)
class ArchitectureSettings:
    """Per-architecture values resolved from the 'architectures' mapping.

    Attributes:
        name: Architecture name (the key in 'architectures').
        tool_prefix: Toolchain prefix, e.g. 'arm-none-eabi-'.
        cflags: Compiler flags, passed through as a single string.
        ldflags: Linker flags, passed through as a single string.
    """

    name: str
    tool_prefix: str
    cflags: str
    ldflags: str


class BuildConfig:
    """Accessor for the configuration document.

    Example:
        config = BuildConfig("config/config.json")
        prefix = config.get("build_name_prefix")
        arm = config.architecture_settings("arm")

    The document is re-read for every lookup, so a single run observes
    edits made between lookups. Concurrent writers are not supported.

    Attributes:
        path: Path to the JSON document.
    """

    def __init__(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        """Read and parse the whole document.

        Raises:
            ConfigFileError: If the file is missing, unreadable or not a
                JSON object.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ConfigFileError(str(self.path), "file not found") from None
        except json.JSONDecodeError as e:
            raise ConfigFileError(str(self.path), f"invalid JSON ({e})") from None
        except OSError as e:
            raise ConfigFileError(str(self.path), e.strerror or str(e)) from None

        if not isinstance(data, dict):
            raise ConfigFileError(str(self.path), "top level is not a JSON object")
        return data

    def get(self, *keys: str) -> Any:
        """Look up a nested value.

        Args:
            keys: Path of object keys, outermost first.

        Returns:
            The value at that path.

        Raises:
            ConfigKeyError: If any key along the path is absent.
        """
        value: Any = self.load()
        for depth, key in enumerate(keys):
            if not isinstance(value, dict) or key not in value:
                raise ConfigKeyError(".".join(keys[: depth + 1]))
            value = value[key]
        return value

    def get_str(self, *keys: str) -> str:
        value = self.get(*keys)
        if not isinstance(value, str):
            raise ConfigValueError(f"{'.'.join(keys)} must be a string")
        return value

    def get_int(self, *keys: str) -> int:
        value = self.get(*keys)
        # bool is an int subclass, but true/false is never a version number
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValueError(f"{'.'.join(keys)} must be an integer")
        return value

    @property
    def build_dir(self) -> str:
        return self.get_str("build_dir")

    @property
    def build_name_prefix(self) -> str:
        return self.get_str("build_name_prefix")

    def version(self) -> Version:
        return Version(
            major=self.get_int("version", "major"),
            minor=self.get_int("version", "minor"),
            build_number=self.get_int("version", "build_number"),
        )

    def architecture_names(self) -> list[str]:
        """Get the sorted names of all configured architectures."""
        architectures = self.get("architectures")
        if not isinstance(architectures, dict):
            raise ConfigValueError("architectures must be a JSON object")
        return sorted(architectures)

    def has_architecture(self, name: str) -> bool:
        return name in self.architecture_names()

    def architecture(self, name: str) -> dict[str, Any]:
        """Get the raw per-architecture object.

        Raises:
            UnknownTargetError: If no architecture has this name.
        """
        architectures = self.get("architectures")
        if not isinstance(architectures, dict):
            raise ConfigValueError("architectures must be a JSON object")
        if name not in architectures:
            raise UnknownTargetError(name, sorted(architectures))
        return architectures[name]

    def architecture_settings(self, name: str) -> ArchitectureSettings:
        """Resolve toolchain prefix and flags for one architecture."""
        # Existence check first so an unknown name reports the valid ones
        self.architecture(name)
        return ArchitectureSettings(
            name=name,
            tool_prefix=self.get_str("architectures", name, "toolchain", "tool"),
            cflags=self.get_str("architectures", name, "cflags"),
            ldflags=self.get_str("architectures", name, "ldflags"),
        )

    def update(self, mutator: Callable[[dict[str, Any]], None]) -> None:
        """Read, modify and atomically replace the document.

        The new content is written to a temporary file in the same
        directory and moved over the original with os.replace, so readers
        never see a partially written document.

        Args:
            mutator: Called with the parsed document; modifies it in place.
        """
        data = self.load()
        mutator(data)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def __repr__(self) -> str:
        return f"BuildConfig(path={str(self.path)!r})"
