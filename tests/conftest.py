# SPDX-License-Identifier: MIT
"""Shared fixtures for archbuild tests."""

from __future__ import annotations

import copy
import json
import logging
import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

SAMPLE_CONFIG: dict[str, Any] = {
    "build_dir": "build",
    "build_name_prefix": "fw",
    "version": {"major": 1, "minor": 2, "build_number": 41},
    "architectures": {
        "arm": {
            "toolchain": {"tool": "arm-none-eabi-"},
            "cflags": "-mcpu=cortex-m4 -O2",
            "ldflags": "-Wl,--gc-sections",
        },
        "riscv": {
            "toolchain": {"tool": "riscv64-unknown-elf-"},
            "cflags": "-march=rv32imac -mabi=ilp32",
            "ldflags": "-nostartfiles",
        },
    },
}


def write_config(path: Path, data: dict[str, Any] | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SAMPLE_CONFIG if data is None else data, indent=2))
    return path


@pytest.fixture
def sample_config() -> dict[str, Any]:
    """A fresh deep copy of the sample configuration document."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A sample configuration document at tmp_path/config/config.json."""
    return write_config(tmp_path / "config" / "config.json")


@pytest.fixture
def make_config(tmp_path: Path):
    """Factory writing a custom configuration document under tmp_path."""

    def make(data: dict[str, Any], name: str = "custom.json") -> Path:
        return write_config(tmp_path / name, data)

    return make


@pytest.fixture
def fake_run():
    """Patch subprocess.run in the command runner to succeed without running."""
    with patch("archbuild.util.commands.subprocess.run") as mock:
        mock.side_effect = lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0)
        yield mock


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() so handlers never outlive a test's capture."""
    yield
    logger = logging.getLogger("archbuild")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
