# SPDX-License-Identifier: MIT
"""Clean and build pipelines.

Both pipelines export their settings through an Environment and hand the
actual work to make, which reads CC, AS, SIZE, CFLAGS, LDFLAGS,
BUILD_DIR, ARCH and TARGET from its environment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

from archbuild.configure.config import ArchitectureSettings, BuildConfig, Version
from archbuild.core.environment import Environment
from archbuild.options import Options
from archbuild.toolchains.gcc import GccCrossToolchain
from archbuild.util.commands import CommandRunner

logger = logging.getLogger(__name__)

MAKE = "make"


def compose_target_name(prefix: str, arch: str, version: Version) -> str:
    """Build the artifact name, e.g. 'fw_arm_v1.2.41'."""
    return f"{prefix}_{arch}_v{version.major}.{version.minor}.{version.build_number}"


def artifact_path(build_dir: str, arch: str, target_name: str) -> str:
    """Path of the linked artifact: {build_dir}/{arch}/{target_name}."""
    return str(PurePosixPath(build_dir) / arch / target_name)


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a build pipeline run.

    Attributes:
        settings: Resolved per-architecture settings.
        target_name: Composed artifact name.
        artifact: Path the artifact is expected at.
        env: Variables exported to make and readelf.
    """

    settings: ArchitectureSettings
    target_name: str
    artifact: str
    env: Environment


def clean_pipeline(
    options: Options, config: BuildConfig, runner: CommandRunner
) -> Environment:
    """Run 'make clean' for the selected target."""
    logger.info("Cleaning build artifacts for target: %s", options.target)

    env = Environment()
    env.export("BUILD_DIR", config.build_dir)
    env.export("ARCH", options.target)

    runner.run([MAKE, "clean"], env=env)
    return env


def build_pipeline(
    options: Options, config: BuildConfig, runner: CommandRunner
) -> BuildResult:
    """Export the toolchain environment, run make, then inspect the artifact.

    The ELF inspection goes through the runner like every other command,
    so a dry run executes nothing.

    Raises:
        UnknownTargetError: If the target is not configured.
        ConfigKeyError: If a required configuration value is absent.
        CommandError: If make or readelf fails.
    """
    arch = options.target
    logger.info("Loading configuration for target: %s", arch)

    settings = config.architecture_settings(arch)
    build_dir = config.build_dir
    prefix = config.build_name_prefix
    version = config.version()

    target_name = compose_target_name(prefix, arch, version)
    toolchain = GccCrossToolchain(settings.tool_prefix)

    env = Environment()
    env.set_toolchain(toolchain)
    env.export("CFLAGS", settings.cflags)
    env.export("LDFLAGS", settings.ldflags)
    env.export("BUILD_DIR", build_dir)
    env.export("ARCH", arch)
    env.export("TARGET", target_name)

    logger.info("Toolchain prefix: %s", settings.tool_prefix)
    logger.info("CFLAGS: %s", settings.cflags)
    logger.info("LDFLAGS: %s", settings.ldflags)
    logger.info("BUILD_DIR: %s", build_dir)
    logger.info("ARCH: %s", arch)
    logger.info("TARGET: %s", target_name)

    runner.run([MAKE], env=env)

    artifact = artifact_path(build_dir, arch, target_name)
    runner.run(toolchain.readelf_cmd(artifact), env=env)

    return BuildResult(
        settings=settings, target_name=target_name, artifact=artifact, env=env
    )
