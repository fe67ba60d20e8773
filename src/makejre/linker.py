"""Invocation of the JDK runtime linker (jlink)."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from makejre.config import JdkLayoutConfig
from makejre.errors import LinkerError
from makejre.platform import PlatformProfile
from makejre.utils.paths import remove_path

LOGGER = logging.getLogger(__name__)


def jdk_module_dir(jdk_root: Path, layout: JdkLayoutConfig | None = None) -> Path:
    return jdk_root / (layout or JdkLayoutConfig()).jmods_dir


def module_path_dirs(
    jdk_root: Path,
    jfx_root: Path | None,
    layout: JdkLayoutConfig | None = None,
) -> list[Path]:
    """Return the module-path directories in search order."""

    dirs = [jdk_module_dir(jdk_root, layout)]
    if jfx_root is not None:
        dirs.append(jfx_root)
    return dirs


def build_module_path(
    jdk_root: Path,
    jfx_root: Path | None,
    platform: PlatformProfile,
    layout: JdkLayoutConfig | None = None,
) -> str:
    """Join the JDK and optional JavaFX module directories with the platform separator."""

    return platform.path_separator.join(str(path) for path in module_path_dirs(jdk_root, jfx_root, layout))


def linker_path(jdk_root: Path, platform: PlatformProfile, layout: JdkLayoutConfig | None = None) -> Path:
    return jdk_root / (layout or JdkLayoutConfig()).bin_dir / platform.linker_name


def build_linker_command(
    linker: Path,
    output_dir: Path,
    module_path: str,
    modules: str,
    extra_args: Sequence[str] = (),
) -> list[str]:
    return [
        str(linker),
        f"--output={output_dir}",
        f"--module-path={module_path}",
        f"--add-modules={modules}",
        *extra_args,
    ]


def run_linker(
    linker: Path,
    output_dir: Path,
    module_path: str,
    modules: str,
    *,
    extra_args: Sequence[str] = (),
    logger: logging.Logger | None = None,
) -> list[str]:
    """Write a runtime image to ``output_dir`` and return the command that was run.

    jlink refuses to write into an existing directory, so any previous output is deleted first.
    """

    effective_logger = logger or LOGGER
    if remove_path(output_dir):
        effective_logger.info("link.previous_output_removed path=%s", output_dir)

    command = build_linker_command(linker, output_dir, module_path, modules, extra_args)
    effective_logger.info("link.start output=%s", output_dir)
    effective_logger.debug("link.command %s", " ".join(command))
    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise LinkerError(f"could not run the linker at {linker}: {exc}") from exc

    if completed.returncode != 0:
        raise LinkerError(
            f"the linker exited with status {completed.returncode} while writing {output_dir}",
            returncode=completed.returncode,
        )
    effective_logger.info("link.done output=%s", output_dir)
    return command
