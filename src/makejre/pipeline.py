"""Runtime-image build orchestration: extract, link, copy, archive, clean up."""

from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

from makejre.archive import add_source_archive, archive_file_name, create_archive
from makejre.config import AppSettings
from makejre.copy_list import apply_copy_list, read_copy_list
from makejre.errors import ModuleListError
from makejre.extract import extract_archive, remove_temp_dir
from makejre.linker import build_module_path, linker_path, module_path_dirs, run_linker
from makejre.modules import find_unknown_modules, join_modules, read_module_list
from makejre.params import BuildParameters
from makejre.platform import PlatformProfile, detect_platform
from makejre.utils.paths import remove_path

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Return object for a completed runtime-image build."""

    run_id: str
    platform_tag: str
    modules: str
    module_path: str
    archive_path: Path
    source_archive_path: Path
    elapsed_seconds: float

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["archive_path"] = str(self.archive_path)
        payload["source_archive_path"] = str(self.source_archive_path)
        return payload


def _remove_output_dir(output_dir: Path, logger: logging.Logger) -> None:
    logger.info("cleanup.output_dir path=%s", output_dir)
    remove_path(output_dir)


def run_build(
    params: BuildParameters,
    settings: AppSettings,
    *,
    platform: PlatformProfile | None = None,
    check_modules: bool | None = None,
    logger: logging.Logger | None = None,
) -> BuildResult:
    """Build the runtime image described by ``params`` and write both archives.

    Temporary extraction roots are removed on every exit path. The output directory is
    removed once linking has started, so a failure before that leaves an existing one alone.
    """

    effective_logger = logger or LOGGER
    profile = platform or detect_platform(settings.platform.tag)
    verify_modules = settings.linker.check_modules if check_modules is None else check_modules
    layout = settings.jdk_layout
    workspace = settings.workspace

    run_id = f"makejre-run-{uuid4().hex[:12]}"
    started_mono = time.monotonic()
    effective_logger.info(
        "build.start run_id=%s platform=%s kind=%s output=%s",
        run_id,
        profile.tag,
        params.output_kind,
        params.output_dir,
    )

    module_names = read_module_list(params.module_list, logger=effective_logger)
    modules = join_modules(module_names)
    directives = read_copy_list(params.copy_list) if params.copy_list is not None else []

    jdk_temp = params.output_parent / workspace.temp_jdk_dir_name
    jfx_temp = params.output_parent / workspace.temp_jfx_dir_name

    with ExitStack() as stack:
        # Callbacks run last-in first-out: output directory once linking started, JDK root, then JavaFX root.
        if params.jfx_archive is not None:
            stack.callback(remove_temp_dir, jfx_temp, effective_logger)
        stack.callback(remove_temp_dir, jdk_temp, effective_logger)

        jdk_root = extract_archive(params.jdk_archive, jdk_temp, logger=effective_logger)
        jfx_root: Path | None = None
        if params.jfx_archive is not None:
            jfx_root = extract_archive(params.jfx_archive, jfx_temp, logger=effective_logger)

        if verify_modules:
            unknown = find_unknown_modules(module_names, module_path_dirs(jdk_root, jfx_root, layout))
            if unknown:
                raise ModuleListError(unknown)

        module_path = build_module_path(jdk_root, jfx_root, profile, layout)
        # A pre-existing output directory is only touched once linking starts.
        stack.callback(_remove_output_dir, params.output_dir, effective_logger)
        run_linker(
            linker_path(jdk_root, profile, layout),
            params.output_dir,
            module_path,
            modules,
            extra_args=settings.linker.extra_args,
            logger=effective_logger,
        )

        apply_copy_list(directives, params.output_dir, logger=effective_logger)

        archive_path = create_archive(
            params.output_dir,
            params.output_kind,
            params.output_parent
            / archive_file_name(params.output_name, profile.tag, params.output_kind, with_source=False),
            settings=settings.archive,
            logger=effective_logger,
        )
        add_source_archive(jdk_root, params.output_dir, layout, logger=effective_logger)
        source_archive_path = create_archive(
            params.output_dir,
            params.output_kind,
            params.output_parent
            / archive_file_name(params.output_name, profile.tag, params.output_kind, with_source=True),
            settings=settings.archive,
            logger=effective_logger,
        )

    result = BuildResult(
        run_id=run_id,
        platform_tag=profile.tag,
        modules=modules,
        module_path=module_path,
        archive_path=archive_path,
        source_archive_path=source_archive_path,
        elapsed_seconds=round(time.monotonic() - started_mono, 3),
    )
    effective_logger.info(
        "build.done run_id=%s archive=%s source_archive=%s elapsed_seconds=%s",
        run_id,
        archive_path,
        source_archive_path,
        result.elapsed_seconds,
    )
    return result
