"""Creation of the distributable runtime-image archives."""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
import zipfile
from pathlib import Path

from makejre.config import ArchiveConfig, JdkLayoutConfig
from makejre.params import OutputKind
from makejre.utils.paths import remove_path

LOGGER = logging.getLogger(__name__)


def archive_file_name(output_name: str, platform_tag: str, kind: OutputKind, *, with_source: bool) -> str:
    """Return ``<name>-<tag>[-src].<kind>``."""

    suffix = "-src" if with_source else ""
    return f"{output_name}-{platform_tag}{suffix}.{kind}"


def _neutral_owner(member: tarfile.TarInfo) -> tarfile.TarInfo:
    member.uid = 0
    member.gid = 0
    member.uname = ""
    member.gname = ""
    return member


def _write_tar_gz(output_dir: Path, archive_path: Path, compresslevel: int) -> None:
    with tarfile.open(archive_path, "w:gz", compresslevel=compresslevel) as tar:
        tar.add(output_dir, arcname=output_dir.name, filter=_neutral_owner)


def _write_zip(output_dir: Path, archive_path: Path, compresslevel: int | None) -> None:
    root = output_dir.parent
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compresslevel) as zf:
        for dirpath, dirnames, filenames in os.walk(output_dir, followlinks=True):
            dirnames.sort()
            current = Path(dirpath)
            # ZipFile.write keeps the Unix mode and emits directory entries for directories.
            zf.write(current, current.relative_to(root).as_posix())
            for filename in sorted(filenames):
                file_path = current / filename
                zf.write(file_path, file_path.relative_to(root).as_posix())


def create_archive(
    output_dir: Path,
    kind: OutputKind,
    archive_path: Path,
    *,
    settings: ArchiveConfig | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """Archive ``output_dir`` so that every entry is rooted at its leaf name.

    Any existing file at ``archive_path`` is replaced.
    """

    effective_logger = logger or LOGGER
    archive_settings = settings or ArchiveConfig()
    if remove_path(archive_path):
        effective_logger.info("archive.previous_removed path=%s", archive_path)

    effective_logger.info("archive.create path=%s kind=%s", archive_path, kind)
    if kind == "tar.gz":
        _write_tar_gz(output_dir, archive_path, archive_settings.gzip_compresslevel)
    else:
        _write_zip(output_dir, archive_path, archive_settings.zip_compresslevel)
    return archive_path


def add_source_archive(
    jdk_root: Path,
    output_dir: Path,
    layout: JdkLayoutConfig | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """Copy the JDK's bundled source archive into the image's library directory."""

    effective_logger = logger or LOGGER
    jdk_layout = layout or JdkLayoutConfig()
    source = jdk_root / jdk_layout.lib_dir / jdk_layout.source_archive
    dest_dir = output_dir / jdk_layout.lib_dir
    effective_logger.info("archive.add_source source=%s dest=%s", source, dest_dir)
    return Path(shutil.copy(source, dest_dir))
