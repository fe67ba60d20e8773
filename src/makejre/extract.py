"""Extraction of JDK and JavaFX archives into scratch directories."""

from __future__ import annotations

import logging
import os
import tarfile
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Any

from makejre.errors import ExtractionError
from makejre.utils.paths import recreate_directory, remove_path

LOGGER = logging.getLogger(__name__)

ZIP_SUFFIXES: tuple[str, ...] = (".zip", ".jar")


class Extractor(ABC):
    """Extracts one archive after rejecting members that would escape the destination."""

    def __init__(self, src: Path) -> None:
        self.src = src

    def extract(self, dst: Path) -> None:
        with self._open() as ar:
            problematic = [name for name in self._getnames(ar) if not Extractor.is_sane_name(name)]
            if problematic:
                raise ExtractionError(
                    f"refusing to extract {self.src}: entries with absolute paths or parent references: "
                    + ", ".join(problematic)
                )
            self._extractall(ar, dst)

    @abstractmethod
    def _open(self) -> Any:
        ...

    @abstractmethod
    def _getnames(self, ar: Any) -> list[str]:
        ...

    @abstractmethod
    def _extractall(self, ar: Any, dst: Path) -> None:
        ...

    @staticmethod
    def is_sane_name(name: str) -> bool:
        member = PurePosixPath(name.replace("\\", "/"))
        if member.is_absolute() or (member.parts and member.parts[0].endswith(":")):
            return False
        return ".." not in member.parts

    @staticmethod
    def create(src: Path) -> "Extractor":
        """Pick an extractor from the archive's content; the file name only decides which format is tried first."""

        candidates: list[tuple[Any, type[Extractor]]] = [
            (tarfile.is_tarfile, TarExtractor),
            (zipfile.is_zipfile, ZipExtractor),
        ]
        if src.name.lower().endswith(ZIP_SUFFIXES):
            candidates.reverse()
        for matches, extractor_cls in candidates:
            if matches(src):
                return extractor_cls(src)
        raise ExtractionError(f"don't know how to extract the archive: {src}")


class TarExtractor(Extractor):
    def _open(self) -> tarfile.TarFile:
        return tarfile.open(self.src)

    def _getnames(self, ar: tarfile.TarFile) -> list[str]:
        return ar.getnames()

    def _extractall(self, ar: tarfile.TarFile, dst: Path) -> None:
        # "tar" keeps executable bits and relative symlinks found in JDK bundles.
        ar.extractall(dst, filter="tar")


class ZipExtractor(Extractor):
    def _open(self) -> zipfile.ZipFile:
        return zipfile.ZipFile(self.src)

    def _getnames(self, ar: zipfile.ZipFile) -> list[str]:
        return ar.namelist()

    def _extractall(self, ar: zipfile.ZipFile, dst: Path) -> None:
        # ZipFile.extractall drops permissions.
        for zipinfo in ar.infolist():
            extract_and_preserve_permissions(ar, zipinfo, dst)


def extract_and_preserve_permissions(zf: zipfile.ZipFile, zipinfo: zipfile.ZipInfo, destination: Path) -> str:
    """Extract one zip member and restore the Unix mode stored in its header."""

    extracted_file = zf.extract(zipinfo, destination)
    unix_attributes = (zipinfo.external_attr >> 16) & 0o7777
    if unix_attributes != 0:
        os.chmod(extracted_file, unix_attributes)
    return extracted_file


def single_child_directory(root: Path) -> Path:
    """Return the only entry of ``root``, which must be a directory."""

    children = sorted(root.iterdir())
    if len(children) != 1:
        names = ", ".join(child.name for child in children) or "<empty>"
        raise ExtractionError(
            f"expected exactly one top-level directory in {root}, found {len(children)}: {names}"
        )
    child = children[0]
    if not child.is_dir():
        raise ExtractionError(f"expected a top-level directory in {root}, found file {child.name}")
    return child


def extract_archive(archive: Path, temp_root: Path, logger: logging.Logger | None = None) -> Path:
    """Extract ``archive`` into a fresh ``temp_root`` and return the archive's root directory."""

    effective_logger = logger or LOGGER
    if temp_root.exists():
        effective_logger.info("extract.stale_temp_removed path=%s", temp_root)
    effective_logger.info("extract.temp_dir_created path=%s", temp_root)
    recreate_directory(temp_root)

    effective_logger.info("extract.start archive=%s dest=%s", archive, temp_root)
    Extractor.create(archive).extract(temp_root)
    root = single_child_directory(temp_root)
    effective_logger.debug("extract.root_resolved archive=%s root=%s", archive, root)
    return root


def remove_temp_dir(temp_root: Path, logger: logging.Logger | None = None) -> None:
    """Delete a scratch extraction root; a missing directory is not an error."""

    effective_logger = logger or LOGGER
    if remove_path(temp_root):
        effective_logger.info("cleanup.temp_dir path=%s", temp_root)
