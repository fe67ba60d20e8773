"""Copy-list parsing and application to a linked runtime image."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from makejre.errors import CopyError, MalformedInputError

LOGGER = logging.getLogger(__name__)

SEPARATOR = ";"


@dataclass(frozen=True, slots=True)
class CopyDirective:
    """One ``source;destination`` line of a copy-list file."""

    source: Path
    destination: str
    line_no: int


def parse_copy_line(line: str, line_no: int) -> CopyDirective:
    """Split a copy-list line on its first separator and trim both fields."""

    source, sep, destination = line.partition(SEPARATOR)
    source = source.strip()
    destination = destination.strip()
    if not sep or destination == "":
        raise MalformedInputError(line, line_no)
    return CopyDirective(source=Path(source), destination=destination, line_no=line_no)


def read_copy_list(path: Path) -> list[CopyDirective]:
    """Parse every line of a copy-list file in file order."""

    text = path.read_text(encoding="utf-8")
    return [parse_copy_line(line, line_no) for line_no, line in enumerate(text.splitlines(), start=1)]


def apply_copy_list(
    directives: Iterable[CopyDirective],
    output_dir: Path,
    logger: logging.Logger | None = None,
) -> list[Path]:
    """Copy each source file into its destination directory under ``output_dir``.

    Destination directories are not created; they must already exist in the image.
    """

    effective_logger = logger or LOGGER
    copied: list[Path] = []
    for directive in directives:
        dest_dir = output_dir / directive.destination
        if not directive.source.is_file():
            raise CopyError(f"copy-list source not found (line {directive.line_no}): {directive.source}")
        if not dest_dir.is_dir():
            raise CopyError(f"copy-list destination is not a directory (line {directive.line_no}): {dest_dir}")
        effective_logger.info("copy.file source=%s dest=%s", directive.source, dest_dir)
        copied.append(Path(shutil.copy(directive.source, dest_dir)))
    return copied
