"""Module-list reading and optional module-path checks."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

LOGGER = logging.getLogger(__name__)

JMOD_SUFFIX = ".jmod"


def read_module_list(path: Path, logger: logging.Logger | None = None) -> list[str]:
    """Read module names in file order, skipping empty and whitespace-only lines."""

    effective_logger = logger or LOGGER
    effective_logger.info("modules.read path=%s", path)
    names = [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip() != ""]
    effective_logger.debug("modules.read_done count=%s", len(names))
    return names


def join_modules(names: Sequence[str]) -> str:
    """Join module names into a single ``--add-modules`` value."""

    return ",".join(name for name in names if name != "")


def available_modules(module_dirs: Iterable[Path]) -> set[str]:
    """Return the names of all JMOD files found in the given directories."""

    found: set[str] = set()
    for directory in module_dirs:
        if not directory.is_dir():
            continue
        found.update(path.name[: -len(JMOD_SUFFIX)] for path in directory.glob(f"*{JMOD_SUFFIX}"))
    return found


def find_unknown_modules(names: Sequence[str], module_dirs: Iterable[Path]) -> list[str]:
    """Return requested names with no matching JMOD, keeping request order."""

    known = available_modules(module_dirs)
    unknown: list[str] = []
    for name in names:
        if name not in known and name not in unknown:
            unknown.append(name)
    return unknown
