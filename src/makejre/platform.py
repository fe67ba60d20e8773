"""Host platform profiles used to parameterize the build pipeline."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from makejre.errors import MakeJreError


@dataclass(frozen=True, slots=True)
class PlatformProfile:
    """Host-specific separators, executable names, and the archive tag."""

    tag: str
    path_separator: str
    linker_name: str


PROFILES: dict[str, PlatformProfile] = {
    "linux": PlatformProfile(tag="linux", path_separator=":", linker_name="jlink"),
    "darwin": PlatformProfile(tag="darwin", path_separator=":", linker_name="jlink"),
    "windows": PlatformProfile(tag="windows", path_separator=";", linker_name="jlink.exe"),
}


def get_os(platform: str | None = None) -> str:
    """Return a canonical operating system name for ``sys.platform``."""

    value = platform or sys.platform
    if value.startswith("linux"):
        return "linux"
    if value.startswith("darwin"):
        return "darwin"
    if value.startswith(("win32", "cygwin")):
        return "windows"
    raise MakeJreError(f"unsupported operating system: {value}")


def detect_platform(tag_override: str | None = None) -> PlatformProfile:
    """Return the profile for the override tag, or for the running host."""

    tag = tag_override or get_os()
    try:
        return PROFILES[tag]
    except KeyError as exc:
        allowed = ", ".join(sorted(PROFILES))
        raise MakeJreError(f"unknown platform tag {tag!r}; expected one of: {allowed}") from exc
