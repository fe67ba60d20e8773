"""Validation of the positional build arguments."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from makejre.errors import ArgumentError, InputNotFoundError

OutputKind = Literal["tar.gz", "zip"]
OUTPUT_KINDS: tuple[str, ...] = ("tar.gz", "zip")
NULL_SENTINEL = "null"


@dataclass(frozen=True, slots=True)
class BuildParameters:
    """Validated inputs for one runtime-image build."""

    output_kind: OutputKind
    output_dir: Path
    jdk_archive: Path
    jfx_archive: Path | None
    module_list: Path
    copy_list: Path | None = None

    @property
    def output_parent(self) -> Path:
        return self.output_dir.parent

    @property
    def output_name(self) -> str:
        return self.output_dir.name


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _require_file(value: str, missing_message: str) -> Path:
    path = Path(value)
    if not path.is_file():
        raise InputNotFoundError(f"{missing_message} {value}")
    return path


def validate_output_kind(value: str | None) -> OutputKind:
    """Return the output kind, or fail if it is absent or not a known kind."""

    if _is_blank(value):
        raise ArgumentError("no output kind was specified.")
    if value not in OUTPUT_KINDS:
        raise ArgumentError("the output kind must be one of { tar.gz, zip }.")
    return cast(OutputKind, value)


def validate_output_dir(value: str | None) -> Path:
    """Return the output directory, which must name a parent directory."""

    if _is_blank(value):
        raise ArgumentError("no output directory was specified.")
    output_dir = Path(value)
    if output_dir.parent == Path(".") or output_dir.name == "":
        raise ArgumentError("the pathname of the output directory must include a parent.")
    return output_dir


def validate_arguments(
    output_kind: str | None,
    output_dir: str | None,
    jdk_archive: str | None,
    jfx_archive: str | None,
    module_list: str | None,
    copy_list: str | None = None,
    *,
    null_sentinel: str = NULL_SENTINEL,
) -> BuildParameters:
    """Validate the positional arguments in order and stop at the first failure.

    Only existence checks touch the filesystem; nothing is created or removed.
    """

    kind = validate_output_kind(output_kind)
    out_dir = validate_output_dir(output_dir)

    if _is_blank(jdk_archive):
        raise ArgumentError("no JDK archive was specified.")
    jdk_path = _require_file(jdk_archive, "no JDK archive was found at")

    if _is_blank(jfx_archive):
        raise ArgumentError("no JavaFX JMODs archive was specified.")
    jfx_path: Path | None = None
    if jfx_archive != null_sentinel:
        jfx_path = _require_file(jfx_archive, "no JavaFX JMODs archive was found at")

    if _is_blank(module_list):
        raise ArgumentError("no module-list file was specified.")
    module_list_path = _require_file(module_list, "no module-list file was found at")

    copy_list_path: Path | None = None
    if not _is_blank(copy_list):
        copy_list_path = _require_file(copy_list, "no copy-list file was found at")

    return BuildParameters(
        output_kind=kind,
        output_dir=out_dir,
        jdk_archive=jdk_path,
        jfx_archive=jfx_path,
        module_list=module_list_path,
        copy_list=copy_list_path,
    )
