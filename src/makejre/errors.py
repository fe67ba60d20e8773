"""Exception hierarchy for runtime-image builds."""

from __future__ import annotations


class MakeJreError(Exception):
    """Base class for every failure that should end a build with exit code 1."""


class ArgumentError(MakeJreError):
    """A command-line argument is missing or malformed."""


class InputNotFoundError(ArgumentError):
    """An archive or list file named on the command line does not exist."""


class MalformedInputError(MakeJreError):
    """A copy-list line does not have the ``source;destination`` shape."""

    def __init__(self, line: str, line_no: int) -> None:
        super().__init__(f"malformed line in copy list (line {line_no}): {line}")
        self.line = line
        self.line_no = line_no


class ModuleListError(MakeJreError):
    """Requested modules are not present on the module path."""

    def __init__(self, unknown: list[str]) -> None:
        super().__init__(f"modules not found on the module path: {','.join(unknown)}")
        self.unknown = unknown


class ExtractionError(MakeJreError):
    """An archive could not be extracted into the expected single-root layout."""


class LinkerError(MakeJreError):
    """The runtime linker is missing or exited with a non-zero status."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class CopyError(MakeJreError):
    """A copy-list source or destination directory does not exist."""
