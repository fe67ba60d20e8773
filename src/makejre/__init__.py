"""Build minimal Java runtime images and package them for distribution."""

from makejre.errors import MakeJreError
from makejre.params import BuildParameters, validate_arguments
from makejre.pipeline import BuildResult, run_build

__version__ = "0.1.0"

__all__ = [
    "BuildParameters",
    "BuildResult",
    "MakeJreError",
    "run_build",
    "validate_arguments",
]
