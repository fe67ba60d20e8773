"""Shared utility helpers."""

from makejre.utils.paths import recreate_directory, remove_path, write_json_atomically

__all__ = [
    "recreate_directory",
    "remove_path",
    "write_json_atomically",
]
