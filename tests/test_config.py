from __future__ import annotations

from pathlib import Path

import pytest

from makejre.config import load_settings
from makejre.errors import MakeJreError
from makejre.platform import detect_platform, get_os


def test_defaults_without_settings_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MAKEJRE_LINKER__CHECK_MODULES", raising=False)
    settings = load_settings(config_file=tmp_path / "configs" / "settings.yaml")

    assert settings.workspace.temp_jdk_dir_name == "$temp-jdk$"
    assert settings.workspace.temp_jfx_dir_name == "$temp-jfx$"
    assert settings.workspace.null_sentinel == "null"
    assert settings.linker.extra_args == []
    assert settings.linker.check_modules is False
    assert settings.paths.logs_root == (tmp_path / "logs").resolve()


def test_yaml_and_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    settings_file = tmp_path / "configs" / "settings.yaml"
    settings_file.parent.mkdir()
    settings_file.write_text(
        "linker:\n  extra_args: ['--strip-debug', '--no-man-pages']\narchive:\n  gzip_compresslevel: 6\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MAKEJRE_LINKER__CHECK_MODULES", "true")

    settings = load_settings(config_file=settings_file)

    assert settings.linker.extra_args == ["--strip-debug", "--no-man-pages"]
    assert settings.linker.check_modules is True
    assert settings.archive.gzip_compresslevel == 6


@pytest.mark.parametrize(
    ("platform", "expected"),
    [("linux", "linux"), ("darwin", "darwin"), ("win32", "windows"), ("cygwin", "windows")],
)
def test_get_os(platform: str, expected: str) -> None:
    assert get_os(platform) == expected


def test_detect_platform_profiles() -> None:
    windows = detect_platform("windows")
    assert (windows.tag, windows.path_separator, windows.linker_name) == ("windows", ";", "jlink.exe")
    with pytest.raises(MakeJreError, match="unknown platform tag"):
        detect_platform("plan9")
