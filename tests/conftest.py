from __future__ import annotations

import io
import subprocess
import tarfile
import zipfile
from pathlib import Path

import pytest

from makejre.config import AppSettings, load_settings
from makejre.platform import PlatformProfile, detect_platform

JDK_ROOT_NAME = "jdk-21.0.2"
JFX_ROOT_NAME = "javafx-jmods-21.0.2"
JDK_MODULES = ("java.base", "java.logging", "java.desktop")
JFX_MODULES = ("javafx.base", "javafx.graphics")


def _add_bytes(tar: tarfile.TarFile, name: str, data: bytes, mode: int = 0o644) -> None:
    info = tarfile.TarInfo(name)
    info.size = len(data)
    info.mode = mode
    tar.addfile(info, io.BytesIO(data))


def _add_dir(tar: tarfile.TarFile, name: str) -> None:
    info = tarfile.TarInfo(name)
    info.type = tarfile.DIRTYPE
    info.mode = 0o755
    tar.addfile(info)


def _src_zip_bytes() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("java.base/java/lang/Object.java", "package java.lang;\npublic class Object {}\n")
    return buffer.getvalue()


@pytest.fixture
def inputs_dir(tmp_path: Path) -> Path:
    path = tmp_path / "inputs"
    path.mkdir()
    return path


@pytest.fixture
def jdk_archive(inputs_dir: Path) -> Path:
    """A tiny JDK tarball with jmods, a linker stub, and lib/src.zip."""

    archive = inputs_dir / "openjdk-21_linux-x64_bin.tar.gz"
    with tarfile.open(archive, "w:gz") as tar:
        for directory in ("", "/bin", "/jmods", "/lib"):
            _add_dir(tar, f"{JDK_ROOT_NAME}{directory}")
        _add_bytes(tar, f"{JDK_ROOT_NAME}/bin/jlink", b"#!/bin/sh\nexit 0\n", mode=0o755)
        for module in JDK_MODULES:
            _add_bytes(tar, f"{JDK_ROOT_NAME}/jmods/{module}.jmod", b"JM\x01\x00")
        _add_bytes(tar, f"{JDK_ROOT_NAME}/lib/src.zip", _src_zip_bytes())
    return archive


@pytest.fixture
def jfx_archive(inputs_dir: Path) -> Path:
    archive = inputs_dir / "openjfx-21_linux-x64_bin-jmods.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for module in JFX_MODULES:
            zf.writestr(f"{JFX_ROOT_NAME}/{module}.jmod", b"JM\x01\x00")
    return archive


@pytest.fixture
def module_list(inputs_dir: Path) -> Path:
    path = inputs_dir / "modules.txt"
    path.write_text("java.base\n\njava.logging\n", encoding="utf-8")
    return path


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dist"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return load_settings(config_file=tmp_path / "absent-settings.yaml")


@pytest.fixture
def linux() -> PlatformProfile:
    return detect_platform("linux")


class FakeLinker:
    """Stands in for ``subprocess.run`` and lays out a minimal runtime image."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.commands: list[list[str]] = []

    def __call__(self, command: list[str], check: bool = False) -> subprocess.CompletedProcess[bytes]:
        self.commands.append(list(command))
        if self.returncode == 0:
            output = Path(next(arg for arg in command if arg.startswith("--output=")).split("=", 1)[1])
            output.mkdir()
            (output / "bin").mkdir()
            (output / "lib").mkdir()
            (output / "conf").mkdir()
            (output / "release").write_text('JAVA_VERSION="21.0.2"\n', encoding="utf-8")
        return subprocess.CompletedProcess(command, self.returncode)

    def option(self, name: str) -> str:
        prefix = f"--{name}="
        return next(arg[len(prefix):] for arg in self.commands[-1] if arg.startswith(prefix))


@pytest.fixture
def fake_linker(monkeypatch: pytest.MonkeyPatch) -> FakeLinker:
    linker = FakeLinker()
    monkeypatch.setattr("makejre.linker.subprocess.run", linker)
    return linker


@pytest.fixture
def failing_linker(monkeypatch: pytest.MonkeyPatch) -> FakeLinker:
    linker = FakeLinker(returncode=1)
    monkeypatch.setattr("makejre.linker.subprocess.run", linker)
    return linker
