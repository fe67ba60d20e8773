"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "MAKEJRE_SETTINGS_FILE"


class ProjectConfig(BaseModel):
    """Project metadata settings."""

    name: str = "makejre"
    env: str = "dev"


class PathsConfig(BaseModel):
    """Filesystem paths used by the CLI itself."""

    logs_root: Path = Path("./logs")

    def resolved(self, project_root: Path) -> "PathsConfig":
        """Return a copy with project-relative paths resolved to absolute paths."""

        updates: dict[str, Path] = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            updates[field_name] = value if value.is_absolute() else (project_root / value).resolve()
        return self.model_copy(update=updates)


class PlatformConfig(BaseModel):
    """Host platform overrides."""

    tag: Literal["linux", "windows", "darwin"] | None = None


class WorkspaceConfig(BaseModel):
    """Names of the scratch directories created beside the output directory."""

    temp_jdk_dir_name: str = Field(default="$temp-jdk$", min_length=1)
    temp_jfx_dir_name: str = Field(default="$temp-jfx$", min_length=1)
    null_sentinel: str = Field(default="null", min_length=1)


class JdkLayoutConfig(BaseModel):
    """Relative locations inside an extracted JDK tree."""

    jmods_dir: str = "jmods"
    bin_dir: str = "bin"
    lib_dir: str = "lib"
    source_archive: str = "src.zip"


class LinkerConfig(BaseModel):
    """Runtime linker invocation settings."""

    extra_args: list[str] = Field(default_factory=list)
    check_modules: bool = False


class ArchiveConfig(BaseModel):
    """Compression settings for the generated runtime archives."""

    gzip_compresslevel: int = Field(default=9, ge=1, le=9)
    zip_compresslevel: int | None = Field(default=None, ge=0, le=9)


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    jdk_layout: JdkLayoutConfig = Field(default_factory=JdkLayoutConfig)
    linker: LinkerConfig = Field(default_factory=LinkerConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)

    model_config = SettingsConfigDict(
        env_prefix="MAKEJRE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides."""

    settings_file = resolve_settings_file(config_file)
    project_root = settings_file.parent.parent.resolve()
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    resolved_paths = settings.paths.resolved(project_root=project_root)
    return settings.model_copy(update={"paths": resolved_paths})
