"""Typer CLI entrypoint for makejre."""

from __future__ import annotations

import logging
import tarfile
import zipfile
from pathlib import Path

import typer
import yaml
from pydantic import ValidationError

from makejre.config import AppSettings, load_settings
from makejre.errors import MakeJreError
from makejre.logging_utils import configure_logging
from makejre.params import validate_arguments
from makejre.pipeline import run_build
from makejre.platform import detect_platform
from makejre.utils.paths import write_json_atomically

app = typer.Typer(
    add_completion=False,
    help="Build minimal Java runtime images and package them as tar.gz or zip archives.",
)

LOG_FILE_NAME = "makejre.log"
BUILD_FAILURES: tuple[type[BaseException], ...] = (MakeJreError, OSError, tarfile.TarError, zipfile.BadZipFile)
SETTINGS_FAILURES: tuple[type[BaseException], ...] = (ValidationError, yaml.YAMLError)


def _fail(message: str, logger: logging.Logger | None = None) -> typer.Exit:
    if logger is not None:
        logger.error("build.failed error=%s", message)
    typer.echo(f"ERROR: {message}", err=True)
    return typer.Exit(code=1)


def _configure_logger(settings: AppSettings, verbose: bool) -> logging.Logger:
    level = logging.DEBUG if verbose else logging.INFO
    return configure_logging(settings.paths.logs_root / LOG_FILE_NAME, level=level)


@app.command()
def build(
    output_kind: str | None = typer.Argument(None, help="Archive kind: tar.gz or zip.", show_default=False),
    output_dir: str | None = typer.Argument(
        None,
        help="Runtime image directory; its parent receives the archives.",
        show_default=False,
    ),
    jdk_archive: str | None = typer.Argument(None, help="JDK .tar.gz or .zip archive.", show_default=False),
    jfx_archive: str | None = typer.Argument(
        None,
        help="JavaFX JMODs .zip archive, or 'null' to skip JavaFX.",
        show_default=False,
    ),
    module_list: str | None = typer.Argument(None, help="File with one module name per line.", show_default=False),
    copy_list: str | None = typer.Argument(
        None,
        help="Optional file of 'source;destination' lines copied into the image.",
        show_default=False,
    ),
    check_modules: bool | None = typer.Option(
        None,
        "--check-modules/--no-check-modules",
        help="Verify every module has a JMOD on the module path before linking.",
        show_default=False,
    ),
    platform_tag: str | None = typer.Option(
        None,
        "--platform-tag",
        help="Override the host platform: linux, windows, or darwin.",
    ),
    summary_file: Path | None = typer.Option(
        None,
        "--summary-file",
        help="Write a JSON build summary to this path.",
        dir_okay=False,
    ),
    show_config: bool = typer.Option(
        False,
        "--show-config",
        help="Print the effective configuration after env overrides and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Link a runtime image, then write <name>-<platform>.<kind> and <name>-<platform>-src.<kind>."""

    try:
        settings = load_settings(config_file=config_file)
    except SETTINGS_FAILURES as exc:
        raise _fail(f"invalid settings: {exc}") from exc

    if show_config:
        typer.echo(yaml.safe_dump(settings.as_dict(), sort_keys=False))
        return

    try:
        params = validate_arguments(
            output_kind,
            output_dir,
            jdk_archive,
            jfx_archive,
            module_list,
            copy_list,
            null_sentinel=settings.workspace.null_sentinel,
        )
        platform = detect_platform(platform_tag or settings.platform.tag)
    except MakeJreError as exc:
        raise _fail(str(exc)) from exc

    logger = _configure_logger(settings, verbose)
    try:
        result = run_build(params, settings, platform=platform, check_modules=check_modules, logger=logger)
    except BUILD_FAILURES as exc:
        raise _fail(str(exc), logger) from exc

    if summary_file is not None:
        write_json_atomically(result.as_dict(), summary_file)
        logger.info("build.summary_written path=%s", summary_file)

    typer.echo(f"run_id: {result.run_id}")
    typer.echo(f"platform: {result.platform_tag}")
    typer.echo(f"modules: {result.modules}")
    typer.echo(f"archive: {result.archive_path}")
    typer.echo(f"source_archive: {result.source_archive_path}")
    typer.echo(f"elapsed_seconds: {result.elapsed_seconds}")


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
