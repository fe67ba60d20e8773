from __future__ import annotations

from pathlib import Path

import pytest

from makejre.copy_list import apply_copy_list, parse_copy_line, read_copy_list
from makejre.errors import CopyError, MalformedInputError


def test_parse_trims_both_fields() -> None:
    directive = parse_copy_line("  extra/logging.properties ;  conf  ", 3)
    assert directive.source == Path("extra/logging.properties")
    assert directive.destination == "conf"
    assert directive.line_no == 3


def test_parse_splits_on_first_separator_only() -> None:
    directive = parse_copy_line("a.txt;lib;extra", 1)
    assert directive.destination == "lib;extra"


@pytest.mark.parametrize("line", ["no-separator-here", "source.txt;", "source.txt;   ", ""])
def test_malformed_line_is_named(line: str) -> None:
    with pytest.raises(MalformedInputError) as excinfo:
        parse_copy_line(line, 7)
    assert excinfo.value.line == line
    assert excinfo.value.line_no == 7
    assert line in str(excinfo.value)


def test_read_copy_list_keeps_order(tmp_path: Path) -> None:
    path = tmp_path / "copy.txt"
    path.write_text("a.txt;conf\nb.txt ; lib\n", encoding="utf-8")
    directives = read_copy_list(path)
    assert [(d.source.name, d.destination) for d in directives] == [("a.txt", "conf"), ("b.txt", "lib")]


def test_read_copy_list_rejects_malformed_line(tmp_path: Path) -> None:
    path = tmp_path / "copy.txt"
    path.write_text("a.txt;conf\nbroken line\n", encoding="utf-8")
    with pytest.raises(MalformedInputError, match="broken line"):
        read_copy_list(path)


def test_apply_copies_into_existing_directories(tmp_path: Path) -> None:
    image = tmp_path / "image"
    (image / "conf").mkdir(parents=True)
    first = tmp_path / "first" / "app.properties"
    second = tmp_path / "second" / "app.properties"
    first.parent.mkdir()
    second.parent.mkdir()
    first.write_text("first", encoding="utf-8")
    second.write_text("second", encoding="utf-8")

    copied = apply_copy_list(
        [parse_copy_line(f"{first};conf", 1), parse_copy_line(f"{second};conf", 2)],
        image,
    )

    assert copied == [image / "conf" / "app.properties"] * 2
    assert (image / "conf" / "app.properties").read_text(encoding="utf-8") == "second"


def test_apply_does_not_create_destination(tmp_path: Path) -> None:
    image = tmp_path / "image"
    image.mkdir()
    source = tmp_path / "a.txt"
    source.write_text("a", encoding="utf-8")

    with pytest.raises(CopyError, match="not a directory"):
        apply_copy_list([parse_copy_line(f"{source};missing/dir", 1)], image)
    assert not (image / "missing").exists()


def test_apply_missing_source(tmp_path: Path) -> None:
    image = tmp_path / "image"
    (image / "lib").mkdir(parents=True)
    with pytest.raises(CopyError, match="source not found"):
        apply_copy_list([parse_copy_line(f"{tmp_path / 'nope.txt'};lib", 1)], image)
