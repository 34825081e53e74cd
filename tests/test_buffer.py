"""Tests for the document line buffer."""

from __future__ import annotations

from pathlib import Path

import pytest
from norgcapture.buffer import Buffer


def test_open_missing_file_is_empty(tmp_path: Path) -> None:
    buffer = Buffer.open(tmp_path / "missing.norg")

    assert buffer.line_count() == 0
    assert buffer.lines == ()


def test_insert_lines_and_save(tmp_path: Path) -> None:
    path = tmp_path / "doc.norg"
    path.write_text("* A\n* B\n", encoding="utf-8")
    buffer = Buffer.open(path)

    buffer.insert_lines(1, ["text", "more"])
    buffer.insert_lines(buffer.line_count(), ["end"])
    buffer.save()

    assert path.read_text(encoding="utf-8") == "* A\ntext\nmore\n* B\nend\n"


def test_insert_text_splits_across_lines(tmp_path: Path) -> None:
    buffer = Buffer(tmp_path / "doc.norg", ["before after"])

    buffer.insert_text(0, 7, "one\ntwo ")

    assert buffer.lines == ("before one", "two after")


def test_insert_text_at_end_starts_new_line(tmp_path: Path) -> None:
    buffer = Buffer(tmp_path / "doc.norg", ["first"])

    buffer.insert_text(1, 0, "second")

    assert buffer.lines == ("first", "second")


def test_out_of_range_positions_raise(tmp_path: Path) -> None:
    buffer = Buffer(tmp_path / "doc.norg", ["abc"])

    with pytest.raises(ValueError):
        buffer.insert_lines(3, ["x"])
    with pytest.raises(ValueError):
        buffer.insert_text(0, 10, "x")


def test_save_empty_buffer_writes_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "empty.norg"

    Buffer(path).save()

    assert path.read_text(encoding="utf-8") == ""


def test_untouched_lines_survive_byte_for_byte(tmp_path: Path) -> None:
    path = tmp_path / "doc.norg"
    path.write_text(
        "* Tasks\n- page\x0cbreak\n- sep\u2028inline\n* Other\n", encoding="utf-8"
    )
    buffer = Buffer.open(path)

    assert buffer.line_count() == 4
    buffer.insert_lines(buffer.line_count(), ["- new"])
    buffer.save()

    assert path.read_text(encoding="utf-8") == (
        "* Tasks\n- page\x0cbreak\n- sep\u2028inline\n* Other\n- new\n"
    )


def test_missing_final_newline_is_kept(tmp_path: Path) -> None:
    path = tmp_path / "doc.norg"
    path.write_text("* A\n- one", encoding="utf-8")
    buffer = Buffer.open(path)

    buffer.insert_lines(1, ["- zero"])
    buffer.save()

    assert path.read_text(encoding="utf-8") == "* A\n- zero\n- one"
