"""Tests for JSON input handling."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from jsonshape.errors import JsonShapeError, ParseError
from jsonshape.parsing import format_json, parse_json, read_input


def test_parse_json_returns_value() -> None:
    assert parse_json('  {"a": [1, 2]}\n') == {"a": [1, 2]}


def test_parse_json_rejects_empty_input() -> None:
    with pytest.raises(ParseError, match="empty"):
        parse_json("   ")


def test_parse_json_reports_position() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_json('{\n  "a": }')

    error = excinfo.value
    assert isinstance(error, JsonShapeError)
    assert error.message.startswith("Invalid JSON:")
    assert error.line == 2
    assert error.column is not None


def test_format_json_uses_two_space_indent() -> None:
    assert format_json('{"a":[1,2]}') == '{\n  "a": [\n    1,\n    2\n  ]\n}'


def test_format_json_keeps_non_ascii() -> None:
    assert "é" in format_json('{"k": "é"}')


def test_read_input_from_file(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text('{"a": 1}', encoding="utf-8")

    assert read_input(str(path)) == '{"a": 1}'


def test_read_input_from_stdin() -> None:
    assert read_input("-", stdin=io.StringIO("[1]")) == "[1]"
    assert read_input(None, stdin=io.StringIO("[2]")) == "[2]"


@pytest.mark.parametrize("text", ['{"a": NaN}', "[Infinity]", "-Infinity"])
def test_parse_json_rejects_non_json_constants(text: str) -> None:
    with pytest.raises(ParseError, match="unexpected token"):
        parse_json(text)


def test_format_json_rejects_non_json_constants() -> None:
    with pytest.raises(ParseError):
        format_json('{"a": NaN}')


def test_format_json_rejects_overflowing_numbers() -> None:
    assert parse_json("[1e999]") == [float("inf")]

    with pytest.raises(ParseError, match="out of range"):
        format_json("[1e999]")
