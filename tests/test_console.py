"""Tests for ANSI colouring of spans."""

from __future__ import annotations

from jsonshape.console import colorize
from jsonshape.models import Span


def test_colorize_wraps_tagged_spans() -> None:
    text = colorize([Span('"a"', "key"), Span(": "), Span("number", "number")], "light")

    assert text == '\033[33m"a"\033[0m: \033[34mnumber\033[0m'


def test_colorize_dark_theme_differs() -> None:
    spans = [Span("string", "string")]

    assert colorize(spans, "dark") != colorize(spans, "light")


def test_colorize_unknown_theme_uses_light() -> None:
    spans = [Span("+ a: number", "diff-add")]

    assert colorize(spans, "solarized") == colorize(spans, "light")
