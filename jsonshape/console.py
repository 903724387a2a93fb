"""ANSI colouring of highlighted spans for terminal output."""

from __future__ import annotations

from typing import Dict, Iterable

from .models import Span

_RESET = "\033[0m"

_PALETTES: Dict[str, Dict[str, str]] = {
    "light": {
        "string": "\033[32m",
        "number": "\033[34m",
        "boolean": "\033[35m",
        "null": "\033[90m",
        "array": "\033[36m",
        "truncated": "\033[90m",
        "circular": "\033[31m",
        "key": "\033[33m",
        "bracket": "\033[37m",
        "keyword": "\033[35m",
        "interface": "\033[1;34m",
        "type": "\033[36m",
        "diff-add": "\033[32m",
        "diff-remove": "\033[31m",
        "diff-same": "\033[90m",
    },
    "dark": {
        "string": "\033[92m",
        "number": "\033[94m",
        "boolean": "\033[95m",
        "null": "\033[37m",
        "array": "\033[96m",
        "truncated": "\033[37m",
        "circular": "\033[91m",
        "key": "\033[93m",
        "bracket": "\033[97m",
        "keyword": "\033[95m",
        "interface": "\033[1;94m",
        "type": "\033[96m",
        "diff-add": "\033[92m",
        "diff-remove": "\033[91m",
        "diff-same": "\033[37m",
    },
}


def colorize(spans: Iterable[Span], theme: str = "light") -> str:
    """Join ``spans`` wrapping each tagged span in the theme's ANSI colour."""
    palette = _PALETTES.get(theme, _PALETTES["light"])
    parts = []
    for span in spans:
        code = palette.get(span.kind) if span.kind else None
        parts.append(f"{code}{span.text}{_RESET}" if code else span.text)
    return "".join(parts)


__all__ = ["colorize"]
