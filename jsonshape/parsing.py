"""JSON input handling at the edge of the core."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import ParseError


def parse_json(text: str) -> Any:
    """Parse ``text`` or raise :class:`ParseError` with the decoder's message."""
    stripped = text.strip()
    if not stripped:
        raise ParseError("Input is empty; paste or pipe JSON data first")
    try:
        return json.loads(stripped, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            line=exc.lineno,
            column=exc.colno,
        ) from exc
    except RecursionError as exc:
        raise ParseError("Invalid JSON: nesting is too deep to parse") from exc


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Invalid JSON: unexpected token {name}")


def format_json(text: str, *, indent: int = 2) -> str:
    """Pretty-print JSON text with ``indent`` spaces, keeping non-ASCII characters."""
    data = parse_json(text)
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as exc:
        raise ParseError("Invalid JSON: number is out of range") from exc


def read_input(source: str | None, *, stdin: Any = None) -> str:
    """Return the text of ``source``: a file path, or standard input for ``-``/``None``."""
    if source is None or source == "-":
        if stdin is None:
            import sys

            stdin = sys.stdin
        return stdin.read()
    return Path(source).expanduser().read_text(encoding="utf-8")


__all__ = ["format_json", "parse_json", "read_input"]
