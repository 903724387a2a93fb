"""Exception types raised at the jsonshape boundaries."""

from __future__ import annotations


class JsonShapeError(RuntimeError):
    """Base class for errors surfaced to the user."""


class ParseError(JsonShapeError):
    """Raised when input text is not valid JSON."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class ClipboardError(JsonShapeError):
    """Raised when the system clipboard cannot be read or written."""


__all__ = ["ClipboardError", "JsonShapeError", "ParseError"]
