"""Output strategies shared by the renderers."""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..models import Span


class Emitter(Protocol):
    """Receives rendered tokens in order."""

    def emit(self, text: str, kind: Optional[str] = None) -> None:
        """Append ``text`` tagged with a highlighting ``kind``."""


class PlainEmitter:
    """Concatenates tokens into plain text, dropping the kinds."""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def emit(self, text: str, kind: Optional[str] = None) -> None:
        self._parts.append(text)

    def text(self) -> str:
        return "".join(self._parts)


class SpanEmitter:
    """Collects tokens as spans, merging neighbours of the same kind."""

    def __init__(self) -> None:
        self._spans: List[Span] = []

    def emit(self, text: str, kind: Optional[str] = None) -> None:
        if not text:
            return
        if self._spans and self._spans[-1].kind == kind:
            last = self._spans.pop()
            self._spans.append(Span(text=last.text + text, kind=kind))
            return
        self._spans.append(Span(text=text, kind=kind))

    def spans(self) -> List[Span]:
        return list(self._spans)


def spans_to_text(spans: List[Span]) -> str:
    return "".join(span.text for span in spans)


__all__ = ["Emitter", "PlainEmitter", "SpanEmitter", "spans_to_text"]
