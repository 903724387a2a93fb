"""Coordinates parsing, core calls and persistence for the CLI and service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .clipboard import SystemClipboard
from .core import (
    describe_stats,
    diff_shapes,
    generate_type_lang,
    generate_type_lang_spans,
    infer_shape,
    json_stats,
    render_diff,
    render_diff_spans,
    render_shape_source,
    render_shape_spans,
)
from .core.typelang import DEFAULT_INTERFACE_NAME
from .logging import get_logger
from .models import DiffResult, JsonStats, Span
from .parsing import format_json, parse_json
from .stores import DisplayOptions, HistoryStore


@dataclass
class ExtractOutcome:
    """Rendered result of one extraction."""

    text: str
    spans: List[Span]
    stats: JsonStats
    output_format: str


@dataclass
class CompareOutcome:
    """Result of comparing two JSON documents."""

    result: DiffResult
    report: str
    spans: List[Span]


class Orchestrator:
    """Runs jsonshape operations on raw text input.

    Parse failures surface as :class:`~jsonshape.errors.ParseError` before any
    core function runs; clipboard failures as
    :class:`~jsonshape.errors.ClipboardError`.
    """

    def __init__(
        self,
        history: HistoryStore | None = None,
        clipboard: SystemClipboard | None = None,
    ) -> None:
        self.history = history
        self._clipboard = clipboard
        self.logger = get_logger("orchestrator")

    def extract(
        self,
        text: str,
        options: DisplayOptions | None = None,
        *,
        interface_name: str = DEFAULT_INTERFACE_NAME,
        record: bool = True,
    ) -> ExtractOutcome:
        options = options or DisplayOptions()
        data = parse_json(text)
        stats = json_stats(data)
        self.logger.debug("Parsed input: %s", describe_stats(stats))

        if options.output_format == "typescript":
            rendered = generate_type_lang(data, interface_name)
            spans = generate_type_lang_spans(data, interface_name)
        else:
            shape = infer_shape(data, options.policy)
            rendered = render_shape_source(shape, options.policy)
            spans = render_shape_spans(shape, options.policy)

        if record and self.history is not None:
            entry = self.history.add(text.strip())
            self.logger.debug("Recorded history entry %d", entry.id)

        return ExtractOutcome(
            text=rendered, spans=spans, stats=stats, output_format=options.output_format
        )

    def compare(self, text_a: str, text_b: str) -> CompareOutcome:
        data_a = parse_json(text_a)
        data_b = parse_json(text_b)
        result = diff_shapes(data_a, data_b)
        return CompareOutcome(result=result, report=render_diff(result), spans=render_diff_spans(result))

    def format(self, text: str) -> str:
        return format_json(text)

    def stats(self, text: str) -> JsonStats:
        return json_stats(parse_json(text))

    def paste(self) -> str:
        return self.clipboard.read_text()

    def copy(self, text: str) -> None:
        self.clipboard.write_text(text)
        self.logger.info("Copied %d characters to the clipboard", len(text))

    @property
    def clipboard(self) -> SystemClipboard:
        if self._clipboard is None:
            self._clipboard = SystemClipboard()
        return self._clipboard

    def history_input(self, entry_id: int) -> Optional[str]:
        if self.history is None:
            return None
        entry = self.history.get(entry_id)
        if entry is None:
            return None
        if entry.truncated:
            self.logger.warning("History entry %d was truncated when saved", entry_id)
        return entry.input


__all__ = ["CompareOutcome", "ExtractOutcome", "Orchestrator"]
