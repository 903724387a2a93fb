"""Tests for the orchestrator that ties parsing, core and stores together."""

from __future__ import annotations

import json
from typing import Any

import pytest

from jsonshape.errors import ClipboardError, ParseError
from jsonshape.models import JsonStats, Policy
from jsonshape.orchestrator import Orchestrator
from jsonshape.stores import DisplayOptions, HistoryStore, KeyValueStore


class _FakeClipboard:
    def __init__(self, text: str = "", *, fail: bool = False) -> None:
        self.text = text
        self.fail = fail
        self.written: list[str] = []

    def read_text(self) -> str:
        if self.fail:
            raise ClipboardError("clipboard unavailable")
        return self.text

    def write_text(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("clipboard unavailable")
        self.written.append(text)


@pytest.fixture
def history() -> HistoryStore:
    return HistoryStore(KeyValueStore(None))


def test_extract_structure_records_history(
    history: HistoryStore, response_payload: dict[str, Any]
) -> None:
    orchestrator = Orchestrator(history=history)
    text = json.dumps(response_payload)

    outcome = orchestrator.extract(text, DisplayOptions(policy=Policy(compact=True)))

    assert outcome.output_format == "structure"
    assert outcome.text.startswith('{"code": number,"data": {"users": array[1] {')
    assert "".join(span.text for span in outcome.spans) == outcome.text
    assert outcome.stats == JsonStats(keys=6, depth=4)
    assert [entry.input for entry in history.entries()] == [text]


def test_extract_typescript(response_payload: dict[str, Any]) -> None:
    outcome = Orchestrator().extract(
        json.dumps(response_payload),
        DisplayOptions(output_format="typescript"),
        interface_name="Payload",
    )

    assert outcome.text.startswith("interface Payload {\n  code: number;\n")


def test_extract_without_recording(history: HistoryStore) -> None:
    Orchestrator(history=history).extract("[1]", record=False)

    assert history.entries() == []


def test_extract_parse_error_skips_history(history: HistoryStore) -> None:
    orchestrator = Orchestrator(history=history)

    with pytest.raises(ParseError):
        orchestrator.extract("{oops")
    assert history.entries() == []


def test_compare_reports_changes() -> None:
    outcome = Orchestrator().compare('{"a": 1}', '{"a": "1"}')

    assert outcome.report.startswith("+ Added fields:\n  + a: string")
    assert not outcome.result.identical


def test_format_and_stats() -> None:
    orchestrator = Orchestrator()

    assert orchestrator.format('{"a":1}') == '{\n  "a": 1\n}'
    assert orchestrator.stats('{"a": {"b": 1}}') == JsonStats(keys=2, depth=2)


def test_paste_and_copy_use_clipboard() -> None:
    clipboard = _FakeClipboard('{"a": 1}')
    orchestrator = Orchestrator(clipboard=clipboard)  # type: ignore[arg-type]

    assert orchestrator.paste() == '{"a": 1}'
    orchestrator.copy("result")
    assert clipboard.written == ["result"]


def test_clipboard_failure_propagates() -> None:
    orchestrator = Orchestrator(clipboard=_FakeClipboard(fail=True))  # type: ignore[arg-type]

    with pytest.raises(ClipboardError):
        orchestrator.paste()


def test_history_input(history: HistoryStore) -> None:
    orchestrator = Orchestrator(history=history)
    entry = history.add("[true]")

    assert orchestrator.history_input(entry.id) == "[true]"
    assert orchestrator.history_input(entry.id + 100) is None
    assert Orchestrator().history_input(entry.id) is None


def test_extract_rejects_non_json_constants(history: HistoryStore) -> None:
    with pytest.raises(ParseError, match="NaN"):
        Orchestrator(history=history).extract('{"a": NaN}')
    assert history.entries() == []
