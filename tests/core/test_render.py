"""Tests for shape rendering."""

from __future__ import annotations

from typing import Any

from jsonshape.core import infer_shape, render_shape, render_shape_source, render_shape_spans
from jsonshape.models import Policy, Span


def _render(value: Any, policy: Policy | None = None) -> str:
    policy = policy or Policy()
    return render_shape(infer_shape(value, policy), policy)


def test_render_response_payload(response_payload: dict[str, Any]) -> None:
    assert _render(response_payload) == (
        "{\n"
        '  "code": number,\n'
        '  "data": {\n'
        '    "users": array[1] {\n'
        '      "id": number,\n'
        '      "name": string\n'
        "    },\n"
        '    "total": number\n'
        "  }\n"
        "}"
    )


def test_render_compact(response_payload: dict[str, Any]) -> None:
    text = _render(response_payload, Policy(compact=True))

    assert text == (
        '{"code": number,"data": {"users": array[1] {"id": number,"name": string},'
        '"total": number}}'
    )
    assert "\n" not in text


def test_render_arrays_of_leaves() -> None:
    assert _render([1, 2, 3]) == "array[3]<number>"
    assert _render([1, 2, 3], Policy(show_length=False)) == "array<number>"
    assert _render(["a"], Policy(keys_only=True)) == "array[1]"


def test_render_empty_containers() -> None:
    assert _render([]) == "array[0]"
    assert _render([], Policy(show_length=False)) == "array[]"
    assert _render([], Policy(keys_only=True)) == "[]"
    assert _render({}) == "{}"
    assert _render({}, Policy(keys_only=True)) == "{}"


def test_render_samples() -> None:
    policy = Policy(show_sample=True, compact=True)

    assert _render({"s": "hi", "n": 42, "b": True, "z": None}, policy) == (
        '{"s": string ("hi"),"n": number (42),"b": boolean (true),"z": null}'
    )


def test_render_keys_only_keeps_the_skeleton() -> None:
    value = {"a": 1, "b": {"c": "x"}, "d": [{"e": True}]}

    assert _render(value, Policy(keys_only=True)) == (
        "{\n"
        '  "a": null,\n'
        '  "b": {\n'
        '    "c": null\n'
        "  },\n"
        '  "d": array[1] {\n'
        '    "e": null\n'
        "  }\n"
        "}"
    )


def test_render_depth_marker() -> None:
    assert _render({"a": {"b": 1}}, Policy(max_depth=1)) == '{\n  "a": ...\n}'


def test_render_one_type_token_per_leaf() -> None:
    text = _render({"a": 1, "b": {"c": "x", "d": [True]}, "e": None})

    assert text.count("number") == 1
    assert text.count("string") == 1
    assert text.count("boolean") == 1
    assert text.count("null") == 1


def test_render_escapes_keys() -> None:
    assert _render({'say "hi"': 1}, Policy(compact=True)) == '{"say \\"hi\\"": number}'


def test_render_spans_tag_tokens() -> None:
    spans = render_shape_spans(infer_shape({"a": 1}))

    assert spans == [
        Span("{", "bracket"),
        Span("\n  "),
        Span('"a"', "key"),
        Span(": "),
        Span("number", "number"),
        Span("\n"),
        Span("}", "bracket"),
    ]


def test_render_spans_mark_circular_and_truncated() -> None:
    node: dict[str, Any] = {}
    node["loop"] = node
    node["deep"] = {"x": 1}
    policy = Policy(max_depth=2)

    kinds = {span.kind for span in render_shape_spans(infer_shape(node, policy), policy)}

    assert {"circular", "truncated", "key", "bracket"} <= kinds


def test_render_source_matches_display_text(response_payload: dict[str, Any]) -> None:
    shape = infer_shape(response_payload)

    assert render_shape_source(shape) == render_shape(shape)
