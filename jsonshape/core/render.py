"""Rendering of shape trees to display text."""

from __future__ import annotations

import json
from typing import List, Tuple, Union

from ..models import (
    ArrayOfComposite,
    ArrayOfLeaf,
    CircularRef,
    EmptyArray,
    Leaf,
    ObjectShape,
    Policy,
    Shape,
    Span,
    Truncated,
    ValueKind,
)
from .emit import Emitter, PlainEmitter, SpanEmitter

TRUNCATED_MARKER = "..."
CIRCULAR_MARKER = "[Circular]"

_Item = Union[Span, Tuple[Shape, int]]

_LEAF_SPAN_KINDS = {
    ValueKind.STRING: "string",
    ValueKind.NUMBER: "number",
    ValueKind.BOOLEAN: "boolean",
    ValueKind.NULL: "null",
    ValueKind.UNDEFINED: "null",
}


class ShapeRenderer:
    """Writes a shape into an :class:`Emitter`.

    The traversal keeps its own stack of pending tokens and sub-shapes, so the
    depth of the shape does not translate into Python recursion.
    """

    def __init__(self, policy: Policy | None = None) -> None:
        self.policy = policy or Policy()
        compact = self.policy.compact
        self._newline = "" if compact else "\n"
        self._unit = "" if compact else "  "

    def render(self, shape: Shape, emitter: Emitter) -> None:
        stack: List[_Item] = [(shape, 0)]
        while stack:
            item = stack.pop()
            if isinstance(item, Span):
                emitter.emit(item.text, item.kind)
                continue
            node, indent = item
            stack.extend(reversed(self._expand(node, indent)))

    def _expand(self, shape: Shape, indent: int) -> List[_Item]:
        if isinstance(shape, Leaf):
            return [self._leaf(shape)]
        if isinstance(shape, Truncated):
            return [Span(TRUNCATED_MARKER, "truncated")]
        if isinstance(shape, CircularRef):
            return [Span(CIRCULAR_MARKER, "circular")]
        if isinstance(shape, EmptyArray):
            if self.policy.keys_only:
                return [Span("[]", "array")]
            label = "array[]" if shape.length is None else _array_label(shape.length)
            return [Span(label, "array")]
        if isinstance(shape, ArrayOfLeaf):
            label = Span(_array_label(shape.length), "array")
            if self.policy.keys_only:
                return [label]
            return [label, Span("<", "array"), (shape.element, indent), Span(">", "array")]
        if isinstance(shape, ArrayOfComposite):
            return [Span(_array_label(shape.length), "array"), Span(" "), (shape.element, indent)]
        return self._object(shape, indent)

    def _object(self, shape: ObjectShape, indent: int) -> List[_Item]:
        if not shape.fields:
            return [Span("{}", "bracket")]
        items: List[_Item] = [Span("{", "bracket"), Span(self._newline)]
        last = len(shape.fields) - 1
        pad = self._unit * (indent + 1)
        for index, (name, child) in enumerate(shape.fields):
            items.append(Span(pad))
            items.append(Span(json.dumps(name, ensure_ascii=False), "key"))
            items.append(Span(": "))
            items.append((child, indent + 1))
            if index < last:
                items.append(Span(","))
            items.append(Span(self._newline))
        items.append(Span(self._unit * indent))
        items.append(Span("}", "bracket"))
        return items

    @staticmethod
    def _leaf(leaf: Leaf) -> Span:
        if leaf.omitted:
            return Span("null", "null")
        kind = _LEAF_SPAN_KINDS[leaf.kind]
        name = leaf.kind.value
        if leaf.sample is None:
            return Span(name, kind)
        if leaf.kind is ValueKind.STRING:
            return Span(f'{name} ("{leaf.sample}")', kind)
        return Span(f"{name} ({leaf.sample})", kind)


def _array_label(length: int | None) -> str:
    return "array" if length is None else f"array[{length}]"


def render_shape(shape: Shape, policy: Policy | None = None) -> str:
    """Render ``shape`` as plain display text."""
    emitter = PlainEmitter()
    ShapeRenderer(policy).render(shape, emitter)
    return emitter.text()


def render_shape_spans(shape: Shape, policy: Policy | None = None) -> List[Span]:
    """Render ``shape`` as spans tagged for syntax highlighting."""
    emitter = SpanEmitter()
    ShapeRenderer(policy).render(shape, emitter)
    return emitter.spans()


def render_shape_source(shape: Shape, policy: Policy | None = None) -> str:
    """Plain text suitable for copying; identical to the displayed text without markup."""
    return render_shape(shape, policy)


__all__ = [
    "CIRCULAR_MARKER",
    "TRUNCATED_MARKER",
    "ShapeRenderer",
    "render_shape",
    "render_shape_source",
    "render_shape_spans",
]
