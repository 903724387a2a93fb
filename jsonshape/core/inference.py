"""Structure inference from raw JSON values to shape trees."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Union

from ..logging import get_logger
from ..models import (
    ArrayOfComposite,
    ArrayOfLeaf,
    CircularRef,
    EmptyArray,
    Leaf,
    ObjectShape,
    Policy,
    Shape,
    Truncated,
    ValueKind,
)
from .values import AncestorChain, classify

SAMPLE_LIMIT = 30

logger = get_logger("core.inference")


@dataclass
class _OpenNode:
    """A composite whose children are still being inferred."""

    value: Any
    kind: ValueKind
    depth: int
    names: List[str]
    children: List[Any]
    shapes: List[Shape] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return len(self.shapes) == len(self.children)

    def next_child(self) -> Any:
        return self.children[len(self.shapes)]


class ShapeInferer:
    """Builds a :class:`Shape` for a JSON value under a :class:`Policy`.

    Arrays are described by their first element only. Nesting is walked with an
    explicit stack so deeply nested input cannot exhaust the interpreter stack.
    """

    def __init__(self, policy: Policy | None = None, *, legacy_seen: bool = False) -> None:
        self.policy = policy or Policy()
        self._legacy_seen = legacy_seen

    def infer(self, value: Any) -> Shape:
        chain = AncestorChain(legacy_seen=self._legacy_seen)
        counts: Counter[str] = Counter()

        node = self._visit(value, 0, chain, counts)
        if not isinstance(node, _OpenNode):
            return node

        stack: List[_OpenNode] = [node]
        while True:
            top = stack[-1]
            if not top.complete:
                child = self._visit(top.next_child(), top.depth + 1, chain, counts)
                if isinstance(child, _OpenNode):
                    stack.append(child)
                else:
                    top.shapes.append(child)
                continue

            stack.pop()
            chain.leave(top.value)
            shape = self._close(top)
            if not stack:
                logger.debug(
                    "Inferred %d nodes (%d truncated, %d circular)",
                    counts["nodes"],
                    counts["truncated"],
                    counts["circular"],
                )
                return shape
            stack[-1].shapes.append(shape)

    def _visit(
        self, value: Any, depth: int, chain: AncestorChain, counts: Counter[str]
    ) -> Union[Shape, _OpenNode]:
        counts["nodes"] += 1
        policy = self.policy
        if policy.max_depth > 0 and depth >= policy.max_depth:
            counts["truncated"] += 1
            return Truncated()

        kind = classify(value)
        if kind.is_leaf:
            return self._leaf(value, kind)

        if value in chain:
            counts["circular"] += 1
            return CircularRef()

        chain.enter(value)
        if kind is ValueKind.ARRAY:
            if len(value) == 0:
                chain.leave(value)
                return EmptyArray(length=0 if policy.show_length else None)
            return _OpenNode(value, kind, depth, names=[], children=[value[0]])

        names = list(value.keys())
        if not names:
            chain.leave(value)
            return ObjectShape()
        return _OpenNode(value, kind, depth, names=names, children=[value[name] for name in names])

    def _close(self, node: _OpenNode) -> Shape:
        if node.kind is ValueKind.ARRAY:
            length = len(node.value) if self.policy.show_length else None
            element = node.shapes[0]
            if classify(node.children[0]).is_leaf:
                return ArrayOfLeaf(length=length, element=element)
            return ArrayOfComposite(length=length, element=element)
        return ObjectShape(fields=tuple(zip(node.names, node.shapes)))

    def _leaf(self, value: Any, kind: ValueKind) -> Leaf:
        if self.policy.keys_only:
            return Leaf(kind=kind, omitted=True)
        if not self.policy.show_sample:
            return Leaf(kind=kind)
        return Leaf(kind=kind, sample=sample_text(value, kind))


def sample_text(value: Any, kind: ValueKind) -> str | None:
    """Return the example text shown next to a leaf type name."""
    if kind is ValueKind.STRING:
        text = value if isinstance(value, str) else str(value)
        if len(text) > SAMPLE_LIMIT:
            return text[:SAMPLE_LIMIT] + "..."
        return text
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return number_literal(value)
    return None


def number_literal(value: int | float) -> str:
    """Format a number the way a JavaScript console prints it (``1.0`` -> ``1``, ``1.5e-7``).

    Overflowing literals such as ``1e999`` parse to infinity.
    """
    if isinstance(value, int):
        return str(value)
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    # Positional notation down to 1e-6.
    if -6 <= power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def infer_shape(value: Any, policy: Policy | None = None) -> Shape:
    """Infer the shape of ``value`` under ``policy`` (defaults when omitted)."""
    return ShapeInferer(policy).infer(value)


__all__ = ["SAMPLE_LIMIT", "ShapeInferer", "infer_shape", "number_literal", "sample_text"]
