"""Key and depth statistics for a parsed JSON value."""

from __future__ import annotations

from typing import Any, List, Tuple

from ..models import JsonStats, ValueKind
from .values import AncestorChain, classify

_LEAVE = object()


def json_stats(value: Any) -> JsonStats:
    """Count every object key and measure the deepest nesting level.

    Unlike inference this walks every array element. Values that refer back to
    an ancestor are counted once.
    """
    keys = 0
    depth = 0
    chain = AncestorChain()
    stack: List[Tuple[Any, int]] = [(value, 0)]
    while stack:
        node, level = stack.pop()
        if level is _LEAVE:
            chain.leave(node)
            continue
        depth = max(depth, level)
        kind = classify(node)
        if kind.is_leaf or node in chain:
            continue
        chain.enter(node)
        stack.append((node, _LEAVE))  # type: ignore[arg-type]
        if kind is ValueKind.OBJECT:
            keys += len(node)
            children = list(node.values())
        else:
            children = list(node)
        stack.extend((child, level + 1) for child in reversed(children))
    return JsonStats(keys=keys, depth=depth)


def describe_stats(stats: JsonStats) -> str:
    return f"{stats.keys} keys · {stats.depth} levels"


__all__ = ["describe_stats", "json_stats"]
