"""Tests for key and depth statistics."""

from __future__ import annotations

from typing import Any

from jsonshape.core import describe_stats, json_stats
from jsonshape.models import JsonStats


def test_stats_walk_every_array_element() -> None:
    value = {"a": 1, "b": {"c": [{"d": 1}, {"e": 2}]}}

    assert json_stats(value) == JsonStats(keys=5, depth=4)


def test_stats_for_primitive() -> None:
    assert json_stats("x") == JsonStats(keys=0, depth=0)


def test_stats_ignore_back_references() -> None:
    node: dict[str, Any] = {"a": 1}
    node["self"] = node

    assert json_stats(node) == JsonStats(keys=2, depth=1)


def test_describe_stats() -> None:
    assert describe_stats(JsonStats(keys=3, depth=2)) == "3 keys · 2 levels"


def _nested_objects(levels: int) -> dict[str, Any]:
    root: dict[str, Any] = {}
    current = root
    for _ in range(levels):
        child: dict[str, Any] = {}
        current["n"] = child
        current = child
    return root


def test_stats_handle_nesting_deeper_than_the_recursion_limit() -> None:
    assert json_stats(_nested_objects(3000)) == JsonStats(keys=3000, depth=3000)
