"""Structural comparison of two JSON values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Tuple

from ..logging import get_logger
from ..models import DiffEntry, DiffResult, Span, ValueKind
from .emit import Emitter, PlainEmitter, SpanEmitter
from .values import AncestorChain, classify

ROOT_PATH = "root"

logger = get_logger("core.diff")


@dataclass
class _Frame:
    """A matched container whose child pairs are still being compared."""

    a: Any
    b: Any
    path: str
    kind: ValueKind
    pairs: List[Tuple[Any, Any, str]]
    added_mark: int
    removed_mark: int
    cursor: int = 0


@dataclass
class _Collector:
    same: List[DiffEntry] = field(default_factory=list)
    added: List[DiffEntry] = field(default_factory=list)
    removed: List[DiffEntry] = field(default_factory=list)

    def result(self) -> DiffResult:
        return DiffResult(same=tuple(self.same), added=tuple(self.added), removed=tuple(self.removed))


class ShapeDiffer:
    """Walks two values in lock-step and classifies every path.

    A change of kind at a node is reported once and hides everything beneath it.
    Arrays are compared through their first elements only. A container that
    shows no additions or removals anywhere below it is recorded as unchanged,
    empty containers included.
    """

    def diff(self, a: Any, b: Any) -> DiffResult:
        out = _Collector()
        chain_a = AncestorChain()
        chain_b = AncestorChain()

        frame = self._visit(a, b, "", out, chain_a, chain_b)
        stack: List[_Frame] = [frame] if frame is not None else []
        while stack:
            top = stack[-1]
            if top.cursor < len(top.pairs):
                child_a, child_b, child_path = top.pairs[top.cursor]
                top.cursor += 1
                child = self._visit(child_a, child_b, child_path, out, chain_a, chain_b)
                if child is not None:
                    stack.append(child)
                continue
            stack.pop()
            chain_a.leave(top.a)
            chain_b.leave(top.b)
            if len(out.added) == top.added_mark and len(out.removed) == top.removed_mark:
                out.same.append(DiffEntry(top.path or ROOT_PATH, top.kind.value))

        result = out.result()
        logger.debug(
            "Diff complete: %d same, %d added, %d removed",
            len(result.same),
            len(result.added),
            len(result.removed),
        )
        return result

    def _visit(
        self,
        a: Any,
        b: Any,
        path: str,
        out: _Collector,
        chain_a: AncestorChain,
        chain_b: AncestorChain,
    ) -> _Frame | None:
        kind_a = classify(a)
        kind_b = classify(b)
        label = path or ROOT_PATH
        if kind_a is not kind_b:
            out.removed.append(DiffEntry(label, kind_a.value))
            out.added.append(DiffEntry(label, kind_b.value))
            return None
        if kind_a.is_leaf:
            out.same.append(DiffEntry(label, kind_a.value))
            return None
        if a in chain_a or b in chain_b:
            out.same.append(DiffEntry(label, kind_a.value))
            return None

        added_mark = len(out.added)
        removed_mark = len(out.removed)
        pairs: List[Tuple[Any, Any, str]] = []
        if kind_a is ValueKind.OBJECT:
            for key in _union_keys(a, b):
                child_path = f"{path}.{key}" if path else str(key)
                if key not in a:
                    out.added.append(DiffEntry(child_path, classify(b[key]).value))
                elif key not in b:
                    out.removed.append(DiffEntry(child_path, classify(a[key]).value))
                else:
                    pairs.append((a[key], b[key], child_path))
        elif len(a) > 0 and len(b) > 0:
            pairs.append((a[0], b[0], f"{path}[0]"))

        chain_a.enter(a)
        chain_b.enter(b)
        return _Frame(
            a=a,
            b=b,
            path=path,
            kind=kind_a,
            pairs=pairs,
            added_mark=added_mark,
            removed_mark=removed_mark,
        )


def _union_keys(a: Any, b: Any) -> List[Any]:
    keys = list(a.keys())
    seen = set(keys)
    keys.extend(key for key in b.keys() if key not in seen)
    return keys


def diff_shapes(a: Any, b: Any) -> DiffResult:
    """Compare the structure of ``a`` against ``b``."""
    return ShapeDiffer().diff(a, b)


ADDED_HEADER = "+ Added fields:"
REMOVED_HEADER = "- Removed fields:"
IDENTICAL_MESSAGE = "Structures are identical"


def write_diff(result: DiffResult, emitter: Emitter) -> None:
    """Write the human readable report for ``result`` into ``emitter``."""
    if result.identical:
        emitter.emit(IDENTICAL_MESSAGE, "diff-same")
        return
    if result.added:
        emitter.emit(ADDED_HEADER, "diff-add")
        emitter.emit("\n")
        for entry in result.added:
            emitter.emit(f"  + {entry.path}: {entry.type}", "diff-add")
            emitter.emit("\n")
        emitter.emit("\n")
    if result.removed:
        emitter.emit(REMOVED_HEADER, "diff-remove")
        emitter.emit("\n")
        for entry in result.removed:
            emitter.emit(f"  - {entry.path}: {entry.type}", "diff-remove")
            emitter.emit("\n")
        emitter.emit("\n")
    emitter.emit(f"Unchanged fields: {len(result.same)}", "diff-same")


def render_diff(result: DiffResult) -> str:
    emitter = PlainEmitter()
    write_diff(result, emitter)
    return emitter.text()


def render_diff_spans(result: DiffResult) -> List[Span]:
    emitter = SpanEmitter()
    write_diff(result, emitter)
    return emitter.spans()


__all__ = [
    "ADDED_HEADER",
    "IDENTICAL_MESSAGE",
    "REMOVED_HEADER",
    "ROOT_PATH",
    "ShapeDiffer",
    "diff_shapes",
    "render_diff",
    "render_diff_spans",
    "write_diff",
]
