"""Core data models shared across jsonshape components."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union


class ValueKind(str, Enum):
    """Closed classification of a raw JSON value."""

    NULL = "null"
    UNDEFINED = "undefined"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_leaf(self) -> bool:
        return self not in (ValueKind.ARRAY, ValueKind.OBJECT)


_POLICY_ALIASES = {
    "showLength": "show_length",
    "showArrayLength": "show_length",
    "showSample": "show_sample",
    "showSampleValue": "show_sample",
    "keysOnly": "keys_only",
    "compactMode": "compact",
    "maxDepth": "max_depth",
}


@dataclass(frozen=True)
class Policy:
    """Switches governing inference and rendering verbosity."""

    show_length: bool = True
    show_sample: bool = False
    keys_only: bool = False
    compact: bool = False
    max_depth: int = 0

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            object.__setattr__(self, "max_depth", 0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, *, base: Optional["Policy"] = None) -> "Policy":
        """Build a policy from a loose mapping, layering it over ``base``.

        Accepts snake_case field names as well as the camelCase option names
        persisted by earlier releases. Unknown keys and values that cannot be
        coerced are ignored.
        """
        policy = base or cls()
        if not data:
            return policy
        known = {item.name for item in fields(cls)}
        updates: dict[str, Any] = {}
        for raw_key, raw_value in data.items():
            key = _POLICY_ALIASES.get(raw_key, raw_key)
            if key not in known or raw_value is None:
                continue
            if key == "max_depth":
                depth = _coerce_int(raw_value)
                if depth is not None:
                    updates[key] = max(depth, 0)
            else:
                flag = _coerce_bool(raw_value)
                if flag is not None:
                    updates[key] = flag
        return replace(policy, **updates) if updates else policy

    def to_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def _coerce_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip() or "0")
        except ValueError:
            return None
    return None


# ----------------------------------------------------------------------
# Shape variants


@dataclass(frozen=True)
class Leaf:
    """Primitive value; ``omitted`` leaves carry no type information."""

    kind: ValueKind
    sample: Optional[str] = None
    omitted: bool = False


@dataclass(frozen=True)
class ArrayOfLeaf:
    """Array whose representative element is a primitive."""

    length: Optional[int]
    element: "Shape"


@dataclass(frozen=True)
class ArrayOfComposite:
    """Array whose representative element is an object or array."""

    length: Optional[int]
    element: "Shape"


@dataclass(frozen=True)
class EmptyArray:
    length: Optional[int] = 0


@dataclass(frozen=True)
class ObjectShape:
    """Object fields in first-seen key order."""

    fields: Tuple[Tuple[str, "Shape"], ...] = ()

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def get(self, name: str) -> Optional["Shape"]:
        for field_name, shape in self.fields:
            if field_name == name:
                return shape
        return None


@dataclass(frozen=True)
class Truncated:
    """Recursion stopped at the configured depth limit."""


@dataclass(frozen=True)
class CircularRef:
    """Value already open on the current ancestor chain."""


Shape = Union[Leaf, ArrayOfLeaf, ArrayOfComposite, EmptyArray, ObjectShape, Truncated, CircularRef]


# ----------------------------------------------------------------------
# Diff, stats and rendering records


@dataclass(frozen=True)
class DiffEntry:
    """A path and the kind of value found there."""

    path: str
    type: str


@dataclass(frozen=True)
class DiffResult:
    """Paths classified by a structural comparison of two values."""

    same: Tuple[DiffEntry, ...] = ()
    added: Tuple[DiffEntry, ...] = ()
    removed: Tuple[DiffEntry, ...] = ()

    @property
    def identical(self) -> bool:
        return not self.added and not self.removed

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {
            "same": [{"path": e.path, "type": e.type} for e in self.same],
            "added": [{"path": e.path, "type": e.type} for e in self.added],
            "removed": [{"path": e.path, "type": e.type} for e in self.removed],
        }


@dataclass(frozen=True)
class JsonStats:
    """Total object key count and maximum nesting depth of a value."""

    keys: int = 0
    depth: int = 0


@dataclass(frozen=True)
class Span:
    """A piece of rendered text tagged with a highlighting kind."""

    text: str
    kind: Optional[str] = None


@dataclass
class HistoryEntry:
    """A previously extracted input kept in the persisted history."""

    id: int
    input: str
    preview: str
    time: str
    truncated: bool = False


__all__ = [
    "ArrayOfComposite",
    "ArrayOfLeaf",
    "CircularRef",
    "DiffEntry",
    "DiffResult",
    "EmptyArray",
    "HistoryEntry",
    "JsonStats",
    "Leaf",
    "ObjectShape",
    "Policy",
    "Shape",
    "Span",
    "Truncated",
    "ValueKind",
]
