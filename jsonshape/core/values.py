"""Classification of raw JSON values and cycle tracking."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Iterator, Set

from ..models import ValueKind


class _Undefined:
    """Marker for a value that is present as a key but has no JSON value."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def classify(value: Any) -> ValueKind:
    """Return the kind of ``value``; anything unrecognised is treated as a string."""
    if value is None:
        return ValueKind.NULL
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return ValueKind.STRING


def kind_of(value: Any) -> str:
    return classify(value).value


class AncestorChain:
    """Identities of the composite values open between the root and the current node.

    ``enter``/``leave`` bracket the visit of one subtree. With ``legacy_seen`` the
    chain never forgets a value, so a second reference from a sibling branch is
    reported as circular as well.
    """

    def __init__(self, *, legacy_seen: bool = False) -> None:
        self._open: Set[int] = set()
        self._legacy_seen = legacy_seen

    def __contains__(self, value: object) -> bool:
        return id(value) in self._open

    def __len__(self) -> int:
        return len(self._open)

    def enter(self, value: object) -> None:
        self._open.add(id(value))

    def leave(self, value: object) -> None:
        if not self._legacy_seen:
            self._open.discard(id(value))

    @contextmanager
    def visiting(self, value: object) -> Iterator[None]:
        self.enter(value)
        try:
            yield
        finally:
            self.leave(value)


__all__ = ["AncestorChain", "UNDEFINED", "classify", "kind_of"]
