"""TypeScript-style declarations generated directly from JSON values."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple, Union

from ..models import Span, ValueKind
from .emit import Emitter, PlainEmitter, SpanEmitter
from .values import AncestorChain, classify

DEFAULT_INTERFACE_NAME = "IResponse"

_IDENTIFIER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")

_PRIMITIVE_TYPES = {
    ValueKind.NULL: "null",
    ValueKind.UNDEFINED: "undefined",
    ValueKind.STRING: "string",
    ValueKind.NUMBER: "number",
    ValueKind.BOOLEAN: "boolean",
}


@dataclass(frozen=True)
class _Leave:
    value: Any


_Item = Union[Span, _Leave, Tuple[Any, int]]


def property_name(name: str) -> str:
    """Quote ``name`` unless it is a bare identifier."""
    if _IDENTIFIER.match(name):
        return name
    return json.dumps(name, ensure_ascii=False)


class TypeLangGenerator:
    """Emits ``interface``/``type`` declarations describing a JSON value.

    Only the first element of an array is inspected. Every field is required and
    no unions are produced. A value that refers back to one of its ancestors is
    typed as ``any``.
    """

    def __init__(self, interface_name: str = DEFAULT_INTERFACE_NAME) -> None:
        self.interface_name = interface_name or DEFAULT_INTERFACE_NAME

    def generate(self, value: Any, emitter: Emitter) -> None:
        name = self.interface_name
        if classify(value) is ValueKind.OBJECT:
            emitter.emit("interface", "keyword")
            emitter.emit(" ")
            emitter.emit(name, "interface")
            emitter.emit(" ")
            self._run([(value, 0)], emitter)
            return
        emitter.emit("type", "keyword")
        emitter.emit(" ")
        emitter.emit(name, "interface")
        emitter.emit(" = ")
        self._run([(value, 0)], emitter)
        emitter.emit(";")

    def _run(self, initial: List[_Item], emitter: Emitter) -> None:
        chain = AncestorChain()
        stack: List[_Item] = list(reversed(initial))
        while stack:
            item = stack.pop()
            if isinstance(item, Span):
                emitter.emit(item.text, item.kind)
            elif isinstance(item, _Leave):
                chain.leave(item.value)
            else:
                value, indent = item
                stack.extend(reversed(self._expand(value, indent, chain)))

    def _expand(self, value: Any, indent: int, chain: AncestorChain) -> List[_Item]:
        kind = classify(value)
        if kind.is_leaf:
            return [Span(_PRIMITIVE_TYPES[kind], "type")]
        if value in chain:
            return [Span("any", "type")]
        if kind is ValueKind.OBJECT:
            return self._structure(value, indent, chain)

        if len(value) == 0:
            return [Span("any", "type"), Span("[]")]
        first = value[0]
        chain.enter(value)
        if classify(first) is ValueKind.OBJECT and first not in chain:
            items: List[_Item] = [Span("Array", "type"), Span("<")]
            items.extend(self._structure(first, indent, chain))
            items.extend([Span(">"), _Leave(value)])
            return items
        return [(first, indent), Span("[]"), _Leave(value)]

    def _structure(self, obj: Mapping[str, Any], indent: int, chain: AncestorChain) -> List[_Item]:
        if not obj:
            return [Span("{}")]
        chain.enter(obj)
        pad = "  " * (indent + 1)
        items: List[_Item] = [Span("{\n")]
        for key in obj:
            items.append(Span(pad))
            items.append(Span(property_name(str(key)), "key"))
            items.append(Span(": "))
            items.append((obj[key], indent + 1))
            items.append(Span(";\n"))
        items.append(Span("  " * indent + "}"))
        items.append(_Leave(obj))
        return items


def generate_type_lang(value: Any, interface_name: str = DEFAULT_INTERFACE_NAME) -> str:
    """Return the declaration for ``value`` as plain text."""
    emitter = PlainEmitter()
    TypeLangGenerator(interface_name).generate(value, emitter)
    return emitter.text()


def generate_type_lang_spans(value: Any, interface_name: str = DEFAULT_INTERFACE_NAME) -> List[Span]:
    """Return the declaration for ``value`` as highlighted spans."""
    emitter = SpanEmitter()
    TypeLangGenerator(interface_name).generate(value, emitter)
    return emitter.spans()


__all__ = [
    "DEFAULT_INTERFACE_NAME",
    "TypeLangGenerator",
    "generate_type_lang",
    "generate_type_lang_spans",
    "property_name",
]
