"""Persisted display options and theme."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ..models import Policy
from .kv import KeyValueStore

OPTIONS_KEY = "options"
THEME_KEY = "theme"

OUTPUT_FORMATS = ("structure", "typescript")
THEMES = ("light", "dark")


@dataclass(frozen=True)
class DisplayOptions:
    """Policy plus the selected output format."""

    policy: Policy = field(default_factory=Policy)
    output_format: str = "structure"


class OptionsStore:
    """Loads and saves :class:`DisplayOptions` under the ``options`` key."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def load(self, base: DisplayOptions | None = None) -> DisplayOptions:
        """Return persisted options layered over ``base`` (defaults when omitted)."""
        base = base or DisplayOptions()
        raw = self._store.get(OPTIONS_KEY)
        if not isinstance(raw, dict):
            return base
        policy = Policy.from_mapping(raw, base=base.policy)
        output_format = raw.get("output_format", raw.get("outputFormat"))
        if output_format not in OUTPUT_FORMATS:
            output_format = base.output_format
        return DisplayOptions(policy=policy, output_format=output_format)

    def save(self, options: DisplayOptions) -> None:
        payload: Dict[str, Any] = options.policy.to_dict()
        payload["output_format"] = options.output_format
        self._store.set(OPTIONS_KEY, payload)


class ThemeStore:
    """Persists the colour theme; ``light`` unless set otherwise."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get(self) -> str:
        theme = self._store.get(THEME_KEY, "light")
        return theme if theme in THEMES else "light"

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}' (expected one of: {', '.join(THEMES)})")
        self._store.set(THEME_KEY, theme)
        return theme

    def toggle(self) -> str:
        return self.set("light" if self.get() == "dark" else "dark")


__all__ = ["DisplayOptions", "OUTPUT_FORMATS", "OptionsStore", "THEMES", "ThemeStore"]
