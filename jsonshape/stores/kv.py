"""Persistent key-value blob store backed by a single JSON file."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ..logging import get_logger

_STORE_VERSION = 1
_HOME_ENV = "JSONSHAPE_HOME"

logger = get_logger("stores.kv")


def default_store_path() -> Path:
    """Return ``$JSONSHAPE_HOME/store.json`` or ``~/.jsonshape/store.json``."""
    home = os.environ.get(_HOME_ENV)
    base = Path(home).expanduser() if home else Path.home() / ".jsonshape"
    return base / "store.json"


class KeyValueStore:
    """Stores JSON-serialisable blobs by key.

    A missing, unreadable or foreign file loads as an empty store. Every
    ``set``/``remove`` is written through immediately. A ``None`` path keeps
    data in memory only.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Any] = {}
        if self._path is not None:
            self._load(self._path)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: str, value: Any) -> None:
        # Round-trip through JSON so callers cannot keep aliases to stored data.
        self._entries[key] = json.loads(json.dumps(value))
        self._persist()

    def remove(self, key: str) -> None:
        if key not in self._entries:
            return
        del self._entries[key]
        self._persist()

    # ------------------------------------------------------------------
    # Internal helpers

    def _persist(self) -> None:
        if self._path is None:
            return
        payload = {"version": _STORE_VERSION, "entries": self._entries}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False), encoding="utf-8"
        )
        logger.debug("Persisted %d store entries to %s", len(self._entries), self._path)

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", path, exc)
            return
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            logger.warning("Ignoring store %s with unsupported format", path)
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {key: value for key, value in entries.items() if isinstance(key, str)}


__all__ = ["KeyValueStore", "default_store_path"]
