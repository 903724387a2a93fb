"""Capped history of recently extracted inputs."""

from __future__ import annotations

import re
import time
from datetime import datetime
from typing import Callable, List, Optional

from ..models import HistoryEntry
from .kv import KeyValueStore

HISTORY_KEY = "history"
MAX_HISTORY = 15
MAX_INPUT_LENGTH = 5000
PREVIEW_LENGTH = 60

_WHITESPACE = re.compile(r"\s+")


class HistoryStore:
    """Newest-first ring buffer of raw inputs kept in a :class:`KeyValueStore`."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        limit: int = MAX_HISTORY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._limit = limit
        self._clock = clock

    def entries(self) -> List[HistoryEntry]:
        raw = self._store.get(HISTORY_KEY, [])
        if not isinstance(raw, list):
            return []
        entries: List[HistoryEntry] = []
        for payload in raw:
            entry = _entry_from_dict(payload)
            if entry is not None:
                entries.append(entry)
        return entries

    def add(self, text: str) -> HistoryEntry:
        now = self._clock()
        entries = self.entries()
        entry_id = int(now * 1000)
        if entries and entry_id <= entries[0].id:
            entry_id = entries[0].id + 1
        truncated = len(text) > MAX_INPUT_LENGTH
        entry = HistoryEntry(
            id=entry_id,
            input=text[:MAX_INPUT_LENGTH] if truncated else text,
            preview=_WHITESPACE.sub(" ", text[:PREVIEW_LENGTH]),
            time=datetime.fromtimestamp(now).isoformat(timespec="seconds"),
            truncated=truncated,
        )
        entries.insert(0, entry)
        del entries[self._limit :]
        self._store.set(HISTORY_KEY, [_entry_to_dict(item) for item in entries])
        return entry

    def get(self, entry_id: int) -> Optional[HistoryEntry]:
        for entry in self.entries():
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        self._store.remove(HISTORY_KEY)


def _entry_to_dict(entry: HistoryEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "input": entry.input,
        "preview": entry.preview,
        "time": entry.time,
        "truncated": entry.truncated,
    }


def _entry_from_dict(payload: object) -> Optional[HistoryEntry]:
    if not isinstance(payload, dict):
        return None
    entry_id = payload.get("id")
    text = payload.get("input")
    if not isinstance(entry_id, int) or not isinstance(text, str):
        return None
    preview = payload.get("preview")
    stamp = payload.get("time")
    return HistoryEntry(
        id=entry_id,
        input=text,
        preview=preview if isinstance(preview, str) else _WHITESPACE.sub(" ", text[:PREVIEW_LENGTH]),
        time=stamp if isinstance(stamp, str) else "",
        truncated=bool(payload.get("truncated", False)),
    )


__all__ = ["HISTORY_KEY", "MAX_HISTORY", "MAX_INPUT_LENGTH", "PREVIEW_LENGTH", "HistoryStore"]
