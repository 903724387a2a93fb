"""Persistent stores for history, options and theme."""

from .history import HistoryStore
from .kv import KeyValueStore, default_store_path
from .options import DisplayOptions, OptionsStore, ThemeStore

__all__ = [
    "DisplayOptions",
    "HistoryStore",
    "KeyValueStore",
    "OptionsStore",
    "ThemeStore",
    "default_store_path",
]
