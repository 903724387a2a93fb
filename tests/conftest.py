from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from jsonshape.stores import KeyValueStore


@pytest.fixture
def response_payload() -> dict[str, Any]:
    """A typical API response used across inference, type and diff tests."""
    return {"code": 200, "data": {"users": [{"id": 1, "name": "x"}], "total": 1}}


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "store.json")


@pytest.fixture
def jsonshape_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default store location at a temporary directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("JSONSHAPE_HOME", str(home))
    return home
