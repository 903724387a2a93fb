"""Tests for the FastAPI service mode."""

from __future__ import annotations

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from jsonshape.orchestrator import Orchestrator
from jsonshape.service import create_app
from jsonshape.stores import HistoryStore, KeyValueStore


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_extract_endpoint(client: TestClient) -> None:
    response = client.post("/extract", json={"text": '{"a": [1, 2]}', "policy": {"compact": True}})

    assert response.status_code == 200
    data = response.json()
    assert data["text"] == '{"a": array[2]<number>}'
    assert data["format"] == "structure"
    assert data["stats"] == {"keys": 1, "depth": 2}
    assert {"text": '"a"', "kind": "key"} in data["spans"]


def test_extract_typescript_endpoint(client: TestClient) -> None:
    response = client.post(
        "/extract",
        json={"text": "[1]", "format": "typescript", "interface_name": "Numbers"},
    )

    assert response.status_code == 200
    assert response.json()["text"] == "type Numbers = number[];"


def test_extract_rejects_invalid_json(client: TestClient) -> None:
    response = client.post("/extract", json={"text": '{"a": }'})

    assert response.status_code == 422
    body = response.json()
    assert body["detail"].startswith("Invalid JSON")
    assert body["line"] == 1


def test_extract_rejects_unknown_format(client: TestClient) -> None:
    response = client.post("/extract", json={"text": "{}", "format": "xml"})

    assert response.status_code == 422


def test_extract_does_not_record_history() -> None:
    history = HistoryStore(KeyValueStore(None))
    client = TestClient(create_app(lambda: Orchestrator(history=history)))

    assert client.post("/extract", json={"text": "[]"}).status_code == 200
    assert history.entries() == []


def test_diff_endpoint(client: TestClient) -> None:
    response = client.post("/diff", json={"a": '{"a": 1}', "b": '{"b": 1}'})

    assert response.status_code == 200
    data = response.json()
    assert data["identical"] is False
    assert data["added"] == [{"path": "b", "type": "number"}]
    assert data["removed"] == [{"path": "a", "type": "number"}]
    assert data["report"].startswith("+ Added fields:")


def test_format_endpoint(client: TestClient) -> None:
    response = client.post("/format", json={"text": '{"a":1}'})

    assert response.status_code == 200
    assert response.json() == {"text": '{\n  "a": 1\n}'}
