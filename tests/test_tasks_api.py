from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_list_is_empty_initially(client: TestClient) -> None:
    resp = client.get("/tasks")
    assert resp.status_code == 200
    assert resp.json() == []


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_returns_full_record(created: dict) -> None:
    assert set(created) == {"id", "title", "description", "status", "createdAt", "updatedAt"}
    assert isinstance(created["id"], int)
    assert created["title"] == "Teste"
    assert created["description"] == "Descrição"
    assert created["status"] == "open"
    assert created["createdAt"] == created["updatedAt"]


@pytest.mark.parametrize("status", ["open", "doing", "done"])
def test_create_keeps_supplied_status(client: TestClient, status: str) -> None:
    resp = client.post("/tasks", json={"title": "T", "description": "D", "status": status})
    assert resp.status_code == 201
    assert resp.json()["status"] == status


def test_create_accepts_empty_description(client: TestClient) -> None:
    resp = client.post("/tasks", json={"title": "T", "description": ""})
    assert resp.status_code == 201
    assert resp.json()["description"] == ""


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "description": "x"},
        {"title": "T", "description": "D", "status": "invalid"},
        {"description": "missing title"},
        {"title": "missing description"},
        {"title": 123, "description": "D"},
        {"title": "T", "description": "D", "priority": "high"},
        {"title": None, "description": "D"},
    ],
)
def test_create_rejects_invalid_payloads(client: TestClient, payload: dict) -> None:
    resp = client.post("/tasks", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Validation failed"
    assert body["errors"]
    assert client.get("/tasks").json() == []


def test_create_rejects_malformed_json(client: TestClient) -> None:
    resp = client.post("/tasks", content=b"{not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400


def test_get_created_and_list(client: TestClient, created: dict) -> None:
    resp = client.get(f"/tasks/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created

    listed = client.get("/tasks").json()
    assert [t["id"] for t in listed] == [created["id"]]


def test_list_is_ordered_by_id(client: TestClient) -> None:
    ids = [client.post("/tasks", json={"title": f"t{i}", "description": ""}).json()["id"] for i in range(3)]
    assert [t["id"] for t in client.get("/tasks").json()] == sorted(ids)


@pytest.mark.parametrize("method", ["get", "put", "delete"])
@pytest.mark.parametrize(
    "task_id", ["1", "999", "-1", "99999999999999999999", "-99999999999999999999", "9223372036854775808"]
)
def test_absent_ids_are_404(client: TestClient, method: str, task_id: str) -> None:
    kwargs = {"json": {"title": "x"}} if method == "put" else {}
    resp = getattr(client, method)(f"/tasks/{task_id}", **kwargs)
    assert resp.status_code == 404
    assert resp.json()["detail"] == f"Task with id {int(task_id)} not found"


@pytest.mark.parametrize("method", ["get", "put", "delete"])
@pytest.mark.parametrize("task_id", ["abc", "1.5", "1e3", "0x10", "١", "１"])
def test_non_integer_ids_are_400(client: TestClient, created: dict, method: str, task_id: str) -> None:
    kwargs = {"json": {"title": "x"}} if method == "put" else {}
    resp = getattr(client, method)(f"/tasks/{task_id}", **kwargs)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["loc"] == ["path", "task_id"]


def test_decimal_form_of_existing_id_is_400(client: TestClient, created: dict) -> None:
    assert client.get(f"/tasks/{created['id']}.5").status_code == 400


def test_partial_update_keeps_other_fields(client: TestClient, created: dict) -> None:
    resp = client.put(f"/tasks/{created['id']}", json={"title": "Atualizado"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "Atualizado"
    assert updated["description"] == created["description"]
    assert updated["status"] == created["status"]
    assert updated["createdAt"] == created["createdAt"]
    assert _ts(updated["updatedAt"]) > _ts(created["updatedAt"])

    assert client.get(f"/tasks/{created['id']}").json() == updated


def test_update_status_and_description(client: TestClient, created: dict) -> None:
    resp = client.put(f"/tasks/{created['id']}", json={"status": "doing", "description": ""})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "doing"
    assert body["description"] == ""
    assert body["title"] == created["title"]


def test_empty_update_only_refreshes_timestamp(client: TestClient, created: dict) -> None:
    resp = client.put(f"/tasks/{created['id']}", json={})
    assert resp.status_code == 200
    body = resp.json()
    assert {k: body[k] for k in ("title", "description", "status")} == {
        k: created[k] for k in ("title", "description", "status")
    }
    assert _ts(body["updatedAt"]) > _ts(created["updatedAt"])


@pytest.mark.parametrize(
    "payload",
    [
        {"title": ""},
        {"status": "finished"},
        {"title": None},
        {"status": None},
        {"id": 5},
        {"createdAt": "2020-01-01T00:00:00Z"},
        {"description": 7},
    ],
)
def test_update_rejects_invalid_payloads(client: TestClient, created: dict, payload: dict) -> None:
    resp = client.put(f"/tasks/{created['id']}", json=payload)
    assert resp.status_code == 400
    assert client.get(f"/tasks/{created['id']}").json() == created


def test_create_update_delete_scenario(client: TestClient) -> None:
    resp = client.post("/tasks", json={"title": "Teste", "description": "Descrição"})
    assert resp.status_code == 201
    task = resp.json()
    assert task["status"] == "open"

    resp = client.put(f"/tasks/{task['id']}", json={"title": "Atualizado"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "Atualizado"
    assert resp.json()["description"] == "Descrição"

    resp = client.delete(f"/tasks/{task['id']}")
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get(f"/tasks/{task['id']}").status_code == 404
    assert client.delete(f"/tasks/{task['id']}").status_code == 404


def test_ids_are_not_reused_after_delete(client: TestClient) -> None:
    first = client.post("/tasks", json={"title": "a", "description": ""}).json()
    assert client.delete(f"/tasks/{first['id']}").status_code == 204
    second = client.post("/tasks", json={"title": "b", "description": ""}).json()
    assert second["id"] > first["id"]


def test_request_id_is_echoed(client: TestClient) -> None:
    resp = client.get("/tasks", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
    assert client.get("/tasks").headers["X-Request-ID"]
