from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_tracker.app.main import create_app
from task_tracker.config import Settings


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(db_path=str(tmp_path / "tasks.db"), log_dir=str(tmp_path / "logs"), log_level="WARNING")


@pytest.fixture()
def client(settings: Settings):
    # the context manager runs the lifespan, which creates the table
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def created(client: TestClient) -> dict:
    resp = client.post("/tasks", json={"title": "Teste", "description": "Descrição"})
    assert resp.status_code == 201
    return resp.json()
