# tests/test_api.py

from __future__ import annotations

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from mini_task_manager.api.routes_health import INFO_MESSAGE
from mini_task_manager.main import create_app
from mini_task_manager.services.bootstrap import SEED_TASKS, ensure_schema


def _severed_app():
    """App whose sessions fail every query, as if the server went away."""
    session = MagicMock(name="session")
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("server has gone away"))
    session.query.side_effect = OperationalError("SELECT tasks", {}, Exception("server has gone away"))

    app = create_app()
    app.state.session_factory = MagicMock(return_value=session)
    return app, session


def test_info_is_plain_text(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == INFO_MESSAGE
    assert r.headers["content-type"].startswith("text/plain")


def test_health_ok_after_bootstrap(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "OK"}


def test_health_without_pool_is_unavailable() -> None:
    client = TestClient(create_app())
    r = client.get("/health")
    assert r.status_code == 503
    assert r.json() == {"status": "DB_NOT_INITIALIZED"}


def test_tasks_returns_seed_rows_in_id_order(client: TestClient) -> None:
    r = client.get("/tasks")
    assert r.status_code == 200

    body = r.json()
    assert [t["id"] for t in body] == [1, 2, 3, 4]
    assert [(t["title"], t["status"]) for t in body] == SEED_TASKS
    for t in body:
        assert set(t) == {"id", "title", "status"}
        assert isinstance(t["id"], int)
        assert isinstance(t["title"], str)
        assert isinstance(t["status"], str)


def test_tasks_without_pool_fails_generically() -> None:
    client = TestClient(create_app())
    r = client.get("/tasks")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch tasks"}


def test_severed_database_keeps_serving() -> None:
    app, session = _severed_app()
    client = TestClient(app)

    health = client.get("/health")
    assert health.status_code == 500
    assert health.json() == {"status": "DB_ERROR"}
    assert "gone away" not in health.text

    tasks = client.get("/tasks")
    assert tasks.status_code == 500
    assert tasks.json() == {"error": "Failed to fetch tasks"}
    assert "gone away" not in tasks.text

    info = client.get("/")
    assert info.status_code == 200
    assert info.text == INFO_MESSAGE

    assert session.close.call_count == 2


def test_empty_table_lists_nothing(memory_engine) -> None:
    ensure_schema(memory_engine)
    client = TestClient(create_app(memory_engine))
    r = client.get("/tasks")
    assert r.status_code == 200
    assert r.json() == []
