# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from mini_task_manager.core.config import Settings
from mini_task_manager.core.db import make_session_factory
from mini_task_manager.main import create_app
from mini_task_manager.services.bootstrap import ensure_schema, seed_if_empty


@pytest.fixture()
def settings() -> Settings:
    """Complete settings built explicitly, so no .env or process env leaks in."""
    return Settings(
        _env_file=None,
        db_host="db.internal",
        db_user="mtm_user",
        db_password="s3cret-pw",
        db_name="mini_task_manager",
    )


@pytest.fixture()
def memory_engine() -> Engine:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture()
def seeded_engine(memory_engine: Engine) -> Engine:
    ensure_schema(memory_engine)
    seed_if_empty(make_session_factory(memory_engine))
    return memory_engine


@pytest.fixture()
def sqlite_file_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'tasks.sqlite3'}"


@pytest.fixture()
def client(seeded_engine: Engine) -> TestClient:
    return TestClient(create_app(seeded_engine))
