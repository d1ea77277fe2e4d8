from __future__ import annotations

import os
import sqlite3
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

# Ensure CI can import app settings without a local .env file.
_ENV_DEFAULTS = {
    "APP_ENV": "test",
    "DATABASE_PATH": ":memory:",
}
for _key, _value in _ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)

from taskpulse.core.deps import get_db
from taskpulse.main import app
from taskpulse.schemas.tasks import TaskCreate
from taskpulse.services.database import connect, init_schema
from taskpulse.services.repositories import (
    SQLiteMonthlySummaryRepository,
    SQLiteTaskRepository,
)


@pytest.fixture(autouse=True)
def reset_test_state() -> None:
    app.dependency_overrides.clear()


@pytest.fixture
def db() -> sqlite3.Connection:
    conn = connect(":memory:")
    init_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def task_repo(db: sqlite3.Connection) -> SQLiteTaskRepository:
    return SQLiteTaskRepository(db)


@pytest.fixture
def summary_repo(db: sqlite3.Connection) -> SQLiteMonthlySummaryRepository:
    return SQLiteMonthlySummaryRepository(db)


@pytest.fixture
def add_task(task_repo: SQLiteTaskRepository):
    """Insert a task, optionally completing it: add_task("2025-09-01T09:00", completed=...)."""

    def _add(
        created: str,
        *,
        completed: str | None = None,
        estimated: int | None = None,
        actual: int | None = None,
        title: str = "Task",
    ):
        task = task_repo.create(
            TaskCreate(
                title=title,
                estimated_minutes=estimated,
                created_at=datetime.fromisoformat(created),
            )
        )
        if completed is not None:
            task = task_repo.complete(
                task.id,
                completed_at=datetime.fromisoformat(completed),
                actual_minutes=actual,
            )
        return task

    return _add


@pytest.fixture
def client(db: sqlite3.Connection) -> TestClient:
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    # Surface unhandled errors as 500 responses instead of re-raising.
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
