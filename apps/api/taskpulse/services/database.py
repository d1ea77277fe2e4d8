from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

_SCHEMA = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL CHECK(length(title) > 0 AND length(title) <= 200),
    description TEXT CHECK(description IS NULL OR length(description) <= 1000),
    created_at TEXT NOT NULL,
    completed_at TEXT,
    estimated_minutes INTEGER CHECK(
        estimated_minutes IS NULL OR (estimated_minutes >= 1 AND estimated_minutes <= 1440)
    ),
    actual_minutes INTEGER CHECK(actual_minutes IS NULL OR actual_minutes >= 0),
    is_completed INTEGER NOT NULL DEFAULT 0 CHECK(is_completed IN (0, 1)),
    tags TEXT NOT NULL DEFAULT '[]' CHECK(json_valid(tags))
);

CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at);
CREATE INDEX IF NOT EXISTS idx_tasks_completed_at ON tasks(completed_at);
CREATE INDEX IF NOT EXISTS idx_tasks_is_completed ON tasks(is_completed);

CREATE TABLE IF NOT EXISTS monthly_summaries (
    id TEXT PRIMARY KEY,
    month TEXT NOT NULL UNIQUE CHECK(month GLOB '[0-9][0-9][0-9][0-9]-[0-9][0-9]'),
    total_tasks INTEGER NOT NULL DEFAULT 0,
    completed_tasks INTEGER NOT NULL DEFAULT 0,
    completion_rate INTEGER NOT NULL DEFAULT 0,
    average_actual_minutes INTEGER NULL,
    estimation_accuracy INTEGER NULL,
    longest_streak INTEGER NOT NULL DEFAULT 0,
    most_productive_day TEXT NULL,
    celebration_message TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now')),
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

CREATE INDEX IF NOT EXISTS idx_monthly_summaries_month ON monthly_summaries(month DESC);
"""


def connect(path: str) -> sqlite3.Connection:
    # FastAPI runs sync dependencies in a worker thread.
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(_SCHEMA)


def to_db_timestamp(value: datetime) -> str:
    # Stored as naive UTC with fixed-width fractions so text comparison orders correctly.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="microseconds")


def from_db_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)
