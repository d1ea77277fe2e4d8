from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from taskpulse.schemas.summaries import MonthlySummary, MonthlySummaryCreate
from taskpulse.schemas.tasks import Task, TaskCreate, TaskFilter
from taskpulse.services.database import from_db_timestamp, to_db_timestamp

logger = logging.getLogger(__name__)


class TaskSource(Protocol):
    def find_all(self, task_filter: TaskFilter | None = None) -> list[Task]: ...


class SummaryStore(Protocol):
    def save(self, summary: MonthlySummaryCreate) -> MonthlySummary: ...

    def find_by_month(self, month: str) -> MonthlySummary | None: ...

    def find_all(self, limit: int | None = None) -> list[MonthlySummary]: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _row_to_task(row: sqlite3.Row) -> Task:
    try:
        tags = json.loads(row["tags"] or "[]")
    except ValueError:
        logger.warning("Failed to parse tags for task %s", row["id"])
        tags = []
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        created_at=from_db_timestamp(row["created_at"]),
        completed_at=from_db_timestamp(row["completed_at"]),
        estimated_minutes=row["estimated_minutes"],
        actual_minutes=row["actual_minutes"],
        is_completed=bool(row["is_completed"]),
        tags=tags if isinstance(tags, list) else [],
    )


def _row_to_summary(row: sqlite3.Row) -> MonthlySummary:
    return MonthlySummary(
        id=row["id"],
        month=row["month"],
        total_tasks=row["total_tasks"],
        completed_tasks=row["completed_tasks"],
        completion_rate=row["completion_rate"],
        average_actual_minutes=row["average_actual_minutes"],
        estimation_accuracy=row["estimation_accuracy"],
        longest_streak=row["longest_streak"],
        most_productive_day=row["most_productive_day"],
        celebration_message=row["celebration_message"],
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


class SQLiteTaskRepository:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def create(self, task: TaskCreate) -> Task:
        task_id = str(uuid.uuid4())
        created_at = task.created_at or _utcnow()
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO tasks (id, title, description, created_at, estimated_minutes, tags)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    task_id,
                    task.title,
                    task.description,
                    to_db_timestamp(created_at),
                    task.estimated_minutes,
                    json.dumps(task.tags),
                ),
            )
        logger.info("Task created (id=%s)", task_id)
        created = self.find_by_id(task_id)
        if created is None:
            raise RuntimeError(f"Failed to read back task {task_id}")
        return created

    def complete(
        self,
        task_id: str,
        *,
        completed_at: datetime | None = None,
        actual_minutes: int | None = None,
    ) -> Task | None:
        """Mark a task complete; already completed tasks are returned unchanged."""
        current = self.find_by_id(task_id)
        if current is None:
            return None
        if current.is_completed:
            return current

        finished = completed_at or _utcnow()
        if actual_minutes is None:
            created = current.created_at
            end = finished
            if end.tzinfo is not None:
                end = end.astimezone(timezone.utc).replace(tzinfo=None)
            actual_minutes = max(0, int((end - created).total_seconds() // 60))

        with self._conn:
            self._conn.execute(
                """
                UPDATE tasks
                SET is_completed = 1, completed_at = ?, actual_minutes = ?
                WHERE id = ?
                """,
                (to_db_timestamp(finished), actual_minutes, task_id),
            )
        return self.find_by_id(task_id)

    def find_by_id(self, task_id: str) -> Task | None:
        row = self._conn.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()
        if row is None:
            return None
        return _row_to_task(row)

    def find_all(self, task_filter: TaskFilter | None = None) -> list[Task]:
        conditions: list[str] = []
        params: list[Any] = []

        if task_filter is not None:
            if task_filter.is_completed is not None:
                conditions.append("is_completed = ?")
                params.append(1 if task_filter.is_completed else 0)
            if task_filter.created_after is not None:
                conditions.append("created_at >= ?")
                params.append(to_db_timestamp(task_filter.created_after))
            if task_filter.created_before is not None:
                conditions.append("created_at < ?")
                params.append(to_db_timestamp(task_filter.created_before))
            if task_filter.completed_after is not None:
                conditions.append("completed_at >= ?")
                params.append(to_db_timestamp(task_filter.completed_after))
            if task_filter.completed_before is not None:
                conditions.append("completed_at < ?")
                params.append(to_db_timestamp(task_filter.completed_before))

        sql = "SELECT * FROM tasks"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY created_at ASC, id ASC"

        rows = self._conn.execute(sql, params).fetchall()
        return [_row_to_task(row) for row in rows]


class SQLiteMonthlySummaryRepository:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def save(self, summary: MonthlySummaryCreate) -> MonthlySummary:
        """Create or replace the summary for ``summary.month``.

        The upsert and the read-back share one transaction. Two writers racing
        on the same month still resolve as last-writer-wins.
        """
        logger.info("Saving monthly summary (month=%s)", summary.month)
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO monthly_summaries (
                    id, month, total_tasks, completed_tasks, completion_rate,
                    average_actual_minutes, estimation_accuracy, longest_streak,
                    most_productive_day, celebration_message
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(month) DO UPDATE SET
                    total_tasks = excluded.total_tasks,
                    completed_tasks = excluded.completed_tasks,
                    completion_rate = excluded.completion_rate,
                    average_actual_minutes = excluded.average_actual_minutes,
                    estimation_accuracy = excluded.estimation_accuracy,
                    longest_streak = excluded.longest_streak,
                    most_productive_day = excluded.most_productive_day,
                    celebration_message = excluded.celebration_message,
                    updated_at = strftime('%Y-%m-%dT%H:%M:%f', 'now')
                """,
                (
                    str(uuid.uuid4()),
                    summary.month,
                    summary.total_tasks,
                    summary.completed_tasks,
                    summary.completion_rate,
                    summary.average_actual_minutes,
                    summary.estimation_accuracy,
                    summary.longest_streak,
                    summary.most_productive_day,
                    summary.celebration_message,
                ),
            )
            row = self._conn.execute(
                "SELECT * FROM monthly_summaries WHERE month = ?", (summary.month,)
            ).fetchone()
        if row is None:
            raise RuntimeError(f"Failed to save monthly summary for {summary.month}")
        return _row_to_summary(row)

    def find_by_month(self, month: str) -> MonthlySummary | None:
        row = self._conn.execute(
            "SELECT * FROM monthly_summaries WHERE month = ?", (month,)
        ).fetchone()
        if row is None:
            return None
        return _row_to_summary(row)

    def find_all(self, limit: int | None = None) -> list[MonthlySummary]:
        if limit:
            rows = self._conn.execute(
                "SELECT * FROM monthly_summaries ORDER BY month DESC LIMIT ?",
                (limit,),
            ).fetchall()
        else:
            rows = self._conn.execute(
                "SELECT * FROM monthly_summaries ORDER BY month DESC"
            ).fetchall()
        return [_row_to_summary(row) for row in rows]

    def delete(self, month: str) -> bool:
        logger.info("Deleting monthly summary (month=%s)", month)
        with self._conn:
            cursor = self._conn.execute(
                "DELETE FROM monthly_summaries WHERE month = ?", (month,)
            )
        return cursor.rowcount > 0
