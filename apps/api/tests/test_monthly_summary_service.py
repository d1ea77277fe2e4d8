from __future__ import annotations

import sqlite3

import pytest

from taskpulse.services.monthly_summary import (
    MonthlySummaryService,
    build_monthly_summary,
)
from tests.fixtures.tasks import done_on, pending_on


@pytest.fixture
def service(task_repo, summary_repo) -> MonthlySummaryService:
    return MonthlySummaryService(task_repo, summary_repo)


def test_generate_summary_for_four_day_streak_month(service, add_task) -> None:
    for day in (1, 2, 3, 4):
        add_task(f"2025-09-0{day}T09:00:00", completed=f"2025-09-0{day}T18:00:00")
    add_task("2025-09-10T09:00:00")

    summary = service.generate_monthly_summary("2025-09")

    assert summary.month == "2025-09"
    assert summary.total_tasks == 5
    assert summary.completed_tasks == 4
    assert summary.completion_rate == 80
    assert summary.longest_streak == 4
    assert summary.average_actual_minutes == 540
    assert summary.estimation_accuracy is None
    # Mon..Thu with one completion each: Monday leads in Sunday-first order.
    assert summary.most_productive_day == "Monday"
    assert summary.celebration_message.startswith("🎯 Solid progress!")


def test_generate_summary_for_empty_month(service) -> None:
    summary = service.generate_monthly_summary("2025-02")

    assert summary.total_tasks == 0
    assert summary.completed_tasks == 0
    assert summary.completion_rate == 0
    assert summary.longest_streak == 0
    assert summary.most_productive_day is None
    assert summary.estimation_accuracy is None
    assert summary.average_actual_minutes is None
    assert summary.celebration_message.startswith("🚀 Ready to start fresh?")


def test_only_tasks_created_inside_the_month_are_counted(service, add_task) -> None:
    add_task("2025-08-31T23:59:59", completed="2025-09-01T10:00:00")
    add_task("2025-09-01T00:00:00", completed="2025-09-01T10:00:00")
    add_task("2025-09-30T23:59:59")
    add_task("2025-10-01T00:00:00")

    summary = service.generate_monthly_summary("2025-09")

    assert summary.total_tasks == 2
    assert summary.completed_tasks == 1
    assert summary.completion_rate == 50


def test_regenerating_is_idempotent_and_upserts(service, summary_repo, add_task) -> None:
    add_task("2025-09-01T09:00:00", completed="2025-09-01T09:30:00", estimated=30)
    add_task("2025-09-02T09:00:00")

    first = service.generate_monthly_summary("2025-09")
    second = service.generate_monthly_summary("2025-09")

    metric_fields = set(first.model_dump()) - {"created_at", "updated_at"}
    assert first.model_dump(include=metric_fields) == second.model_dump(
        include=metric_fields
    )
    assert len(summary_repo.find_all()) == 1


def test_regenerating_after_changes_replaces_metrics(
    service, summary_repo, task_repo, add_task
) -> None:
    pending = add_task("2025-09-01T09:00:00")
    first = service.generate_monthly_summary("2025-09")

    task_repo.complete(pending.id)
    second = service.generate_monthly_summary("2025-09")

    assert first.completed_tasks == 0
    assert second.completed_tasks == 1
    assert second.id == first.id
    assert summary_repo.find_by_month("2025-09").completed_tasks == 1


def test_summary_uses_configured_tone(task_repo, summary_repo, add_task) -> None:
    add_task("2025-09-01T09:00:00", completed="2025-09-01T10:00:00")
    service = MonthlySummaryService(task_repo, summary_repo, tone="professional")

    summary = service.generate_monthly_summary("2025-09")

    assert summary.celebration_message.startswith("Excellent performance this month: 100%")


def test_calculate_accuracy_compares_with_previous_month(service, add_task) -> None:
    add_task("2025-08-05T09:00:00", completed="2025-08-05T10:00:00", estimated=30, actual=60)
    add_task("2025-09-05T09:00:00", completed="2025-09-05T09:30:00", estimated=30, actual=30)

    stats = service.calculate_accuracy("2025-09")

    assert stats.accuracy == 100
    assert stats.trend is not None
    assert stats.trend.direction == "up"
    assert stats.trend.percentage == 50


def test_build_summary_rate_bounds() -> None:
    tasks = [done_on("2025-09-01"), pending_on("2025-09-02"), pending_on("2025-09-03")]

    summary = build_monthly_summary("2025-09", tasks)

    assert summary.completion_rate == 33
    assert 0 <= summary.completion_rate <= 100


class _FailingStore:
    def save(self, summary):
        raise sqlite3.IntegrityError("UNIQUE constraint failed: monthly_summaries.month")

    def find_by_month(self, month):
        return None

    def find_all(self, limit=None):
        return []


def test_persistence_errors_propagate_unchanged(task_repo) -> None:
    service = MonthlySummaryService(task_repo, _FailingStore())

    with pytest.raises(sqlite3.IntegrityError):
        service.generate_monthly_summary("2025-09")
