from __future__ import annotations

import logging

from taskpulse.schemas.summaries import (
    AccuracyStats,
    CelebrationTone,
    MonthlySummary,
    MonthlySummaryCreate,
)
from taskpulse.schemas.tasks import Task, TaskFilter
from taskpulse.services.accuracy import calculate_accuracy_stats
from taskpulse.services.celebration import generate_celebration_message
from taskpulse.services.metrics import mean_or_none, percentage
from taskpulse.services.months import month_bounds, shift_month
from taskpulse.services.productive_day import calculate_most_productive_day
from taskpulse.services.repositories import SummaryStore, TaskSource
from taskpulse.services.streaks import compute_longest_streak, extract_completion_dates

logger = logging.getLogger(__name__)


def build_monthly_summary(
    month: str,
    tasks: list[Task],
    *,
    tone: CelebrationTone | None = None,
) -> MonthlySummaryCreate:
    """Compute every summary metric for one month's tasks. Pure."""
    total = len(tasks)
    completed = [task for task in tasks if task.is_completed]
    completion_rate = percentage(len(completed), total)

    average_actual = mean_or_none(
        [task.actual_minutes for task in completed if task.actual_minutes is not None]
    )
    accuracy = calculate_accuracy_stats(tasks)
    streak = compute_longest_streak(extract_completion_dates(tasks))
    productive_day = calculate_most_productive_day(tasks)

    message = generate_celebration_message(
        completion_rate, len(completed), streak.length, tone=tone
    )

    return MonthlySummaryCreate(
        month=month,
        total_tasks=total,
        completed_tasks=len(completed),
        completion_rate=completion_rate,
        average_actual_minutes=average_actual,
        estimation_accuracy=accuracy.accuracy,
        longest_streak=streak.length,
        most_productive_day=productive_day.day,
        celebration_message=message,
    )


class MonthlySummaryService:
    def __init__(
        self,
        task_source: TaskSource,
        summary_store: SummaryStore,
        *,
        tone: CelebrationTone | None = None,
    ):
        self._tasks = task_source
        self._summaries = summary_store
        self._tone = tone

    def get_month_tasks(self, month: str) -> list[Task]:
        start, end = month_bounds(month)
        return self._tasks.find_all(TaskFilter(created_after=start, created_before=end))

    def generate_monthly_summary(self, month: str) -> MonthlySummary:
        logger.info("Generating monthly summary (month=%s)", month)
        tasks = self.get_month_tasks(month)
        summary = self._summaries.save(
            build_monthly_summary(month, tasks, tone=self._tone)
        )
        logger.info(
            "Monthly summary generated (month=%s total=%s completed=%s rate=%s)",
            month,
            summary.total_tasks,
            summary.completed_tasks,
            summary.completion_rate,
        )
        return summary

    def calculate_accuracy(
        self, month: str, *, compare_previous: bool = True
    ) -> AccuracyStats:
        tasks = self.get_month_tasks(month)
        previous = (
            self.get_month_tasks(shift_month(month, -1)) if compare_previous else None
        )
        return calculate_accuracy_stats(tasks, previous)
