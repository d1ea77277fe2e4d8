from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from taskpulse.schemas.summaries import AccuracyStats, EstimationType, TrendData
from taskpulse.schemas.tasks import Task
from taskpulse.services.metrics import mean_or_none, round_half_up, trend_direction

logger = logging.getLogger(__name__)

# Estimates within 10% of the actual duration (at least one minute) count as accurate.
_TOLERANCE_PERCENT = 10


@dataclass(frozen=True)
class EstimationAccuracy:
    estimated_minutes: int
    actual_minutes: int
    accuracy_percentage: int
    estimation_type: EstimationType


def calculate_estimation_accuracy(
    estimated_minutes: int, actual_minutes: int
) -> EstimationAccuracy:
    longest = max(estimated_minutes, actual_minutes)
    difference = abs(estimated_minutes - actual_minutes)
    accuracy = max(0, round_half_up(100 - (difference / longest) * 100))

    tolerance = max(1, round_half_up(actual_minutes * _TOLERANCE_PERCENT / 100))
    estimation_type: EstimationType
    if difference <= tolerance:
        estimation_type = "accurate"
    elif estimated_minutes > actual_minutes:
        estimation_type = "overestimate"
    else:
        estimation_type = "underestimate"

    return EstimationAccuracy(
        estimated_minutes=estimated_minutes,
        actual_minutes=actual_minutes,
        accuracy_percentage=accuracy,
        estimation_type=estimation_type,
    )


def _has_estimate(task: Task) -> bool:
    return (
        task.is_completed
        and task.estimated_minutes is not None
        and task.actual_minutes is not None
        and task.estimated_minutes > 0
        and task.actual_minutes > 0
    )


def calculate_accuracy_stats(
    tasks: Iterable[Task],
    previous_tasks: Iterable[Task] | None = None,
) -> AccuracyStats:
    """Aggregate estimation accuracy over tasks already filtered to one period.

    Only completed tasks carrying a positive estimate and a positive actual
    duration are scored; ``total_completed`` still counts every completed task.
    When ``previous_tasks`` is given and both periods have a score, a trend
    against the previous period is attached.
    """
    task_list = list(tasks)
    analyzed = [task for task in task_list if _has_estimate(task)]
    total_completed = sum(1 for task in task_list if task.is_completed)

    if not analyzed:
        logger.info(
            "No tasks with estimates found (total_completed=%s)", total_completed
        )
        return AccuracyStats(total_completed=total_completed)

    scored = [
        calculate_estimation_accuracy(task.estimated_minutes, task.actual_minutes)  # type: ignore[arg-type]
        for task in analyzed
    ]
    accuracy = mean_or_none([item.accuracy_percentage for item in scored])

    trend: TrendData | None = None
    if previous_tasks is not None:
        previous = calculate_accuracy_stats(previous_tasks)
        if previous.accuracy is not None and accuracy is not None:
            trend = TrendData(
                direction=trend_direction(accuracy, previous.accuracy),
                percentage=abs(accuracy - previous.accuracy),
            )

    stats = AccuracyStats(
        accuracy=accuracy,
        tasks_analyzed=len(analyzed),
        total_completed=total_completed,
        average_estimate=mean_or_none([item.estimated_minutes for item in scored]),
        average_actual=mean_or_none([item.actual_minutes for item in scored]),
        accurate_count=sum(1 for s in scored if s.estimation_type == "accurate"),
        overestimate_count=sum(
            1 for s in scored if s.estimation_type == "overestimate"
        ),
        underestimate_count=sum(
            1 for s in scored if s.estimation_type == "underestimate"
        ),
        trend=trend,
    )
    logger.info(
        "Accuracy calculation complete (accuracy=%s analyzed=%s trend=%s)",
        stats.accuracy,
        stats.tasks_analyzed,
        trend.direction if trend else None,
    )
    return stats
