from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from taskpulse.schemas.tasks import Task
from taskpulse.services.metrics import percentage

# Sunday-first. Ties go to the earliest weekday in this order.
WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@dataclass(frozen=True)
class ProductiveDay:
    day: str | None
    count: int
    percentage: int


def _sunday_first_index(task: Task) -> int:
    # date.weekday() is Monday=0 .. Sunday=6.
    return (task.completed_at.weekday() + 1) % 7  # type: ignore[union-attr]


def weekday_completion_counts(tasks: Iterable[Task]) -> list[int]:
    counts = [0] * len(WEEKDAY_NAMES)
    for task in tasks:
        if task.is_completed and task.completed_at is not None:
            counts[_sunday_first_index(task)] += 1
    return counts


def calculate_most_productive_day(tasks: Iterable[Task]) -> ProductiveDay:
    counts = weekday_completion_counts(tasks)
    total = sum(counts)
    if total == 0:
        return ProductiveDay(day=None, count=0, percentage=0)

    leader: str | None = None
    leader_count = 0
    for name, count in zip(WEEKDAY_NAMES, counts):
        if count > leader_count:
            leader = name
            leader_count = count

    return ProductiveDay(
        day=leader,
        count=leader_count,
        percentage=percentage(leader_count, total),
    )
