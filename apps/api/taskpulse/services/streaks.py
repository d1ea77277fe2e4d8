from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from typing import Iterable

from taskpulse.schemas.tasks import Task


@dataclass(frozen=True)
class StreakRun:
    length: int
    start_date: Date | None
    end_date: Date | None


def extract_completion_dates(tasks: Iterable[Task] | None) -> list[Date]:
    if not tasks:
        return []
    out: list[Date] = []
    for task in tasks:
        if task.is_completed and task.completed_at is not None:
            out.append(task.completed_at.date())
    return out


def compute_longest_streak(completion_dates: list[Date]) -> StreakRun:
    if not completion_dates:
        return StreakRun(0, None, None)

    # Consecutive days differ by exactly one ordinal.
    ordinals = sorted({day.toordinal() for day in completion_dates})

    best_len = 0
    best_start = ordinals[0]
    run_len = 0
    run_start = ordinals[0]
    prev: int | None = None
    for ordinal in ordinals:
        if prev is not None and ordinal == prev + 1:
            run_len += 1
        else:
            run_len = 1
            run_start = ordinal
        prev = ordinal
        if run_len > best_len:
            best_len = run_len
            best_start = run_start

    return StreakRun(
        length=best_len,
        start_date=Date.fromordinal(best_start),
        end_date=Date.fromordinal(best_start + best_len - 1),
    )
