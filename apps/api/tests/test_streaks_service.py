from __future__ import annotations

from datetime import date as Date

from taskpulse.services.streaks import compute_longest_streak, extract_completion_dates
from tests.fixtures.tasks import done_on, make_task, pending_on


def test_compute_longest_streak_returns_five_for_five_consecutive_days() -> None:
    dates = [
        Date(2026, 2, 11),
        Date(2026, 2, 12),
        Date(2026, 2, 13),
        Date(2026, 2, 14),
        Date(2026, 2, 15),
    ]

    run = compute_longest_streak(dates)

    assert run.length == 5
    assert run.start_date == Date(2026, 2, 11)
    assert run.end_date == Date(2026, 2, 15)


def test_gap_resets_run_and_longest_is_kept() -> None:
    dates = [
        Date(2025, 9, 1),
        Date(2025, 9, 2),
        Date(2025, 9, 3),
        Date(2025, 9, 5),
        Date(2025, 9, 6),
    ]

    run = compute_longest_streak(dates)

    assert run.length == 3
    assert run.start_date == Date(2025, 9, 1)


def test_same_day_completions_count_once_and_order_does_not_matter() -> None:
    dates = [
        Date(2025, 9, 3),
        Date(2025, 9, 1),
        Date(2025, 9, 2),
        Date(2025, 9, 2),
        Date(2025, 9, 1),
    ]

    assert compute_longest_streak(dates).length == 3


def test_streak_crosses_month_boundary() -> None:
    dates = [Date(2025, 8, 30), Date(2025, 8, 31), Date(2025, 9, 1)]

    assert compute_longest_streak(dates).length == 3


def test_no_completions_is_zero_and_isolated_days_are_one() -> None:
    empty = compute_longest_streak([])
    isolated = compute_longest_streak([Date(2025, 9, 1), Date(2025, 9, 3)])

    assert empty.length == 0
    assert empty.start_date is None
    assert isolated.length == 1


def test_extract_completion_dates_ignores_pending_tasks() -> None:
    tasks = [
        done_on("2025-09-01"),
        pending_on("2025-09-02"),
        make_task("2025-09-03T08:00:00", completed="2025-09-04T23:59:00"),
    ]

    assert extract_completion_dates(tasks) == [Date(2025, 9, 1), Date(2025, 9, 4)]
