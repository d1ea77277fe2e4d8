from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date as Date
from typing import Iterable, Sequence

from taskpulse.schemas.summaries import HistoricalTrends, MonthlySummary
from taskpulse.schemas.tasks import Task
from taskpulse.services.metrics import percentage, round_half_up
from taskpulse.services.months import first_day, last_day
from taskpulse.services.trends import series_from_trends

BAR_WIDTH = 20
LABEL_WIDTH = 20
COMPLETED_CHAR = "█"
PENDING_CHAR = "░"
SPARKLINE_CHARS = ("▁", "▂", "▃", "▄", "▅", "▆", "▇", "█")
NULL_CHAR = "·"

CHART_TITLE = "📊 Weekly Completion Pattern"

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class WeekBucket:
    start: Date
    end: Date
    completed: int
    total: int

    @property
    def label(self) -> str:
        return f"{_short_date(self.start)}-{_short_date(self.end)}"


def _short_date(day: Date) -> str:
    return f"{_MONTH_ABBR[day.month - 1]} {day.day}"


def _week_ranges(month: str) -> list[tuple[int, int]]:
    """Inclusive ordinal ranges; weeks start on Monday, clipped to the month."""
    first = first_day(month).toordinal()
    last = last_day(month).toordinal()

    ranges: list[tuple[int, int]] = []
    start = first
    while start <= last:
        # Date.weekday(): Monday=0 .. Sunday=6
        days_to_sunday = 6 - Date.fromordinal(start).weekday()
        end = min(start + days_to_sunday, last)
        ranges.append((start, end))
        start = end + 1
    return ranges


def group_tasks_by_week(tasks: Iterable[Task], month: str) -> list[WeekBucket]:
    ranges = _week_ranges(month)
    completed = [0] * len(ranges)
    totals = [0] * len(ranges)

    for task in tasks:
        created = task.created_at.date().toordinal()
        for index, (start, end) in enumerate(ranges):
            if start <= created <= end:
                totals[index] += 1
                if task.is_completed:
                    completed[index] += 1
                break

    return [
        WeekBucket(
            start=Date.fromordinal(start),
            end=Date.fromordinal(end),
            completed=completed[index],
            total=totals[index],
        )
        for index, (start, end) in enumerate(ranges)
    ]


def render_bar(completed: int, total: int, width: int = BAR_WIDTH) -> str:
    filled = round_half_up(completed / total * width) if total > 0 else 0
    return COMPLETED_CHAR * filled + PENDING_CHAR * (width - filled)


def generate_weekly_completion_chart(tasks: Iterable[Task], month: str) -> str:
    weeks = group_tasks_by_week(tasks, month)

    if all(week.total == 0 for week in weeks):
        return f"{CHART_TITLE}\n\nNo tasks created this month.\n"

    lines = [CHART_TITLE, ""]
    for number, week in enumerate(weeks, start=1):
        label = f"Week {number} ({week.label})".ljust(LABEL_WIDTH)
        bar = render_bar(week.completed, week.total)
        rate = percentage(week.completed, week.total)
        lines.append(f"{label} {bar} {week.completed}/{week.total} tasks ({rate}%)")

    total_completed = sum(week.completed for week in weeks)
    total_tasks = sum(week.total for week in weeks)
    lines.append("")
    lines.append(f"Legend: {COMPLETED_CHAR} = completed, {PENDING_CHAR} = pending")
    lines.append(
        f"Total: {total_completed}/{total_tasks} tasks completed "
        f"({percentage(total_completed, total_tasks)}%)"
    )
    return "\n".join(lines) + "\n"


def generate_sparkline(
    values: Sequence[float | None],
    *,
    min_value: float = 0,
    max_value: float = 100,
    null_char: str = NULL_CHAR,
) -> str:
    """One glyph per value; ``None`` renders as ``null_char``.

    The domain is widened to cover every observed value, so out-of-range
    points clamp to the lowest or highest glyph instead of failing.
    """
    if not values:
        return ""

    observed = [value for value in values if value is not None]
    if not observed:
        return null_char * len(values)

    low = min(min(observed), min_value)
    high = max(max(observed), max_value)
    span = high - low
    top = len(SPARKLINE_CHARS) - 1

    out: list[str] = []
    for value in values:
        if value is None:
            out.append(null_char)
            continue
        normalized = (value - low) / span if span > 0 else 0.5
        index = min(math.floor(normalized * len(SPARKLINE_CHARS)), top)
        out.append(SPARKLINE_CHARS[max(0, index)])
    return "".join(out)


def generate_completion_rate_sparkline(rates: Sequence[float | None]) -> str:
    return generate_sparkline(rates, min_value=0, max_value=100)


def generate_accuracy_sparkline(accuracies: Sequence[float | None]) -> str:
    return generate_sparkline(accuracies, min_value=0, max_value=100)


def _format_minutes(minutes: int) -> str:
    if minutes < 60:
        return f"{minutes} minutes"
    hours, rest = divmod(minutes, 60)
    unit = "hour" if hours == 1 else "hours"
    if rest == 0:
        return f"{hours} {unit}"
    return f"{hours} {unit} {rest} min"


def _long_month(month: str) -> str:
    day = first_day(month)
    return day.strftime("%B %Y")


def format_monthly_summary(
    summary: MonthlySummary, tasks: Sequence[Task] | None = None
) -> str:
    lines = [f"🎉 Monthly Progress Report - {_long_month(summary.month)}", ""]

    lines.append("📈 Tasks Overview")
    lines.append(f"  🎯 Total Created: {summary.total_tasks} tasks")
    lines.append(f"  ✅ Completed: {summary.completed_tasks} tasks")
    lines.append(f"  📊 Completion Rate: {summary.completion_rate}%")
    lines.append("")

    if summary.estimation_accuracy is not None:
        lines.append("⏱️  Time Estimation")
        lines.append(f"  🎓 Accuracy: {summary.estimation_accuracy}%")
        if summary.average_actual_minutes is not None:
            lines.append(
                f"  📏 Average Task Duration: {_format_minutes(summary.average_actual_minutes)}"
            )
        lines.append("")

    if summary.longest_streak > 0:
        plural = "s" if summary.longest_streak > 1 else ""
        lines.append("🔥 Productivity Streak")
        lines.append(
            f"  Longest Streak: {summary.longest_streak} consecutive day{plural}"
        )
        lines.append("")

    if summary.most_productive_day:
        lines.append("💪 Most Productive Day")
        lines.append(f"  🗓️  {summary.most_productive_day}")
        lines.append("")

    if tasks:
        lines.append(generate_weekly_completion_chart(tasks, summary.month))

    lines.append(summary.celebration_message)
    return "\n".join(lines) + "\n"


_ARROWS = {"up": "↑", "down": "↓", "stable": "→"}


def format_historical_trends(trends: HistoricalTrends) -> str:
    lines = ["📅 Historical Trends", ""]
    for item in trends.months:
        if item.summary is None:
            lines.append(f"  {item.month}  no summary")
            continue
        accuracy = (
            f"{item.summary.estimation_accuracy}%"
            if item.summary.estimation_accuracy is not None
            else "n/a"
        )
        arrow = f" {_ARROWS[item.trend.direction]}" if item.trend else ""
        lines.append(
            f"  {item.month}  {item.summary.completion_rate:>3}% complete{arrow}"
            f"  accuracy {accuracy}  streak {item.summary.longest_streak}d"
        )

    rates = series_from_trends(trends, "completion_rate")
    accuracies = series_from_trends(trends, "estimation_accuracy")
    lines.append("")
    lines.append(f"Completion rate: {generate_completion_rate_sparkline(rates)}")
    lines.append(f"Accuracy:        {generate_accuracy_sparkline(accuracies)}")
    lines.append("")
    lines.append(
        "Completion rate improving ✨"
        if trends.completion_rate_improving
        else "Completion rate holding steady"
    )
    lines.append(
        "Estimation accuracy improving ✨"
        if trends.estimation_accuracy_improving
        else "Estimation accuracy holding steady"
    )
    return "\n".join(lines) + "\n"
