from __future__ import annotations

from taskpulse.schemas.summaries import MonthlySummaryCreate


def make_summary(month: str, **overrides) -> MonthlySummaryCreate:
    base = {
        "month": month,
        "total_tasks": 4,
        "completed_tasks": 2,
        "completion_rate": 50,
        "average_actual_minutes": 30,
        "estimation_accuracy": 80,
        "longest_streak": 2,
        "most_productive_day": "Monday",
        "celebration_message": "📚 You completed 2 tasks this month!",
    }
    base.update(overrides)
    return MonthlySummaryCreate(**base)
