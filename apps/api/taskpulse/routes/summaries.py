from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, status
from fastapi.responses import PlainTextResponse

from taskpulse.core.config import settings
from taskpulse.core.deps import SummaryRepoDep, SummaryServiceDep, TaskRepoDep
from taskpulse.schemas.summaries import (
    MONTH_PATTERN,
    AccuracyStats,
    MonthlyInsightsResponse,
    MonthlySummary,
)
from taskpulse.schemas.tasks import TaskFilter
from taskpulse.services.charts import format_monthly_summary
from taskpulse.services.insights import (
    detect_milestones,
    generate_gentle_reminders,
    generate_improvement_suggestions,
)
from taskpulse.services.repositories import SummaryStore

router = APIRouter()

MonthPath = Annotated[str, Path(pattern=MONTH_PATTERN, description="YYYY-MM")]


@router.post("/summaries/{month}", response_model=MonthlySummary)
def regenerate_summary(month: MonthPath, service: SummaryServiceDep) -> MonthlySummary:
    return service.generate_monthly_summary(month)


@router.get("/summaries", response_model=list[MonthlySummary])
def list_summaries(
    repo: SummaryRepoDep,
    limit: int | None = Query(default=None, ge=1, le=120),
) -> list[MonthlySummary]:
    return repo.find_all(limit)


def _stored_summary(repo: SummaryStore, month: str) -> MonthlySummary:
    summary = repo.find_by_month(month)
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No summary for {month}",
        )
    return summary


@router.get("/summaries/{month}", response_model=MonthlySummary)
def get_summary(month: MonthPath, repo: SummaryRepoDep) -> MonthlySummary:
    return _stored_summary(repo, month)


@router.get("/summaries/{month}/accuracy", response_model=AccuracyStats)
def get_accuracy(
    month: MonthPath,
    service: SummaryServiceDep,
    compare_previous: bool = Query(default=True),
) -> AccuracyStats:
    return service.calculate_accuracy(month, compare_previous=compare_previous)


@router.get("/summaries/{month}/report", response_class=PlainTextResponse)
def get_report(
    month: MonthPath, repo: SummaryRepoDep, service: SummaryServiceDep
) -> str:
    summary = _stored_summary(repo, month)
    return format_monthly_summary(summary, service.get_month_tasks(month))


@router.get("/summaries/{month}/insights", response_model=MonthlyInsightsResponse)
def get_insights(
    month: MonthPath,
    repo: SummaryRepoDep,
    service: SummaryServiceDep,
    tasks: TaskRepoDep,
    seen: list[str] = Query(default=[]),
) -> MonthlyInsightsResponse:
    summary = _stored_summary(repo, month)
    accuracy = service.calculate_accuracy(month, compare_previous=False)
    completed_all_time = len(tasks.find_all(TaskFilter(is_completed=True)))
    pending = tasks.find_all(TaskFilter(is_completed=False))
    tone = settings.celebration_tone

    return MonthlyInsightsResponse(
        month=month,
        milestones=detect_milestones(summary, completed_all_time, seen),
        suggestions=generate_improvement_suggestions(
            summary, accuracy, tone=tone, enable_insights=settings.enable_insights
        ),
        reminders=generate_gentle_reminders(
            pending,
            now=datetime.now(timezone.utc),
            tone=tone,
            enable_insights=settings.enable_insights,
        ),
    )
