from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

TrendDirection = Literal["up", "down", "stable"]
EstimationType = Literal["accurate", "overestimate", "underestimate"]
CelebrationTone = Literal["enthusiastic", "gentle", "professional"]

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class MonthlySummaryCreate(BaseModel):
    month: str = Field(pattern=MONTH_PATTERN)
    total_tasks: int = Field(ge=0)
    completed_tasks: int = Field(ge=0)
    completion_rate: int = Field(ge=0, le=100)
    average_actual_minutes: int | None = None
    estimation_accuracy: int | None = Field(default=None, ge=0, le=100)
    longest_streak: int = Field(ge=0)
    most_productive_day: str | None = None
    celebration_message: str


class MonthlySummary(MonthlySummaryCreate):
    id: str
    created_at: datetime
    updated_at: datetime


class TrendData(BaseModel):
    direction: TrendDirection
    # Absolute percentage-point change.
    percentage: int


class AccuracyStats(BaseModel):
    accuracy: int | None = None
    tasks_analyzed: int = 0
    total_completed: int = 0
    average_estimate: int | None = None
    average_actual: int | None = None
    accurate_count: int = 0
    overestimate_count: int = 0
    underestimate_count: int = 0
    trend: TrendData | None = None


class TrendIndicator(BaseModel):
    metric: str
    current: int
    previous: int
    change: int
    direction: TrendDirection


class HistoricalMonth(BaseModel):
    month: str
    summary: MonthlySummary | None = None
    trend: TrendIndicator | None = None


class HistoricalTrends(BaseModel):
    months: list[HistoricalMonth]
    completion_rate_improving: bool
    estimation_accuracy_improving: bool
    average_trend: TrendDirection


class HistoricalTrendsResponse(HistoricalTrends):
    completion_rate_sparkline: str
    accuracy_sparkline: str


class MonthlyInsightsResponse(BaseModel):
    month: str
    milestones: list[str]
    suggestions: list[str]
    reminders: list[str]
