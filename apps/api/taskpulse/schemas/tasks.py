from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Task(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    created_at: datetime
    completed_at: datetime | None = None
    estimated_minutes: int | None = Field(default=None, ge=1, le=1440)
    actual_minutes: int | None = Field(default=None, ge=0)
    is_completed: bool = False
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_completion_fields(self) -> "Task":
        if self.actual_minutes is not None and not self.is_completed:
            raise ValueError("actual_minutes requires a completed task")
        return self


class TaskCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    estimated_minutes: int | None = Field(default=None, ge=1, le=1440)
    tags: list[str] = Field(default_factory=list)
    # Backfilled imports may carry their own creation time.
    created_at: datetime | None = None


class TaskFilter(BaseModel):
    """Lower bounds are inclusive, upper bounds exclusive."""

    created_after: datetime | None = None
    created_before: datetime | None = None
    completed_after: datetime | None = None
    completed_before: datetime | None = None
    is_completed: bool | None = None
