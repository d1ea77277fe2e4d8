from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_env: str = Field(default="development", alias="APP_ENV")

    # Storage
    database_path: str = Field(default="taskpulse.db", alias="DATABASE_PATH")

    # Celebration / insights
    celebration_tone: Literal["enthusiastic", "gentle", "professional"] | None = (
        Field(default=None, alias="CELEBRATION_TONE")
    )
    enable_insights: bool = Field(default=True, alias="ENABLE_INSIGHTS")
    history_months: int = Field(default=6, alias="HISTORY_MONTHS")

    # Observability
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")
    sentry_traces_sample_rate: float = Field(
        default=0.0, alias="SENTRY_TRACES_SAMPLE_RATE"
    )

    @model_validator(mode="after")
    def validate_runtime_constraints(self) -> "Settings":
        if not (1 <= self.history_months <= 24):
            raise ValueError("HISTORY_MONTHS must be between 1 and 24")
        if not (0.0 <= self.sentry_traces_sample_rate <= 1.0):
            raise ValueError("SENTRY_TRACES_SAMPLE_RATE must be 0..1")
        if not self.database_path.strip():
            raise ValueError("DATABASE_PATH must not be empty")
        return self

    def is_sentry_configured(self) -> bool:
        return bool(self.sentry_dsn)


settings = Settings()  # singleton import via env settings
