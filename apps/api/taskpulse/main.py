from __future__ import annotations

import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from taskpulse.core.config import settings
from taskpulse.routes.summaries import router as summaries_router
from taskpulse.routes.trends import router as trends_router
from taskpulse.services.error_log import log_system_error

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="taskpulse API", version="0.1.0")


def _init_sentry() -> None:
    if not settings.is_sentry_configured():
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[FastApiIntegration()],
        traces_sample_rate=settings.sentry_traces_sample_rate,
        send_default_pii=False,
        environment=settings.app_env,
    )


_init_sentry()


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.exception_handler(sqlite3.Error)
async def database_error_handler(request: Request, exc: sqlite3.Error):
    is_constraint = isinstance(exc, sqlite3.IntegrityError)
    detail = {
        "message": "Summary storage request failed.",
        "code": "constraint_violation" if is_constraint else "storage_error",
    }
    log_system_error(
        route=str(request.url.path),
        message="Database request failed",
        err=exc,
        meta={"method": request.method, "error_type": type(exc).__name__},
    )
    return JSONResponse(status_code=503, content={"detail": detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log_system_error(
        route=str(request.url.path),
        message="Unhandled server error",
        err=exc,
        meta={"method": request.method},
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(summaries_router, prefix="/api")
app.include_router(trends_router, prefix="/api")
