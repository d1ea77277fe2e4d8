from __future__ import annotations

import logging
import traceback
from typing import Any

logger = logging.getLogger(__name__)

_MAX_STACK_CHARS = 8000


def log_system_error(
    *,
    route: str,
    message: str,
    err: BaseException | None = None,
    meta: dict[str, Any] | None = None,
) -> None:
    # Best-effort logging; never raise.
    try:
        stack = None
        if err is not None:
            stack = "".join(
                traceback.format_exception(type(err), err, err.__traceback__)
            )[:_MAX_STACK_CHARS]
        logger.error(
            "%s (route=%s meta=%s)%s",
            message,
            route,
            meta or {},
            f"\n{stack}" if stack else "",
        )
    except Exception:
        return
