"""
Access logging for the todo/user API.

Each request produces one log line with method, path, status and latency.
Failed requests (4xx) are logged at INFO so rejected ids, bad bodies and
refused tokens show up under the default level; successful ones only at
DEBUG. Request bodies and the ``x-auth`` header are never logged.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("todo_api.access")

RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms:.1f}"
        level = logging.INFO if response.status_code >= 400 else logging.DEBUG
        logger.log(
            level,
            "%s %s %d %.1fms",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response
