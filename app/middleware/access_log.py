"""Access logging middleware — one log line per request."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app.access")

class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, query, status and duration for every request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info(
            "%s %s → %d (%dms)", request.method, path, response.status_code, duration_ms
        )
        return response
