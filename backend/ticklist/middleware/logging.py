"""
Ticklist Backend — Request Logging Middleware
===============================================

What:  One access log line per HTTP request.
How:   Measures time around the downstream handler and logs method, path,
       status, duration, request ID, and client IP.
When:  Runs inside RequestIDMiddleware, so the request ID is already set.

Log level by status:
    5xx → ERROR     4xx → WARNING     otherwise → INFO

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ticklist.middleware.request_id import request_id_var

logger = logging.getLogger("ticklist.access")

# Probed every few seconds by the hosting environment
_UNLOGGED_PATHS = frozenset({"/"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, and duration for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path in _UNLOGGED_PATHS:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
