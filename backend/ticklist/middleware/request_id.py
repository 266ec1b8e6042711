"""
Ticklist Backend — Request ID Middleware
==========================================

What:  Assigns a correlation ID to each request and echoes it on the response.
Why:   The access line and any error logged while handling the request share
       the same ID, so a failing 500 can be matched to its traceback.
How:   Reads X-Request-ID if the client sent a usable one, otherwise generates
       a short UUID; stores it in a ContextVar read by the log calls.

A client-supplied ID is written into every log line for the request, so it is
reduced to a fixed alphabet and length first. One that is empty after that is
replaced with a generated ID.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

MAX_REQUEST_ID_LENGTH = 64

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9._:-]")

# Coroutine-local: concurrent requests on one event loop each see their own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def clean_request_id(raw: str) -> str:
    """Strip characters outside [A-Za-z0-9._:-] and cap the length."""
    return _DISALLOWED_CHARS.sub("", raw)[:MAX_REQUEST_ID_LENGTH]


def generate_request_id() -> str:
    # 8 hex chars is enough to correlate lines within one deployment
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with a log-safe correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = clean_request_id(request.headers.get("X-Request-ID", ""))
        if not rid:
            rid = generate_request_id()
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
