# Middleware package init
"""
Ticklist Backend — Middleware Package
=======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: pick up or generate a correlation ID
    2. Logging: one access line per request, tagged with that ID

    Responses travel back in reverse order, so the access line sees the final
    status code and the X-Request-ID header is set last.
"""
