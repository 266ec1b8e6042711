"""
Ticklist Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn ticklist.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐  │
    │  │ GET / │ │ /crags   │ │ /routes  │ │ /ascents │  │
    │  └───────┘ └──────────┘ └──────────┘ └──────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ any internal failure → internal_server_error │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Apply migrations (only with RUN_MIGRATIONS_ON_STARTUP)
    3. Log startup complete

    Shutdown:
    1. Dispose the database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response

from ticklist import __version__
from ticklist.config import Settings, settings as default_settings
from ticklist.database import Database
from ticklist.exceptions import TicklistError, format_error_chain
from ticklist.middleware.logging import RequestLoggingMiddleware
from ticklist.middleware.request_id import RequestIDMiddleware, request_id_var
from ticklist.migrations import run_migrations
from ticklist.routes import health
from ticklist.routes.resources import ascents_router, crags_router, routes_router

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Called once from the lifespan, before anything else logs.
    Format: 2024-03-02T12:00:00 [INFO] ticklist.access: GET /crags 200 3.1ms ...
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Container runtimes capture stdout
        ],
        force=True,
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Error Mapping
# ══════════════════════════════════════════════════════════════════════════

def internal_server_error(exc: BaseException) -> Response:
    """
    Turn any internal failure into an empty 500 response.

    This is the only place failures become responses. The log line carries
    the full cause chain (e.g. the SQL statement, then the driver error) and
    the traceback; the client gets the status code and nothing else.
    Connectivity errors and constraint violations are not distinguished.
    Application errors also log their context dict (table, operation).
    """
    if isinstance(exc, TicklistError):
        logger.error(
            "internal server error [%s]: %s | Context: %s",
            request_id_var.get(""),
            format_error_chain(exc),
            exc.context,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.error(
            "internal server error [%s]: %s",
            request_id_var.get(""),
            format_error_chain(exc),
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    return Response(status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route application and unexpected exceptions to internal_server_error.

    Request validation errors are left to FastAPI's default 422 handler.

    Database failures, including unreachable servers, arrive as DatabaseError
    and take the first handler. The Exception handler is only for bugs:
    Starlette runs it in ServerErrorMiddleware, which re-raises after the 500
    is sent, so the server logs the traceback a second time and the access
    middleware writes no line for that request.
    """

    @app.exception_handler(TicklistError)
    async def handle_application_error(request: Request, exc: TicklistError):
        return internal_server_error(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return internal_server_error(exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:  Configuration; defaults to the process-wide settings
        database:  Pre-built Database; defaults to one built from settings.
                   Tests pass their own to point the app at SQLite.

    The Database is attached to app.state immediately (not in the lifespan),
    so a test transport that never runs the lifespan still has a pool.
    """
    settings = settings or default_settings
    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(settings.log_level)
        logger.info("Ticklist %s starting up...", __version__)

        if settings.run_migrations_on_startup:
            await run_migrations(settings)

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Ticklist shutting down...")
        await app.state.database.dispose()
        logger.info("Shutdown complete.")

    docs_enabled = settings.api_docs_enabled
    app = FastAPI(
        title="Ticklist API",
        description="Records climbing crags, the routes at them, and ascents of those routes.",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(crags_router)
    app.include_router(routes_router)
    app.include_router(ascents_router)

    return app


# uvicorn expects `ticklist.main:app` to be importable
app = create_app()
