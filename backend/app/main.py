"""Backend API — FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Settings are passed in and stored on app.state; components read them from there
    - Every response carries permissive CORS headers, including 500s from the interceptor
    - OPTIONS on any path answers 200 (CORS preflight)
    - Database manager created in the lifespan; a failure there goes through the
      startup failure entry and aborts startup
    - Interactive docs at /swagger, OpenAPI document at /swagger.json

Serve with `python -m app` (see app/server.py).
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from app.api.error_handlers import register_error_handlers, report_startup_failure
from app.api.routes import health, test_projects
from app.config import Settings, get_settings
from app.infrastructure.background import DetachedTasks
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    try:
        app.state.db_manager = DatabaseSessionManager(settings.database_url)
    except Exception as exc:
        report_startup_failure(exc, settings)
        raise
    logger.info("Backend API started")
    yield
    logger.info("Backend API shutting down")
    # Let in-flight reports finish within their own timeouts; never cancel them
    await app.state.detached_tasks.drain(
        timeout=settings.error_report_connect_timeout
        + settings.error_report_read_timeout,
    )
    await app.state.db_manager.dispose()


def create_app(
    settings: Settings | None = None,
    *,
    error_reporter: ErrorReporter | None = None,
) -> FastAPI:
    """Build the application. error_reporter defaults to one built from settings."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Backend API",
        version="1.0.0",
        description="TestProjects CRUD API",
        lifespan=lifespan,
        docs_url="/swagger",
        openapi_url="/swagger.json",
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.detached_tasks = DetachedTasks()
    if error_reporter is None and settings.reporting_enabled:
        error_reporter = ErrorReporter.from_settings(settings)
    app.state.error_reporter = error_reporter

    # Order matters: the interceptor must sit inside the CORS middleware
    register_error_handlers(app)
    _register_cors(app)

    app.include_router(health.router)
    app.include_router(test_projects.router)
    return app


def _register_cors(app: FastAPI) -> None:
    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        # Preflight: OPTIONS on any path, known or not
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
