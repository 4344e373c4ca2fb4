"""Failure Interceptor — captures unhandled failures and reports them off the response path.

Invariants:
    - Request entry: any exception escaping a route is logged (message, class, trace),
      the board id is resolved, a report is spawned if an endpoint is configured,
      and a fixed-shape 500 JSON response is returned without waiting for the report
    - Startup entry: the failure is logged and reported with STARTUP_CONTEXT on a
      detached thread; the caller is responsible for exiting non-zero
    - Neither entry retries the failed operation
    - HTTPException (404 route, 405 method) is handled by FastAPI, never reported

Design Decisions:
    - HTTP middleware rather than exception_handler(Exception): Starlette runs the
      catch-all handler outside user middleware, which would drop the CORS headers
"""

import logging
import threading

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.config import ObservabilitySettings
from app.core.board_id import resolve_board_id
from app.core.request_context import RequestContext, STARTUP_CONTEXT
from app.infrastructure.background import DetachedTasks
from app.infrastructure.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request"


def register_error_handlers(app: FastAPI) -> None:
    """Install the request-scoped failure interceptor on the app."""

    @app.middleware("http")
    async def capture_unhandled_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return handle_request_failure(request, exc)


def handle_request_failure(request: Request, exc: Exception) -> JSONResponse:
    """Log, spawn the report, and build the 500 response."""
    state = request.app.state
    context = context_from_request(request)
    logger.error(
        f"Unhandled exception occurred: {exc}",
        extra={
            "path": context.path,
            "method": context.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )

    board_id = resolve_board_id(context, state.settings)
    logger.warning(
        f"Extracted boardId: {board_id or 'NULL'}",
        extra={"board_id": board_id},
    )

    reporter: ErrorReporter | None = state.error_reporter
    if reporter is not None:
        logger.warning(
            f"Sending error to endpoint: {reporter.endpoint_url} "
            f"(boardId: {board_id or 'NULL'})",
        )
        state.detached_tasks.spawn(
            reporter.report(board_id, context, exc), name="error-report",
        )
    else:
        logger.warning(
            "RUNTIME_ERROR_ENDPOINT_URL is not set - skipping error reporting",
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE, "message": str(exc)},
    )


def context_from_request(request: Request) -> RequestContext:
    return RequestContext(
        path=request.url.path or "/",
        method=request.method or "GET",
        user_agent=request.headers.get("user-agent", ""),
        host=request.url.hostname,
        query_params=dict(request.query_params),
        headers={k.lower(): v for k, v in request.headers.items()},
    )


def report_startup_failure(
    exc: BaseException,
    settings: ObservabilitySettings | None = None,
    reporter: ErrorReporter | None = None,
) -> threading.Thread | None:
    """Startup entry: log and report a failure that happened before serving.

    The board id comes straight from configuration (no request in scope).
    Returns the reporting thread, or None when reporting is disabled.
    """
    logger.error(f"Application failed to start: {exc}", exc_info=exc)
    settings = settings or ObservabilitySettings()

    if reporter is None:
        if not settings.reporting_enabled:
            logger.warning(
                "RUNTIME_ERROR_ENDPOINT_URL is not set - skipping startup error reporting",
            )
            return None
        reporter = ErrorReporter.from_settings(settings)

    board_id = settings.board_id or None
    return DetachedTasks().spawn_in_thread(
        lambda: reporter.report(board_id, STARTUP_CONTEXT, exc),
        name="startup-error-report",
    )
