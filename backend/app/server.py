"""Process entry point — configure logging, build the app, serve with uvicorn.

Invariants:
    - Logging is configured from ObservabilitySettings before anything can fail
    - Any failure while loading settings, building the app or binding the
      listening socket goes through the startup failure entry, then the
      process exits with status 1
    - The server always binds 0.0.0.0; only PORT is configurable
    - uvicorn logs propagate to the root logging configuration
"""

import logging
import socket
import sys

import uvicorn

from app.api.error_handlers import report_startup_failure
from app.config import ObservabilitySettings, get_settings
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

BIND_HOST = "0.0.0.0"


def bind_socket(port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((BIND_HOST, port))
    except OSError:
        sock.close()
        raise
    return sock


def serve(application, sock: socket.socket) -> None:
    """Run uvicorn on an already-bound socket."""
    config = uvicorn.Config(
        application, host=BIND_HOST, port=sock.getsockname()[1], log_config=None,
    )
    uvicorn.Server(config).run(sockets=[sock])


def main() -> None:
    observability = ObservabilitySettings()
    setup_logging(observability.log_level, observability.log_format)

    try:
        from app.main import create_app

        settings = get_settings()
        application = create_app(settings)
        sock = bind_socket(settings.port)
    except Exception as exc:
        report_startup_failure(exc, observability)
        sys.exit(1)

    logger.warning(f"Serving Backend API on {BIND_HOST}:{settings.port}")
    serve(application, sock)
