"""API test fixtures — app built from explicit settings, SQLite store, recording reporter.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state.db_manager points at the test engine, so get_db runs for real
    - The reporter records calls; tests control when a report completes via `release`

Design Decisions:
    - raise_app_exceptions=False: the interceptor answers 500 itself and nothing
      should propagate, but a regression should fail on status, not on transport
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.infrastructure.database import DatabaseSessionManager
from app.main import create_app


class RecordingReporter:
    """Stands in for ErrorReporter; records what would have been sent."""

    endpoint_url = "https://webapi0123456789abcdef01234567.up.railway.app/api/errors"

    def __init__(self):
        self.calls = []
        self.release = None

    async def report(self, board_id, context, exc):
        self.calls.append({"board_id": board_id, "context": context, "exc": exc})
        if self.release is not None:
            await self.release.wait()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        runtime_error_endpoint_url="",
        board_id="",
    )


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def app(settings, reporter, test_engine, test_session_factory):
    application = create_app(settings, error_reporter=reporter)
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    application.state.db_manager = fake_manager
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
