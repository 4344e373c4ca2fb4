"""Settings — environment-driven configuration."""

import pytest
from pydantic import ValidationError

from app.config import ObservabilitySettings, Settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # no stray .env
    for name in (
        "DATABASE_URL", "PORT", "HOST", "LOG_LEVEL", "LOG_FORMAT",
        "RUNTIME_ERROR_ENDPOINT_URL", "BOARD_ID",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_database_url_is_required(clean_env):
    with pytest.raises(ValidationError):
        Settings()


def test_defaults(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    settings = Settings()
    assert settings.port == 8080
    assert settings.log_level == "WARN"
    assert settings.runtime_error_endpoint_url == ""
    assert settings.board_id == ""
    assert settings.reporting_enabled is False


def test_reads_environment(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    clean_env.setenv("PORT", "9000")
    clean_env.setenv("RUNTIME_ERROR_ENDPOINT_URL", "https://errors.test/x")
    clean_env.setenv("BOARD_ID", "abc")
    settings = Settings()
    assert settings.port == 9000
    assert settings.board_id == "abc"
    assert settings.reporting_enabled is True


@pytest.mark.parametrize("url", [
    "postgres://u:p@db:5432/app",
    "postgresql://u:p@db:5432/app",
])
def test_postgres_urls_use_asyncpg(url):
    settings = Settings(database_url=url)
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/app"


def test_driver_urls_left_alone():
    url = "postgresql+asyncpg://u:p@db:5432/app"
    assert Settings(database_url=url).database_url == url


def test_observability_settings_need_no_database(clean_env):
    clean_env.setenv("BOARD_ID", "abc")
    settings = ObservabilitySettings()
    assert settings.board_id == "abc"
    assert settings.error_report_connect_timeout == 5.0
    assert settings.error_report_read_timeout == 5.0


def test_host_variable_is_not_a_setting(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    clean_env.setenv("HOST", "127.0.0.1")
    assert not hasattr(Settings(), "host")
