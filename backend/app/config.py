"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All configuration comes from environment variables (or .env)
    - ObservabilitySettings has no required fields: it can always be built,
      even when the full Settings cannot (startup failure reporting relies on this)
    - get_settings() is cached (lru_cache): single instance per process
    - Settings are passed explicitly into create_app and stored on app.state
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObservabilitySettings(BaseSettings):
    """Logging and error-reporting settings."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    log_level: str = "WARN"
    log_format: str = "text"

    # Reporting is disabled when the endpoint is empty
    runtime_error_endpoint_url: str = ""
    board_id: str = ""
    error_report_connect_timeout: float = 5.0
    error_report_read_timeout: float = 5.0

    @property
    def reporting_enabled(self) -> bool:
        return bool(self.runtime_error_endpoint_url)


class Settings(ObservabilitySettings):
    """Full application settings. DATABASE_URL is required."""

    database_url: str
    port: int = 8080

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Railway provides postgres(ql):// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str):
            for prefix in ("postgresql://", "postgres://"):
                if v.startswith(prefix):
                    return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
