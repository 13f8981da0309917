"""Application configuration via pydantic-settings.

Values are read from environment variables (and an optional .env file).
Settings are grouped and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataSourceSettings(BaseSettings):
    """Where the benefits CSV comes from."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    benefits_data_source: str = Field(
        default="benefits-data.csv",
        description="Local path or http(s) URL of the benefits CSV",
    )
    data_timeout: float = Field(default=10.0, description="Timeout in seconds for remote CSV downloads")


class WebSettings(BaseSettings):
    """HTTP server and session cookie settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    session_cookie_name: str = Field(default="screener_session")
    app_title: str = Field(default="Benefits Screener")
    max_sessions: int = Field(
        default=1000,
        ge=1,
        description="Sessions kept in memory before the least recently used is evicted",
    )
    session_idle_timeout: float = Field(
        default=3600.0,
        gt=0,
        description="Seconds of inactivity before a session is dropped",
    )


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.data.benefits_data_source
        settings.web.port
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    data: DataSourceSettings = Field(default_factory=DataSourceSettings)
    web: WebSettings = Field(default_factory=WebSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton, import this wherever settings are needed.
settings = Settings()
