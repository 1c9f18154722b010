from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration backed by Pydantic BaseSettings.
    Values are read from the environment and an optional .env file.
    """

    PROJECT_NAME: str = "Nursing Desk"

    # Hosted data service (Supabase)
    SUPABASE_URL: str = Field(..., description="Base URL of the Supabase project")
    SUPABASE_ANON_KEY: str = Field(..., description="Public anon key used as the API key")
    SUPABASE_TIMEOUT: float = Field(30.0, description="HTTP timeout for data service requests in seconds")

    # Listing and notifications
    APPOINTMENT_PAGE_SIZE: int = Field(5, description="Max appointments per list, 0 or less for unbounded")
    NOTIFICATION_TIMEOUT_SECONDS: float = Field(3.0, description="Seconds before a notification auto-dismisses")

    # Application Settings
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("colored", description="Log format: colored, json or plain")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("SUPABASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in ("colored", "json", "plain"):
            raise ValueError("LOG_FORMAT must be one of: colored, json, plain")
        return v

    @computed_field
    @property
    def rest_url(self) -> str:
        """PostgREST endpoint of the project."""
        return f"{self.SUPABASE_URL}/rest/v1"

    @computed_field
    @property
    def auth_url(self) -> str:
        """GoTrue endpoint of the project."""
        return f"{self.SUPABASE_URL}/auth/v1"

    @property
    def appointment_page_limit(self) -> int | None:
        """Page size for appointment lists, None when unbounded."""
        if self.APPOINTMENT_PAGE_SIZE <= 0:
            return None
        return self.APPOINTMENT_PAGE_SIZE


# Singleton for configuration
_settings_instance = None


def get_settings() -> Settings:
    """
    Return a cached Settings instance.
    Avoids re-reading the environment on every call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
