"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class PipelineSettings(BaseSettings):
    """Pipeline backend API configuration."""

    model_config = SettingsConfigDict(env_prefix="PIPELINE_")

    url: str = Field(default="http://localhost:9090/pipeline", description="Pipeline API base URL")
    token: str = Field(default="", description="Bearer token for the Pipeline API")
    organization_id: int = Field(default=0, description="Organization the commands act on")
    timeout_seconds: float = Field(default=30.0, description="Request timeout")
    verify_tls: bool = Field(default=True, description="Verify the API server certificate")

    @field_validator("url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL."""
        return v.rstrip("/")


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., PIPELINE_TOKEN).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="integrated-services", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.TEXT, description="Logging format")

    # Validation policy
    require_ingress_auth: bool = Field(
        default=False,
        description="Reject specs exposing an ingress without an htpasswd secret",
    )

    # Nested settings
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
