"""Library configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ``MODELSYNC_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MODELSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "test", "staging", "production"] = "development"
    version: str = "0.1.0"

    # Sync behaviour
    enabled_by_default: bool = Field(
        default=False,
        description="State of the sync context when no scope guard is active",
    )

    # Reference entity store
    database_url: str = Field(
        default="sqlite:///:memory:",
        description="SQLAlchemy URL used by the reference session helpers",
    )

    # Observability
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    otel_enabled: bool = False
    otlp_endpoint: str = ""  # OTLP collector endpoint (e.g., http://localhost:4317)
    otel_service_name: str = "modelsync"
    prometheus_enabled: bool = True

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
