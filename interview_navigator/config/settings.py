"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Interview Navigator"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Document store
    storage_backend: str = "memory"  # Options: memory, mongo
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "interview_navigator"

    # Pricing
    platform_fee_percent: float = Field(default=15.0, ge=0, le=100)
    default_currency: str = "USD"

    # Booking rules
    slot_interval_minutes: int = Field(default=15, gt=0)
    min_booking_minutes: int = 15
    max_booking_minutes: int = 180

    # Discovery
    interviewer_page_size: int = Field(default=10, gt=0)

    # Reviews
    review_page_size: int = 50

    # Payments backend (empty = payments disabled)
    payments_backend_url: str = ""
    payments_timeout_seconds: float = 30.0

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def payments_enabled(self) -> bool:
        return bool(self.payments_backend_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
