"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from zoneinfo import ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.dates import resolve_timezone


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote session source
    session_api_base_url: str = "https://etmarketsai.indiatimes.com/aibot"
    session_api_timeout: float = 30.0

    # Analytics
    analytics_page_size: int = 1000
    analytics_max_pages: int = 10
    top_queries_limit: int = 10
    display_timezone: str = "UTC"

    # Application
    app_env: str = "development"
    app_debug: bool = True
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    # Rate limiting
    rate_limit_per_minute: int = 30

    @field_validator("display_timezone")
    @classmethod
    def validate_display_timezone(cls, value: str) -> str:
        try:
            resolve_timezone(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
