"""
Configuration management for the adopet browser.
Loads settings from environment variables and provides typed configuration access.
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment: development, staging, production")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Adoption API
    api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the pet adoption API"
    )
    api_timeout: int = Field(default=30, description="API request timeout in seconds")

    # Listing Settings
    default_page_size: int = Field(default=10, description="Pets per page on the pet list")
    default_sort: str = Field(default="createdAt,desc", description="Default pet list ordering")
    breed_page_size: int = Field(default=12, description="Breed cards per page on the breed explorer")
    max_visible_pages: int = Field(default=5, description="Page buttons shown by the pagination control")
    stats_sample_size: int = Field(
        default=1000,
        description="Number of pets fetched to build statistics and the age chart"
    )

    # Input Settings
    debounce_delay_ms: int = Field(
        default=500,
        description="Delay before a text filter is applied, in milliseconds"
    )

    # Breed Image Cache
    breed_image_cache_max_size: int = Field(
        default=256,
        description="Maximum number of cached breed image URLs"
    )
    breed_image_cache_ttl: int = Field(default=3600, description="Breed image cache TTL in seconds")

    # Fallbacks
    mock_fallback_enabled: bool = Field(
        default=True,
        description="Show sample pets when the pet list cannot be loaded"
    )

    # Service
    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP service")
    port: int = Field(default=8000, description="Port for the HTTP service")

    @property
    def debounce_delay(self) -> float:
        """Debounce delay in seconds."""
        return self.debounce_delay_ms / 1000.0

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, read from the environment on first use."""
    return Settings()


def reload_settings() -> Settings:
    """Forget the cached settings and read the environment again."""
    get_settings.cache_clear()
    return get_settings()


settings = get_settings()
