"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REELTHREADS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="reelthreads", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=False, description="Include caller info"
    )
    log_to_file: bool = Field(default=False, description="Write rotating log files")
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    # Comments
    comment_max_length: int = Field(
        default=10000, ge=1, description="Maximum comment length after trimming"
    )

    # Ratings
    rating_min: int = Field(default=1, description="Lowest accepted rating")
    rating_max: int = Field(default=5, description="Highest accepted rating")
    rating_display_places: int = Field(
        default=2, ge=0, description="Decimal places for presented averages"
    )

    # Ranking
    trending_rating_weight: float = Field(
        default=2.0, description="Average rating multiplier in the trending score"
    )
    movie_page_size_default: int = Field(
        default=10, ge=1, description="Default movie listing page size"
    )
    movie_page_size_max: int = Field(
        default=50, ge=1, description="Maximum movie listing page size"
    )

    # Storage
    store_max_retries: int = Field(
        default=3, ge=0, description="Retries after an optimistic write conflict"
    )

    @model_validator(mode="after")
    def check_rating_bounds(self) -> "Settings":
        """Reject a rating range that no value could satisfy."""
        if self.rating_min > self.rating_max:
            msg = "rating_min must not exceed rating_max"
            raise ValueError(msg)
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
