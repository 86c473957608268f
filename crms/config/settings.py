"""
CRMS Configuration Module

Environment-based configuration with fail-fast validation.
All settings are loaded from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_prefix="CRMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory for runtime data (local storage db)",
    )

    # Remote API
    api_base_url: str = Field(
        default="http://localhost:5000",
        description="Origin of the referral API (paths are appended)",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds",
    )

    # Client-side behaviour
    cache_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Freshness window for cached analytics responses",
    )
    message_clear_delay: float = Field(
        default=3.0,
        gt=0,
        description="Seconds before a success message clears itself",
    )
    page_size: int = Field(
        default=6,
        ge=1,
        le=100,
        description="Referrals shown per page",
    )

    # Web server
    port: int = Field(
        default=8553,
        ge=1,
        le=65535,
        description="Port the Flet web app listens on",
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Convert string to Path."""
        return Path(v)

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the API origin so paths can be appended."""
        return v.rstrip("/")

    def ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @property
    def storage_path(self) -> Path:
        """Path to the SQLite file backing the session storage."""
        return self.data_dir / "local_storage.db"

    @property
    def upload_dir(self) -> Path:
        """Where resume files picked in the browser are uploaded."""
        return self.data_dir / "uploads"


def get_settings() -> Settings:
    """
    Get validated settings instance.

    Raises:
        ValidationError: If required settings are missing or invalid.
    """
    settings = Settings()
    settings.ensure_data_dir()
    return settings
