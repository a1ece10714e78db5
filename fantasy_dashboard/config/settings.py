"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables with sensible defaults.
Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing with different configurations

The database is in-memory unless DATABASE_PATH points at a file, so a
fresh process starts empty and is filled from the seed workbook or an upload.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For lists (like cors_origins), use comma-separated values in env.
    """

    # API Configuration
    api_title: str = "Fantasy League Dashboard API"
    api_version: str = "0.1.0"
    host: str = Field(
        default="0.0.0.0",
        description="Interface to bind when running the server directly"
    )
    port: int = Field(
        default=3000,
        description="Listen port. PORT in the environment overrides it."
    )

    # Database
    database_path: str = Field(
        default=":memory:",
        description="SQLite database path. ':memory:' keeps everything in process memory."
    )

    # Ingestion
    seed_workbook_path: Optional[str] = Field(
        default="fantasy_results_2019_2024_v26.xlsx",
        description="Workbook loaded at startup if it exists. Missing or unreadable is not fatal."
    )
    weekly_results_sheet: str = Field(
        default="weekly_results",
        description="Sheet holding one row per team per week"
    )
    coach_lookup_sheet: str = Field(
        default="coach_lookup",
        description="Sheet mapping roster display names to canonical coaches"
    )

    # Uploads
    upload_dir: str = Field(
        default="",
        description="Directory for temporary upload files. Empty means the system temp dir."
    )
    max_upload_size_mb: int = Field(
        default=20,
        description="Maximum workbook upload size in MB"
    )

    # Static dashboard
    static_dir: str = Field(
        default=str(PACKAGE_STATIC_DIR),
        description="Directory holding index.html and dashboard assets"
    )

    # Error reporting
    expose_database_errors: bool = Field(
        default=False,
        description="Return the SQLite error message in 500 responses instead of a generic one."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed CORS origins. Use * for development only."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def upload_directory(self) -> Optional[Path]:
        """Upload directory as a Path, or None to use the system temp dir."""
        if not self.upload_dir:
            return None
        return Path(self.upload_dir)

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    This is safe because settings don't change during runtime.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()
