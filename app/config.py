# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Table and Bucket Names
    # -------------------------------------------------------------------------
    # The hosted project prefixes its tables; keep them configurable.

    PACKAGES_TABLE: str = Field(
        default="app_070c516bb6_qr_codes",
        description="Table holding package (QR code) records"
    )

    WORKERS_TABLE: str = Field(
        default="app_f79f105891_workers",
        description="Table holding worker records"
    )

    ATTENDANCE_TABLE: str = Field(
        default="app_f79f105891_attendance",
        description="Table holding daily attendance records"
    )

    HYGIENE_TABLE: str = Field(
        default="app_f79f105891_hygiene_records",
        description="Table holding hygiene photo records"
    )

    LAB_TESTS_TABLE: str = Field(
        default="app_f79f105891_lab_tests",
        description="Table holding lab test report records"
    )

    BATCH_COUNTER_TABLE: str = Field(
        default="batch_counter_data",
        description="Table holding batch counter machine readings"
    )

    BATCH_COUNTER_STATS_VIEW: str = Field(
        default="batch_counter_stats_last_hour",
        description="View aggregating batch counter readings over the last hour"
    )

    HYGIENE_BUCKET: str = Field(
        default="hygiene-photos",
        description="Storage bucket for hygiene photos"
    )

    LAB_TESTS_BUCKET: str = Field(
        default="lab-tests",
        description="Storage bucket for lab test reports"
    )

    # -------------------------------------------------------------------------
    # Package Tracking Settings
    # -------------------------------------------------------------------------

    PACKAGE_RECENT_DAYS: int = Field(
        default=10,
        ge=1,
        le=365,
        description="Lookback window (days) used for package listing and the first lookup pass"
    )

    ATTENDANCE_RECENT_DAYS: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Lookback window (days) for attendance listing"
    )

    CODE_TIMEZONE: str = Field(
        default="UTC",
        description="IANA timezone whose calendar day prefixes generated package codes"
    )

    LOCAL_CACHE_PATH: str = Field(
        default=".cache/packages.json",
        description="JSON file used as the package cache when Supabase is unreachable"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing session tokens"
    )

    ADMIN_PASSWORD: str = Field(
        default="admin123",
        min_length=1,
        description="Password that unlocks full-access sessions"
    )

    SESSION_TTL_MINUTES: int = Field(
        default=720,
        ge=1,
        description="Lifetime of a session token in minutes"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # File Upload Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum photo/report upload size in MB"
    )

    ALLOWED_EXTENSIONS: str = Field(
        default=".jpg,.jpeg,.png,.webp,.pdf",
        description="Allowed upload file extensions (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Handles comma-separated values and strips whitespace.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_extensions_list(self) -> list[str]:
        """
        Parse ALLOWED_EXTENSIONS string into a list.

        Example: ".jpg, .png" -> [".jpg", ".png"]
        """
        return [ext.strip().lower() for ext in self.ALLOWED_EXTENSIONS.split(",")]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
