"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- No database settings: the registry lives in process memory only
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings", "DEFAULT_CLICK_LOCATION"]

DEFAULT_CLICK_LOCATION = "Simulated Location"


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Base URL for generating short URLs"
    )

    # Registration Configuration
    DEFAULT_VALIDITY_MINUTES: int = Field(
        default=30,
        gt=0,
        description="Validity applied when a draft entry does not specify one"
    )
    MAX_VALIDITY_MINUTES: int = Field(
        default=60 * 24 * 365,
        gt=0,
        le=60 * 24 * 365 * 100,
        description="Longest validity accepted for one entry (one year)"
    )
    MAX_BATCH_SIZE: int = Field(
        default=5,
        gt=0,
        description="Maximum number of URLs accepted in one registration batch"
    )

    # Shortcode Generation Configuration
    SHORTCODE_LENGTH: int = Field(
        default=6,
        ge=4,
        le=20,
        description="Length of generated base36 shortcodes"
    )
    SHORTCODE_MAX_ATTEMPTS: int = Field(
        default=10,
        gt=0,
        description="Draws per entry before generation gives up on collisions"
    )

    # Click Recording Configuration
    CLICK_LOCATION: str = Field(
        default=DEFAULT_CLICK_LOCATION,
        description="Placeholder location stored on every click (no geolocation lookup)"
    )

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = Field(
        default=True,
        description="Toggle slowapi rate limiting for all endpoints"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit logs as JSON lines instead of plain text"
    )


settings = Settings()
