# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to wiki endpoints, timeouts, tile cache bounds and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="OSRSWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Wiki endpoints
    base_url: str = Field(default="https://oldschool.runescape.wiki", description="Wiki origin (scheme + host)")
    user_agent: str = Field(
        default="osrswiki-core/0.1 (https://oldschool.runescape.wiki)",
        description="User-Agent sent with every upstream request",
    )

    # Network timeouts
    request_timeout: float = Field(default=15.0, gt=0, description="Per-request timeout in seconds")
    resource_timeout: float = Field(
        default=30.0, gt=0, description="Upper bound in seconds for a whole search or feed operation"
    )

    # Search
    search_page_size: int = Field(default=50, ge=1, le=500, description="Default number of results per page")
    thumbnail_size: int = Field(default=240, ge=1, description="Requested thumbnail width in pixels")
    thumbnail_batch_limit: int = Field(default=50, ge=1, le=50, description="Page ids per thumbnail request")

    # Offline map tiles
    tile_cache_max_bytes: int = Field(default=50 * 1024 * 1024, ge=0, description="Tile cache byte budget")
    tile_cache_max_entries: int = Field(default=500, ge=0, description="Tile cache entry cap")
    map_directory: Path = Field(default=Path("maps"), description="User directory checked first for map floors")
    bundled_map_directory: Path | None = Field(
        default=None, description="Directory of map floors shipped with the application"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(
        default="interactive", description="Logging output mode when --json is not given"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
