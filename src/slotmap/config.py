"""Configuration using Pydantic settings.

Configuration is loaded from:
1. Environment variables (SLOTMAP_* prefix)
2. .env file in current directory
3. Default values
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MapSettings(BaseSettings):
    """Settings read when a slot map is built.

    Environment variables are prefixed with SLOTMAP_. CLI-only variables are
    ignored.
    """

    model_config = SettingsConfigDict(
        env_prefix="SLOTMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scan for shared slots at construction (validation builds)
    check_collisions: bool = False


class SlotMapConfig(MapSettings):
    """Map settings plus the defaults of the ``slotmap`` CLI."""

    # Default hash function for the CLI
    hasher: Literal["builtin", "blake2b"] = "builtin"

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper


@lru_cache
def get_config() -> SlotMapConfig:
    """Get the global configuration.

    Configuration is cached after first load.

    Returns:
        SlotMapConfig instance.
    """
    return SlotMapConfig()


@lru_cache
def get_map_settings() -> MapSettings:
    """Get the settings used by map construction, cached after first load."""
    return MapSettings()


def clear_config_cache() -> None:
    """Clear the configuration cache (for testing)."""
    get_config.cache_clear()
    get_map_settings.cache_clear()
