"""Centralized configuration using Pydantic Settings.

This module is the single place where settings are read. The client
core never looks at the environment itself: the container reads this
configuration and passes the credential and transport in.

Configuration can be overridden via environment variables:
- GEO_API_KEY=your-maps-co-key
- GEO_TIMEOUT_SECONDS=5
- GEO_MAPS_TEMPLATES='{"openstreetmap": "https://www.openstreetmap.org/search?query={lat},{lon}"}'
- GEO_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.models import DEFAULT_MAP_LINK_TEMPLATES


class GeocodingConfig(BaseSettings):
    """Provider and transport configuration.

    Environment variables prefixed with GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="GEO_")

    api_key: SecretStr = SecretStr("")
    base_url: str = "https://geocode.maps.co"
    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = "geocoding-client"
    language: Optional[str] = None


class MapLinksConfig(BaseSettings):
    """Map link templates, keyed by service name.

    Environment variables prefixed with GEO_MAPS_.
    """

    model_config = SettingsConfigDict(env_prefix="GEO_MAPS_")

    templates: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_MAP_LINK_TEMPLATES)
    )


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with GEO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="GEO_LOG_")

    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"] = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.geocoding.base_url)
        print(config.map_links.templates)
    """

    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    map_links: MapLinksConfig = Field(default_factory=MapLinksConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
