"""Centralized configuration using Pydantic Settings.

All credentials and map constants live here instead of process-wide
constants, and are passed explicitly into the fetcher and the map
surface factories at construction time.

Configuration can be overridden via environment variables:
- TRANSIT_DIRECTIONS_API_KEY=...
- TRANSIT_DIRECTIONS_TIMEOUT_SECONDS=5
- TRANSIT_MAP_VIEWPORT_HEIGHT=900
- TRANSIT_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError


class DirectionsConfig(BaseSettings):
    """Directions web API configuration.

    Environment variables prefixed with TRANSIT_DIRECTIONS_.

    ``api_key`` is required before any fetch; it is also the key used by
    the map tiles provider when one needs it.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_DIRECTIONS_")

    api_key: str = ""
    base_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    timeout_seconds: float = 10.0
    alternatives: bool = True
    language: Optional[str] = None

    def require_api_key(self) -> str:
        """Return the API key or fail with a typed configuration error."""
        key = self.api_key.strip()
        if not key:
            raise ConfigurationError(
                "Directions API key is not configured",
                setting_name="TRANSIT_DIRECTIONS_API_KEY",
                expected_type="non-empty string",
            )
        return key


class MapConfig(BaseSettings):
    """Map surface and route styling configuration.

    Environment variables prefixed with TRANSIT_MAP_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_MAP_")

    # Initial camera over Crown Heights, Brooklyn.
    center_latitude: float = 40.670884415976886
    center_longitude: float = -73.958119273615
    zoom_start: int = 14
    tiles: str = "OpenStreetMap"

    viewport_height: int = 800
    edge_padding: float = 30.0
    stroke_width: float = 5.0
    dash_length: float = 25.0
    show_overview: bool = False

    output_file: str = "transit_map.html"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TRANSIT_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.directions.base_url)
        print(config.map.viewport_height)

    Environment variables prefixed with TRANSIT_.
    """

    model_config = SettingsConfigDict(env_prefix="TRANSIT_")

    directions: DirectionsConfig = Field(default_factory=DirectionsConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    output_dir: Path = Field(default_factory=Path.cwd)

    @property
    def map_output_path(self) -> Path:
        """Full path of the rendered HTML map."""
        return self.output_dir / self.map.output_file


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
