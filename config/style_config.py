"""
Map Style Utilities Configuration.

Provides configuration for:
    - Source inference (vector URL schemes, GeoJSON suffixes)
    - Raster source tile size
    - Host error matching for batch removes
    - Library log level

Exports:
    StyleUtilsConfig: Pydantic configuration model
"""

import os
from typing import Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from config.defaults import SourceDefaults, HostDefaults, LoggingDefaults
from exceptions import ConfigurationError


def _split_env_list(value: str) -> Tuple[str, ...]:
    """Split a comma-separated env var into a tuple, dropping blanks."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


# ============================================================================
# STYLE UTILS CONFIGURATION
# ============================================================================

class StyleUtilsConfig(BaseModel):
    """
    Map style utilities configuration.

    Controls how loose source arguments are classified and how host
    errors are recognised.
    """

    vector_url_schemes: Tuple[str, ...] = Field(
        default=SourceDefaults.VECTOR_URL_SCHEMES,
        description="URL prefixes that identify a hosted vector tileset",
        examples=[("mapbox://",)]
    )

    geojson_suffixes: Tuple[str, ...] = Field(
        default=SourceDefaults.GEOJSON_SUFFIXES,
        description="File suffixes that identify a GeoJSON document by URL",
        examples=[(".geojson",), (".geojson", ".json")]
    )

    tile_placeholders: Tuple[str, ...] = Field(
        default=SourceDefaults.TILE_PLACEHOLDERS,
        description="Placeholders that must all appear in a tile URL template"
    )

    raster_tile_size: int = Field(
        default=SourceDefaults.RASTER_TILE_SIZE,
        gt=0,
        description="tileSize for raster and raster-dem sources"
    )

    missing_layer_pattern: str = Field(
        default=HostDefaults.MISSING_LAYER_PATTERN,
        min_length=1,
        description="Substring of the host error message for a missing layer"
    )

    missing_source_pattern: str = Field(
        default=HostDefaults.MISSING_SOURCE_PATTERN,
        min_length=1,
        description="Substring of the host error message for a missing source"
    )

    log_level: str = Field(
        default=LoggingDefaults.LOG_LEVEL,
        description="Log level for library components"
    )

    # ========================================================================
    # Validators
    # ========================================================================

    @field_validator('vector_url_schemes', 'geojson_suffixes', 'tile_placeholders')
    @classmethod
    def validate_not_empty(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Each matcher list needs at least one entry."""
        if not v:
            raise ValueError("At least one value is required")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.upper()
        if level not in LoggingDefaults.VALID_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {LoggingDefaults.VALID_LEVELS}"
            )
        return level

    # ========================================================================
    # Factory Methods
    # ========================================================================

    @classmethod
    def from_environment(cls) -> 'StyleUtilsConfig':
        """
        Load from environment variables.

        Raises:
            ConfigurationError: If any variable holds an invalid value
        """
        try:
            return cls(
                vector_url_schemes=_split_env_list(
                    os.environ.get("MAP_UTILS_VECTOR_SCHEMES", ",".join(SourceDefaults.VECTOR_URL_SCHEMES))
                ),
                geojson_suffixes=_split_env_list(
                    os.environ.get("MAP_UTILS_GEOJSON_SUFFIXES", ",".join(SourceDefaults.GEOJSON_SUFFIXES))
                ),
                raster_tile_size=int(
                    os.environ.get("MAP_UTILS_RASTER_TILE_SIZE", str(SourceDefaults.RASTER_TILE_SIZE))
                ),
                missing_layer_pattern=os.environ.get(
                    "MAP_UTILS_MISSING_LAYER_PATTERN", HostDefaults.MISSING_LAYER_PATTERN
                ),
                missing_source_pattern=os.environ.get(
                    "MAP_UTILS_MISSING_SOURCE_PATTERN", HostDefaults.MISSING_SOURCE_PATTERN
                ),
                log_level=os.environ.get("MAP_UTILS_LOG_LEVEL", LoggingDefaults.LOG_LEVEL),
            )
        except (ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid map utils configuration: {e}") from e

    def debug_dict(self) -> dict:
        """Return configuration as a plain dict for logging."""
        return self.model_dump()
