"""
Configuration Defaults - Single source of truth for all default values.

Every default here is safe for any deployment; override through the
MAP_UTILS_* environment variables documented on each class.

Usage:
    from config.defaults import SourceDefaults

    # In Pydantic Field definitions:
    raster_tile_size: int = Field(default=SourceDefaults.RASTER_TILE_SIZE, ...)
"""


# =============================================================================
# SOURCE INFERENCE DEFAULTS
# =============================================================================

class SourceDefaults:
    """
    Defaults used when turning a loose source argument into a source spec.

    Override:
        MAP_UTILS_VECTOR_SCHEMES - comma-separated URL schemes for hosted vector tilesets
        MAP_UTILS_GEOJSON_SUFFIXES - comma-separated file suffixes served as GeoJSON
        MAP_UTILS_RASTER_TILE_SIZE - tileSize for raster / raster-dem sources
    """

    VECTOR_URL_SCHEMES = ("mapbox://",)
    GEOJSON_SUFFIXES = (".geojson",)

    # A tile URL template must contain all of these
    TILE_PLACEHOLDERS = ("{z}", "{x}", "{y}")

    # Mapbox GL default for raster sources
    RASTER_TILE_SIZE = 512


# =============================================================================
# HOST ERROR DEFAULTS
# =============================================================================

class HostDefaults:
    """
    Defaults describing how the host map reports errors.

    Override:
        MAP_UTILS_MISSING_LAYER_PATTERN - substring of the host error for a missing layer
        MAP_UTILS_MISSING_SOURCE_PATTERN - substring of the host error for a missing source
    """

    ERROR_EVENT = "error"
    LOAD_EVENT = "load"
    MISSING_LAYER_PATTERN = "does not exist"
    MISSING_SOURCE_PATTERN = "There is no source with this ID"


# =============================================================================
# LOGGING DEFAULTS
# =============================================================================

class LoggingDefaults:
    """Logging level for library components. Override: MAP_UTILS_LOG_LEVEL."""

    LOG_LEVEL = "INFO"
    VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
