"""
Source inference and normalisation.

infer_source() turns the loose source argument of a layer-adding call
into either an inline source spec or the name of a registered source.
The rules are a closed, ordered chain; the first match wins:

    1. mapping                        -> inline GeoJSON
    2. string with a vector scheme    -> vector source by URL
    3. string with {z} {x} {y}        -> vector source by tile template
    4. string with a GeoJSON suffix   -> GeoJSON source by URL
    5. any other string               -> existing source name, unchanged
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from config import StyleUtilsConfig, get_config
from exceptions import ContractViolationError
from .models import (
    GeoJSONSourceSpec,
    RasterSourceSpec,
    VectorSourceSpec,
)

SourceRef = Union[str, Dict[str, Any]]


# ============================================================================
# PREDICATES
# ============================================================================

def is_vector_url(raw: str, config: StyleUtilsConfig) -> bool:
    return raw.startswith(tuple(config.vector_url_schemes))


def is_tile_template(raw: str, config: StyleUtilsConfig) -> bool:
    return all(placeholder in raw for placeholder in config.tile_placeholders)


def is_geojson_url(raw: str, config: StyleUtilsConfig) -> bool:
    return raw.lower().endswith(tuple(config.geojson_suffixes))


_STRING_RULES: List[Tuple[Callable[[str, StyleUtilsConfig], bool], Callable[[str], Dict[str, Any]]]] = [
    (is_vector_url, lambda raw: VectorSourceSpec(url=raw).to_spec()),
    (is_tile_template, lambda raw: VectorSourceSpec(tiles=[raw]).to_spec()),
    (is_geojson_url, lambda raw: GeoJSONSourceSpec(data=raw).to_spec()),
]


# ============================================================================
# INFERENCE
# ============================================================================

def infer_source(raw: Any, config: Optional[StyleUtilsConfig] = None) -> SourceRef:
    """
    Infer a source reference from a loose argument.

    Args:
        raw: GeoJSON mapping, URL, tile template, or source name
        config: Matching rules (defaults to the global config)

    Returns:
        Inline source spec dict, or the source name unchanged

    Raises:
        ContractViolationError: If raw is neither a mapping nor a string
    """
    config = config or get_config()

    if isinstance(raw, Mapping):
        return GeoJSONSourceSpec(data=raw).to_spec()

    if not isinstance(raw, str):
        raise ContractViolationError(
            f"Source must be a mapping or a string, got {type(raw).__name__}"
        )

    for matches, build in _STRING_RULES:
        if matches(raw, config):
            return build(raw)
    return raw


# ============================================================================
# NORMALISATION FOR add_source-style calls
# ============================================================================

def _tiled_fields(spec: Any, config: StyleUtilsConfig) -> Dict[str, Any]:
    """URL/template string or {url|tiles, ...} mapping -> model field dict."""
    if isinstance(spec, str):
        if is_tile_template(spec, config):
            return {"tiles": [spec]}
        return {"url": spec}
    if isinstance(spec, Mapping):
        fields = dict(spec)
        fields.pop("type", None)
        return fields
    raise ContractViolationError(
        f"Source spec must be a URL string or a mapping, got {type(spec).__name__}"
    )


def vector_source(spec: Any, config: Optional[StyleUtilsConfig] = None, **options) -> Dict[str, Any]:
    """
    Normalise a vector source argument.

    Examples:
        >>> vector_source("mapbox://foo.blah")
        {'type': 'vector', 'url': 'mapbox://foo.blah'}
        >>> vector_source("http://tiles.example.com/{z}/{x}/{y}.pbf")
        {'type': 'vector', 'tiles': ['http://tiles.example.com/{z}/{x}/{y}.pbf']}
    """
    config = config or get_config()
    fields = {**_tiled_fields(spec, config), **options}
    try:
        return VectorSourceSpec(**fields).to_spec()
    except ValidationError as e:
        raise ContractViolationError(f"Invalid vector source: {e}") from e


def raster_source(
    spec: Any,
    config: Optional[StyleUtilsConfig] = None,
    source_type: str = "raster",
    **options
) -> Dict[str, Any]:
    """Normalise a raster or raster-dem source argument, defaulting tileSize."""
    config = config or get_config()
    fields = {**_tiled_fields(spec, config), **options}
    fields.setdefault("tileSize", config.raster_tile_size)
    fields["type"] = source_type
    try:
        return RasterSourceSpec(**fields).to_spec()
    except ValidationError as e:
        raise ContractViolationError(f"Invalid {source_type} source: {e}") from e


def geojson_source(data: Any = None, **options) -> Dict[str, Any]:
    """Normalise a GeoJSON source; missing data becomes an empty FeatureCollection."""
    if data is not None:
        options["data"] = data
    try:
        return GeoJSONSourceSpec(**options).to_spec()
    except ValidationError as e:
        raise ContractViolationError(f"Invalid geojson source: {e}") from e
