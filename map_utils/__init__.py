"""
Map Style Utilities.

Convenience layer over a map-rendering engine's styling API:
- camelCase or kebab-case property maps split into paint / layout
- loose source arguments (GeoJSON, mapbox:// URLs, tile templates)
  turned into source specs
- batch property setters and visibility helpers
- Jam Session expressions compiled to the engine's array form

Usage:
    from map_utils import init

    U = init(host)
    U.add_geojson("parks", parks_geojson).add_fill("parks-fill", {
        "fillColor": "green",
        "fillOpacity": U("get('visitors') / 1000"),
    })
"""

from .naming import to_kebab, snake_to_kebab
from .properties import (
    PAINT_PROPERTIES,
    LAYOUT_PROPERTIES,
    PropertyCategory,
    PropertyClassification,
    classify,
    is_layout,
    is_paint,
)
from .assembler import build_style, layer_style, properties
from .models import (
    GeoJSONSourceSpec,
    RasterSourceSpec,
    VectorSourceSpec,
    empty_feature_collection,
)
from .sources import infer_source, geojson_source, raster_source, vector_source
from .handle import LayerHandle
from .utils import MapUtils, init

__all__ = [
    "to_kebab",
    "snake_to_kebab",
    "PAINT_PROPERTIES",
    "LAYOUT_PROPERTIES",
    "PropertyCategory",
    "PropertyClassification",
    "classify",
    "is_layout",
    "is_paint",
    "build_style",
    "layer_style",
    "properties",
    "GeoJSONSourceSpec",
    "RasterSourceSpec",
    "VectorSourceSpec",
    "empty_feature_collection",
    "infer_source",
    "geojson_source",
    "raster_source",
    "vector_source",
    "LayerHandle",
    "MapUtils",
    "init",
]
