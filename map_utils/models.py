"""
Source Specification Pydantic Models.

Defines the source-registration shapes the host accepts:
- GeoJSON (inline FeatureCollection or URL)
- Vector (hosted tileset URL or tile URL templates)
- Raster / raster-dem (URL or tile URL templates plus tileSize)

Each model serialises with to_spec(), which drops unset fields so the
host sees exactly {"type": ..., "url": ...} or {"type": ..., "tiles": [...]}.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def empty_feature_collection() -> Dict[str, Any]:
    """A fresh, empty GeoJSON FeatureCollection."""
    return {"type": "FeatureCollection", "features": []}


class SourceSpec(BaseModel):
    """Base for all source specs. Extra keys (minzoom, attribution...) pass through."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_spec(self) -> Dict[str, Any]:
        """Dump to the host's wire shape."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GeoJSONSourceSpec(SourceSpec):
    """
    GeoJSON source.

    data is either an inline GeoJSON object or a URL string.
    """
    type: Literal["geojson"] = "geojson"
    data: Any = Field(default_factory=empty_feature_collection)


class TiledSourceSpec(SourceSpec):
    """Source addressed by a TileJSON URL or by tile URL templates."""
    url: Optional[str] = None
    tiles: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_url_or_tiles(self) -> "TiledSourceSpec":
        """A tiled source needs somewhere to fetch tiles from."""
        if self.url is None and not self.tiles:
            raise ValueError(f"{self.__class__.__name__} requires either 'url' or 'tiles'")
        return self


class VectorSourceSpec(TiledSourceSpec):
    """Vector tile source."""
    type: Literal["vector"] = "vector"


class RasterSourceSpec(TiledSourceSpec):
    """Raster tile source."""
    type: Literal["raster", "raster-dem"] = "raster"
    tile_size: Optional[int] = Field(default=None, alias="tileSize", gt=0)
