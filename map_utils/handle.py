"""
Chainable layer handle bound to one source.

Returned by the source-adding calls on MapUtils so layers can be added
without repeating the source name:

    U.add_vector("roads", "mapbox://user.roads") \
        .add_line("roads-casing", {"sourceLayer": "roads", "lineWidth": 4}) \
        .add_line("roads-fill", {"sourceLayer": "roads", "lineColor": "white"})
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional

from .assembler import build_style

if TYPE_CHECKING:
    from .utils import MapUtils


@dataclass(frozen=True)
class LayerHandle:
    """Source name plus the MapUtils that registered it. Holds no other state."""
    utils: "MapUtils"
    source_id: str

    def add(self, layer_id: str, layer_type: str, props: Optional[Mapping] = None) -> "LayerHandle":
        """Add a layer of any type on the bound source."""
        # The bound name is a registered source, never re-inferred
        layer = {"id": layer_id, "type": layer_type, "source": self.source_id}
        layer.update(build_style(props))
        self.utils.register_layer(layer)
        return self

    def add_line(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "line", props)

    def add_fill(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "fill", props)

    def add_circle(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "circle", props)

    def add_symbol(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "symbol", props)

    def add_fill_extrusion(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "fill-extrusion", props)

    def add_heatmap(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "heatmap", props)

    def add_raster(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "raster", props)

    def add_hillshade(self, layer_id: str, props: Optional[Mapping] = None) -> "LayerHandle":
        return self.add(layer_id, "hillshade", props)
