"""
Map Utilities Service.

Friendlier front end over a host map's styling API:
- Add layers from a flat, camelCase property map
- Register GeoJSON / vector / raster sources from loose arguments
- Set paint and layout properties on one or many layers at once
- Show, hide, toggle and remove layers in batches
- Compile Jam Session expressions in place: U("get('width') + 3")

The host is held by composition and never modified.

Usage:
    from map_utils import init

    U = init(host)
    U.add_line("roads", "streets", {"lineWidth": 2, "lineColor": "#333"})
    U.set_property(["roads", "rail"], "lineOpacity", 0.5)
    U.hide("rail")

Created: 18 OCT 2026
"""

from collections.abc import Mapping
from contextlib import contextmanager
from functools import partial
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Union

from config import HostDefaults, StyleUtilsConfig, get_config
from exceptions import ContractViolationError
from interfaces import IMapHost
from jam_session import compile as compile_expression
from util_logger import ComponentConfig, ComponentType, LoggerFactory, LogLevel
from .assembler import build_style, layer_style
from .handle import LayerHandle
from .models import empty_feature_collection
from .naming import snake_to_kebab
from .properties import PropertyCategory, classify
from .sources import geojson_source, infer_source, raster_source, vector_source

LayerIds = Union[str, Sequence[str]]

GEOJSON_OBJECT_TYPES = frozenset({
    "FeatureCollection", "Feature", "Point", "MultiPoint", "LineString",
    "MultiLineString", "Polygon", "MultiPolygon", "GeometryCollection",
})


def as_id_list(ids: LayerIds) -> List[str]:
    """
    Normalise a single id or a sequence of ids to a list.

    Raises:
        ContractViolationError: If ids is neither a string nor a sequence of strings
    """
    if isinstance(ids, str):
        return [ids]
    if isinstance(ids, Sequence) and all(isinstance(i, str) for i in ids):
        return list(ids)
    raise ContractViolationError(
        f"Expected an id or a sequence of ids, got {ids!r}"
    )


def _error_message(event: Any) -> str:
    """Pull the message out of a host 'error' event payload."""
    if isinstance(event, Mapping):
        error = event.get("error", event)
        if isinstance(error, Mapping):
            return str(error.get("message", ""))
        return str(error)
    return str(event)


class MapUtils:
    """
    Convenience layer over a host map.

    Every operation is synchronous and forwards one host call per
    (layer, property) or (layer) unit. Batches are not atomic: a host
    rejection part-way through leaves earlier calls in place.
    """

    def __init__(self, host: IMapHost, config: Optional[StyleUtilsConfig] = None):
        """
        Initialize utilities for a host map.

        Args:
            host: Host map implementing IMapHost
            config: Optional configuration (defaults to the global config)
        """
        self.host = host
        self.config = config or get_config()
        self.logger = LoggerFactory.create_from_config(
            ComponentConfig(
                component_type=ComponentType.SERVICE,
                log_level=LogLevel.from_string(self.config.log_level)
            ),
            "MapUtils"
        )

    # ========================================================================
    # EXPRESSIONS
    # ========================================================================

    def __call__(self, expression: str) -> Any:
        """Compile a Jam Session expression: U("2 + 2") -> ["+", 2, 2]."""
        return compile_expression(expression)

    # ========================================================================
    # STYLE BUILDING
    # ========================================================================

    def properties(self, props: Optional[Mapping] = None) -> Dict[str, Any]:
        """Split a flat property map into paint / layout / layer-level fields."""
        return build_style(props)

    def layer_style(self, layer_id: str, *args: Any) -> Dict[str, Any]:
        """
        Build a layer object without registering it.

        Accepts (layer_id, source, type, props) or (layer_id, props).
        """
        return layer_style(layer_id, *args, config=self.config)

    # ========================================================================
    # PROPERTIES
    # ========================================================================

    def set_property(
        self,
        layers: LayerIds,
        prop: Union[str, Mapping],
        value: Any = None
    ) -> None:
        """
        Set one or several style properties on one or several layers.

        Each (layer, property) pair is classified and sent to the host's
        paint or layout setter under its kebab-case name.

        Examples:
            U.set_property("labels", "textSize", 12)
            U.set_property(["a", "b"], {"textSize": 12, "textColor": "blue"})
        """
        props = prop if isinstance(prop, Mapping) else {prop: value}
        for layer_id in as_id_list(layers):
            for name, prop_value in props.items():
                self._dispatch_property(layer_id, name, prop_value)

    def _dispatch_property(self, layer_id: str, name: str, value: Any) -> None:
        classification = classify(name)
        if classification.category is PropertyCategory.PAINT:
            self.host.set_paint_property(layer_id, classification.canonical, value)
            return
        if classification.category is PropertyCategory.NONE:
            self.logger.warning(
                f"'{name}' is not a known paint or layout property; sending to layout",
                extra={'custom_dimensions': {'layer_id': layer_id, 'property': classification.canonical}}
            )
        self.host.set_layout_property(layer_id, classification.canonical, value)

    def __getattr__(self, name: str) -> Callable[..., None]:
        """
        Streamlined setters: U.set_line_width(layers, 3), U.set_text_size(layers, 14).

        Resolved for every known paint or layout property.
        """
        if name.startswith("set_"):
            classification = classify(snake_to_kebab(name[len("set_"):]))
            if classification.is_style:
                return partial(self._set_single, classification.canonical)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def _set_single(self, prop: str, layers: LayerIds, value: Any) -> None:
        self.set_property(layers, prop, value)

    def show(self, layers: LayerIds) -> None:
        """Make layers visible."""
        self.set_property(layers, "visibility", "visible")

    def hide(self, layers: LayerIds) -> None:
        """Hide layers."""
        self.set_property(layers, "visibility", "none")

    def toggle(self, layers: LayerIds, state: bool) -> None:
        """Show layers if state is truthy, otherwise hide them."""
        self.set_property(layers, "visibility", "visible" if state else "none")

    def set_filter(self, layers: LayerIds, filter_expression: Any) -> None:
        """Set the same filter (e.g. a compiled expression) on each layer."""
        for layer_id in as_id_list(layers):
            self.host.set_filter(layer_id, filter_expression)

    # ========================================================================
    # LAYERS
    # ========================================================================

    def register_layer(self, layer: Dict[str, Any]) -> None:
        """Hand a fully shaped layer object to the host."""
        self.logger.debug(
            f"Adding layer '{layer.get('id')}'",
            extra={'custom_dimensions': {'layer_type': layer.get('type')}}
        )
        self.host.add_layer(layer)

    def add(
        self,
        layer_id: str,
        source: Any,
        layer_type: str,
        props: Optional[Mapping] = None
    ) -> None:
        """
        Add a layer.

        Args:
            layer_id: New layer id
            source: Source name, GeoJSON mapping, URL or tile template
            layer_type: Host layer type ("line", "fill", ...)
            props: Flat property map (camelCase or kebab-case)
        """
        self.register_layer(layer_style(layer_id, source, layer_type, props, config=self.config))

    def add_line(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "line", props)

    def add_fill(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "fill", props)

    def add_circle(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "circle", props)

    def add_symbol(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "symbol", props)

    def add_fill_extrusion(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "fill-extrusion", props)

    def add_heatmap(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "heatmap", props)

    def add_raster(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "raster", props)

    def add_hillshade(self, layer_id: str, source: Any, props: Optional[Mapping] = None) -> None:
        self.add(layer_id, source, "hillshade", props)

    def add_background(self, layer_id: str, props: Optional[Mapping] = None) -> None:
        """Background layers have no source."""
        self.add(layer_id, None, "background", props)

    def remove_layer(self, layers: LayerIds) -> None:
        """
        Remove layers, ignoring ids the map does not have.

        The host still receives one remove call per id; its "does not
        exist" error is swallowed for the duration of the batch. Any other
        host error is logged.
        """
        with self._suppress_missing_errors(self.config.missing_layer_pattern):
            for layer_id in as_id_list(layers):
                self.host.remove_layer(layer_id)

    # ========================================================================
    # SOURCES
    # ========================================================================

    def add_source(self, source_id: str, spec: Any) -> LayerHandle:
        """
        Register a source from a loose spec.

        Mappings with a "type" of vector, raster, raster-dem or geojson are
        normalised, a bare GeoJSON object becomes a GeoJSON source and a
        mapping with only url/tiles becomes a vector source. A string goes
        through infer_source(); one that matches no rule is taken as a
        TileJSON URL. Other mappings are passed through unchanged.
        """
        if isinstance(spec, str):
            inferred = infer_source(spec, self.config)
            if isinstance(inferred, Mapping):
                return self._register_source(source_id, inferred)
            return self.add_vector(source_id, spec)
        if not isinstance(spec, Mapping):
            raise ContractViolationError(
                f"Source spec must be a mapping or a string, got {type(spec).__name__}"
            )
        options = dict(spec)
        source_type = options.pop("type", None)
        if source_type in GEOJSON_OBJECT_TYPES:
            return self.add_geojson(source_id, dict(spec))
        if source_type == "vector" or (source_type is None and ("url" in options or "tiles" in options)):
            return self.add_vector(source_id, options)
        if source_type in ("raster", "raster-dem"):
            return self._register_source(
                source_id, raster_source(options, self.config, source_type=source_type)
            )
        if source_type == "geojson":
            return self.add_geojson(source_id, **options)
        return self._register_source(source_id, dict(spec))

    def _register_source(self, source_id: str, spec: Dict[str, Any]) -> LayerHandle:
        self.logger.debug(
            f"Adding source '{source_id}'",
            extra={'custom_dimensions': {'source_type': spec.get('type')}}
        )
        self.host.add_source(source_id, spec)
        return LayerHandle(self, source_id)

    def add_geojson(self, source_id: str, data: Any = None, **options: Any) -> LayerHandle:
        """
        Register a GeoJSON source.

        Args:
            source_id: New source id
            data: GeoJSON object or URL (empty FeatureCollection if omitted)
            **options: Extra source options (cluster, promoteId, ...)
        """
        return self._register_source(source_id, geojson_source(data, **options))

    def add_vector(self, source_id: str, spec: Any, **options: Any) -> LayerHandle:
        """
        Register a vector tile source.

        Args:
            spec: mapbox:// URL, TileJSON URL, tile template, or {url|tiles, ...}
        """
        return self._register_source(source_id, vector_source(spec, self.config, **options))

    def add_raster_source(self, source_id: str, spec: Any, **options: Any) -> LayerHandle:
        """Register a raster tile source; tileSize defaults from config."""
        return self._register_source(source_id, raster_source(spec, self.config, **options))

    def add_raster_dem_source(self, source_id: str, spec: Any, **options: Any) -> LayerHandle:
        """Register a raster-dem (terrain) source; tileSize defaults from config."""
        return self._register_source(
            source_id, raster_source(spec, self.config, source_type="raster-dem", **options)
        )

    def remove_source(self, sources: LayerIds) -> None:
        """Remove sources, ignoring ids the map does not have."""
        with self._suppress_missing_errors(self.config.missing_source_pattern):
            for source_id in as_id_list(sources):
                self.host.remove_source(source_id)

    def update(self, source_id: str, data: Any = None) -> None:
        """Replace a GeoJSON source's data (empty FeatureCollection if omitted)."""
        if data is None:
            data = empty_feature_collection()
        self.host.get_source(source_id).set_data(data)

    set_data = update

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def on_load(self, callback: Callable[[], Any]) -> None:
        """
        Run callback once the map has loaded.

        Called immediately if the host already reports loaded, otherwise
        registered for the next load event only.
        """
        if self.host.loaded():
            callback()
        else:
            self.host.once(HostDefaults.LOAD_EVENT, callback)

    @contextmanager
    def _suppress_missing_errors(self, pattern: str) -> Iterator[None]:
        """Swallow host errors containing pattern while the block runs."""

        def swallow(event: Any = None) -> None:
            message = _error_message(event)
            if pattern in message:
                self.logger.debug(f"Ignoring host error: {message}")
            else:
                self.logger.error(f"Host error: {message}")

        self.host.on(HostDefaults.ERROR_EVENT, swallow)
        try:
            yield
        finally:
            self.host.off(HostDefaults.ERROR_EVENT, swallow)


def init(host: IMapHost, config: Optional[StyleUtilsConfig] = None) -> MapUtils:
    """Create MapUtils for a host map."""
    return MapUtils(host, config)
