"""
Style assembly.

Partitions a flat, caller-friendly property map into the layer object
shape the host expects:

    {"lineWidth": 3, "lineCap": "round", "minzoom": 11}
        -> {"paint": {"line-width": 3}, "layout": {"line-cap": "round"}, "minzoom": 11}

Values are never inspected, so compiled Jam Session expressions pass
straight through.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from config import StyleUtilsConfig
from exceptions import ContractViolationError
from .properties import PropertyCategory, classify
from .sources import infer_source

# The one layer-level key callers write in camelCase
_RENAMED_LAYER_KEYS = {"sourceLayer": "source-layer"}


def build_style(props: Optional[Mapping] = None) -> Dict[str, Any]:
    """
    Split mixed properties into paint, layout and top-level fields.

    Args:
        props: Property name (camelCase or kebab-case) -> value

    Returns:
        Style dict; "paint"/"layout" only present when non-empty

    Raises:
        ContractViolationError: If props is not a mapping
    """
    if props is None:
        return {}
    if not isinstance(props, Mapping):
        raise ContractViolationError(
            f"Properties must be a mapping, got {type(props).__name__}"
        )

    style: Dict[str, Any] = {}
    paint: Dict[str, Any] = {}
    layout: Dict[str, Any] = {}

    for key, value in props.items():
        classification = classify(key)
        if classification.category is PropertyCategory.PAINT:
            paint[classification.canonical] = value
        elif classification.category is PropertyCategory.LAYOUT:
            layout[classification.canonical] = value
        else:
            style[_RENAMED_LAYER_KEYS.get(key, key)] = value

    if paint:
        style["paint"] = paint
    if layout:
        style["layout"] = layout
    return style


# Shorter alias used by MapUtils.properties()
properties = build_style


def layer_style(
    layer_id: str,
    source: Any = None,
    layer_type: Optional[str] = None,
    props: Optional[Mapping] = None,
    config: Optional[StyleUtilsConfig] = None
) -> Dict[str, Any]:
    """
    Build a complete layer object ready for the host's add_layer().

    Two call forms:
        layer_style("roads", "streets", "line", {"lineWidth": 2})
        layer_style("roads", {"source": "streets", "type": "line", "lineWidth": 2})

    The source argument goes through infer_source(), so a GeoJSON mapping,
    a URL or a tile template become inline source specs.
    """
    if isinstance(source, Mapping) and layer_type is None and props is None:
        # (layer_id, properties) form
        props = dict(source)
        source = props.pop("source", None)
        layer_type = props.pop("type", None)

    layer: Dict[str, Any] = {"id": layer_id}
    if layer_type is not None:
        layer["type"] = layer_type
    if source is not None:
        layer["source"] = infer_source(source, config)
    layer.update(build_style(props))
    return layer
