"""
Style property classification.

Every property a layer can carry lives in exactly one half of the layer
object: "paint" (evaluated per frame, cheap to change) or "layout"
(affects placement, forces re-layout). The tables below list the
canonical kebab-case names from the host style specification; anything
not listed is a layer-level field (id, source, type, minzoom, filter...).
"""

from dataclasses import dataclass
from enum import Enum

from .naming import to_kebab


class PropertyCategory(Enum):
    """Which half of a layer object a property belongs to."""
    PAINT = "paint"
    LAYOUT = "layout"
    NONE = "none"


PAINT_PROPERTIES = frozenset({
    # fill
    "fill-antialias", "fill-opacity", "fill-color", "fill-outline-color",
    "fill-translate", "fill-translate-anchor", "fill-pattern",
    # line
    "line-opacity", "line-color", "line-translate", "line-translate-anchor",
    "line-width", "line-gap-width", "line-offset", "line-blur",
    "line-dasharray", "line-pattern", "line-gradient",
    # circle
    "circle-radius", "circle-color", "circle-blur", "circle-opacity",
    "circle-translate", "circle-translate-anchor", "circle-pitch-scale",
    "circle-pitch-alignment", "circle-stroke-width", "circle-stroke-color",
    "circle-stroke-opacity",
    # heatmap
    "heatmap-radius", "heatmap-weight", "heatmap-intensity", "heatmap-color",
    "heatmap-opacity",
    # fill-extrusion
    "fill-extrusion-opacity", "fill-extrusion-color", "fill-extrusion-translate",
    "fill-extrusion-translate-anchor", "fill-extrusion-pattern",
    "fill-extrusion-height", "fill-extrusion-base",
    "fill-extrusion-vertical-gradient",
    # symbol
    "icon-opacity", "icon-color", "icon-halo-color", "icon-halo-width",
    "icon-halo-blur", "icon-translate", "icon-translate-anchor",
    "text-opacity", "text-color", "text-halo-color", "text-halo-width",
    "text-halo-blur", "text-translate", "text-translate-anchor",
    # raster
    "raster-opacity", "raster-hue-rotate", "raster-brightness-min",
    "raster-brightness-max", "raster-saturation", "raster-contrast",
    "raster-resampling", "raster-fade-duration",
    # hillshade
    "hillshade-illumination-direction", "hillshade-illumination-anchor",
    "hillshade-exaggeration", "hillshade-shadow-color",
    "hillshade-highlight-color", "hillshade-accent-color",
    # background
    "background-color", "background-pattern", "background-opacity",
})

LAYOUT_PROPERTIES = frozenset({
    "visibility",
    # fill / circle
    "fill-sort-key", "circle-sort-key",
    # line
    "line-cap", "line-join", "line-miter-limit", "line-round-limit",
    "line-sort-key",
    # symbol
    "symbol-placement", "symbol-spacing", "symbol-avoid-edges",
    "symbol-sort-key", "symbol-z-order",
    "icon-allow-overlap", "icon-ignore-placement", "icon-optional",
    "icon-rotation-alignment", "icon-size", "icon-text-fit",
    "icon-text-fit-padding", "icon-image", "icon-rotate", "icon-padding",
    "icon-keep-upright", "icon-offset", "icon-anchor", "icon-pitch-alignment",
    "text-pitch-alignment", "text-rotation-alignment", "text-field",
    "text-font", "text-size", "text-max-width", "text-line-height",
    "text-letter-spacing", "text-justify", "text-radial-offset",
    "text-variable-anchor", "text-anchor", "text-max-angle",
    "text-writing-mode", "text-rotate", "text-padding", "text-keep-upright",
    "text-transform", "text-offset", "text-allow-overlap",
    "text-ignore-placement", "text-optional",
})


@dataclass(frozen=True)
class PropertyClassification:
    """Category of a property plus its canonical (kebab-case) name."""
    category: PropertyCategory
    canonical: str

    @property
    def is_style(self) -> bool:
        return self.category is not PropertyCategory.NONE


def classify(name: str) -> PropertyClassification:
    """
    Classify a property name in either camelCase or kebab-case.

    Names absent from both tables classify as NONE; that is a normal
    outcome for layer-level fields, not an error.

    Examples:
        >>> classify("lineColor")
        PropertyClassification(category=<PropertyCategory.PAINT: 'paint'>, canonical='line-color')
    """
    canonical = to_kebab(name)
    if canonical in PAINT_PROPERTIES:
        return PropertyClassification(PropertyCategory.PAINT, canonical)
    if canonical in LAYOUT_PROPERTIES:
        return PropertyClassification(PropertyCategory.LAYOUT, canonical)
    return PropertyClassification(PropertyCategory.NONE, canonical)


def is_paint(name: str) -> bool:
    return classify(name).category is PropertyCategory.PAINT


def is_layout(name: str) -> bool:
    return classify(name).category is PropertyCategory.LAYOUT
