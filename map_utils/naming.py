"""
Property name translation.

The host style spec names every property in kebab-case (line-width,
fill-extrusion-color). Callers may write the camelCase form instead
(lineWidth, fillExtrusionColor); these helpers turn either into the
wire form.
"""

import re

_UPPER = re.compile(r"[A-Z]")


def to_kebab(name: str) -> str:
    """
    Convert camelCase to kebab-case.

    Each uppercase ASCII letter becomes "-" plus its lowercase form;
    every other character is left alone, so already-kebab input comes
    back unchanged and to_kebab(to_kebab(x)) == to_kebab(x).

    Examples:
        >>> to_kebab("textSize")
        'text-size'
        >>> to_kebab("fill-extrusion-color")
        'fill-extrusion-color'
    """
    return _UPPER.sub(lambda m: "-" + m.group(0).lower(), name)


def snake_to_kebab(name: str) -> str:
    """Convert a Python snake_case name (line_width) to kebab-case."""
    return name.replace("_", "-")
