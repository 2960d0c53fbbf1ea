"""
Event handler attributes.

Values are script text written as-is. Quotes inside handler code must
already be escaped by the caller.

- SVG 1.1 Graphics Events: https://www.w3.org/TR/SVG11/script.html#GraphicsEvents
- SVG 1.1 SVG Events: https://www.w3.org/TR/SVG11/interact.html#SVGEvents
"""

from dataclasses import dataclass
from typing import Optional

from structuredvg.bundle import attribute_bundle, xml_attribute


@attribute_bundle
@dataclass
class GraphicalEvents:
    """Event attributes allowed on most graphics and container elements."""

    onfocusin: Optional[str] = xml_attribute(default=None)
    onfocusout: Optional[str] = xml_attribute(default=None)
    onactivate: Optional[str] = xml_attribute(default=None)
    onclick: Optional[str] = xml_attribute(default=None)
    onmousedown: Optional[str] = xml_attribute(default=None)
    onmouseup: Optional[str] = xml_attribute(default=None)
    onmouseover: Optional[str] = xml_attribute(default=None)
    onmousemove: Optional[str] = xml_attribute(default=None)
    onmouseout: Optional[str] = xml_attribute(default=None)


__all__ = ["GraphicalEvents"]
