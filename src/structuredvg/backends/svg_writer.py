"""
SVG element writer.

Wraps the attribute list of a bundle in an empty-element tag:

    <path id="outline" d="M0.0000 0.0000L10.0000 0.0000z"/>

and wraps a sequence of such elements in an ``<svg>`` document.

Only empty elements are produced; child content and text nodes belong to a
full document writer.
"""

import io
import logging
from typing import Any, BinaryIO, Iterable, Optional

from structuredvg.bundle import write_attributes
from structuredvg.io import WriteSettings, resolve_settings

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _tag_of(element: Any, tag: Optional[str]) -> str:
    if tag is not None:
        return tag
    element_tag = getattr(element, "TAG", None)
    if not element_tag:
        raise ValueError(f"No tag given and {type(element).__name__} has no TAG")
    return element_tag


def write_element(
    writer: BinaryIO,
    element: Any,
    settings: Optional[WriteSettings] = None,
    tag: Optional[str] = None,
) -> None:
    """
    Write ``element`` as ``<tag attributes/>``.

    Args:
        writer: Binary output
        element: Any bundle-like value (see bundle.write_attributes)
        settings: Write settings (defaults when None)
        tag: Element name; defaults to ``element.TAG``
    """
    name = _tag_of(element, tag)
    attributes = io.BytesIO()
    wrote_any = write_attributes(element, attributes, resolve_settings(settings))

    writer.write(b"<" + name.encode("utf-8"))
    if wrote_any:
        writer.write(b" ")
        writer.write(attributes.getvalue())
    writer.write(b"/>")


def element_to_string(
    element: Any,
    settings: Optional[WriteSettings] = None,
    tag: Optional[str] = None,
) -> str:
    buffer = io.BytesIO()
    write_element(buffer, element, settings, tag)
    return buffer.getvalue().decode("utf-8")


def generate_svg(
    elements: Iterable[Any],
    settings: Optional[WriteSettings] = None,
) -> str:
    """
    Generate an SVG document containing ``elements``.

    Returns:
        String with one element per line inside the ``<svg>`` root
    """
    lines = [f'<svg xmlns="{SVG_NAMESPACE}">']
    for element in elements:
        lines.append("  " + element_to_string(element, settings))
    lines.append("</svg>")
    return "\n".join(lines)


def save_svg_file(
    elements: Iterable[Any],
    filename: str,
    settings: Optional[WriteSettings] = None,
) -> None:
    """
    Generate an SVG document and save it to a file.

    Args:
        elements: Elements to write
        filename: Output file path (.svg extension recommended)
        settings: Write settings
    """
    svg = generate_svg(elements, settings)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(svg)
    logger.info("Wrote SVG document to %s", filename)


__all__ = ["SVG_NAMESPACE", "write_element", "element_to_string", "generate_svg", "save_svg_file"]
