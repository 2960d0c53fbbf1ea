"""Backends turning attribute bundles into document text (SVG)."""

from .svg_writer import element_to_string, generate_svg, save_svg_file, write_element

__all__ = ["element_to_string", "generate_svg", "save_svg_file", "write_element"]
