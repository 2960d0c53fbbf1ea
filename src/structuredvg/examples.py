"""
Example elements for demos and tests.

Builds a rounded "tab" outline path exercising every attribute group:
conditional processing, core attributes (class, style, data-*, xml:space)
and event handlers.
"""
from structuredvg.common import (
    ConditionalProcessing,
    CoreAttributes,
    DataAttribute,
    NonStandardAttribute,
    XmlSpace,
    language_list,
    space_list,
)
from structuredvg.number import PositiveNumber
from structuredvg.path import ElementPath, PathData, PathSegment
from structuredvg.script import GraphicalEvents
from structuredvg.style import DeclarationList


def build_tab_outline(width: float = 40.0, height: float = 20.0, radius: float = 4.0) -> PathData:
    """Closed outline with rounded top corners."""
    return PathData.of(
        PathSegment.move(0, height),
        PathSegment.vertical(radius),
        PathSegment.quadratic(0, 0, radius, 0),
        PathSegment.horizontal(width - radius),
        PathSegment.quadratic(width, 0, width, radius),
        PathSegment.vertical(height),
        PathSegment.close(),
    )


def build_example_path(tab_count: int = 1) -> ElementPath:
    style = DeclarationList()
    style.push_property("fill", "none")
    style.push_property("stroke", "black")

    core = CoreAttributes(
        id=f"tab-{tab_count}",
        class_=space_list("tab", "outline"),
        style=style,
        xml_space=XmlSpace.PRESERVE,
        data=[DataAttribute.new("index", str(tab_count))],
        other=[NonStandardAttribute("stroke-width", "2")],
    )

    return ElementPath(
        conditional_processing=ConditionalProcessing(system_language=language_list("en", "en-US")),
        core=core,
        graphical_event=GraphicalEvents(onclick="select(evt)"),
        d=build_tab_outline(),
        path_length=PositiveNumber(96.0),
    )


def build_minimal_path() -> ElementPath:
    return ElementPath(d=PathData.of(PathSegment.move(0, 0), PathSegment.line(10, 10)))
