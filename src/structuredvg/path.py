"""
Structured path data (the ``d`` attribute) and the ``<path>`` element.

A path is an ordered sequence of segments. Every segment is one drawing
command carrying a fixed number of numeric arguments:

    Command           Letter   Arguments
    ----------------  -------  ---------
    Move              M / m    2
    Line              L / l    2
    Horizontal        H / h    1
    Vertical          V / v    1
    Cubic             C / c    6
    CubicSmooth       S / s    4
    Quadratic         Q / q    4
    QuadraticSmooth   T / t    2
    Elliptical        A / a    7
    Close             z / z    0

The arity is checked when a segment is constructed, never when it is
written.

References:
    https://www.w3.org/TR/SVG11/paths.html#PathData
    https://www.w3.org/TR/SVG/paths.html#PathData
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple

from structuredvg.bundle import attribute_bundle, xml_attribute, xml_attribute_bundle
from structuredvg.common import ConditionalProcessing, CoreAttributes
from structuredvg.errors import InvalidPathSegment
from structuredvg.io import Writable, WriteSettings
from structuredvg.number import Number, PositiveNumber, format_number
from structuredvg.script import GraphicalEvents


class Command(Enum):
    """Path command kinds."""

    MOVE = "move"
    LINE = "line"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CUBIC = "cubic"
    CUBIC_SMOOTH = "cubic_smooth"
    QUADRATIC = "quadratic"
    QUADRATIC_SMOOTH = "quadratic_smooth"
    ELLIPTICAL = "elliptical"
    CLOSE = "close"

    @property
    def argument_count(self) -> int:
        return _ARGUMENT_COUNT[self]

    @property
    def absolute(self) -> str:
        return _ABSOLUTE_LETTER[self]

    @property
    def relative(self) -> str:
        # Close is written as "z" either way
        if self is Command.CLOSE:
            return "z"
        return _ABSOLUTE_LETTER[self].lower()


_ARGUMENT_COUNT = {
    Command.MOVE: 2,
    Command.LINE: 2,
    Command.HORIZONTAL: 1,
    Command.VERTICAL: 1,
    Command.CUBIC: 6,
    Command.CUBIC_SMOOTH: 4,
    Command.QUADRATIC: 4,
    Command.QUADRATIC_SMOOTH: 2,
    Command.ELLIPTICAL: 7,
    Command.CLOSE: 0,
}

_ABSOLUTE_LETTER = {
    Command.MOVE: "M",
    Command.LINE: "L",
    Command.HORIZONTAL: "H",
    Command.VERTICAL: "V",
    Command.CUBIC: "C",
    Command.CUBIC_SMOOTH: "S",
    Command.QUADRATIC: "Q",
    Command.QUADRATIC_SMOOTH: "T",
    Command.ELLIPTICAL: "A",
    Command.CLOSE: "z",
}


@dataclass(frozen=True)
class PathSegment(Writable):
    """
    One path command with its arguments.

    Prefer the named constructors, which make the arity part of the call:

        PathSegment.move(10, 20)
        PathSegment.cubic(1, 2, 3, 4, 5, 6, relative=True)
        PathSegment.close()

    Properties:
        command: Command kind
        args: Exactly ``command.argument_count`` numbers
        relative: Relative (lowercase) or absolute (uppercase) coordinates

    Raises:
        InvalidPathSegment: If the number of arguments does not match the
            command or an argument is not a finite number
    """

    command: Command
    args: Tuple[Number, ...] = ()
    relative: bool = False

    def __post_init__(self) -> None:
        args = tuple(self.args)
        expected = self.command.argument_count
        if len(args) != expected:
            raise InvalidPathSegment(
                f"{self.command.name} takes {expected} arguments, got {len(args)}"
            )
        try:
            args = tuple(float(arg) for arg in args)
        except (TypeError, ValueError) as e:
            raise InvalidPathSegment(f"Invalid {self.command.name} argument: {str(e)}")
        if not all(math.isfinite(arg) for arg in args):
            raise InvalidPathSegment(f"{self.command.name} arguments must be finite: {args}")
        object.__setattr__(self, "args", args)

    @property
    def letter(self) -> str:
        return self.command.relative if self.relative else self.command.absolute

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(self.letter.encode("ascii"))
        if self.args:
            text = " ".join(format_number(arg, settings.precision) for arg in self.args)
            writer.write(text.encode("ascii"))

    # Named constructors

    @classmethod
    def move(cls, x: Number, y: Number, relative: bool = False) -> "PathSegment":
        """Move the pen without drawing."""
        return cls(Command.MOVE, (x, y), relative)

    @classmethod
    def line(cls, x: Number, y: Number, relative: bool = False) -> "PathSegment":
        return cls(Command.LINE, (x, y), relative)

    @classmethod
    def horizontal(cls, x: Number, relative: bool = False) -> "PathSegment":
        return cls(Command.HORIZONTAL, (x,), relative)

    @classmethod
    def vertical(cls, y: Number, relative: bool = False) -> "PathSegment":
        return cls(Command.VERTICAL, (y,), relative)

    @classmethod
    def cubic(
        cls,
        x1: Number, y1: Number,
        x2: Number, y2: Number,
        x: Number, y: Number,
        relative: bool = False,
    ) -> "PathSegment":
        """Cubic Bézier curve with two explicit control points."""
        return cls(Command.CUBIC, (x1, y1, x2, y2, x, y), relative)

    @classmethod
    def cubic_smooth(
        cls, x2: Number, y2: Number, x: Number, y: Number, relative: bool = False
    ) -> "PathSegment":
        """Cubic Bézier curve; the first control point mirrors the previous segment's."""
        return cls(Command.CUBIC_SMOOTH, (x2, y2, x, y), relative)

    @classmethod
    def quadratic(
        cls, x1: Number, y1: Number, x: Number, y: Number, relative: bool = False
    ) -> "PathSegment":
        return cls(Command.QUADRATIC, (x1, y1, x, y), relative)

    @classmethod
    def quadratic_smooth(cls, x: Number, y: Number, relative: bool = False) -> "PathSegment":
        return cls(Command.QUADRATIC_SMOOTH, (x, y), relative)

    @classmethod
    def elliptical(
        cls,
        rx: Number, ry: Number,
        x_axis_rotation: Number,
        large_arc: Number, sweep: Number,
        x: Number, y: Number,
        relative: bool = False,
    ) -> "PathSegment":
        """Elliptical arc. ``large_arc`` and ``sweep`` are flags (0 or 1)."""
        return cls(
            Command.ELLIPTICAL,
            (rx, ry, x_axis_rotation, large_arc, sweep, x, y),
            relative,
        )

    @classmethod
    def close(cls, relative: bool = False) -> "PathSegment":
        """Line back to the start of the current subpath."""
        return cls(Command.CLOSE, (), relative)


@dataclass(frozen=True)
class PathData(Writable):
    """
    Immutable sequence of path segments.

    Segments are written back to back with no separator; each command
    letter starts a new segment.
    """

    segments: Tuple[PathSegment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))

    @classmethod
    def of(cls, *segments: PathSegment) -> "PathData":
        return cls(segments)

    def extended(self, segments: Iterable[PathSegment]) -> "PathData":
        """Return a new path with ``segments`` appended."""
        return PathData(self.segments + tuple(segments))

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        for segment in self.segments:
            segment.write_to(writer, settings)


@attribute_bundle
@dataclass
class ElementPath:
    """
    Attributes of a ``<path>`` element.

    - SVG 1.1: https://www.w3.org/TR/SVG11/paths.html#PathElement
    - SVG 2: https://www.w3.org/TR/SVG/paths.html#PathElement
    """

    conditional_processing: ConditionalProcessing = xml_attribute_bundle(
        default_factory=ConditionalProcessing
    )
    core: CoreAttributes = xml_attribute_bundle(default_factory=CoreAttributes)
    graphical_event: GraphicalEvents = xml_attribute_bundle(default_factory=GraphicalEvents)

    # Shape of the path
    d: Optional[PathData] = xml_attribute(default=None)

    # Author's computation of the total path length, in user units
    path_length: Optional[PositiveNumber] = xml_attribute(name="pathLength", default=None)

    TAG = "path"


__all__ = ["Command", "PathSegment", "PathData", "ElementPath"]
