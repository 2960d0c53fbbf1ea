"""
Numeric value types.

All floats are written with a fixed number of decimal places taken from
``WriteSettings.precision`` so output never depends on repr() heuristics.
"""

from __future__ import annotations

import math
from functools import total_ordering
from typing import BinaryIO, Optional

from structuredvg.errors import InvalidNumber
from structuredvg.io import Writable, WriteSettings

# Alias kept so callers can annotate path arguments and lengths uniformly
Number = float


def format_number(value: float, precision: int) -> str:
    """
    Format ``value`` with exactly ``precision`` decimal places.

    Examples:
        format_number(1, 2)      -> "1.00"
        format_number(0.125, 2)  -> "0.12"  (round half to even)
        format_number(3.5, 0)    -> "4"
    """
    return f"{float(value):.{precision}f}"


@total_ordering
class PositiveNumber(Writable):
    """
    A float that is guaranteed to be finite and not negative.

    Negative zero is accepted and stored as ``0.0`` so it is never written
    with a sign.

    Two constructors:
        PositiveNumber(x)      raises InvalidNumber on bad input
        PositiveNumber.new(x)  returns None on bad input

    Since NaN can never be stored, ordering and equality are total.
    """

    __slots__ = ("_value",)

    ZERO: "PositiveNumber"

    def __init__(self, value: Number):
        value = float(value)
        if not PositiveNumber.is_valid(value):
            raise InvalidNumber(f"Not a finite non-negative number: {value!r}")
        # -0.0 + 0.0 == +0.0
        self._value = value + 0.0

    @staticmethod
    def is_valid(value: Number) -> bool:
        return not (math.isnan(value) or math.isinf(value) or value < 0)

    @classmethod
    def new(cls, value: Number) -> Optional["PositiveNumber"]:
        try:
            return cls(value)
        except (InvalidNumber, TypeError, ValueError):
            return None

    @classmethod
    def from_str(cls, text: str) -> "PositiveNumber":
        """
        Parse the written form of a number ("1.5000").

        Raises:
            InvalidNumber: If ``text`` is not a finite non-negative number
        """
        try:
            value = float(text)
        except ValueError:
            raise InvalidNumber(f"Not a number: {text!r}")
        return cls(value)

    @property
    def value(self) -> float:
        return self._value

    def __float__(self) -> float:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PositiveNumber):
            return self._value == other._value
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return PositiveNumber.is_valid(other) and self._value == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, PositiveNumber):
            return self._value < other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"PositiveNumber({self._value!r})"

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(format_number(self._value, settings.precision).encode("ascii"))


PositiveNumber.ZERO = PositiveNumber(0.0)


__all__ = ["Number", "format_number", "PositiveNumber"]
