"""
Writing primitives shared by every value and attribute type.

A *writer* is anything with a ``write(bytes)`` method: an open binary file,
``io.BytesIO``, a socket wrapper. Everything written is UTF-8.

ARCHITECTURAL RULE:
    Settings are passed explicitly to every write call.
    There is no module-level configuration.
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO, Optional

from structuredvg.errors import SettingsError

DEFAULT_PRECISION = 4


@dataclass(frozen=True)
class WriteSettings:
    """
    Options applied while writing attribute values.

    Properties:
        precision: Number of decimal places used for every float written
            (path arguments, PositiveNumber, plain floats). Defaults to 4.
    """

    precision: int = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise SettingsError(f"precision must be an int, got {self.precision!r}")
        if self.precision < 0:
            raise SettingsError(f"precision must not be negative, got {self.precision}")


def resolve_settings(settings: Optional[WriteSettings]) -> WriteSettings:
    """Return ``settings`` or the defaults when ``None``."""
    if settings is None:
        return WriteSettings()
    return settings


class Writable(ABC):
    """
    A value that knows how to write its own textual form.

    Implementations must only write valid UTF-8 and must let writer errors
    propagate.
    """

    @abstractmethod
    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        ...

    def write_to_string(self, settings: Optional[WriteSettings] = None) -> str:
        buffer = io.BytesIO()
        self.write_to(buffer, resolve_settings(settings))
        return buffer.getvalue().decode("utf-8")


def write_value(value: Any, writer: BinaryIO, settings: WriteSettings) -> None:
    """
    Write the canonical text of an attribute value.

    Supported values:
        - Writable instances (delegate to ``write_to``)
        - str, bytes
        - bool (``true``/``false``), int
        - float (fixed precision from ``settings``)
        - Enum members (their ``value``)

    Raises:
        TypeError: If the value has no canonical text form
    """
    # Local import keeps number -> io a one-way dependency
    from structuredvg.number import format_number

    if isinstance(value, Writable):
        value.write_to(writer, settings)
    elif isinstance(value, Enum):
        # Before str/int: IntEnum and str-mixin members are written by value
        write_value(value.value, writer, settings)
    elif isinstance(value, str):
        writer.write(value.encode("utf-8"))
    elif isinstance(value, bytes):
        writer.write(value)
    elif isinstance(value, bool):
        writer.write(b"true" if value else b"false")
    elif isinstance(value, int):
        writer.write(str(value).encode("ascii"))
    elif isinstance(value, float):
        writer.write(format_number(value, settings.precision).encode("ascii"))
    else:
        raise TypeError(f"Unsupported attribute value type: {type(value).__name__}")


def value_to_bytes(value: Any, settings: Optional[WriteSettings] = None) -> bytes:
    buffer = io.BytesIO()
    write_value(value, buffer, resolve_settings(settings))
    return buffer.getvalue()


class Attribute(ABC):
    """
    A single context-independent named attribute.

    Subclasses provide ``attribute_name`` and ``attribute_value``; they can be
    placed anywhere a nested bundle is accepted, alone or in a list.
    """

    @property
    @abstractmethod
    def attribute_name(self) -> str:
        ...

    @property
    @abstractmethod
    def attribute_value(self) -> Any:
        ...

    def write_attribute(self, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(self.attribute_name.encode("utf-8"))
        writer.write(b'="')
        write_value(self.attribute_value, writer, settings)
        writer.write(b'"')


__all__ = [
    "DEFAULT_PRECISION",
    "WriteSettings",
    "resolve_settings",
    "Writable",
    "write_value",
    "value_to_bytes",
    "Attribute",
]
