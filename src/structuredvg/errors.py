"""
Exception types raised by structuredvg.

Absence is never an error here: popping an empty list, removing a value that
is not present or building a PositiveNumber from a bad float through
``PositiveNumber.new`` all return ``None``/``False``. The exceptions below
cover broken schemas, invalid constructor input and bad configuration.

Errors raised by the output sink (``OSError`` and friends) are never wrapped.
"""


class StructuredSvgError(Exception):
    """Base class for all structuredvg errors."""
    pass


class SchemaError(StructuredSvgError):
    """Raised when an attribute bundle schema is invalid at registration time."""
    pass


class InvalidNumber(StructuredSvgError, ValueError):
    """Raised when a float is NaN, infinite or negative where that is not allowed."""
    pass


class InvalidPathSegment(StructuredSvgError, ValueError):
    """Raised when a path segment is built with the wrong number of arguments."""
    pass


class InvalidDelimitedValue(StructuredSvgError, ValueError):
    """Raised when text cannot be stored as an entry of a delimited list."""
    pass


class InvalidLanguageTag(StructuredSvgError, ValueError):
    """
    Raised for malformed language tags.

    Language tags are not checked yet, so nothing raises this today. It exists
    so callers can already handle it.
    """
    pass


class SettingsError(StructuredSvgError):
    """Raised when write settings cannot be loaded or are invalid."""
    pass


__all__ = [
    "StructuredSvgError",
    "SchemaError",
    "InvalidNumber",
    "InvalidPathSegment",
    "InvalidDelimitedValue",
    "InvalidLanguageTag",
    "SettingsError",
]
