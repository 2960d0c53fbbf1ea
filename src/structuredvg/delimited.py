"""
Delimited value list.

Stores an ordered multi-value attribute (``class``, ``requiredFeatures``,
``systemLanguage`` ...) as a single string with one delimiter character
between entries, exactly as it will appear in the document.

INVARIANTS:
    - Empty storage means zero entries
    - No leading or trailing delimiter
    - No two adjacent delimiters
    - Every entry parses back into the value type

Writing emits the storage verbatim, so no whitespace ever surrounds the
delimiters. Whitespace around delimiters is accepted (and dropped) by
``DelimitedValues.parse``.
"""

from __future__ import annotations

from enum import Enum
from typing import (
    Any,
    BinaryIO,
    Callable,
    Generic,
    Iterable,
    Iterator,
    Optional,
    Type,
    TypeVar,
)

from structuredvg.errors import InvalidDelimitedValue
from structuredvg.io import Writable, WriteSettings, resolve_settings, value_to_bytes

V = TypeVar("V")


def _parse_entry(
    value_type: Type[Any], text: str, settings: Optional[WriteSettings] = None
) -> Any:
    """
    Parse one entry back into ``value_type``.

    Uses ``value_type.from_str`` when defined. Enum members are matched by
    the text of their value and bools by ``true``/``false``, mirroring how
    io.write_value writes them. Anything else goes through the constructor.

    Raises:
        ValueError: If ``text`` is not a valid entry
    """
    parser: Optional[Callable[[str], Any]] = getattr(value_type, "from_str", None)
    if parser is not None:
        return parser(text)
    if isinstance(value_type, type) and issubclass(value_type, Enum):
        for member in value_type:
            if value_to_bytes(member, settings).decode("utf-8") == text:
                return member
        raise ValueError(f"{text!r} is not a valid {value_type.__name__}")
    if value_type is bool:
        if text not in ("true", "false"):
            raise ValueError(f"{text!r} is not a valid bool")
        return text == "true"
    return value_type(text)


class DelimitedValues(Writable, Generic[V]):
    """
    Ordered list of values of ``value_type`` stored as delimited text.

    Example:
        classes = DelimitedValues(delimiter=" ")
        classes.push("b")
        classes.push("c")
        str(classes)  -> "b c"

    Entry matching:
        ``contains`` and ``remove`` compare whole entries, never substrings.
        With a comma delimiter, "en" is not contained in "en-US".

    Entry text:
        Pushed values are stored as the text io.write_value would write for
        them, so PositiveNumber(1.5) is stored as "1.5000" and
        XmlSpace.PRESERVE as "preserve". Floats use ``settings.precision``.

    Properties:
        delimiter: Single separator character
        value_type: Type entries are parsed into by ``iter_values``/``pop``
        settings: WriteSettings used to turn pushed values into entry text
    """

    def __init__(
        self,
        values: Iterable[V] = (),
        *,
        delimiter: str = " ",
        value_type: Type[V] = str,
        settings: Optional[WriteSettings] = None,
    ):
        if len(delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
        self.delimiter = delimiter
        self.value_type = value_type
        self.settings = resolve_settings(settings)
        self._inner = ""
        for value in values:
            self.push(value)

    # ------------------------------------------------------------------
    # Construction from text
    # ------------------------------------------------------------------

    @classmethod
    def parse(
        cls,
        text: str,
        *,
        delimiter: str = " ",
        value_type: Type[V] = str,
        settings: Optional[WriteSettings] = None,
    ) -> "DelimitedValues[V]":
        """
        Build a list from document text, validating every entry.

        Whitespace surrounding the delimiters is dropped. With a whitespace
        delimiter, runs of whitespace count as one delimiter.

        Raises:
            InvalidDelimitedValue: If an entry is empty or does not parse
        """
        result = cls(delimiter=delimiter, value_type=value_type, settings=settings)
        if delimiter.isspace():
            parts = text.split()
        else:
            stripped = text.strip()
            parts = [part.strip() for part in stripped.split(delimiter)] if stripped else []

        for part in parts:
            if not part:
                raise InvalidDelimitedValue(f"Empty entry in {text!r}")
            try:
                _parse_entry(value_type, part, result.settings)
            except (TypeError, ValueError) as e:
                raise InvalidDelimitedValue(
                    f"Entry {part!r} is not a valid {value_type.__name__}: {str(e)}"
                )
        result._inner = delimiter.join(parts)
        return result

    @classmethod
    def from_str_unchecked(
        cls,
        text: str,
        *,
        delimiter: str = " ",
        value_type: Type[V] = str,
        settings: Optional[WriteSettings] = None,
    ) -> "DelimitedValues[V]":
        """
        Build a list from text that is already known to be valid.

        Only use this at a system boundary where ``text`` was produced by
        this library (for example, ``str()`` of another DelimitedValues).
        Nothing is checked: malformed text breaks the list invariants.
        """
        result = cls(delimiter=delimiter, value_type=value_type, settings=settings)
        result._inner = text
        return result

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _entry_text(self, value: V) -> str:
        if isinstance(value, str) and not isinstance(value, Enum):
            return value
        return value_to_bytes(value, self.settings).decode("utf-8")

    def push(self, value: V) -> None:
        """
        Append ``value`` as the last entry.

        Raises:
            InvalidDelimitedValue: If the entry text is empty or contains the
                delimiter
            TypeError: If ``value`` has no canonical text form
        """
        text = self._entry_text(value)
        if not text:
            raise InvalidDelimitedValue("Cannot push an empty value")
        if self.delimiter in text:
            raise InvalidDelimitedValue(
                f"Value {text!r} contains the delimiter {self.delimiter!r}"
            )
        if self._inner:
            self._inner += self.delimiter
        self._inner += text

    def push_str_unchecked(self, text: str) -> None:
        """Append ``text`` as an entry without validating it."""
        if self._inner:
            self._inner += self.delimiter
        self._inner += text

    def pop(self) -> Optional[V]:
        """Remove and return the last entry, or None if the list is empty."""
        if not self._inner:
            return None
        last = self._inner.rfind(self.delimiter)
        if last == -1:
            tail, self._inner = self._inner, ""
        else:
            tail = self._inner[last + 1:]
            self._inner = self._inner[:last]
        return _parse_entry(self.value_type, tail, self.settings)

    def _find_entry(self, text: str) -> Optional[tuple]:
        """Return (start, end) offsets of the first entry equal to ``text``."""
        start = 0
        for entry in self.iter():
            end = start + len(entry)
            if entry == text:
                return start, end
            start = end + 1
        return None

    def remove(self, value: V) -> bool:
        """
        Remove the first entry equal to ``value``.

        One adjacent delimiter goes with it: the one after the entry, or the
        one before it when the entry is last. A sole entry takes none.

        Returns:
            True if an entry was removed, False if none matched
        """
        span = self._find_entry(self._entry_text(value))
        if span is None:
            return False

        start, end = span
        if end != len(self._inner):
            end += 1
        elif start != 0:
            start -= 1
        self._inner = self._inner[:start] + self._inner[end:]
        return True

    def clear(self) -> None:
        self._inner = ""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, value: V) -> bool:
        return self._find_entry(self._entry_text(value)) is not None

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def iter(self) -> Iterator[str]:
        """Iterate over the raw entry texts of the current storage."""
        if not self._inner:
            return iter(())
        return iter(self._inner.split(self.delimiter))

    def iter_values(self) -> Iterator[V]:
        """Iterate over entries parsed into ``value_type``."""
        return (_parse_entry(self.value_type, entry, self.settings) for entry in self.iter())

    def __iter__(self) -> Iterator[str]:
        return self.iter()

    def __len__(self) -> int:
        if not self._inner:
            return 0
        return self._inner.count(self.delimiter) + 1

    def __bool__(self) -> bool:
        return bool(self._inner)

    def __str__(self) -> str:
        return self._inner

    def __repr__(self) -> str:
        return f"DelimitedValues({self._inner!r}, delimiter={self.delimiter!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DelimitedValues):
            return NotImplemented
        return self.delimiter == other.delimiter and self._inner == other._inner

    __hash__ = None  # type: ignore[assignment]

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(self._inner.encode("utf-8"))


__all__ = ["DelimitedValues"]
