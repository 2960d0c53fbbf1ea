"""
Bundle composition.

A Bundle is an ordered table of attribute descriptors and nested bundle
slots. Writing a bundle walks the table in declaration order and emits
``name="value"`` tokens separated by exactly one space:

    id="a" class="b c" d="M0.0000 0.0000z"

Nested bundles are spliced in at their declared position. The output is the
same whether attributes are declared in one flat bundle or spread over
nested ones, since a single running "wrote anything yet" flag is shared by
the whole traversal.

Schemas are usually declared on dataclasses:

    @attribute_bundle
    @dataclass
    class Anchor:
        core: CoreAttributes = xml_attribute_bundle(default_factory=CoreAttributes)
        href: Optional[str] = xml_attribute(default=None)
        target: str = xml_attribute(check=IF_NOT_DEFAULT, default="")

``attribute_bundle`` builds the descriptor table once, when the class is
defined, and rejects invalid policy/type combinations with SchemaError.
"""

from __future__ import annotations

import dataclasses
import io
import logging
import typing
from dataclasses import dataclass
from typing import (
    Any,
    BinaryIO,
    Callable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from structuredvg.errors import SchemaError
from structuredvg.io import Attribute, WriteSettings, resolve_settings
from structuredvg.policy import UNTYPED, AttributeDescriptor, Emission, PresencePolicy

logger = logging.getLogger(__name__)

# dataclasses.Field metadata keys
ATTRIBUTE_KEY = "structuredvg.xml_attribute"
BUNDLE_KEY = "structuredvg.xml_attribute_bundle"

# Class attribute holding the registered Bundle
BUNDLE_ATTR = "__attribute_bundle__"

T = TypeVar("T")


@dataclass(frozen=True)
class NestedBundle:
    """
    Slot for a nested bundle.

    The field value may be:
        - an instance of an ``@attribute_bundle`` class
        - an Attribute (DataAttribute, NonStandardAttribute, ...)
        - a list or tuple of any of these
        - None (writes nothing)
    """

    field: str


BundleEntry = Union[AttributeDescriptor, NestedBundle]


class BoundBundle(typing.NamedTuple):
    """
    A Bundle paired with the source it reads from.

    Lets hand-built descriptor tables nest without a dataclass:

        inner = Bundle([AttributeDescriptor.create("class")])
        outer = Bundle([AttributeDescriptor.create("id"), NestedBundle("inner")])
        outer.to_string({"id": "a", "inner": BoundBundle(inner, {"class": "b c"})})
    """

    bundle: "Bundle"
    source: Any


class AttributeWriter:
    """
    Writes attributes to ``writer`` with the separator rule applied.

    A space is written before every attribute except the first one written
    through this AttributeWriter. Nested bundles share the same instance, so
    nesting never changes the output.
    """

    def __init__(self, writer: BinaryIO, settings: WriteSettings):
        self.writer = writer
        self.settings = settings
        self.wrote_any = False

    def _separate(self) -> None:
        if self.wrote_any:
            self.writer.write(b" ")

    def write_emission(self, emission: Emission) -> None:
        self._separate()
        emission.write_to(self.writer, self.settings)
        self.wrote_any = True

    def write_attribute(self, attribute: Attribute) -> None:
        self._separate()
        attribute.write_attribute(self.writer, self.settings)
        self.wrote_any = True


def _read_field(source: Any, field_name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(field_name)
    return getattr(source, field_name)


class Bundle:
    """
    Ordered descriptor table for one element or attribute group.

    Bundles are built once (usually by ``attribute_bundle``) and never
    mutated afterwards.

    Properties:
        entries: Descriptors and nested slots, in declaration order
        name: Human-readable name, for logs and schema descriptions
    """

    def __init__(self, entries: Sequence[BundleEntry] = (), name: str = ""):
        for entry in entries:
            if not isinstance(entry, (AttributeDescriptor, NestedBundle)):
                raise SchemaError(f"Unsupported bundle entry: {entry!r}")
        self._entries: Tuple[BundleEntry, ...] = tuple(entries)
        self.name = name

    @property
    def entries(self) -> Tuple[BundleEntry, ...]:
        return self._entries

    @property
    def descriptors(self) -> List[AttributeDescriptor]:
        return [e for e in self._entries if isinstance(e, AttributeDescriptor)]

    def attribute_names(self) -> List[str]:
        """Names of the directly declared attributes (nested slots excluded)."""
        return [d.name for d in self.descriptors]

    def __repr__(self) -> str:
        return f"Bundle({self.name!r}, {len(self._entries)} entries)"

    def write_into(self, source: Any, out: AttributeWriter) -> bool:
        """
        Write this bundle's attributes for ``source`` through ``out``.

        Returns:
            True if at least one attribute was written by this call
        """
        wrote = False
        for entry in self._entries:
            value = _read_field(source, entry.field)
            if isinstance(entry, NestedBundle):
                wrote = write_nested(value, out) or wrote
                continue
            emission = entry.evaluate(value)
            if emission is not None:
                out.write_emission(emission)
                wrote = True
        return wrote

    def write_attributes(
        self,
        source: Any,
        writer: BinaryIO,
        settings: Optional[WriteSettings] = None,
    ) -> bool:
        """
        Write every emitted attribute of ``source`` to ``writer``.

        ``source`` is an object (fields read with getattr) or a mapping
        (missing keys read as None).

        Returns:
            True if at least one attribute was written

        Raises:
            Whatever ``writer.write`` raises, immediately. Output written
            before the failure is not rolled back.
        """
        return self.write_into(source, AttributeWriter(writer, resolve_settings(settings)))

    def encode(self, source: Any, settings: Optional[WriteSettings] = None) -> Tuple[bytes, bool]:
        """Return ``(attribute bytes, wrote_any)`` for ``source``."""
        buffer = io.BytesIO()
        wrote_any = self.write_attributes(source, buffer, settings)
        return buffer.getvalue(), wrote_any

    def to_string(self, source: Any, settings: Optional[WriteSettings] = None) -> str:
        data, _ = self.encode(source, settings)
        return data.decode("utf-8")


def get_bundle(cls_or_instance: Any) -> Optional[Bundle]:
    """Return the Bundle registered on a class (or an instance's class)."""
    return getattr(cls_or_instance, BUNDLE_ATTR, None)


def write_nested(value: Any, out: AttributeWriter) -> bool:
    """Write a nested bundle slot value; see NestedBundle for accepted values."""
    if value is None:
        return False
    if isinstance(value, Attribute):
        out.write_attribute(value)
        return True
    if isinstance(value, BoundBundle):
        return value.bundle.write_into(value.source, out)
    bundle = get_bundle(value)
    if bundle is not None and not isinstance(value, type):
        return bundle.write_into(value, out)
    if isinstance(value, (list, tuple)):
        wrote = False
        for item in value:
            wrote = write_nested(item, out) or wrote
        return wrote
    raise TypeError(f"Cannot write {type(value).__name__} as an attribute bundle")


def write_attributes(
    value: Any,
    writer: BinaryIO,
    settings: Optional[WriteSettings] = None,
) -> bool:
    """
    Write any bundle-like value to ``writer``.

    Accepts everything a nested slot accepts (bundle instances, attributes,
    lists of them, None).

    Returns:
        True if at least one attribute was written
    """
    return write_nested(value, AttributeWriter(writer, resolve_settings(settings)))


def encode_attributes(value: Any, settings: Optional[WriteSettings] = None) -> Tuple[bytes, bool]:
    """Return ``(attribute bytes, wrote_any)`` for any bundle-like value."""
    buffer = io.BytesIO()
    wrote_any = write_attributes(value, buffer, settings)
    return buffer.getvalue(), wrote_any


def attributes_to_string(value: Any, settings: Optional[WriteSettings] = None) -> str:
    data, _ = encode_attributes(value, settings)
    return data.decode("utf-8")


# =============================================================================
# SCHEMA DECLARATION
# =============================================================================


@dataclass(frozen=True)
class AttributeOptions:
    """Options given to ``xml_attribute``; turned into a descriptor at registration."""

    name: Optional[str] = None
    check: Union[PresencePolicy, Callable[[Any], bool], None] = None
    transform: Optional[Callable[[Any], Union[bytes, str]]] = None
    literal: Optional[bytes] = None


def xml_attribute(
    *,
    name: Optional[str] = None,
    check: Union[PresencePolicy, Callable[[Any], bool], None] = None,
    transform: Optional[Callable[[Any], Union[bytes, str]]] = None,
    literal: Optional[bytes] = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """
    Declare a dataclass field as an attribute.

    Args:
        name: Attribute name (defaults to the field name)
        check: Presence policy or predicate callable
        transform: Callable producing the value text
        literal: Constant value text
        default, default_factory: Passed to ``dataclasses.field``
    """
    options = AttributeOptions(name=name, check=check, transform=transform, literal=literal)
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata={ATTRIBUTE_KEY: options},
    )


def xml_attribute_bundle(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field as a nested attribute bundle."""
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata={BUNDLE_KEY: True},
    )


def build_bundle(cls: type) -> Bundle:
    """
    Build the descriptor table of a dataclass.

    Raises:
        SchemaError: If ``cls`` is not a dataclass or a field is invalid
    """
    if not dataclasses.is_dataclass(cls):
        raise SchemaError(f"{cls.__name__} must be a dataclass")

    try:
        hints = typing.get_type_hints(cls)
    except NameError as e:
        raise SchemaError(f"Cannot resolve field types of {cls.__name__}: {str(e)}")

    entries: List[BundleEntry] = []
    for f in dataclasses.fields(cls):
        options = f.metadata.get(ATTRIBUTE_KEY)
        is_bundle = f.metadata.get(BUNDLE_KEY, False)
        if options is not None and is_bundle:
            raise SchemaError(f"{cls.__name__}.{f.name} cannot be both an attribute and a bundle")
        if options is not None:
            try:
                descriptor = AttributeDescriptor.create(
                    f.name,
                    name=options.name,
                    check=options.check,
                    transform=options.transform,
                    literal=options.literal,
                    field_type=hints.get(f.name, UNTYPED),
                )
            except SchemaError as e:
                raise SchemaError(f"{cls.__name__}: {str(e)}")
            entries.append(descriptor)
        elif is_bundle:
            entries.append(NestedBundle(f.name))

    return Bundle(entries, name=cls.__name__)


def _write_attributes_method(
    self: Any,
    writer: BinaryIO,
    settings: Optional[WriteSettings] = None,
) -> bool:
    return get_bundle(self).write_attributes(self, writer, settings)


def _attributes_to_string_method(self: Any, settings: Optional[WriteSettings] = None) -> str:
    return get_bundle(self).to_string(self, settings)


def attribute_bundle(cls: Type[T]) -> Type[T]:
    """
    Class decorator registering a dataclass as an attribute bundle.

    Apply it above ``@dataclass``. Adds ``write_attributes(writer, settings)``
    and ``attributes_to_string(settings)`` to the class.
    """
    bundle = build_bundle(cls)
    setattr(cls, BUNDLE_ATTR, bundle)
    cls.write_attributes = _write_attributes_method  # type: ignore[attr-defined]
    cls.attributes_to_string = _attributes_to_string_method  # type: ignore[attr-defined]
    logger.debug(
        "Registered attribute bundle %s: %d attributes, %d nested",
        bundle.name,
        len(bundle.descriptors),
        len(bundle.entries) - len(bundle.descriptors),
    )
    return cls


__all__ = [
    "NestedBundle",
    "BoundBundle",
    "AttributeWriter",
    "Bundle",
    "get_bundle",
    "write_nested",
    "write_attributes",
    "encode_attributes",
    "attributes_to_string",
    "AttributeOptions",
    "xml_attribute",
    "xml_attribute_bundle",
    "build_bundle",
    "attribute_bundle",
]
