"""
Attribute policy model.

Each serializable field is described by an AttributeDescriptor made of:

    - a PresencePolicy deciding whether the field is written at all
    - a ValuePolicy deciding which text represents the value

    Presence policy    Skips when
    -----------------  ---------------------------------------------
    Always             never
    IfSome             the value is None (optional fields only)
    IfNotDefault       the value equals the type's default
    IfPredicate(f)     f(value) is falsy

    Value policy       Written text
    -----------------  ---------------------------------------------
    PassThrough        the value's canonical text (see io.write_value)
    Transform(f)       f(value), written verbatim
    LiteralSuffix(b)   the constant bytes b, whatever the value

ARCHITECTURAL RULE:
    Descriptors are immutable and validated once, when a schema is
    registered. Evaluation never raises for a valid schema except for
    errors coming from user callables or the writer.
"""

from __future__ import annotations

import io
import re
import types
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, NamedTuple, Optional, Tuple, Union, get_args, get_origin

from structuredvg.errors import SchemaError
from structuredvg.io import WriteSettings, resolve_settings, write_value

_INVALID_NAME_RE = re.compile(r'[\s"=<>]')


class _Unset:
    """Marker for "no value supplied", distinct from None."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

# Field type is not known (descriptor built by hand without a type)
UNTYPED: Any = _Unset()


def is_optional_type(tp: Any) -> bool:
    """True for ``Optional[X]``, ``Union[X, None]`` and ``X | None``."""
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        return type(None) in get_args(tp)
    return False


def _type_default(tp: Any) -> Any:
    """Default value of a field type, used by IfNotDefault."""
    if is_optional_type(tp):
        return None
    target = get_origin(tp) or tp
    if not isinstance(target, type):
        raise SchemaError(f"Cannot determine a default value for {tp!r}")
    factory = getattr(target, "default", None)
    if callable(factory):
        try:
            return factory()
        except TypeError as e:
            raise SchemaError(f"Cannot determine a default value for {tp!r}: {str(e)}")
    try:
        return target()
    except TypeError as e:
        raise SchemaError(f"Cannot determine a default value for {tp!r}: {str(e)}")


# =============================================================================
# PRESENCE POLICIES
# =============================================================================


class PresencePolicy(ABC):
    """Decides whether a field contributes an attribute."""

    kind: str = ""

    @abstractmethod
    def admit(self, value: Any) -> Tuple[bool, Any]:
        """
        Return ``(emit, value)``.

        ``value`` is the value handed to the value policy; IfSome passes the
        populated optional value through unchanged.
        """

    def resolve(self, field_name: str, field_type: Any) -> "PresencePolicy":
        """
        Validate this policy against a field type at schema registration.

        Returns the policy to store, which may carry resolved data.

        Raises:
            SchemaError: If the policy cannot be used on this field
        """
        return self


@dataclass(frozen=True)
class Always(PresencePolicy):
    kind = "always"

    def admit(self, value: Any) -> Tuple[bool, Any]:
        return True, value


@dataclass(frozen=True)
class IfSome(PresencePolicy):
    kind = "if_some"

    def admit(self, value: Any) -> Tuple[bool, Any]:
        return value is not None, value

    def resolve(self, field_name: str, field_type: Any) -> PresencePolicy:
        if field_type is not UNTYPED and not is_optional_type(field_type):
            raise SchemaError(
                f"IfSome only works on optional fields; '{field_name}' is {field_type!r}"
            )
        return self


@dataclass(frozen=True)
class IfNotDefault(PresencePolicy):
    """
    Emit unless the value equals the default.

    Properties:
        default: The default to compare against. When omitted it is derived
            from the field type at registration: None for optional types,
            ``T.default()`` when the type defines it, else ``T()``.
    """

    default: Any = UNSET
    kind = "if_not_default"

    def admit(self, value: Any) -> Tuple[bool, Any]:
        if self.default is UNSET:
            raise SchemaError("IfNotDefault was used before its default was resolved")
        return value != self.default, value

    def resolve(self, field_name: str, field_type: Any) -> PresencePolicy:
        if self.default is not UNSET:
            return self
        if field_type is UNTYPED:
            raise SchemaError(
                f"IfNotDefault on '{field_name}' needs an explicit default or a field type"
            )
        return IfNotDefault(default=_type_default(field_type))


@dataclass(frozen=True)
class IfPredicate(PresencePolicy):
    """Emit only when ``predicate(value)`` is true."""

    predicate: Callable[[Any], bool]
    kind = "if_predicate"

    def admit(self, value: Any) -> Tuple[bool, Any]:
        return bool(self.predicate(value)), value

    def resolve(self, field_name: str, field_type: Any) -> PresencePolicy:
        if not callable(self.predicate):
            raise SchemaError(f"Predicate for '{field_name}' is not callable")
        return self


ALWAYS = Always()
IF_SOME = IfSome()
IF_NOT_DEFAULT = IfNotDefault()


# =============================================================================
# VALUE POLICIES
# =============================================================================


class ValuePolicy(ABC):
    """Produces the text of an emitted attribute."""

    kind: str = ""

    @abstractmethod
    def write_value(self, value: Any, writer: BinaryIO, settings: WriteSettings) -> None:
        ...

    def validate(self, field_name: str) -> None:
        pass


@dataclass(frozen=True)
class PassThrough(ValuePolicy):
    kind = "pass_through"

    def write_value(self, value: Any, writer: BinaryIO, settings: WriteSettings) -> None:
        write_value(value, writer, settings)


@dataclass(frozen=True)
class Transform(ValuePolicy):
    """
    Replace the value's own text with ``transform(value)``.

    The callable returns bytes (or str, encoded as UTF-8). Its output is
    written verbatim; no quoting or escaping is added.
    """

    transform: Callable[[Any], Union[bytes, str]]
    kind = "transform"

    def write_value(self, value: Any, writer: BinaryIO, settings: WriteSettings) -> None:
        result = self.transform(value)
        if isinstance(result, str):
            result = result.encode("utf-8")
        writer.write(result)

    def validate(self, field_name: str) -> None:
        if not callable(self.transform):
            raise SchemaError(f"Transform for '{field_name}' is not callable")


@dataclass(frozen=True)
class LiteralSuffix(ValuePolicy):
    """Write a constant value; presence alone carries the information."""

    literal: bytes
    kind = "literal"

    def write_value(self, value: Any, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(self.literal)

    def validate(self, field_name: str) -> None:
        if not isinstance(self.literal, bytes):
            raise SchemaError(f"Literal for '{field_name}' must be bytes, got {self.literal!r}")
        if b'"' in self.literal:
            raise SchemaError(f"Literal for '{field_name}' must not contain '\"'")
        try:
            self.literal.decode("utf-8")
        except UnicodeDecodeError:
            raise SchemaError(f"Literal for '{field_name}' is not valid UTF-8")


PASS_THROUGH = PassThrough()


# =============================================================================
# DESCRIPTORS
# =============================================================================


class Emission(NamedTuple):
    """An attribute that passed its presence check, ready to be written."""

    name: str
    value: Any
    policy: ValuePolicy

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(self.name.encode("utf-8"))
        writer.write(b'="')
        self.policy.write_value(self.value, writer, settings)
        writer.write(b'"')

    def value_text(self, settings: Optional[WriteSettings] = None) -> str:
        buffer = io.BytesIO()
        self.policy.write_value(self.value, buffer, resolve_settings(settings))
        return buffer.getvalue().decode("utf-8")


@dataclass(frozen=True)
class AttributeDescriptor:
    """
    One serializable field.

    Properties:
        field: Identifier used to read the value from its source object
        name: Attribute name written to the document
        presence: PresencePolicy
        value: ValuePolicy

    Build descriptors with ``AttributeDescriptor.create`` so the policy
    combination is validated; the plain constructor trusts its arguments.
    """

    field: str
    name: str
    presence: PresencePolicy = ALWAYS
    value: ValuePolicy = PASS_THROUGH

    @classmethod
    def create(
        cls,
        field_name: str,
        *,
        name: Optional[str] = None,
        check: Union[PresencePolicy, Callable[[Any], bool], None] = None,
        transform: Optional[Callable[[Any], Union[bytes, str]]] = None,
        literal: Optional[bytes] = None,
        field_type: Any = UNTYPED,
    ) -> "AttributeDescriptor":
        """
        Build and validate a descriptor.

        Args:
            field_name: Field identifier; also the attribute name unless
                ``name`` is given
            name: Attribute name override (e.g. "xml:lang")
            check: Presence policy, or a callable used as IfPredicate.
                Defaults to IfSome for optional fields, Always otherwise.
            transform: Callable producing the value text
            literal: Constant value text
            field_type: Annotated type of the field, used to validate IfSome
                and to resolve IfNotDefault

        Raises:
            SchemaError: If the combination is invalid
        """
        attribute_name = field_name if name is None else name
        if not isinstance(attribute_name, str) or not attribute_name:
            raise SchemaError(f"Attribute name for '{field_name}' must be a non-empty string")
        if _INVALID_NAME_RE.search(attribute_name):
            raise SchemaError(f"Invalid attribute name {attribute_name!r} for '{field_name}'")

        if transform is not None and literal is not None:
            raise SchemaError(f"'{field_name}' cannot have both a transform and a literal")

        if check is None:
            presence: PresencePolicy = (
                IF_SOME if field_type is not UNTYPED and is_optional_type(field_type) else ALWAYS
            )
        elif isinstance(check, PresencePolicy):
            presence = check
        elif callable(check):
            presence = IfPredicate(check)
        else:
            raise SchemaError(
                f"check for '{field_name}' must be a PresencePolicy or a callable, got {check!r}"
            )
        presence = presence.resolve(field_name, field_type)

        if transform is not None:
            value: ValuePolicy = Transform(transform)
        elif literal is not None:
            value = LiteralSuffix(literal)
        else:
            value = PASS_THROUGH
        value.validate(field_name)

        return cls(field=field_name, name=attribute_name, presence=presence, value=value)

    def evaluate(self, value: Any) -> Optional[Emission]:
        """Apply the presence policy; None means the attribute is skipped."""
        emit, value = self.presence.admit(value)
        if not emit:
            return None
        return Emission(self.name, value, self.value)


__all__ = [
    "UNSET",
    "UNTYPED",
    "is_optional_type",
    "PresencePolicy",
    "Always",
    "IfSome",
    "IfNotDefault",
    "IfPredicate",
    "ALWAYS",
    "IF_SOME",
    "IF_NOT_DEFAULT",
    "ValuePolicy",
    "PassThrough",
    "Transform",
    "LiteralSuffix",
    "PASS_THROUGH",
    "Emission",
    "AttributeDescriptor",
]
