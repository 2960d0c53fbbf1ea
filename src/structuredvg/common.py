"""
Attribute groups shared by most elements.

Defines the value types used by the common groups (XmlSpace, LanguageTag),
the free-form attributes (DataAttribute, NonStandardAttribute) and the two
groups every element composes:

    - CoreAttributes          id, tabindex, xml:lang, xml:space, class,
                              style, data-*, non-standard attributes
    - ConditionalProcessing   requiredFeatures, requiredExtensions,
                              systemLanguage
"""

import warnings
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, List, Optional

from structuredvg.bundle import attribute_bundle, xml_attribute, xml_attribute_bundle
from structuredvg.delimited import DelimitedValues
from structuredvg.io import Attribute, Writable, WriteSettings
from structuredvg.policy import IF_NOT_DEFAULT
from structuredvg.style import DeclarationList


class XmlSpace(Enum):
    """
    ``xml:space`` value: whether white space in character data is preserved.

    See https://www.w3.org/TR/SVG11/text.html#WhiteSpace
    """

    DEFAULT = "default"
    PRESERVE = "preserve"

    @classmethod
    def default(cls) -> "XmlSpace":
        return cls.DEFAULT


class LanguageTag(Writable):
    """
    Language tag such as "en" or "en-US".

    Values should follow RFC 5646 (https://www.rfc-editor.org/info/rfc5646).
    They are not checked; a non-standard tag is still written but most
    software relying on it (localization, screen readers) will ignore it.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: str):
        self._tag = str(tag)

    @classmethod
    def from_str(cls, text: str) -> "LanguageTag":
        """
        Parse a language tag.

        Raises:
            InvalidLanguageTag: Reserved; never raised while tags are unchecked
        """
        return cls(text)

    def __str__(self) -> str:
        return self._tag

    def __repr__(self) -> str:
        return f"LanguageTag({self._tag!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LanguageTag):
            return self._tag == other._tag
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tag)

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        writer.write(self._tag.encode("utf-8"))


def space_list(*values: str) -> DelimitedValues[str]:
    """Space separated list, as used by ``class`` and ``requiredFeatures``."""
    return DelimitedValues(values, delimiter=" ")


def language_list(*tags: str) -> DelimitedValues[LanguageTag]:
    """Comma separated language tags, as used by ``systemLanguage``."""
    return DelimitedValues(
        (LanguageTag(tag) for tag in tags),
        delimiter=",",
        value_type=LanguageTag,
    )


@dataclass(frozen=True)
class DataAttribute(Attribute):
    """
    A ``data-*`` attribute.

    Build it with ``DataAttribute.new(name, value)``, which adds the "data-"
    prefix. Names should be XML-compatible and lowercase; see
    https://www.w3.org/TR/2014/CR-html5-20140204/dom.html#embedding-custom-non-visible-data-with-the-data-*-attributes
    """

    name: str
    value: str

    @classmethod
    def new(cls, name: str, value: str) -> "DataAttribute":
        if not name:
            raise ValueError("data-* attribute name must not be empty")
        if any("A" <= ch <= "Z" for ch in name):
            warnings.warn(
                f"data-* attribute name should not contain uppercase ASCII letters: {name!r}",
                UserWarning,
            )
        return cls(name="data-" + name, value=value)

    @property
    def attribute_name(self) -> str:
        return self.name

    @property
    def attribute_value(self) -> str:
        return self.value


@dataclass(frozen=True)
class NonStandardAttribute(Attribute):
    """
    Any attribute not modelled by this package.

    Styling properties (``fill``, ``stroke`` ...) also go here.
    """

    name: str
    value: str

    @property
    def attribute_name(self) -> str:
        return self.name

    @property
    def attribute_value(self) -> str:
        return self.value


@attribute_bundle
@dataclass
class CoreAttributes:
    """
    Attributes available on every element.

    See https://www.w3.org/TR/SVG11/intro.html#TermCoreAttributes
    """

    id: Optional[str] = xml_attribute(default=None)

    # SVG 2 / HTML5 attribute
    tabindex: Optional[int] = xml_attribute(
        transform=lambda tabindex: str(tabindex).encode("ascii"),
        default=None,
    )

    xml_lang: Optional[LanguageTag] = xml_attribute(name="xml:lang", default=None)

    # Deprecated in SVG 2 in favour of the CSS white-space property
    xml_space: XmlSpace = xml_attribute(
        name="xml:space",
        check=IF_NOT_DEFAULT,
        literal=b"preserve",
        default=XmlSpace.DEFAULT,
    )

    class_: Optional[DelimitedValues[str]] = xml_attribute(name="class", default=None)
    style: Optional[DeclarationList] = xml_attribute(default=None)

    data: List[DataAttribute] = xml_attribute_bundle(default_factory=list)

    # Attributes not covered by the standard, including styling properties
    other: List[NonStandardAttribute] = xml_attribute_bundle(default_factory=list)


@attribute_bundle
@dataclass
class ConditionalProcessing:
    """
    Attributes selecting alternate content by user agent capabilities or language.

    See https://www.w3.org/TR/SVG11/struct.html#ConditionalProcessing
    """

    # Feature strings, see https://www.w3.org/TR/SVG11/feature.html
    required_features: Optional[DelimitedValues[str]] = xml_attribute(
        name="requiredFeatures", default=None
    )
    required_extensions: Optional[DelimitedValues[str]] = xml_attribute(
        name="requiredExtensions", default=None
    )
    system_language: Optional[DelimitedValues[LanguageTag]] = xml_attribute(
        name="systemLanguage", default=None
    )


__all__ = [
    "XmlSpace",
    "LanguageTag",
    "space_list",
    "language_list",
    "DataAttribute",
    "NonStandardAttribute",
    "CoreAttributes",
    "ConditionalProcessing",
]
