"""
Tests for bundle composition.

These tests verify:
    - Exactly one space between attributes, none leading or trailing
    - Declaration order, including nested bundles at their position
    - Output is identical for flat and nested declarations
    - Schema registration on dataclasses
    - Writer errors propagate
"""

import io
from dataclasses import dataclass
from typing import List, Optional

import pytest

from structuredvg.bundle import (
    AttributeWriter,
    BoundBundle,
    Bundle,
    NestedBundle,
    attribute_bundle,
    attributes_to_string,
    encode_attributes,
    get_bundle,
    write_attributes,
    xml_attribute,
    xml_attribute_bundle,
)
from structuredvg.common import NonStandardAttribute
from structuredvg.errors import SchemaError
from structuredvg.io import WriteSettings
from structuredvg.policy import ALWAYS, IF_NOT_DEFAULT, IF_SOME, AttributeDescriptor


def attr(name: str) -> AttributeDescriptor:
    return AttributeDescriptor.create(name, check=IF_SOME)


@attribute_bundle
@dataclass
class Inner:
    x: Optional[str] = xml_attribute(default=None)
    y: Optional[str] = xml_attribute(default=None)


@attribute_bundle
@dataclass
class Outer:
    first: Optional[str] = xml_attribute(default=None)
    inner: Inner = xml_attribute_bundle(default_factory=Inner)
    last: Optional[str] = xml_attribute(default=None)


@attribute_bundle
@dataclass
class Counters:
    count: int = xml_attribute(check=IF_NOT_DEFAULT, default=0)
    label: str = xml_attribute(check=IF_NOT_DEFAULT, default="")


class FailingWriter:
    """Writer that raises after a number of successful writes."""

    def __init__(self, allowed_writes: int):
        self.allowed_writes = allowed_writes
        self.written = b""

    def write(self, data: bytes) -> int:
        if self.allowed_writes == 0:
            raise OSError("disk full")
        self.allowed_writes -= 1
        self.written += data
        return len(data)


class TestSeparators:
    """Test the single-space separator rule."""

    def test_two_always_attributes(self):
        bundle = Bundle(
            [
                AttributeDescriptor.create("id", check=ALWAYS),
                AttributeDescriptor.create("class", check=ALWAYS),
            ]
        )
        assert bundle.to_string({"id": "a", "class": "b c"}) == 'id="a" class="b c"'

    def test_nothing_emitted(self):
        bundle = Bundle([attr("id"), attr("class")])
        assert bundle.encode({}) == (b"", False)

    def test_skipped_first_attribute_leaves_no_leading_space(self):
        bundle = Bundle([attr("id"), attr("class")])
        assert bundle.to_string({"class": "b"}) == 'class="b"'

    def test_skipped_last_attribute_leaves_no_trailing_space(self):
        bundle = Bundle([attr("id"), attr("class")])
        assert bundle.to_string({"id": "a"}) == 'id="a"'

    def test_running_flag_shared_across_bundles(self):
        buffer = io.BytesIO()
        out = AttributeWriter(buffer, WriteSettings())
        assert out.wrote_any is False
        assert Bundle([attr("a")]).write_into({"a": "1"}, out) is True
        assert Bundle([attr("b")]).write_into({}, out) is False
        assert out.wrote_any is True
        assert Bundle([attr("c")]).write_into({"c": "3"}, out) is True
        assert buffer.getvalue() == b'a="1" c="3"'

    def test_wrote_any_reported(self):
        bundle = Bundle([attr("id")])
        assert bundle.write_attributes({"id": "a"}, io.BytesIO()) is True
        assert bundle.write_attributes({}, io.BytesIO()) is False


class TestNesting:
    """Test nested bundles."""

    def test_nested_spliced_at_declared_position(self):
        outer = Outer(first="1", inner=Inner(x="2"), last="3")
        assert outer.attributes_to_string() == 'first="1" x="2" last="3"'

    def test_empty_nested_adds_no_separator(self):
        outer = Outer(first="1", last="3")
        assert outer.attributes_to_string() == 'first="1" last="3"'

    def test_nested_only(self):
        outer = Outer(inner=Inner(y="2"))
        assert outer.attributes_to_string() == 'y="2"'

    def test_nested_none_writes_nothing(self):
        outer = Outer(first="1", inner=None)
        assert outer.attributes_to_string() == 'first="1"'

    @pytest.mark.parametrize(
        "split",
        [
            [["a", "b", "c", "d"]],
            [["a"], ["b", "c", "d"]],
            [["a", "b"], ["c", "d"]],
            [["a"], ["b"], ["c"], ["d"]],
            [[], ["a", "b"], [], ["c", "d"], []],
        ],
    )
    @pytest.mark.parametrize(
        "values",
        [
            {"a": "1", "b": "2", "c": "3", "d": "4"},
            {"b": "2", "d": "4"},
            {"a": "1"},
            {},
        ],
    )
    def test_flat_and_nested_output_identical(self, split, values):
        flat = Bundle([attr(name) for names in split for name in names])
        expected = flat.encode(values)

        entries = []
        source = {}
        for index, names in enumerate(split):
            slot = f"group{index}"
            entries.append(NestedBundle(slot))
            source[slot] = BoundBundle(Bundle([attr(n) for n in names]), values)
        nested = Bundle(entries)

        assert nested.encode(source) == expected

    def test_deep_nesting(self):
        innermost = Bundle([attr("c")])
        middle = Bundle([attr("b"), NestedBundle("deeper")])
        outer = Bundle([attr("a"), NestedBundle("inner"), attr("d")])
        values = {"a": "1", "b": "2", "c": "3", "d": "4"}
        source = dict(
            values,
            inner=BoundBundle(middle, dict(values, deeper=BoundBundle(innermost, values))),
        )
        assert outer.to_string(source) == 'a="1" b="2" c="3" d="4"'

    def test_attribute_list_slot(self):
        attrs = [NonStandardAttribute("fill", "red"), NonStandardAttribute("stroke", "blue")]
        assert attributes_to_string(attrs) == 'fill="red" stroke="blue"'

    def test_unsupported_nested_value(self):
        with pytest.raises(TypeError):
            attributes_to_string(42)


class TestDefaults:
    """Test IfNotDefault fields in a registered schema."""

    def test_defaults_write_nothing(self):
        assert encode_attributes(Counters()) == (b"", False)

    def test_non_defaults_written(self):
        assert Counters(count=2, label="x").attributes_to_string() == 'count="2" label="x"'

    @pytest.mark.parametrize("count", [1, -1, 100])
    def test_each_non_default_value_is_one_token(self, count):
        assert Counters(count=count).attributes_to_string() == f'count="{count}"'


class TestRegistration:
    """Test the attribute_bundle decorator."""

    def test_bundle_stored_on_class(self):
        bundle = get_bundle(Outer)
        assert [type(e).__name__ for e in bundle.entries] == [
            "AttributeDescriptor",
            "NestedBundle",
            "AttributeDescriptor",
        ]
        assert bundle.attribute_names() == ["first", "last"]
        assert bundle.name == "Outer"

    def test_optional_fields_get_if_some(self):
        assert get_bundle(Inner).descriptors[0].presence == IF_SOME

    def test_unmarked_fields_ignored(self):
        @attribute_bundle
        @dataclass
        class Partial:
            note: str = "internal"
            id: Optional[str] = xml_attribute(default=None)

        assert get_bundle(Partial).attribute_names() == ["id"]
        assert Partial(id="a").attributes_to_string() == 'id="a"'

    def test_name_override(self):
        @attribute_bundle
        @dataclass
        class Named:
            view_box: Optional[str] = xml_attribute(name="viewBox", default=None)

        assert Named(view_box="0 0 10 10").attributes_to_string() == 'viewBox="0 0 10 10"'

    def test_if_some_on_plain_field_rejected(self):
        with pytest.raises(SchemaError):

            @attribute_bundle
            @dataclass
            class Broken:
                id: str = xml_attribute(check=IF_SOME, default="")

    def test_non_dataclass_rejected(self):
        with pytest.raises(SchemaError):

            @attribute_bundle
            class NotADataclass:
                pass

    def test_list_of_attributes_as_nested_field(self):
        @attribute_bundle
        @dataclass
        class WithExtras:
            id: Optional[str] = xml_attribute(default=None)
            extras: List[NonStandardAttribute] = xml_attribute_bundle(default_factory=list)

        element = WithExtras(id="a", extras=[NonStandardAttribute("fill", "red")])
        assert element.attributes_to_string() == 'id="a" fill="red"'

    def test_settings_threaded_through(self):
        @attribute_bundle
        @dataclass
        class Sized:
            width: float = xml_attribute(default=1.0)

        assert Sized(width=2.5).attributes_to_string(WriteSettings(precision=1)) == 'width="2.5"'


class TestWriterErrors:
    """Test that writer failures propagate."""

    def test_error_propagates(self):
        bundle = Bundle([attr("id"), attr("class")])
        writer = FailingWriter(allowed_writes=5)
        with pytest.raises(OSError):
            bundle.write_attributes({"id": "a", "class": "b"}, writer)
        assert writer.written == b'id="a" '

    def test_module_function_uses_same_rules(self):
        buffer = io.BytesIO()
        assert write_attributes(Outer(first="1", last="2"), buffer) is True
        assert buffer.getvalue() == b'first="1" last="2"'
