"""
Tests for the shared attribute groups and their value types.
"""

import pytest

from structuredvg.common import (
    ConditionalProcessing,
    CoreAttributes,
    DataAttribute,
    LanguageTag,
    NonStandardAttribute,
    XmlSpace,
    language_list,
    space_list,
)
from structuredvg.script import GraphicalEvents
from structuredvg.style import Declaration, DeclarationList


class TestCoreAttributes:
    """Test CoreAttributes output."""

    def test_empty(self):
        assert CoreAttributes().attributes_to_string() == ""

    def test_xml_space_default_omitted(self):
        assert CoreAttributes(xml_space=XmlSpace.DEFAULT).attributes_to_string() == ""

    def test_xml_space_preserve_written(self):
        core = CoreAttributes(xml_space=XmlSpace.PRESERVE)
        assert core.attributes_to_string() == 'xml:space="preserve"'

    def test_tabindex_zero_written(self):
        assert CoreAttributes(tabindex=0).attributes_to_string() == 'tabindex="0"'

    def test_negative_tabindex(self):
        assert CoreAttributes(tabindex=-1).attributes_to_string() == 'tabindex="-1"'

    def test_xml_lang(self):
        core = CoreAttributes(xml_lang=LanguageTag("fr-CA"))
        assert core.attributes_to_string() == 'xml:lang="fr-CA"'

    def test_class_list(self):
        core = CoreAttributes(id="a", class_=space_list("b", "c"))
        assert core.attributes_to_string() == 'id="a" class="b c"'

    def test_empty_class_list_still_written(self):
        core = CoreAttributes(class_=space_list())
        assert core.attributes_to_string() == 'class=""'

    def test_style(self):
        style = DeclarationList()
        style.push_property("fill", "red")
        style.push_property("opacity", "0.5")
        assert CoreAttributes(style=style).attributes_to_string() == 'style="fill:red;opacity:0.5"'

    def test_full_order(self):
        style = DeclarationList([Declaration("fill", "none")])
        core = CoreAttributes(
            id="x",
            tabindex=2,
            xml_lang=LanguageTag("en"),
            xml_space=XmlSpace.PRESERVE,
            class_=space_list("k"),
            style=style,
            data=[DataAttribute.new("a", "1"), DataAttribute.new("b", "2")],
            other=[NonStandardAttribute("stroke", "blue")],
        )
        assert core.attributes_to_string() == (
            'id="x" tabindex="2" xml:lang="en" xml:space="preserve" class="k" '
            'style="fill:none" data-a="1" data-b="2" stroke="blue"'
        )

    def test_only_extra_attributes(self):
        core = CoreAttributes(other=[NonStandardAttribute("fill", "red")])
        assert core.attributes_to_string() == 'fill="red"'


class TestDataAttribute:
    """Test data-* attributes."""

    def test_prefix_added(self):
        attribute = DataAttribute.new("index", "3")
        assert attribute.attribute_name == "data-index"
        assert attribute.attribute_value == "3"

    def test_uppercase_name_warns(self):
        with pytest.warns(UserWarning, match="uppercase"):
            attribute = DataAttribute.new("rowIndex", "3")
        # Still created
        assert attribute.attribute_name == "data-rowIndex"

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            DataAttribute.new("", "x")


class TestConditionalProcessing:
    """Test ConditionalProcessing output."""

    def test_empty(self):
        assert ConditionalProcessing().attributes_to_string() == ""

    def test_system_language(self):
        group = ConditionalProcessing(system_language=language_list("en", "en-US"))
        assert group.attributes_to_string() == 'systemLanguage="en,en-US"'

    def test_all_fields(self):
        group = ConditionalProcessing(
            required_features=space_list("http://www.w3.org/TR/SVG11/feature#Shape"),
            required_extensions=space_list("http://example.org/ext"),
            system_language=language_list("de"),
        )
        assert group.attributes_to_string() == (
            'requiredFeatures="http://www.w3.org/TR/SVG11/feature#Shape" '
            'requiredExtensions="http://example.org/ext" '
            'systemLanguage="de"'
        )

    def test_language_values_parse_back(self):
        languages = language_list("en", "en-US")
        assert list(languages.iter_values()) == [LanguageTag("en"), LanguageTag("en-US")]


class TestDeclarationList:
    """Test style declarations."""

    def test_empty_declarations_skipped(self):
        style = DeclarationList(
            [Declaration.empty(), Declaration("fill", "red"), Declaration.empty(), Declaration("stroke", "none")]
        )
        assert style.write_to_string() == "fill:red;stroke:none"

    def test_is_empty(self):
        assert DeclarationList().is_empty()
        assert DeclarationList([Declaration.empty()]).is_empty()
        assert not DeclarationList([Declaration("fill", "red")]).is_empty()


class TestGraphicalEvents:
    """Test event handler attributes."""

    def test_declaration_order(self):
        events = GraphicalEvents(onmouseout="b()", onclick="a()", onfocusin="c()")
        assert events.attributes_to_string() == 'onfocusin="c()" onclick="a()" onmouseout="b()"'

    def test_empty(self):
        assert GraphicalEvents().attributes_to_string() == ""
