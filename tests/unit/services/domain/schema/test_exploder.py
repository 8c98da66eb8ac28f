#!/usr/bin/env python3

import pytest

from xsd_simplify.services.domain.schema import (
    MalformedSchemaError,
    TypeRegistries,
    UnresolvedReferenceError,
    explode,
    select_root_element,
    simplify_types,
    split_registries,
)
from xsd_simplify.services.domain.schema.tree import from_plain
from tests.utils.schema_helpers import normalized_tree, plain


class TestSelectRootElement:
    """Test suite for picking the element to explode"""

    def test_single_element(self):
        tree = normalized_tree('<xs:element name="Doc" type="DocType"/>')
        assert select_root_element(tree).get("name") == "Doc"

    def test_first_of_several_by_default(self):
        tree = normalized_tree('<xs:element name="A" type="xs:string"/><xs:element name="B" type="xs:int"/>')
        assert select_root_element(tree).get("name") == "A"

    def test_by_name(self):
        tree = normalized_tree('<xs:element name="A" type="xs:string"/><xs:element name="B" type="xs:int"/>')
        assert select_root_element(tree, "B").get("name") == "B"

    def test_unknown_name_raises(self):
        tree = normalized_tree('<xs:element name="A" type="xs:string"/>')

        with pytest.raises(MalformedSchemaError):
            select_root_element(tree, "Missing")

    def test_no_element_raises(self):
        tree = normalized_tree('<xs:simpleType name="Code"><xs:restriction base="xs:string"/></xs:simpleType>')

        with pytest.raises(MalformedSchemaError):
            select_root_element(tree)


class TestExplode:
    """Test suite for root element explosion"""

    @pytest.fixture
    def document_body(self):
        return """
          <xs:element name="Doc" type="DocType"/>
          <xs:complexType name="DocType">
            <xs:sequence>
              <xs:element name="inner" type="Inner" maxOccurs="unbounded"/>
            </xs:sequence>
          </xs:complexType>
          <xs:complexType name="Inner">
            <xs:sequence>
              <xs:element name="value" type="xs:string"/>
            </xs:sequence>
          </xs:complexType>
        """

    def test_explode_inlines_root_type(self, document_body):
        tree = normalized_tree(document_body)
        registries = split_registries(tree)
        result = simplify_types(registries)

        exploded = explode(select_root_element(tree), registries)

        assert result.rounds == 2
        assert plain(exploded) == {
            "name": "Doc",
            "sequence": {"element": {
                "name": "inner",
                "maxOccurs": "unbounded",
                "sequence": {"element": {"name": "value", "type": "xs:string"}},
            }},
        }

    def test_explode_returns_root_node(self, document_body):
        tree = normalized_tree(document_body)
        registries = split_registries(tree)
        simplify_types(registries)
        root = select_root_element(tree)

        assert explode(root, registries) is root

    def test_unknown_root_type_raises(self):
        registries = TypeRegistries()
        root = from_plain({"name": "Doc", "type": "Missing"})

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            explode(root, registries)
        assert exc_info.value.type_names == ["Missing"]

    def test_complex_root_type_raises(self):
        """A type still in the complex registry is not resolvable"""
        registries = TypeRegistries(complex={"DocType": from_plain({"name": "DocType", "type": "Other"})})
        root = from_plain({"name": "Doc", "type": "DocType"})

        with pytest.raises(UnresolvedReferenceError):
            explode(root, registries)

    def test_primitive_root_is_unchanged(self):
        root = from_plain({"name": "Note", "type": "xs:string"})

        assert plain(explode(root, TypeRegistries())) == {"name": "Note", "type": "xs:string"}

    def test_prefixed_root_type(self):
        tree = normalized_tree("""
          <xs:element name="Doc" type="tns:DocType"/>
          <xs:complexType name="DocType">
            <xs:sequence><xs:element name="v" type="xs:boolean"/></xs:sequence>
          </xs:complexType>
        """)
        registries = split_registries(tree)
        simplify_types(registries)

        exploded = explode(select_root_element(tree), registries)
        assert plain(exploded) == {"name": "Doc", "sequence": {"element": {"name": "v", "type": "xs:boolean"}}}

    def test_root_of_derived_simple_type(self):
        tree = normalized_tree("""
          <xs:element name="Code" type="ShortCode"/>
          <xs:simpleType name="ShortCode"><xs:restriction base="BaseCode"/></xs:simpleType>
          <xs:simpleType name="BaseCode"><xs:restriction base="xs:string"/></xs:simpleType>
        """)
        registries = split_registries(tree)
        simplify_types(registries)

        exploded = explode(select_root_element(tree), registries)
        assert plain(exploded) == {"name": "Code", "type": "xs:string", "restriction": {"base": "xs:string"}}

    def test_anonymous_root_type_is_resolved(self):
        tree = normalized_tree("""
          <xs:element name="Doc">
            <xs:complexType>
              <xs:sequence><xs:element name="item" type="Item"/></xs:sequence>
            </xs:complexType>
          </xs:element>
          <xs:complexType name="Item">
            <xs:sequence><xs:element name="id" type="xs:int"/></xs:sequence>
          </xs:complexType>
        """)
        registries = split_registries(tree)
        simplify_types(registries)

        exploded = explode(select_root_element(tree), registries)
        assert plain(exploded) == {
            "name": "Doc",
            "complexType": {"sequence": {"element": {
                "name": "item",
                "sequence": {"element": {"name": "id", "type": "xs:int"}},
            }}},
        }

    def test_anonymous_root_with_unknown_reference_raises(self):
        root = from_plain({"name": "Doc", "complexType": {"sequence": {"element": {"name": "x", "type": "Nope"}}}})

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            explode(root, TypeRegistries())
        assert exc_info.value.references == ["Nope"]

    def test_anonymous_root_with_derived_simple_type_chain(self):
        """A simple type restricting another named simple type is followed to its primitive base"""
        tree = normalized_tree("""
          <xs:element name="Doc">
            <xs:complexType>
              <xs:sequence><xs:element name="code" type="ShortCode"/></xs:sequence>
            </xs:complexType>
          </xs:element>
          <xs:simpleType name="ShortCode"><xs:restriction base="BaseCode"/></xs:simpleType>
          <xs:simpleType name="BaseCode"><xs:restriction base="xs:string"/></xs:simpleType>
        """)
        registries = split_registries(tree)
        simplify_types(registries)

        exploded = explode(select_root_element(tree), registries)
        assert plain(exploded) == {
            "name": "Doc",
            "complexType": {"sequence": {"element": {
                "name": "code",
                "type": "xs:string",
                "restriction": {"base": "xs:string"},
            }}},
        }
