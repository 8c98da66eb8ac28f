#!/usr/bin/env python3

import pytest

from xsd_simplify.services.domain.schema import PRIMITIVE_TYPES, MalformedSchemaError, TypeRegistries, split_registries
from xsd_simplify.services.domain.schema.tree import SchemaNode, from_plain
from tests.utils.schema_helpers import normalized_tree, registries_for


class TestTypeRegistrySplit:
    """Test suite for splitting declared types into registries"""

    def test_split_by_kind(self):
        registries = registries_for("""
          <xs:complexType name="A"><xs:sequence><xs:element name="x" type="xs:int"/></xs:sequence></xs:complexType>
          <xs:complexType name="B"><xs:sequence><xs:element name="y" type="A"/></xs:sequence></xs:complexType>
          <xs:simpleType name="Code"><xs:restriction base="xs:string"/></xs:simpleType>
        """)

        assert list(registries.complex) == ["A", "B"]
        assert list(registries.simple) == ["Code"]

    def test_entries_alias_tree_nodes(self):
        """Registry values are the tree's own nodes, not copies"""
        tree = normalized_tree("""
          <xs:complexType name="A"><xs:sequence><xs:element name="x" type="xs:int"/></xs:sequence></xs:complexType>
        """)
        registries = split_registries(tree)

        assert registries.complex["A"] is tree.child("schema", "complexType")

    def test_schema_without_types(self):
        registries = registries_for('<xs:element name="Doc" type="xs:string"/>')

        assert registries.complex == {}
        assert registries.simple == {}

    def test_missing_schema_node_raises(self):
        with pytest.raises(MalformedSchemaError):
            split_registries(SchemaNode(properties={"definitions": SchemaNode()}))

    def test_unnamed_type_raises(self):
        tree = from_plain({"schema": {"complexType": {"sequence": ""}}})

        with pytest.raises(MalformedSchemaError):
            split_registries(tree)

    def test_duplicate_name_across_kinds_raises(self):
        tree = from_plain({"schema": {
            "complexType": {"name": "Dup", "sequence": ""},
            "simpleType": {"name": "Dup"},
        }})

        with pytest.raises(MalformedSchemaError):
            split_registries(tree)


class TestTypeRegistries:
    """Test suite for registry operations"""

    def test_promote_moves_entry(self):
        entry = SchemaNode(properties={"name": "A"})
        registries = TypeRegistries(complex={"A": entry})

        registries.promote("A")

        assert registries.complex == {}
        assert registries.simple["A"] is entry

    def test_promote_refuses_name_already_simple(self):
        registries = TypeRegistries(
            complex={"A": SchemaNode(properties={"name": "A"})},
            simple={"A": SchemaNode(properties={"name": "A"})},
        )

        with pytest.raises(MalformedSchemaError):
            registries.promote("A")

    def test_resolve_exact_and_prefixed_names(self):
        code = SchemaNode(properties={"name": "Code"})
        registries = TypeRegistries(simple={"Code": code})

        assert registries.resolve("Code") is code
        assert registries.resolve("tns:Code") is code
        assert registries.resolve("Other") is None
        assert registries.resolve(None) is None

    def test_builtin_reference_ignores_user_type_of_same_local_name(self):
        local_string = SchemaNode(properties={"name": "string"})
        registries = TypeRegistries(simple={"string": local_string})

        assert registries.resolve("xs:string") is None
        assert registries.resolve("xsd:token") is None
        assert registries.resolve("string") is local_string
        assert registries.resolve("tns:string") is local_string

    def test_configured_primitive_is_never_resolved(self):
        registries = TypeRegistries(simple={"xs:decimal": SchemaNode(properties={"name": "xs:decimal"})})

        assert registries.resolve("xs:decimal", PRIMITIVE_TYPES | {"xs:decimal"}) is None
