#!/usr/bin/env python3
"""Complex/simple type registries built from a normalized schema tree."""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Optional

from .errors import MalformedSchemaError
from .tree import SchemaNode, as_list

logger = logging.getLogger(__name__)

# Built-in XSD types that never block simplification
PRIMITIVE_TYPES = frozenset({
    "xs:int",
    "xs:string",
    "xs:long",
    "xs:anyURI",
    "xs:boolean",
    "xs:byte",
    "xs:double",
    "xs:unsignedInt",
    "xs:dateTime",
    "xs:unsignedShort",
})

# Prefixes conventionally bound to the XML Schema namespace
XSD_PREFIXES = ("xs", "xsd")


def local_name(type_name: str) -> str:
    return type_name.split(":", 1)[-1]


@dataclass
class TypeRegistries:
    """Complex and simple type definitions keyed by type name.

    Entries are the same node objects that live in the schema tree, not copies.
    A name is in at most one of the two registries.
    """
    complex: dict[str, SchemaNode] = field(default_factory=dict)
    simple: dict[str, SchemaNode] = field(default_factory=dict)

    def promote(self, name: str) -> None:
        """Move a complex type into the simple registry."""
        if name in self.simple:
            raise MalformedSchemaError(f"Type '{name}' is already a simple type", property_name="name")
        self.simple[name] = self.complex.pop(name)

    def resolve(self, type_name: Any, primitive_types: AbstractSet[str] = PRIMITIVE_TYPES) -> Optional[SchemaNode]:
        """Look up a type reference in the simple registry.

        Tries the reference as written, then without its namespace prefix.
        Primitive names and other references in the XSD namespace never
        resolve to user-declared types.
        """
        if not isinstance(type_name, str) or type_name in primitive_types:
            return None
        if type_name in self.simple:
            return self.simple[type_name]
        if ":" in type_name and type_name.split(":", 1)[0] in XSD_PREFIXES:
            return None
        return self.simple.get(local_name(type_name))


def _register(registry: dict[str, SchemaNode], entries: Any, kind: str, other: dict[str, SchemaNode]) -> None:
    for entry in as_list(entries):
        if not isinstance(entry, SchemaNode):
            raise MalformedSchemaError(f"Top-level {kind} definition is empty")
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise MalformedSchemaError(f"Top-level {kind} definition has no name", property_name="name")
        if name in registry or name in other:
            raise MalformedSchemaError(f"Duplicate type definition '{name}'", property_name="name")
        registry[name] = entry


def split_registries(tree: SchemaNode) -> TypeRegistries:
    """Build registries from ``schema.complexType`` and ``schema.simpleType``.

    Raises:
        MalformedSchemaError: If the tree has no ``schema`` node or a type
            definition is unnamed or declared twice
    """
    schema = tree.get("schema")
    if not isinstance(schema, SchemaNode):
        raise MalformedSchemaError("Tree has no 'schema' node", property_name="schema")

    registries = TypeRegistries()
    _register(registries.complex, schema.get("complexType"), "complexType", registries.simple)
    _register(registries.simple, schema.get("simpleType"), "simpleType", registries.complex)

    logger.info(
        f"Split {len(registries.complex)} complex and {len(registries.simple)} simple type definitions"
    )
    return registries
