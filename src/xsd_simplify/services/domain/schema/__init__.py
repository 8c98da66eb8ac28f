"""
XSD Schema Simplification Domain

Handles the schema transformation pipeline:
- XSD reading into a generic attributed tree
- Normalization passes (attribute promotion, facet folding, content compression)
- Type registry split and the type-simplification fixpoint
- Root element explosion
"""

from .errors import (
    MalformedSchemaError,
    SchemaParseError,
    UnresolvedReferenceError,
    XsdSimplifyError,
)
from .exploder import explode, select_root_element
from .normalize import NORMALIZATION_PASSES, normalize
from .parser import parse_xsd, parse_xsd_file
from .registry import PRIMITIVE_TYPES, TypeRegistries, split_registries
from .simplifier import FixpointResult, is_simplified, simplify_types
from .tree import SchemaNode
from .walker import walk

__all__ = [
    # Tree
    "SchemaNode",
    "walk",
    # Reading
    "parse_xsd",
    "parse_xsd_file",
    # Normalization
    "NORMALIZATION_PASSES",
    "normalize",
    # Types
    "PRIMITIVE_TYPES",
    "TypeRegistries",
    "split_registries",
    "FixpointResult",
    "is_simplified",
    "simplify_types",
    # Explosion
    "explode",
    "select_root_element",
    # Errors
    "XsdSimplifyError",
    "SchemaParseError",
    "MalformedSchemaError",
    "UnresolvedReferenceError",
]
