#!/usr/bin/env python3
"""Root element explosion: the last step of the pipeline."""

import logging
from typing import AbstractSet, Optional

from .errors import MalformedSchemaError, UnresolvedReferenceError
from .registry import PRIMITIVE_TYPES, TypeRegistries
from .simplifier import DEFAULT_MAX_ROUNDS, TypeInliner, inline_type, is_simplified, unresolved_references
from .tree import SchemaNode, as_list
from .walker import walk

logger = logging.getLogger(__name__)


def select_root_element(tree: SchemaNode, name: Optional[str] = None) -> SchemaNode:
    """Return the top-level ``schema.element`` to explode.

    Args:
        tree: Normalized schema tree
        name: Name of the element to pick when the schema declares several

    Raises:
        MalformedSchemaError: If there is no matching top-level element
    """
    elements = [e for e in as_list(tree.child("schema", "element")) if isinstance(e, SchemaNode)]
    if not elements:
        raise MalformedSchemaError("Schema declares no top-level element", property_name="element")

    if name is not None:
        for element in elements:
            if element.get("name") == name:
                return element
        raise MalformedSchemaError(f"Schema declares no top-level element named '{name}'", property_name="element")

    if len(elements) > 1:
        logger.warning(
            f"Schema declares {len(elements)} top-level elements, exploding the first one "
            f"('{elements[0].get('name')}')"
        )
    return elements[0]


def explode(
    root: SchemaNode,
    registries: TypeRegistries,
    primitive_types: AbstractSet[str] = PRIMITIVE_TYPES,
) -> SchemaNode:
    """Inline the root element's type and return the self-contained tree.

    Raises:
        UnresolvedReferenceError: If the root's type is not a resolved simple
            type, or an anonymous root type still holds unresolved references
    """
    type_name = root.get("type")

    if type_name is None:
        # Anonymous inline type: resolve whatever it references. Inlining a
        # derived simple type leaves its base behind, so walk until nothing changes.
        inliner = TypeInliner(registries, primitive_types)
        for _ in range(DEFAULT_MAX_ROUNDS):
            inlined_before = inliner.count
            walk(root, [inliner])
            if inliner.count == inlined_before:
                break
        if not is_simplified(root, primitive_types):
            raise UnresolvedReferenceError(
                f"Root element '{root.get('name')}' holds unresolved type references",
                type_names=[str(root.get("name"))],
                references=unresolved_references(root, primitive_types),
            )
        return root

    if type_name in primitive_types:
        return root

    definition = registries.resolve(type_name, primitive_types)
    if definition is None:
        raise UnresolvedReferenceError(
            f"Root element '{root.get('name')}' has unresolved type",
            type_names=[type_name],
            references=[type_name],
        )

    logger.info(f"Exploding root element '{root.get('name')}' of type '{type_name}'")
    seen = set()
    # Follow simple types derived from other simple types
    while definition is not None and type_name not in seen:
        seen.add(type_name)
        inline_type(root, definition)
        type_name = root.get("type")
        definition = registries.resolve(type_name, primitive_types)
    return root
