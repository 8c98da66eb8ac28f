#!/usr/bin/env python3
"""Normalization passes applied once over the parsed schema tree.

The passes run in the order of ``NORMALIZATION_PASSES`` on every node, the
whole sequence finishing on a node before the walker descends into its
children. That ordering matters for base-type promotion: when a node is
visited its ``restriction``/``extension`` children have not been visited yet,
so their ``base`` is still in their attribute bag and is read from there.
"""

import logging
from typing import Any

from .errors import MalformedSchemaError
from .tree import SchemaNode, as_list
from .walker import walk

logger = logging.getLogger(__name__)

# Schema-level attributes that carry no meaning in the simplified tree
DISALLOWED_ATTRIBUTES = ("elementFormDefault", "attributeFormDefault", "xmlns:xs", "version")

# Attributes moved from the attribute bag onto the node as plain properties
PROMOTED_ATTRIBUTES = ("name", "type", "minOccurs", "maxOccurs", "use", "base", "value")

# Wrappers whose derivation child is hoisted onto the owning type
CONTENT_WRAPPERS = ("simpleContent", "complexContent")
DERIVATIONS = ("extension", "restriction")


def prune_attributes(node: SchemaNode) -> SchemaNode:
    if node.attributes:
        for attr in DISALLOWED_ATTRIBUTES:
            node.attributes.pop(attr, None)
    return node


def compress_annotation(node: SchemaNode) -> SchemaNode:
    documentation = node.child("annotation", "documentation")
    if documentation is not None:
        node.properties["description"] = documentation
        del node.properties["annotation"]
    return node


def compress_content(node: SchemaNode) -> SchemaNode:
    """Hoist ``simpleContent.extension`` (and friends) onto the node."""
    for wrapper in CONTENT_WRAPPERS:
        content = node.get(wrapper)
        if not isinstance(content, SchemaNode):
            continue
        hoisted = False
        for derivation in DERIVATIONS:
            if content.has(derivation):
                node.properties[derivation] = content.properties[derivation]
                hoisted = True
        if hoisted:
            del node.properties[wrapper]
    return node


def _fold_facet(node: SchemaNode, facet: str) -> SchemaNode:
    if not node.has(facet):
        return node

    values = []
    for entry in as_list(node.properties[facet]):
        if isinstance(entry, SchemaNode):
            value = (entry.attributes or {}).get("value", entry.get("value"))
            values.append(value)
        else:
            values.append(entry)
    node.properties[facet] = values
    return node


def fold_enumerations(node: SchemaNode) -> SchemaNode:
    return _fold_facet(node, "enumeration")


def fold_patterns(node: SchemaNode) -> SchemaNode:
    return _fold_facet(node, "pattern")


def promote_attributes(node: SchemaNode) -> SchemaNode:
    """Move allow-listed attributes onto the node.

    Raises:
        MalformedSchemaError: If the node already has a property of that name
    """
    if not node.attributes:
        return node

    for attr in PROMOTED_ATTRIBUTES:
        if attr not in node.attributes:
            continue
        if node.has(attr):
            raise MalformedSchemaError(
                f"Cannot promote attribute '{attr}': node already has a '{attr}' property",
                property_name=attr,
            )
        node.properties[attr] = node.attributes.pop(attr)

    if not node.attributes:
        node.attributes = None
    return node


def promote_base_type(node: SchemaNode) -> SchemaNode:
    """Set ``type`` from the ``base`` of a ``restriction``/``extension`` child.

    Raises:
        MalformedSchemaError: If the node already has a ``type`` property
    """
    for derivation in ("restriction", "extension"):
        child = node.get(derivation)
        if not isinstance(child, SchemaNode) or not child.attributes:
            continue
        base = child.attributes.get("base")
        if base is None:
            continue
        if node.has("type"):
            raise MalformedSchemaError(
                f"Cannot promote {derivation} base '{base}': node already has type '{node.get('type')}'",
                property_name="type",
            )
        node.properties["type"] = base
    return node


def delete_empty_attributes(node: SchemaNode) -> SchemaNode:
    if node.attributes is not None and not node.attributes:
        node.attributes = None
    return node


NORMALIZATION_PASSES = (
    prune_attributes,
    compress_annotation,
    compress_content,
    fold_enumerations,
    fold_patterns,
    promote_attributes,
    promote_base_type,
    delete_empty_attributes,
)


def normalize(tree: Any) -> Any:
    """Run every normalization pass over ``tree`` in place and return it."""
    logger.debug(f"Running {len(NORMALIZATION_PASSES)} normalization passes")
    return walk(tree, NORMALIZATION_PASSES)
