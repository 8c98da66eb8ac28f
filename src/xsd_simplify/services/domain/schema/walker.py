#!/usr/bin/env python3
"""Depth-first pre-order tree walker."""

from typing import Callable, Sequence

from .tree import Node, SchemaNode

NodeTransform = Callable[[SchemaNode], SchemaNode]


def walk(node: Node, passes: Sequence[NodeTransform]) -> Node:
    """Apply ``passes`` to ``node`` and then to every descendant.

    Each pass receives the output of the previous one. Children are visited
    after the node itself has been transformed, so a pass that rewrites the
    node's properties controls what gets walked next. Scalars are returned
    unchanged.

    The tree must be acyclic.
    """
    if not isinstance(node, SchemaNode):
        return node

    for transform in passes:
        node = transform(node)

    for name in list(node.properties):
        if name not in node.properties:
            continue
        value = node.properties[name]
        if isinstance(value, list):
            for index, item in enumerate(value):
                value[index] = walk(item, passes)
        else:
            node.properties[name] = walk(value, passes)

    return node
