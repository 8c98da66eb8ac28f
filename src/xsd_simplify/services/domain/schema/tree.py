#!/usr/bin/env python3
"""Generic schema tree model.

Every transformation in the pipeline operates on this shape. A node is either
a scalar (``str`` or ``None``) or a ``SchemaNode`` carrying named child
properties, an optional attribute bag and optional inline text.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Keys used when a node is rendered as a JSON-friendly dict
ATTR_KEY = "_attr"
TEXT_KEY = "_char"


@dataclass
class SchemaNode:
    """Compound node of the schema tree."""
    properties: dict[str, Any] = field(default_factory=dict)  # name -> Node | list[Node]
    attributes: Optional[dict[str, str]] = None               # raw attribute bag
    text: Optional[str] = None                                # inline text content

    def get(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.properties

    def child(self, *path: str) -> Any:
        """Follow a chain of single-valued properties.

        Returns None as soon as an intermediate step is missing, a scalar or a
        list. The value at the last step is returned as is, which may be a list
        of repeated siblings.
        """
        node: Any = self
        for name in path:
            if not isinstance(node, SchemaNode):
                return None
            node = node.properties.get(name)
        return node

    def clone(self) -> 'SchemaNode':
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON/YAML serializable dict."""
        result: dict[str, Any] = {}
        if self.attributes:
            result[ATTR_KEY] = dict(self.attributes)
        if self.text:
            result[TEXT_KEY] = self.text
        for name, value in self.properties.items():
            result[name] = to_plain(value)
        return result


Node = Union[SchemaNode, str, None]


def is_scalar(value: Any) -> bool:
    return not isinstance(value, (SchemaNode, list))


def as_list(value: Any) -> list:
    """Normalize a single value or a list of values to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def to_plain(value: Any) -> Any:
    """Convert a node, list of nodes or scalar to plain Python data."""
    if isinstance(value, SchemaNode):
        return value.to_dict()
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    return value


def from_plain(value: Any) -> Any:
    """Build nodes from plain dict/list data using the ``_attr``/``_char`` keys.

    Lets callers that already hold a parsed dict (e.g. loaded from JSON) feed
    the pipeline without going through the XSD reader.
    """
    if isinstance(value, list):
        return [from_plain(item) for item in value]
    if not isinstance(value, dict):
        return value

    node = SchemaNode()
    for name, child in value.items():
        if name == ATTR_KEY:
            node.attributes = {str(k): str(v) for k, v in child.items()}
        elif name == TEXT_KEY:
            node.text = child
        else:
            node.properties[name] = from_plain(child)
    return node
