#!/usr/bin/env python3
"""XSD reader producing the generic schema tree.

Tag prefixes are stripped, attributes land in the attribute bag (namespace
declarations included, as ``xmlns``/``xmlns:prefix``), repeated sibling tags
become lists and text is trimmed.
"""

import io
import logging
from pathlib import Path
from typing import Union
from xml.etree.ElementTree import Element

# Use defusedxml for secure XML parsing (prevents XXE attacks)
import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from .errors import SchemaParseError
from .tree import SchemaNode

logger = logging.getLogger(__name__)

XML_NS = "http://www.w3.org/XML/1998/namespace"


def strip_prefix(tag: str) -> str:
    """Drop a ``{uri}`` or ``prefix:`` qualifier from a tag name."""
    if tag.startswith("{"):
        tag = tag[tag.index("}") + 1:]
    return tag.split(":")[-1]


def _attribute_name(raw: str, prefixes: dict[str, str]) -> str:
    if not raw.startswith("{"):
        return raw
    uri, local = raw[1:].split("}", 1)
    prefix = prefixes.get(uri)
    return f"{prefix}:{local}" if prefix else local


def _build_node(
    elem: Element,
    declarations: dict[int, list[tuple[str, str]]],
    prefixes: dict[str, str],
):
    attributes = {}
    for prefix, uri in declarations.get(id(elem), []):
        attributes[f"xmlns:{prefix}" if prefix else "xmlns"] = uri
    for raw, value in elem.attrib.items():
        attributes[_attribute_name(raw, prefixes)] = value

    text = (elem.text or "").strip()
    children = list(elem)

    if not attributes and not children:
        return text

    node = SchemaNode(attributes=attributes or None, text=text or None)
    for child in children:
        if not isinstance(child.tag, str):
            # comments and processing instructions
            continue
        name = strip_prefix(child.tag)
        value = _build_node(child, declarations, prefixes)
        if name not in node.properties:
            node.properties[name] = value
        elif isinstance(node.properties[name], list):
            node.properties[name].append(value)
        else:
            node.properties[name] = [node.properties[name], value]
    return node


def parse_xsd(content: Union[bytes, str]) -> SchemaNode:
    """Parse XSD text into a document node keyed by the root tag.

    Args:
        content: XSD document as bytes or str

    Returns:
        SchemaNode whose only property is the stripped root tag (``schema``)

    Raises:
        SchemaParseError: If the content is not well-formed XML
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    declarations: dict[int, list[tuple[str, str]]] = {}
    prefixes: dict[str, str] = {XML_NS: "xml"}
    pending: list[tuple[str, str]] = []
    root = None

    try:
        for event, item in ET.iterparse(io.BytesIO(content), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                pending.append((prefix, uri))
                prefixes.setdefault(uri, prefix)
            else:
                if root is None:
                    root = item
                if pending:
                    declarations[id(item)] = pending
                    pending = []
    except ET.ParseError as e:
        raise SchemaParseError(f"Invalid XML: {str(e)}") from e
    except DefusedXmlException as e:
        raise SchemaParseError(f"Forbidden XML construct: {str(e)}") from e

    if root is None:
        raise SchemaParseError("Document has no root element")

    logger.debug(f"Parsed XSD root <{root.tag}> with {len(prefixes) - 1} namespace prefixes")
    return SchemaNode(properties={strip_prefix(root.tag): _build_node(root, declarations, prefixes)})


def parse_xsd_file(path: Union[str, Path]) -> SchemaNode:
    """Read and parse an XSD file.

    Raises:
        SchemaParseError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise SchemaParseError(f"Cannot read schema file {path}: {e}") from e

    logger.info(f"Parsing schema file {path}")
    return parse_xsd(content)
