#!/usr/bin/env python3
"""Schema simplification service.

Runs the full pipeline on an XSD document or an already-parsed schema tree:
normalize, split type registries, resolve types to a fixpoint, explode the
root element.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from xsd_simplify.core.config import PipelineConfig, pipeline_config
from xsd_simplify.models.models import SimplificationReport
from xsd_simplify.services.domain.schema import (
    SchemaNode,
    explode,
    normalize,
    parse_xsd,
    parse_xsd_file,
    select_root_element,
    simplify_types,
    split_registries,
)

logger = logging.getLogger(__name__)


@dataclass
class SimplificationResult:
    """Exploded root element plus the run report."""
    tree: SchemaNode
    report: SimplificationReport

    def to_dict(self) -> dict[str, Any]:
        return self.tree.to_dict()


def simplify_schema(
    tree: SchemaNode,
    config: Optional[PipelineConfig] = None,
    root_element: Optional[str] = None,
) -> SimplificationResult:
    """Simplify a parsed schema tree in place.

    Args:
        tree: Document node as produced by ``parse_xsd``
        config: Pipeline configuration (defaults to the environment config)
        root_element: Top-level element to explode, overriding the config

    Returns:
        SimplificationResult with the exploded root element

    Raises:
        MalformedSchemaError: If the tree has an unexpected shape
        UnresolvedReferenceError: If type references cannot be resolved
    """
    config = config or pipeline_config
    primitive_types = config.primitive_types

    normalize(tree)
    registries = split_registries(tree)
    report = SimplificationReport(
        complex_type_count=len(registries.complex),
        simple_type_count=len(registries.simple),
    )

    fixpoint = simplify_types(registries, primitive_types=primitive_types, max_rounds=config.MAX_ROUNDS)

    root = select_root_element(tree, root_element or config.ROOT_ELEMENT)
    report.root_element = root.get("name")
    report.root_type = root.get("type")

    exploded = explode(root, registries, primitive_types=primitive_types)

    report.rounds = fixpoint.rounds
    report.resolved_types = fixpoint.resolved_types
    report.resolved_per_round = fixpoint.resolved
    logger.info(
        f"Simplified schema: root '{report.root_element}', "
        f"{report.complex_type_count} complex types in {report.rounds} rounds"
    )
    return SimplificationResult(tree=exploded, report=report)


def simplify_xsd(
    content: Union[bytes, str],
    config: Optional[PipelineConfig] = None,
    root_element: Optional[str] = None,
) -> SimplificationResult:
    """Parse XSD content and simplify it.

    Raises:
        SchemaParseError: If the content is not well-formed XML
    """
    return simplify_schema(parse_xsd(content), config=config, root_element=root_element)


def simplify_xsd_file(
    path: Union[str, Path],
    config: Optional[PipelineConfig] = None,
    root_element: Optional[str] = None,
) -> SimplificationResult:
    """Read an XSD file and simplify it."""
    return simplify_schema(parse_xsd_file(path), config=config, root_element=root_element)
