#!/usr/bin/env python3
"""Type-simplification fixpoint engine.

Each round inlines every resolved simple type into the complex type
definitions that reference it, then moves complex types that no longer hold
any non-primitive reference into the simple registry. Rounds repeat until the
complex registry is empty. A round that moves nothing means the remaining
types reference each other in a cycle or reference an unknown type, and is
reported as an error.
"""

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Any

from .errors import UnresolvedReferenceError
from .registry import PRIMITIVE_TYPES, TypeRegistries
from .tree import SchemaNode
from .walker import NodeTransform, walk

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 1000


@dataclass
class FixpointResult:
    """Outcome of a fixpoint run."""
    rounds: int = 0
    resolved: list[list[str]] = field(default_factory=list)  # type names promoted per round

    @property
    def resolved_types(self) -> list[str]:
        return [name for batch in self.resolved for name in batch]


def is_simplified(node: Any, primitive_types: AbstractSet[str] = PRIMITIVE_TYPES) -> bool:
    """True if ``node`` holds no reference to a non-primitive type."""
    if isinstance(node, list):
        return all(is_simplified(item, primitive_types) for item in node)
    if not isinstance(node, SchemaNode):
        return True

    type_name = node.get("type")
    if type_name is not None and type_name not in primitive_types:
        return False
    return all(is_simplified(value, primitive_types) for value in node.properties.values())


def unresolved_references(node: Any, primitive_types: AbstractSet[str] = PRIMITIVE_TYPES) -> set[str]:
    """Collect every non-primitive type name still referenced under ``node``."""
    found: set[str] = set()
    if isinstance(node, list):
        for item in node:
            found |= unresolved_references(item, primitive_types)
    elif isinstance(node, SchemaNode):
        type_name = node.get("type")
        if isinstance(type_name, str) and type_name not in primitive_types:
            found.add(type_name)
        for value in node.properties.values():
            found |= unresolved_references(value, primitive_types)
    return found


def inline_type(node: SchemaNode, definition: SchemaNode) -> SchemaNode:
    """Replace ``node``'s type reference with a copy of ``definition``."""
    replacement = definition.clone()
    replacement.properties.pop("name", None)
    node.properties.pop("type", None)
    node.properties.update(replacement.properties)
    return node


class TypeInliner:
    """Node transform inlining any type reference found in the simple registry.

    Counts the substitutions it performs so callers can tell whether a walk
    changed anything.
    """

    def __init__(self, registries: TypeRegistries, primitive_types: AbstractSet[str] = PRIMITIVE_TYPES):
        self.registries = registries
        self.primitive_types = primitive_types
        self.count = 0

    def __call__(self, node: SchemaNode) -> SchemaNode:
        definition = self.registries.resolve(node.get("type"), self.primitive_types)
        if definition is None or definition is node:
            return node
        self.count += 1
        return inline_type(node, definition)


def simplify_types(
    registries: TypeRegistries,
    primitive_types: AbstractSet[str] = PRIMITIVE_TYPES,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> FixpointResult:
    """Resolve complex types until the complex registry is empty.

    Args:
        registries: Registries to update in place
        primitive_types: Type names that never block simplification
        max_rounds: Upper bound on the number of rounds

    Returns:
        FixpointResult with the number of rounds and promotion order

    Raises:
        UnresolvedReferenceError: If a round makes no progress or the round
            limit is reached
    """
    result = FixpointResult()
    inliner = TypeInliner(registries, primitive_types)
    passes: list[NodeTransform] = [inliner]

    while registries.complex:
        if result.rounds >= max_rounds:
            raise UnresolvedReferenceError(
                f"Type simplification did not finish within {max_rounds} rounds",
                type_names=registries.complex,
            )

        before = len(registries.complex)
        inlined_before = inliner.count
        result.rounds += 1

        for definition in list(registries.complex.values()):
            walk(definition, passes)

        promoted = [
            name for name, definition in registries.complex.items()
            if is_simplified(definition, primitive_types)
        ]
        for name in promoted:
            registries.promote(name)
        result.resolved.append(promoted)

        logger.debug(f"Round {result.rounds}: promoted {promoted}, {len(registries.complex)} complex types left")

        # A simple type deriving from another simple type leaves a new reference
        # behind when inlined; that is progress even if nothing was promoted.
        if len(registries.complex) == before and inliner.count == inlined_before:
            references: set[str] = set()
            for definition in registries.complex.values():
                references |= unresolved_references(definition, primitive_types)
            raise UnresolvedReferenceError(
                "Type simplification made no progress; the remaining types reference "
                "each other in a cycle or reference unknown types",
                type_names=registries.complex,
                references=references,
            )

    logger.info(f"Resolved {len(result.resolved_types)} complex types in {result.rounds} rounds")
    return result
