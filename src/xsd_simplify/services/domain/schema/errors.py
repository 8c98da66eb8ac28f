#!/usr/bin/env python3
"""Errors raised by the schema simplification pipeline.

All of them are fatal to a run: the pipeline never emits a partial tree.
"""

from typing import Iterable, Optional


class XsdSimplifyError(Exception):
    """Base class for pipeline errors."""
    pass


class SchemaParseError(XsdSimplifyError):
    """Raised when the XSD source cannot be read or is not well-formed XML."""
    pass


class MalformedSchemaError(XsdSimplifyError):
    """Raised when the schema tree does not have the shape the pipeline expects.

    Typical cause is a property collision while promoting attributes or a base
    type onto a node that already carries that property.
    """

    def __init__(self, message: str, property_name: Optional[str] = None):
        super().__init__(message)
        self.property_name = property_name


class UnresolvedReferenceError(XsdSimplifyError):
    """Raised when type references cannot be resolved.

    Attributes:
        type_names: Types that could not be resolved (stuck complex types or
            the root element's type)
        references: Type names referenced from those types that never became
            resolvable
    """

    def __init__(self, message: str, type_names: Iterable[str] = (), references: Iterable[str] = ()):
        self.type_names = sorted(set(type_names))
        self.references = sorted(set(references))
        details = []
        if self.type_names:
            details.append(f"types: {', '.join(self.type_names)}")
        if self.references:
            details.append(f"unresolved references: {', '.join(self.references)}")
        if details:
            message = f"{message} ({'; '.join(details)})"
        super().__init__(message)
