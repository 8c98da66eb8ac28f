#!/usr/bin/env python3

from pydantic import BaseModel

# Pydantic Models


class SimplificationReport(BaseModel):
    """Summary of one pipeline run."""

    root_element: str | None = None  # Name of the exploded top-level element
    root_type: str | None = None  # Type the root element referenced, if any
    rounds: int = 0  # Fixpoint rounds needed
    resolved_types: list[str] = []  # Complex types in the order they were resolved
    resolved_per_round: list[list[str]] = []
    complex_type_count: int = 0  # Declared complexType definitions
    simple_type_count: int = 0  # Declared simpleType definitions
