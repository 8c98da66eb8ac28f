"""
Domain Layer

This package contains business logic organized by domain area.
Domain services implement core algorithms and should not directly handle
external I/O beyond reading the schema source.

Domains:
- schema: XSD reading, normalization, type simplification and root explosion
"""
