#!/usr/bin/env python3
"""
Configuration settings for the schema simplification pipeline.

These settings can be overridden via environment variables; command-line
flags override both.
"""

from xsd_simplify.core.env_utils import getenv_choice, getenv_clean, getenv_int, getenv_list
from xsd_simplify.services.domain.schema.registry import PRIMITIVE_TYPES
from xsd_simplify.services.domain.schema.simplifier import DEFAULT_MAX_ROUNDS

OUTPUT_FORMATS = ("json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PipelineConfig:
    """Pipeline configuration.

    Values are read from the environment when an instance is created, so
    tests can patch ``os.environ`` and build a fresh config.
    """

    def __init__(self):
        # Extra type names treated like xs:string & co (e.g. "xs:decimal,xs:date")
        self.EXTRA_PRIMITIVE_TYPES = getenv_list("XSD_SIMPLIFY_EXTRA_PRIMITIVE_TYPES")

        # Upper bound on fixpoint rounds
        self.MAX_ROUNDS = getenv_int("XSD_SIMPLIFY_MAX_ROUNDS", DEFAULT_MAX_ROUNDS)

        # Top-level element to explode when the schema declares several
        self.ROOT_ELEMENT = getenv_clean("XSD_SIMPLIFY_ROOT_ELEMENT") or None

        self.OUTPUT_FORMAT = getenv_choice("XSD_SIMPLIFY_OUTPUT_FORMAT", OUTPUT_FORMATS, "json")

        self.LOG_LEVEL = getenv_choice(
            "XSD_SIMPLIFY_LOG_LEVEL", [level.lower() for level in LOG_LEVELS], "info"
        ).upper()

    @property
    def primitive_types(self) -> frozenset[str]:
        """Default primitive type names plus the configured extras."""
        return PRIMITIVE_TYPES | frozenset(self.EXTRA_PRIMITIVE_TYPES)


# Singleton instance
pipeline_config = PipelineConfig()
