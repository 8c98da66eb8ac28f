#!/usr/bin/env python3
"""
Environment variable readers used by the pipeline configuration.

Values are stripped of surrounding whitespace and CRLF line endings, which
creep in when .env files are edited on Windows.
"""

import os
import logging
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def getenv_clean(key: str, default: str = None) -> Optional[str]:
    """Get environment variable with whitespace and line endings removed.

    Args:
        key: Environment variable name
        default: Value returned when the variable is not set

    Returns:
        Cleaned value, or default if not set
    """
    raw_value = os.getenv(key, default)
    if raw_value is None:
        return None

    cleaned = raw_value.strip()
    if raw_value != cleaned:
        logger.warning(
            f"Environment variable {key} had trailing whitespace/line endings: "
            f"raw={repr(raw_value)}, cleaned={repr(cleaned)}"
        )
    return cleaned


def getenv_int(key: str, default: int) -> int:
    """Get environment variable as integer, falling back to default when invalid."""
    raw_value = getenv_clean(key)
    if raw_value is None or raw_value == "":
        return default

    try:
        return int(raw_value)
    except ValueError:
        logger.warning(f"Environment variable {key} is not a valid integer: {repr(raw_value)}. Using default: {default}")
        return default


def getenv_choice(key: str, choices: Sequence[str], default: str) -> str:
    """Get environment variable restricted to ``choices`` (case-insensitive).

    Example:
        >>> # .env file has: XSD_SIMPLIFY_OUTPUT_FORMAT=YAML\r\n
        >>> getenv_choice("XSD_SIMPLIFY_OUTPUT_FORMAT", ("json", "yaml"), "json")
        'yaml'
    """
    raw_value = getenv_clean(key)
    if not raw_value:
        return default

    value = raw_value.lower()
    if value not in choices:
        logger.warning(f"Environment variable {key} must be one of {list(choices)}, got {repr(raw_value)}. Using default: {default}")
        return default
    return value


def getenv_list(key: str, default: list[str] = None, separator: str = ",") -> list[str]:
    """Get environment variable as a list of non-empty, stripped items.

    Example:
        >>> # .env file has: XSD_SIMPLIFY_EXTRA_PRIMITIVE_TYPES=xs:decimal, xs:date
        >>> getenv_list("XSD_SIMPLIFY_EXTRA_PRIMITIVE_TYPES")
        ['xs:decimal', 'xs:date']
    """
    if default is None:
        default = []

    raw_value = getenv_clean(key)
    if not raw_value:
        return default

    items = [item.strip() for item in raw_value.split(separator) if item.strip()]
    return items or default
