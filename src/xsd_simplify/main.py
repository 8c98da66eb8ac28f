#!/usr/bin/env python3
"""Command-line entry point: simplify an XSD file and dump the result."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from xsd_simplify.core.config import LOG_LEVELS, OUTPUT_FORMATS, PipelineConfig
from xsd_simplify.core.logging import setup_logging
from xsd_simplify.services.domain.schema import XsdSimplifyError
from xsd_simplify.services.simplify_service import simplify_xsd_file

logger = logging.getLogger(__name__)


def dump_tree(tree: dict[str, Any], output_format: str) -> str:
    """Serialize the exploded tree as JSON or YAML."""
    if output_format == "yaml":
        return yaml.safe_dump(tree, sort_keys=False, allow_unicode=True)
    return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"


def build_parser(config: PipelineConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xsd-simplify",
        description="Expand an XSD schema's root element into a self-contained JSON/YAML tree",
    )
    parser.add_argument("schema", help="Path to the XSD file")
    parser.add_argument("--out", help="Output file (defaults to stdout)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default=config.OUTPUT_FORMAT, help="Output format")
    parser.add_argument("--root", default=config.ROOT_ELEMENT, help="Top-level element to explode")
    parser.add_argument(
        "--primitive-type",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional type name treated as primitive (repeatable)",
    )
    parser.add_argument("--report", action="store_true", help="Log a summary of the simplification run")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=config.LOG_LEVEL, help="Logging level"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line interface for the schema simplifier."""
    config = PipelineConfig()
    args = build_parser(config).parse_args(argv)

    setup_logging(args.log_level)
    config.EXTRA_PRIMITIVE_TYPES = config.EXTRA_PRIMITIVE_TYPES + args.primitive_type

    try:
        result = simplify_xsd_file(args.schema, config=config, root_element=args.root)
    except XsdSimplifyError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    if args.report:
        logger.info("Simplification report", extra=result.report.model_dump())

    output = dump_tree(result.to_dict(), args.format)
    if args.out:
        Path(args.out).write_text(output, encoding="utf-8")
        logger.info(f"Wrote simplified schema to {args.out}")
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
