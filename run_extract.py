#!/usr/bin/env python3
"""
Command-line entry point for OpenSCAD Customizer schema extraction.

Extracts the parameter schema of a single .scad file or of every .scad file
under a directory and writes it as JSON or YAML.

Usage:
    python run_extract.py --source model.scad
    python run_extract.py --source model.scad --json-schema --pretty
    python run_extract.py --source ./models --format yaml --output-file out/schemas.yaml
"""

import argparse
import json
import logging
import os
import sys
import time
from typing import Any, Dict, Mapping

import yaml
from dotenv import load_dotenv

from core.run_artifacts import build_extraction_report, write_run_report
from core.startup_config import ConfigValidationError, resolve_library_registry
from core.structured_logging import (
    configure_structured_logging,
    phase_scope,
    set_run_id,
    source_scope,
)
from customizer.extractor import (
    ExtractionStats,
    extract_directory,
    extract_file_with_diagnostics,
)
from customizer.json_schema import to_json_schema
from customizer.models import Schema

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="OpenSCAD Customizer Parameter Schema Extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_extract.py --source model.scad\n"
            "  python run_extract.py --source ./models --format yaml\n"
        )
    )

    parser.add_argument(
        "--source",
        required=True,
        help="Path to a .scad file or a directory of .scad files."
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help="Where to write the result. Default: print to stdout."
    )
    parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="Output format. Default: json"
    )
    parser.add_argument(
        "--json-schema",
        action="store_true",
        default=False,
        help="Emit JSON Schema (draft-07) documents instead of the raw schema."
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=False,
        help="Indent JSON output."
    )
    parser.add_argument(
        "--registry",
        default=None,
        help="YAML/JSON library registry. Default: $SCAD_LIBRARY_REGISTRY or built-in."
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="If set, write a JSON run report into this directory."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging."
    )

    return parser.parse_args(argv)


def extract_source(source: str, registry) -> tuple[Dict[str, Schema], ExtractionStats]:
    """Extract a file or directory into a path -> Schema mapping.

    Raises:
        FileNotFoundError: If source does not exist.
        ValueError: If a single file is not a .scad file.
    """
    if os.path.isfile(source):
        with source_scope(os.path.basename(source)):
            diagnostics = extract_file_with_diagnostics(source, registry)
        schema = diagnostics.schema
        stats = ExtractionStats()
        stats.files_processed = 1
        stats.parameters_extracted = len(schema.parameters)
        stats.groups_extracted = len(schema.groups)
        stats.warnings = len(diagnostics.warnings)
        return {os.path.basename(source): schema}, stats

    with source_scope(source):
        return extract_directory(source, registry)


def render_output(
    schemas: Mapping[str, Schema],
    output_format: str,
    json_schema: bool,
    pretty: bool,
) -> str:
    """Serialize extracted schemas to JSON or YAML text."""
    payload: Dict[str, Any] = {}
    for path, schema in schemas.items():
        payload[path] = to_json_schema(schema, path) if json_schema else schema.to_dict()

    if len(payload) == 1:
        payload = next(iter(payload.values()))

    if output_format == "yaml":
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    return json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False)


def log_summary(schemas: Mapping[str, Schema]) -> None:
    """Log parameters per group for each extracted file."""
    for path, schema in schemas.items():
        logger.info(
            "%s: %d parameter(s) in %d group(s)",
            path,
            len(schema.parameters),
            len(schema.groups),
        )
        defaults = schema.defaults()
        for group in schema.groups:
            members = schema.group_parameters(group.id)
            logger.info("  %s (%d)", group.label, len(members))
            for param in members:
                logger.info("    - %s: %s = %r", param.name, param.type, defaults[param.name])
        if schema.libraries:
            logger.info("  libraries: %s", ", ".join(sorted(schema.libraries)))


def main(argv=None) -> int:
    """Main entry point for the extraction CLI."""
    # .env may supply SCAD_LIBRARY_REGISTRY and STRICT_CONFIG_VALIDATION
    load_dotenv()
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()

    try:
        with phase_scope("config"):
            registry = resolve_library_registry(args.registry)

        with phase_scope("extract"):
            t0 = time.time()
            schemas, stats = extract_source(args.source, registry)
            logger.info("Extraction completed in %.2fs: %s", time.time() - t0, stats)

        if not schemas:
            logger.warning("No OpenSCAD files extracted from %s", args.source)
            return 0

        with phase_scope("output"):
            log_summary(schemas)
            output = render_output(schemas, args.format, args.json_schema, args.pretty)
            if args.output_file:
                out_dir = os.path.dirname(os.path.abspath(args.output_file))
                os.makedirs(out_dir, exist_ok=True)
                with open(args.output_file, "w", encoding="utf-8") as f:
                    f.write(output + "\n")
                logger.info("Schema written to %s", args.output_file)
            else:
                sys.stdout.write(output + "\n")

            if args.report_dir:
                report = build_extraction_report(schemas, stats.to_dict())
                path = write_run_report(report, run_id, args.report_dir)
                logger.info("Run report written to %s", path)

    except ConfigValidationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"File error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Extraction failed: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
