"""
High-level orchestrator for Customizer schema extraction.

``extract_schema`` runs the single left-to-right pass over OpenSCAD source
text. The file and directory helpers wrap it for use on disk.
"""

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from customizer.config import (
    ASSIGNMENT_PATTERN,
    BRACKET_HINT_PATTERN,
    DEFAULT_GROUP,
    DEFAULT_UI_TYPE,
    GROUP_HEADER_PATTERN,
    HIDDEN_GROUP,
    SCAD_EXTENSIONS,
    SKIPPED_DIRECTORIES,
    TRAILING_COMMENT_PATTERN,
)
from customizer.heuristics import extract_dependency, infer_unit, strip_directives
from customizer.hints import ColorHint, EnumHint, FileHint, RangeHint, parse_hint
from customizer.lexer import ScopeTracker
from customizer.libraries import LibraryDefinition, detect_libraries
from customizer.models import Group, Parameter, Schema
from customizer.values import classify_default

logger = logging.getLogger(__name__)


@dataclass
class SchemaDiagnostics:
    """Extraction result together with the soft warnings raised on the way."""

    schema: Schema
    warnings: List[str] = field(default_factory=list)


class ExtractionStats:
    """Statistics for a multi-file extraction."""

    def __init__(self):
        self.files_processed = 0
        self.files_failed = 0
        self.parameters_extracted = 0
        self.groups_extracted = 0
        self.warnings = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_failed": self.files_failed,
            "parameters_extracted": self.parameters_extracted,
            "groups_extracted": self.groups_extracted,
            "warnings": self.warnings,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(processed={self.files_processed}, "
            f"failed={self.files_failed}, parameters={self.parameters_extracted}, "
            f"groups={self.groups_extracted}, warnings={self.warnings})"
        )


class _ExtractionState:
    """Mutable accumulator for one extraction pass.

    Created per call and discarded afterwards, so nothing leaks between
    extractions.
    """

    def __init__(self):
        self.groups: List[Group] = []
        self.group_ids = set()
        self.parameters: Dict[str, Parameter] = {}
        self.current_group = DEFAULT_GROUP
        self.param_order = 0
        self.pending_comment: Optional[str] = None
        self.warnings: List[str] = []

    @property
    def in_hidden_group(self) -> bool:
        return self.current_group == HIDDEN_GROUP

    def warn(self, message: str, *args: Any) -> None:
        logger.warning(message, *args)
        self.warnings.append(message % args if args else message)

    def register_group(self, group_id: str) -> None:
        if group_id in self.group_ids:
            return
        self.group_ids.add(group_id)
        self.groups.append(Group(id=group_id, label=group_id, order=len(self.groups)))

    def process_top_level_line(self, line: str, line_number: int) -> None:
        """Run comment capture, group and assignment matching on one line."""
        group_match = GROUP_HEADER_PATTERN.match(line)
        if group_match:
            self.handle_group(group_match.group(1).strip())
            self.pending_comment = None
            return

        assign_match = ASSIGNMENT_PATTERN.match(line)
        if assign_match:
            self.handle_assignment(
                name=assign_match.group(1),
                value_text=assign_match.group(2),
                after=line[line.index(";") + 1:],
                line_number=line_number,
            )
            self.pending_comment = None
            return

        if line.startswith("//"):
            content = line.lstrip("/").strip()
            # Bracketed hint lines are annotations, not descriptions
            if content and not content.startswith("["):
                self.pending_comment = content
            else:
                self.pending_comment = None
            return

        self.pending_comment = None

    def handle_group(self, label: str) -> None:
        if label.lower() == HIDDEN_GROUP.lower():
            self.current_group = HIDDEN_GROUP
            return
        self.register_group(label)
        self.current_group = label

    def handle_assignment(
        self,
        name: str,
        value_text: str,
        after: str,
        line_number: int,
    ) -> None:
        if self.in_hidden_group:
            logger.debug("Skipping hidden assignment %s at line %d", name, line_number)
            return

        value_type, default = classify_default(value_text)
        ui_type = DEFAULT_UI_TYPE
        trailing = ""
        extras: Dict[str, Any] = {}

        bracket_match = BRACKET_HINT_PATTERN.search(after)
        if bracket_match:
            trailing = after[bracket_match.end():].strip()
            hint = parse_hint(bracket_match.group(1).strip())

            if isinstance(hint, ColorHint):
                value_type, ui_type = "color", "color"
            elif isinstance(hint, FileHint):
                value_type, ui_type = "file", "file"
                extras["accepted_extensions"] = hint.extensions
            elif isinstance(hint, RangeHint):
                ui_type = "slider"
                extras["minimum"] = hint.minimum
                extras["maximum"] = hint.maximum
                extras["step"] = hint.step
                if hint.value_type is not None:
                    value_type = hint.value_type
            elif isinstance(hint, EnumHint):
                value_type = "string"
                ui_type = "toggle" if hint.is_toggle else "select"
                extras["enum"] = hint.values
        else:
            comment_match = TRAILING_COMMENT_PATTERN.search(after)
            if comment_match:
                trailing = comment_match.group(1).strip()

        preceding = self.pending_comment or ""
        dependency = extract_dependency(preceding, trailing)
        description = strip_directives(trailing) or strip_directives(preceding)

        if self.current_group == DEFAULT_GROUP:
            self.register_group(DEFAULT_GROUP)

        if name in self.parameters:
            self.warn(
                "Parameter '%s' redeclared at line %d; later declaration wins",
                name,
                line_number,
            )
            del self.parameters[name]

        self.parameters[name] = Parameter(
            name=name,
            type=value_type,
            default=default,
            group=self.current_group,
            order=self.param_order,
            description=description,
            ui_type=ui_type,
            unit=infer_unit(name, value_type, description),
            dependency=dependency,
            **extras,
        )
        self.param_order += 1

    def build(self, libraries) -> Schema:
        if not self.groups:
            self.register_group(DEFAULT_GROUP)
        return Schema(
            groups=tuple(self.groups),
            parameters=MappingProxyType(dict(self.parameters)),
            libraries=libraries,
        )


def extract_schema_with_diagnostics(
    source_text: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
) -> SchemaDiagnostics:
    """Extract a schema and collect soft warnings.

    Args:
        source_text: Full OpenSCAD source.
        registry: Known libraries for include/use detection.

    Returns:
        SchemaDiagnostics holding the schema and warning messages for
        duplicate parameters, unbalanced braces and an unterminated block
        comment.
    """
    state = _ExtractionState()
    tracker = ScopeTracker()

    for line_number, raw_line in enumerate(source_text.split("\n"), start=1):
        if tracker.at_top_level:
            state.process_top_level_line(raw_line.strip(), line_number)
        else:
            state.pending_comment = None
        underflows = tracker.underflows
        tracker.feed(raw_line, line_number)
        if tracker.underflows > underflows:
            state.warnings.append(f"Unbalanced '}}' at line {line_number}")

    if tracker.in_block_comment:
        state.warn("Unterminated block comment at end of input")

    schema = state.build(detect_libraries(source_text, registry))
    logger.debug(
        "Extracted %d parameters in %d groups",
        len(schema.parameters),
        len(schema.groups),
    )
    return SchemaDiagnostics(schema=schema, warnings=state.warnings)


def extract_schema(
    source_text: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
) -> Schema:
    """Extract the Customizer parameter schema from OpenSCAD source text.

    Never raises for malformed input: unrecognized lines contribute nothing.

    Args:
        source_text: Full OpenSCAD source.
        registry: Known libraries; defaults to the built-in registry.

    Returns:
        Immutable Schema with ordered groups, the parameter table and the
        referenced libraries.

    Example:
        >>> schema = extract_schema('/* [Size] */\\nwidth = 50; // [10:100]')
        >>> schema.parameters["width"].ui_type
        'slider'
    """
    return extract_schema_with_diagnostics(source_text, registry).schema


def _read_scad_file(file_path: str) -> str:
    file_path = os.path.abspath(file_path)

    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    if ext not in SCAD_EXTENSIONS:
        raise ValueError(
            f"File {file_path} is not an OpenSCAD source file. "
            f"Expected one of: {SCAD_EXTENSIONS}"
        )

    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()


def extract_file_with_diagnostics(
    file_path: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
) -> SchemaDiagnostics:
    """Extract a single ``.scad`` file and keep its soft warnings.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a ``.scad`` file or is not UTF-8.
    """
    try:
        source_text = _read_scad_file(file_path)
    except Exception as e:
        logger.error("Error reading %s: %s", file_path, e)
        raise

    logger.info("Extracting parameters from %s", file_path)
    diagnostics = extract_schema_with_diagnostics(source_text, registry)
    logger.info(
        "Extracted %d parameters in %d groups from %s (%d warnings)",
        len(diagnostics.schema.parameters),
        len(diagnostics.schema.groups),
        file_path,
        len(diagnostics.warnings),
    )
    return diagnostics


def extract_file(
    file_path: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
) -> Schema:
    """Extract the schema of a single ``.scad`` file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a ``.scad`` file or is not UTF-8.
    """
    return extract_file_with_diagnostics(file_path, registry).schema


def discover_scad_files(directory: str) -> List[str]:
    """Recursively discover all ``.scad`` files in a directory.

    Hidden directories and common build/cache directories are skipped.

    Returns:
        Sorted list of absolute paths.
    """
    scad_files = []
    directory = os.path.abspath(directory)

    logger.info(f"Discovering OpenSCAD files in {directory}")

    for root, dirs, files in os.walk(directory):
        dirs[:] = [
            d for d in dirs
            if not d.startswith('.') and d not in SKIPPED_DIRECTORIES
        ]

        for file in files:
            ext = os.path.splitext(file)[1].lower()
            if ext in SCAD_EXTENSIONS:
                scad_files.append(os.path.join(root, file))

    logger.info(f"Found {len(scad_files)} OpenSCAD files")
    return sorted(scad_files)


def extract_directory(
    directory: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
    continue_on_error: bool = True,
) -> Tuple[Dict[str, Schema], ExtractionStats]:
    """Extract schemas from all ``.scad`` files in a directory tree.

    Args:
        directory: Root directory to process.
        registry: Known libraries for include/use detection.
        continue_on_error: If True, keep going when a file fails.
            If False, re-raise the first error.

    Returns:
        A tuple of (schemas, stats) where schemas maps each file path,
        relative to ``directory``, to its Schema.

    Raises:
        FileNotFoundError: If directory does not exist.
    """
    directory = os.path.abspath(directory)

    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")

    stats = ExtractionStats()
    schemas: Dict[str, Schema] = {}

    scad_files = discover_scad_files(directory)
    if not scad_files:
        logger.warning(f"No OpenSCAD files found in {directory}")
        return schemas, stats

    for file_path in scad_files:
        relative_path = os.path.relpath(file_path, directory)
        try:
            diagnostics = extract_schema_with_diagnostics(
                _read_scad_file(file_path), registry
            )
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Invalid file {relative_path}: {e}")
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue
        except Exception as e:
            logger.error(f"Unexpected error processing {relative_path}: {e}", exc_info=True)
            stats.files_failed += 1
            if not continue_on_error:
                raise
            continue

        schemas[relative_path] = diagnostics.schema
        stats.files_processed += 1
        stats.parameters_extracted += len(diagnostics.schema.parameters)
        stats.groups_extracted += len(diagnostics.schema.groups)
        stats.warnings += len(diagnostics.warnings)

    logger.info(f"Extraction complete: {stats}")
    return schemas, stats


def extract_to_dict(
    source: str,
    registry: Optional[Mapping[str, LibraryDefinition]] = None,
) -> Dict[str, Dict[str, Any]]:
    """Extract a file or directory and return JSON-ready schema dictionaries.

    Returns:
        Mapping of file path to ``Schema.to_dict()``. For a single file the
        key is its basename.
    """
    source = os.path.abspath(source)

    if os.path.isfile(source):
        schema = extract_file(source, registry)
        return {os.path.basename(source): schema.to_dict()}
    if os.path.isdir(source):
        schemas, stats = extract_directory(source, registry)
        logger.info(f"Extraction stats: {stats}")
        return {path: schema.to_dict() for path, schema in schemas.items()}
    raise FileNotFoundError(f"Source not found: {source}")
