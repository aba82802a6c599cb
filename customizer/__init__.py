"""
OpenSCAD Customizer schema extraction.

Reads the annotated source of a parametric OpenSCAD model and recovers its
parameter schema: ordered groups, typed parameters with UI hints, ranges,
enumerations, units and visibility dependencies, plus referenced libraries.
"""

from customizer.models import Dependency, Group, Parameter, Schema
from customizer.lexer import ScopeTracker, strip_line
from customizer.values import classify_default, format_value
from customizer.hints import (
    ColorHint,
    EnumHint,
    FileHint,
    RangeHint,
    parse_enum_values,
    parse_hint,
)
from customizer.heuristics import extract_dependency, infer_unit
from customizer.libraries import BUILTIN_LIBRARIES, LibraryDefinition, detect_libraries
from customizer.extractor import (
    ExtractionStats,
    SchemaDiagnostics,
    discover_scad_files,
    extract_directory,
    extract_file,
    extract_file_with_diagnostics,
    extract_schema,
    extract_schema_with_diagnostics,
    extract_to_dict,
)
from customizer.json_schema import to_json_schema

__all__ = [
    # Data models
    "Dependency",
    "Group",
    "Parameter",
    "Schema",
    "SchemaDiagnostics",
    "ExtractionStats",
    # Lexical layer
    "ScopeTracker",
    "strip_line",
    # Grammar pieces
    "classify_default",
    "format_value",
    "ColorHint",
    "EnumHint",
    "FileHint",
    "RangeHint",
    "parse_enum_values",
    "parse_hint",
    "extract_dependency",
    "infer_unit",
    # Libraries
    "BUILTIN_LIBRARIES",
    "LibraryDefinition",
    "detect_libraries",
    # High-level orchestration
    "extract_schema",
    "extract_schema_with_diagnostics",
    "extract_file",
    "extract_file_with_diagnostics",
    "extract_directory",
    "extract_to_dict",
    "discover_scad_files",
    "to_json_schema",
]
