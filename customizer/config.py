"""
Configuration constants for OpenSCAD Customizer parameter extraction.

Defines the line patterns, reserved group names, type vocabularies and
heuristic rule tables used by the schema extractor.
"""

import re
from typing import Pattern, Set, Tuple

# Group header: a block comment holding only "[ label ]", optionally followed
# by a line comment
GROUP_HEADER_PATTERN: Pattern[str] = re.compile(
    r"^/\*\s*\[\s*([^\]]+?)\s*\]\s*\*/\s*(?://.*)?$"
)

# Top-level assignment: name = value;
ASSIGNMENT_PATTERN: Pattern[str] = re.compile(r"^([$]?[A-Za-z_][A-Za-z0-9_]*)\s*=\s*([^;]+);")

# Trailing hint after the terminating ';'
BRACKET_HINT_PATTERN: Pattern[str] = re.compile(r"//\s*\[([^\]]+)\]")

# Trailing plain comment after the terminating ';'
TRAILING_COMMENT_PATTERN: Pattern[str] = re.compile(r"//\s*(.+)$")

# Visibility directive inside comments
DEPENDS_PATTERN: Pattern[str] = re.compile(
    r"@depends\s*\(\s*([$]?[A-Za-z_][A-Za-z0-9_]*)\s*(==|!=)\s*([^\s)]+)\s*\)",
    re.IGNORECASE,
)

# Numeric literal accepted by the value classifier and range hints
NUMBER_PATTERN: Pattern[str] = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# include <...> / use <...>
LIBRARY_DIRECTIVE_PATTERN: Pattern[str] = re.compile(r"(?:include|use)\s*<([^>]+)>")

# Reserved group names
HIDDEN_GROUP: str = "Hidden"
DEFAULT_GROUP: str = "General"

# Parameter types
PARAMETER_TYPES: Set[str] = {
    "string",
    "integer",
    "number",
    "boolean",
    "color",
    "file",
}

NUMERIC_TYPES: Set[str] = {"integer", "number"}

# UI widget kinds
UI_TYPES: Set[str] = {
    "input",
    "slider",
    "select",
    "toggle",
    "color",
    "file",
}

DEFAULT_UI_TYPE: str = "input"

# Enumerations rendered as a toggle switch
TOGGLE_VALUES: Set[str] = {"yes", "no"}

# Unit rules applied to the description text (first match wins)
DESCRIPTION_UNIT_RULES: Tuple[Tuple[Pattern[str], str], ...] = (
    (re.compile(r"(?<![a-z])(?:mm|millimeters?)(?![a-z])", re.IGNORECASE), "mm"),
    (re.compile(r"(?<![a-z])(?:cm|centimeters?)(?![a-z])", re.IGNORECASE), "cm"),
    (re.compile(r"(?<![a-z])(?:deg|degrees?)(?![a-z])|°", re.IGNORECASE), "°"),
    (re.compile(r"(?<![a-z])inch(?:es)?(?![a-z])|\(\s*in\s*\)|(?<=\d)\s*in(?![a-z])", re.IGNORECASE), "in"),
    (re.compile(r"%|(?<![a-z])percent(?![a-z])", re.IGNORECASE), "%"),
)

# Unit rules applied to the parameter name
ANGLE_NAME_PATTERN: Pattern[str] = re.compile(r"angle|rotation|twist|tilt", re.IGNORECASE)
LENGTH_NAME_PATTERN: Pattern[str] = re.compile(
    r"(?:_width|_height|_depth|_thickness|_diameter|_radius|_length|_size)$"
    r"|^(?:width|height|depth|thickness|diameter|radius|length)$",
    re.IGNORECASE,
)

NAME_UNIT_RULES: Tuple[Tuple[Pattern[str], str], ...] = (
    (ANGLE_NAME_PATTERN, "°"),
    (LENGTH_NAME_PATTERN, "mm"),
)

# OpenSCAD file extensions
SCAD_EXTENSIONS: Set[str] = {".scad"}

# Directories skipped during discovery
SKIPPED_DIRECTORIES: Set[str] = {
    "build",
    "dist",
    "out",
    "node_modules",
    "venv",
    "__pycache__",
}
