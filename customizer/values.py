"""
Default value classification for Customizer assignments.
"""

import math
from typing import Optional, Tuple, Union

from customizer.config import NUMBER_PATTERN
from customizer.models import DefaultValue

Number = Union[int, float]


def parse_number(text: str) -> Optional[Number]:
    """Parse a numeric literal, or return None if ``text`` is not one.

    Literals without a decimal point or exponent become ``int``; all others
    become ``float``. Literals that overflow to infinity, or integers past
    the interpreter's digit limit, are not treated as numbers.
    """
    candidate = text.strip()
    if not NUMBER_PATTERN.match(candidate):
        return None
    if "." in candidate or "e" in candidate.lower():
        value = float(candidate)
        return value if math.isfinite(value) else None
    try:
        return int(candidate)
    except ValueError:
        return None


def is_integer_literal(text: str) -> bool:
    """Check that a literal has no decimal point and an integral value."""
    candidate = text.strip()
    value = parse_number(candidate)
    if value is None or "." in candidate:
        return False
    if isinstance(value, int):
        return True
    return value.is_integer()


def classify_default(value_text: str) -> Tuple[str, DefaultValue]:
    """Classify the right-hand side of an assignment.

    Precedence:
        1. Wrapped in matching quotes -> ("string", unquoted content)
        2. Numeric literal -> ("integer", int) or ("number", float)
        3. ``true`` / ``false`` -> ("boolean", bool)
        4. Anything else -> ("string", raw trimmed text)

    Args:
        value_text: Text between ``=`` and ``;``.

    Returns:
        A tuple of (type, value).

    Example:
        >>> classify_default(' 2.5 ')
        ('number', 2.5)
    """
    trimmed = value_text.strip()

    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in ("\"", "'"):
        return "string", trimmed[1:-1]

    number = parse_number(trimmed)
    if number is not None:
        if is_integer_literal(trimmed):
            return "integer", int(number)
        return "number", float(number)

    if trimmed in ("true", "false"):
        return "boolean", trimmed == "true"

    return "string", trimmed


def format_value(value_type: str, value: DefaultValue) -> str:
    """Render a typed value back to OpenSCAD literal text.

    This is the inverse of ``classify_default`` and is also the form used
    for ``-D name=value`` overrides.
    """
    if value_type == "boolean":
        return "true" if value else "false"
    if value_type == "integer":
        return str(int(value))
    if value_type == "number":
        text = repr(float(value))
        if "." not in text and "e" in text:
            mantissa, exponent = text.split("e", 1)
            text = f"{mantissa}.0e{exponent}"
        return text
    return f"\"{value}\""
