"""
Unit inference and visibility-dependency extraction.

Both are ordered rule tables defined in ``customizer.config``; this module
only applies them.
"""

from typing import Optional

from customizer.config import (
    DEPENDS_PATTERN,
    DESCRIPTION_UNIT_RULES,
    NAME_UNIT_RULES,
    NUMERIC_TYPES,
)
from customizer.models import Dependency


def infer_unit(name: str, value_type: str, description: str = "") -> Optional[str]:
    """Guess the unit of a numeric parameter.

    Description rules are tried before name rules; the first match wins.

    Args:
        name: Parameter name.
        value_type: Final parameter type.
        description: Parameter description.

    Returns:
        A unit label (``mm``, ``cm``, ``°``, ``in``, ``%``) or None.

    Example:
        >>> infer_unit("wall_thickness", "number")
        'mm'
    """
    if value_type not in NUMERIC_TYPES:
        return None

    for pattern, unit in DESCRIPTION_UNIT_RULES:
        if description and pattern.search(description):
            return unit

    for pattern, unit in NAME_UNIT_RULES:
        if pattern.search(name):
            return unit

    return None


def extract_dependency(*comments: str) -> Optional[Dependency]:
    """Find the first ``@depends(name op value)`` directive in the comments."""
    text = " ".join(comment for comment in comments if comment)
    match = DEPENDS_PATTERN.search(text)
    if not match:
        return None
    return Dependency(
        parameter=match.group(1),
        operator=match.group(2),
        value=match.group(3),
    )


def strip_directives(text: str) -> str:
    """Remove ``@depends(...)`` directives from description text."""
    if not DEPENDS_PATTERN.search(text):
        return text
    return " ".join(DEPENDS_PATTERN.sub(" ", text).split())
