"""
Bracketed hint grammar for Customizer parameters.

A hint is the ``[ ... ]`` annotation in the trailing comment of an
assignment, e.g. ``width = 50; // [10:100]``. Interpretation follows a fixed
precedence implemented as an ordered list of named matchers; the first
matcher that accepts the hint text wins:

    color  ->  ColorHint
    file   ->  FileHint
    range  ->  RangeHint
    enum   ->  EnumHint   (always matches)
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from customizer.config import TOGGLE_VALUES
from customizer.values import Number, is_integer_literal, parse_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorHint:
    """``[color]``"""


@dataclass(frozen=True)
class FileHint:
    """``[file]`` or ``[file:stl,obj]``"""

    extensions: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class RangeHint:
    """``[min:max]`` or ``[min:step:max]``.

    ``value_type`` is set only for the three-part form, where the step
    decides between integer and number.
    """

    minimum: Number
    maximum: Number
    step: Optional[Number] = None
    value_type: Optional[str] = None


@dataclass(frozen=True)
class EnumHint:
    """``[a, b, "c, d"]``"""

    values: Tuple[str, ...]

    @property
    def is_toggle(self) -> bool:
        lowered = {value.lower() for value in self.values}
        return len(self.values) == 2 and lowered == TOGGLE_VALUES


Hint = Union[ColorHint, FileHint, RangeHint, EnumHint]


def parse_enum_values(text: str) -> List[str]:
    """Split an enumeration on commas that are not inside quotes.

    Quotes may be single or double; a quote preceded by a backslash does not
    open or close a quoted run, and a quote of the other kind inside a run is
    kept as content. Tokens are trimmed and empty tokens dropped.

    Example:
        >>> parse_enum_values('"a, b", c')
        ['a, b', 'c']
    """
    values: List[str] = []
    current: List[str] = []
    quote_char: Optional[str] = None

    for idx, char in enumerate(text):
        escaped = idx > 0 and text[idx - 1] == "\\"
        if char in ("\"", "'") and not escaped:
            if quote_char is None:
                quote_char = char
            elif char == quote_char:
                quote_char = None
            else:
                current.append(char)
        elif char == "," and quote_char is None:
            token = "".join(current).strip()
            if token:
                values.append(token)
            current = []
        else:
            current.append(char)

    token = "".join(current).strip()
    if token:
        values.append(token)
    return values


def match_color(hint: str) -> Optional[ColorHint]:
    if hint.strip().lower() == "color":
        return ColorHint()
    return None


def match_file(hint: str) -> Optional[FileHint]:
    text = hint.strip()
    if not text.lower().startswith("file"):
        return None
    if ":" not in text:
        return FileHint()
    ext_part = text.split(":", 1)[1]
    return FileHint(extensions=tuple(ext.strip() for ext in ext_part.split(",")))


def match_range(hint: str) -> Optional[RangeHint]:
    parts = [part.strip() for part in hint.split(":")]
    if len(parts) not in (2, 3):
        return None

    numbers = [parse_number(part) for part in parts]
    if any(number is None for number in numbers):
        return None

    if len(numbers) == 2:
        return RangeHint(minimum=numbers[0], maximum=numbers[1])

    step_text = parts[1]
    value_type = "integer" if is_integer_literal(step_text) else "number"
    return RangeHint(
        minimum=numbers[0],
        step=numbers[1],
        maximum=numbers[2],
        value_type=value_type,
    )


def match_enum(hint: str) -> EnumHint:
    return EnumHint(values=tuple(parse_enum_values(hint)))


# Order is precedence
HINT_MATCHERS: Tuple[Tuple[str, Callable[[str], Optional[Hint]]], ...] = (
    ("color", match_color),
    ("file", match_file),
    ("range", match_range),
    ("enum", match_enum),
)


def parse_hint(hint: str) -> Hint:
    """Interpret the text between the brackets of a hint.

    Args:
        hint: Hint text without the surrounding brackets.

    Returns:
        The first variant accepted by ``HINT_MATCHERS``. Malformed ranges
        fall through to ``EnumHint``.
    """
    for name, matcher in HINT_MATCHERS:
        result = matcher(hint)
        if result is not None:
            logger.debug("Hint [%s] matched as %s", hint, name)
            return result
    return match_enum(hint)
