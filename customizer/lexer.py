"""
Lexical stripping and scope tracking for OpenSCAD source lines.

The stripper blanks string literals and drops comment text so that brace
counting is never confused by braces inside strings or comments. The scope
tracker uses the stripped text to decide which lines sit at top level.
"""

import logging
from typing import Tuple

logger = logging.getLogger(__name__)


def strip_line(line: str, in_block_comment: bool) -> Tuple[str, bool]:
    """Remove string and comment content from a single line.

    String literals (single or double quoted, backslash-escapable) are
    replaced by blanks, quotes included. ``//`` truncates the line and
    ``/* ... */`` content is dropped. Block comments may span lines, which
    is why the comment state is threaded through calls.

    Args:
        line: Raw source line without its newline.
        in_block_comment: Whether the previous line ended inside ``/* */``.

    Returns:
        A tuple of (stripped_line, in_block_comment) where the flag is the
        block-comment state at the end of this line.

    Example:
        >>> strip_line('s = "{"; // }', False)
        ('s =    ; ', False)
    """
    output = []
    in_string = False
    string_char = ""
    escape_next = False
    idx = 0
    length = len(line)

    while idx < length:
        char = line[idx]
        nxt = line[idx + 1] if idx + 1 < length else ""

        if in_block_comment:
            if char == "*" and nxt == "/":
                in_block_comment = False
                idx += 2
            else:
                idx += 1
            continue

        if not in_string and char == "/" and nxt == "*":
            in_block_comment = True
            idx += 2
            continue

        if not in_string and char == "/" and nxt == "/":
            break

        if not in_string and char in ("\"", "'"):
            in_string = True
            string_char = char
            output.append(" ")
            idx += 1
            continue

        if in_string:
            if not escape_next and char == "\\":
                escape_next = True
                idx += 1
                continue
            if not escape_next and char == string_char:
                in_string = False
                string_char = ""
            escape_next = False
            output.append(" ")
            idx += 1
            continue

        output.append(char)
        idx += 1

    # Strings never span lines; an unterminated one simply ends here.
    return "".join(output), in_block_comment


class ScopeTracker:
    """Track brace nesting depth and block-comment state across lines.

    A line is at top level when the tracker reports ``depth == 0`` and no
    block comment is open at line entry. ``feed`` must be called once per
    line after recognition logic has run for that line.
    """

    def __init__(self):
        self.depth = 0
        self.in_block_comment = False
        self.underflows = 0

    @property
    def at_top_level(self) -> bool:
        """Whether the next line is eligible for group/assignment matching."""
        return self.depth == 0 and not self.in_block_comment

    def feed(self, raw_line: str, line_number: int = 0) -> str:
        """Strip a raw line and update depth from its remaining braces.

        Args:
            raw_line: Unmodified source line.
            line_number: 1-indexed line number, used for diagnostics only.

        Returns:
            The stripped line.
        """
        stripped, self.in_block_comment = strip_line(raw_line, self.in_block_comment)
        for char in stripped:
            if char == "{":
                self.depth += 1
            elif char == "}":
                if self.depth == 0:
                    self.underflows += 1
                    logger.warning(
                        "Unbalanced '}' at line %d; scope depth clamped at 0",
                        line_number,
                    )
                    continue
                self.depth -= 1
        return stripped
