"""JSON-with-comments parsing for ``pkg.jsonc`` manifests.

Accepts JSON plus ``//`` line comments and ``/* */`` block comments. Comment
markers inside string literals are left alone.
"""

import json
from typing import Any

from .errors import ParseError


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments that sit outside string literals.

    An unterminated block comment swallows the rest of the input. A ``/`` at
    the very end of the input is kept.
    """
    out: list[str] = []
    in_string = False
    escaped = False
    i = 0
    n = len(text)

    while i < n:
        char = text[i]

        if in_string:
            out.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            i += 1
            continue

        if char == "/" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == "/":
                # Keep the line terminator itself
                while i < n and text[i] != "\n":
                    i += 1
                continue
            if nxt == "*":
                end = text.find("*/", i + 2)
                i = n if end == -1 else end + 2
                continue

        if char == '"':
            in_string = True
        out.append(char)
        i += 1

    return "".join(out)


def parse_jsonc(text: str) -> Any:
    """Parse JSON-with-comments text.

    Args:
        text: Raw file contents

    Returns:
        Whatever ``json.loads`` returns for the comment-free text

    Raises:
        ParseError: The text is not valid JSON once comments are removed
    """
    stripped = strip_comments(text)
    try:
        return json.loads(stripped)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, text=stripped, position=e.pos, lineno=e.lineno, colno=e.colno) from e


def parse_json(text: str) -> Any:
    """Parse strict JSON, reporting failures as ParseError."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, text=text, position=e.pos, lineno=e.lineno, colno=e.colno) from e
