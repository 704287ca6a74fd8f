"""Cycle-notation parser.

Notation: a sequence of parenthesized groups, each a comma- or
whitespace-delimited list of integer positions, e.g. ``"(0,1,2)(3 4)"``.
Groups in one string are independent cycles applied simultaneously.
"""

from __future__ import annotations

import re

from permgame.errors import ParseError
from permgame.models import Cycle

_DELIMITER = re.compile(r"\s*,\s*|\s+")
_INTEGER = re.compile(r"-?[0-9]+")


def parse_cycle_notation(text: str | None, length: int | None = None) -> list[Cycle]:
    """Parse cycle notation into a list of cycles.

    Args:
        text: Notation string. ``None`` and blank strings yield no cycles.
        length: When given, every index must lie in ``[0, length)``.

    Returns:
        Cycles in the order written; positions inside each cycle keep their
        written order (it encodes the rotation direction).

    Raises:
        ParseError: Unbalanced or nested parentheses, characters outside a
            group, empty or non-integer tokens, out-of-range indices.
    """
    if text is None:
        return []
    if not isinstance(text, str):
        raise ParseError("Cycle notation must be a string", repr(text))

    cycles: list[Cycle] = []
    pos = 0
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue
        if ch == "(":
            end = text.find(")", pos + 1)
            if end == -1:
                raise ParseError("Unbalanced parenthesis", text[pos:], text)
            body = text[pos + 1 : end]
            if "(" in body:
                raise ParseError("Nested parenthesis", text[pos : end + 1], text)
            cycles.append(_parse_group(body, text, length))
            pos = end + 1
        elif ch == ")":
            raise ParseError("Unbalanced parenthesis", text[: pos + 1], text)
        else:
            nxt = text.find("(", pos)
            fragment = text[pos:] if nxt == -1 else text[pos:nxt]
            raise ParseError("Unexpected text outside a cycle", fragment.strip(), text)
    return cycles


def _parse_group(body: str, text: str, length: int | None) -> Cycle:
    stripped = body.strip()
    if not stripped:
        return ()
    positions: list[int] = []
    for token in _DELIMITER.split(stripped):
        if not token:
            raise ParseError("Empty index in cycle", f"({body})", text)
        if not _INTEGER.fullmatch(token):
            raise ParseError("Not an integer index", token, text)
        index = int(token)
        if index < 0 or (length is not None and index >= length):
            raise ParseError("Index out of range", token, text)
        positions.append(index)
    return tuple(positions)
