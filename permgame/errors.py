"""Exception taxonomy of the puzzle engine.

Assembly-time errors (``ParseError``, ``OverlapError``, ``SchemaError``) are
``ValueError`` subclasses: a level definition is unusable. Play-time errors
(``InvalidMoveError``, ``PolicyViolation``) are recoverable; the puzzle state
is left untouched when they are raised.
"""

from __future__ import annotations


class PermGameError(Exception):
    """Base class for all engine errors."""


class ParseError(PermGameError, ValueError):
    """Malformed cycle notation.

    Attributes:
        fragment: Offending substring of the input.
        text: Full input text.
    """

    def __init__(self, message: str, fragment: str, text: str | None = None):
        super().__init__(f"{message}: {fragment!r}")
        self.fragment = fragment
        self.text = text


class OverlapError(PermGameError, ValueError):
    """A position appears more than once in cycles built together."""

    def __init__(self, position: int):
        super().__init__(f"Position {position} appears in more than one cycle")
        self.position = position


class SchemaError(PermGameError, ValueError):
    """Invalid level schema; ``field`` names the failing entry."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class InvalidMoveError(PermGameError, IndexError):
    pass


class PolicyViolation(PermGameError, PermissionError):
    pass
