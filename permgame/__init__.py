"""Core package of the permutation puzzle engine.

Exports the data model, the cycle-notation parser, the permutation builder,
level assembly and the live puzzle state.
"""

from permgame.assembler import assemble  # noqa: F401
from permgame.errors import (  # noqa: F401
    InvalidMoveError,
    OverlapError,
    ParseError,
    PermGameError,
    PolicyViolation,
    SchemaError,
)
from permgame.game import PuzzleState  # noqa: F401
from permgame.models import LevelSchema, Move, PuzzleConfig  # noqa: F401
from permgame.operations import build_permutation  # noqa: F401
from permgame.parser import parse_cycle_notation  # noqa: F401

__all__ = [
    "assemble",
    "build_permutation",
    "parse_cycle_notation",
    "PuzzleState",
    "PuzzleConfig",
    "LevelSchema",
    "Move",
    "PermGameError",
    "ParseError",
    "OverlapError",
    "SchemaError",
    "InvalidMoveError",
    "PolicyViolation",
]
