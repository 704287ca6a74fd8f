"""Live puzzle state.

``PuzzleState`` is the only place where an arrangement is mutated. Every
operation either completes fully or raises before touching the state.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from permgame.errors import InvalidMoveError, PolicyViolation
from permgame.models import Move, Permutation, PuzzleConfig
from permgame.operations import (
    apply_permutation,
    build_permutation,
    format_cycle_notation,
    invert_permutation,
    validate_permutation,
)
from permgame.parser import parse_cycle_notation

logger = logging.getLogger("permgame.game")


class PuzzleState:
    """Mutable puzzle instance built from a ``PuzzleConfig``.

    Attributes:
        config: Immutable configuration the state was created from.
        moves: Playable moves; starts as the generating set.
        move_count: Number of moves applied so far.
        history: Indices of applied moves, oldest first, as they were at the
            time each move was applied (removing a move shifts later indices).
        applied_moves: The applied ``Move`` objects, parallel to ``history``.
    """

    def __init__(self, config: PuzzleConfig):
        self.config = config
        self.moves: list[Move] = list(config.generators)
        self._arrangement = apply_permutation(config.initial_permutation, range(config.length))
        self.move_count = 0
        self.history: list[int] = []
        self.applied_moves: list[Move] = []

    @property
    def length(self) -> int:
        return self.config.length

    def snapshot_arrangement(self) -> tuple[int, ...]:
        """Read-only copy of the current arrangement."""
        return tuple(self._arrangement)

    def is_solved(self) -> bool:
        return tuple(self._arrangement) == self.config.goal

    def reset(self) -> PuzzleState:
        """Return a fresh state derived from the same configuration."""
        return PuzzleState(self.config)

    def _move_at(self, index: int) -> Move:
        if isinstance(index, bool) or not isinstance(index, int):
            raise InvalidMoveError(f"Move index must be an integer, got {index!r}")
        if not (0 <= index < len(self.moves)):
            raise InvalidMoveError(f"Move index {index} out of range (0..{len(self.moves) - 1})")
        return self.moves[index]

    def apply_move(self, index: int) -> None:
        """Permute the arrangement by move ``index``.

        Raises:
            InvalidMoveError: If ``index`` does not name a move; the
                arrangement is left unchanged.
        """
        move = self._move_at(index)
        self._arrangement = apply_permutation(move.permutation, self._arrangement)
        self.move_count += 1
        self.history.append(index)
        self.applied_moves.append(move)
        logger.debug("Applied move %d %s -> %s", index, move.name, self._arrangement)
        if self.is_solved():
            logger.info("Puzzle solved after %d moves", self.move_count)

    def apply_sequence(self, indices: Iterable[int]) -> None:
        """Apply several moves; all indices are checked before any is applied."""
        indices = list(indices)
        for index in indices:
            self._move_at(index)
        for index in indices:
            self.apply_move(index)

    def add_move(self, move: str | Sequence[int], name: str | None = None) -> Move:
        """Author a new move (free-authoring mode only).

        Args:
            move: Cycle-notation text or an explicit permutation.
            name: Display name; defaults to the move's cycle notation.

        Raises:
            PolicyViolation: If the level locks its initial items (it has a
                generating set).
            InvalidMoveError: If the move is malformed or has the wrong length.
        """
        if self.config.lock_initial_items:
            raise PolicyViolation("Moves cannot be authored in a level with a generating set")
        try:
            if isinstance(move, str):
                permutation = build_permutation(parse_cycle_notation(move, self.length), self.length)
            else:
                validate_permutation(move, self.length)
                permutation = tuple(move)
        except ValueError as e:
            raise InvalidMoveError(f"Invalid move: {e}") from e
        authored = Move(name=name or format_cycle_notation(permutation), permutation=permutation)
        self.moves.append(authored)
        return authored

    def remove_move(self, index: int) -> Move:
        if not self.config.allowed_deletion:
            raise PolicyViolation("Deleting moves is not allowed")
        move = self._move_at(index)
        del self.moves[index]
        return move

    def duplicate_move(self, index: int) -> Move:
        if not self.config.allowed_duplication:
            raise PolicyViolation("Duplicating moves is not allowed")
        move = self._move_at(index)
        self.moves.append(move)
        return move

    def invert_move(self, index: int) -> Move:
        """Append the inverse of move ``index``."""
        if not self.config.allowed_inversion:
            raise PolicyViolation("Inverting moves is not allowed")
        move = self._move_at(index)
        inverse = Move(name=move.name + "'", permutation=invert_permutation(move.permutation))
        self.moves.append(inverse)
        return inverse

    def rearrange(self, i: int, j: int) -> None:
        """Swap the items at positions ``i`` and ``j`` directly.

        Raises:
            PolicyViolation: If initial items are locked.
            InvalidMoveError: If a position is out of range.
        """
        if self.config.lock_initial_items:
            raise PolicyViolation("Initial items are locked; only moves may be applied")
        for position in (i, j):
            if isinstance(position, bool) or not isinstance(position, int):
                raise InvalidMoveError(f"Position must be an integer, got {position!r}")
            if not (0 <= position < self.length):
                raise InvalidMoveError(f"Position {position} out of range")
        self._arrangement[i], self._arrangement[j] = self._arrangement[j], self._arrangement[i]

    def __repr__(self) -> str:
        return (
            f"PuzzleState(level={self.config.level_id!r}, arrangement={self._arrangement}, "
            f"moves={len(self.moves)}, solved={self.is_solved()})"
        )
