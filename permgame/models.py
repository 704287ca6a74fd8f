"""Core data structures of the permutation puzzle engine.

This module defines:
    Cycle        -- ordered positions, item at p0 moves to p1, ..., pk to p0.
    Permutation  -- index = source position, value = destination position.
    Move         -- named permutation playable as a single action.
    LevelSchema  -- raw level record as supplied by a level catalog.
    PuzzleConfig -- immutable, fully assembled puzzle configuration.
"""

from dataclasses import dataclass, field

Cycle = tuple[int, ...]
Permutation = tuple[int, ...]
Arrangement = list[int]


@dataclass(frozen=True)
class Move:
    """Named permutation.

    Attributes:
        name: Display name (cycle-notation text for schema generators).
        permutation: Position mapping of the move.
    """

    name: str
    permutation: Permutation


@dataclass(frozen=True)
class LevelSchema:
    """Raw level record before parsing.

    Attributes:
        length: Number of positions.
        initial_items: Cycle-notation strings composed into the start layout.
        generating_set: Cycle-notation strings, one per generator.
        goal: Cycle-notation strings describing the goal layout (empty means
            canonical labels).
        level_id: Catalog identifier, if any.
        title: Human readable title, if any.
    """

    length: int
    initial_items: tuple[str, ...] = ()
    generating_set: tuple[str, ...] = ()
    goal: tuple[str, ...] = ()
    level_id: str | None = None
    title: str | None = None


@dataclass(frozen=True)
class PuzzleConfig:
    """Fully assembled puzzle configuration.

    ``lock_initial_items`` is derived from ``generators`` once, at
    construction, and cannot be passed in. The initial permutation and every
    generator must be bijections on ``range(length)`` and ``goal`` a
    rearrangement of the canonical labels; otherwise ``ValueError``.
    """

    length: int
    initial_permutation: Permutation
    generators: tuple[Move, ...] = ()
    goal: tuple[int, ...] | None = None
    allowed_deletion: bool = False
    allowed_duplication: bool = False
    allowed_inversion: bool = False
    level_id: str | None = None
    title: str | None = None
    lock_initial_items: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "generators", tuple(self.generators))
        object.__setattr__(self, "lock_initial_items", len(self.generators) > 0)
        if self.goal is None:
            object.__setattr__(self, "goal", tuple(range(self.length)))
        else:
            object.__setattr__(self, "goal", tuple(self.goal))

        from permgame.operations import validate_permutation

        validate_permutation(self.initial_permutation, self.length)
        for move in self.generators:
            try:
                validate_permutation(move.permutation, self.length)
            except ValueError as e:
                raise ValueError(f"Generator {move.name!r}: {e}") from e
        if sorted(self.goal) != list(range(self.length)):
            raise ValueError(f"Goal {self.goal} is not an arrangement of {self.length} items")
