"""Search utilities for level design: shortest solutions and scrambles.

Breadth-first search over arrangements reachable with the generator moves.
State spaces of permutation puzzles grow factorially, so every search is
capped by ``max_states``.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import List, Optional, Sequence

from permgame.game import PuzzleState
from permgame.models import PuzzleConfig
from permgame.operations import apply_permutation

logger = logging.getLogger("permgame.solver")

DEFAULT_MAX_STATES = 200_000


def solve(
    config: PuzzleConfig,
    arrangement: Optional[Sequence[int]] = None,
    max_states: int = DEFAULT_MAX_STATES,
) -> Optional[List[int]]:
    """Find a shortest move sequence from ``arrangement`` to the goal.

    Args:
        config: Assembled puzzle; its generators are the allowed moves.
        arrangement: Start arrangement; defaults to the initial one.
        max_states: Maximum number of distinct arrangements to visit.

    Returns:
        List of generator indices (``[]`` if already solved) or ``None`` when
        the goal is unreachable within ``max_states``.
    """
    if arrangement is None:
        arrangement = apply_permutation(config.initial_permutation, range(config.length))
    start = tuple(arrangement)
    goal = config.goal
    if start == goal:
        return []

    parents: dict[tuple, tuple[tuple, int]] = {start: (start, -1)}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for index, move in enumerate(config.generators):
            nxt = tuple(apply_permutation(move.permutation, current))
            if nxt in parents:
                continue
            parents[nxt] = (current, index)
            if nxt == goal:
                path = _reconstruct(parents, nxt)
                logger.info("Solution of length %d found after %d states", len(path), len(parents))
                return path
            if len(parents) >= max_states:
                logger.warning("Search stopped at max_states=%d", max_states)
                return None
            queue.append(nxt)
    logger.info("Goal unreachable; explored %d states", len(parents))
    return None


def _reconstruct(parents: dict[tuple, tuple[tuple, int]], state: tuple) -> List[int]:
    path: List[int] = []
    while True:
        previous, index = parents[state]
        if index < 0:
            break
        path.append(index)
        state = previous
    path.reverse()
    return path


def count_reachable(config: PuzzleConfig, max_states: int = DEFAULT_MAX_STATES) -> int:
    """Number of arrangements reachable from the initial one (capped)."""
    start = tuple(apply_permutation(config.initial_permutation, range(config.length)))
    seen = {start}
    queue = deque([start])
    while queue and len(seen) < max_states:
        current = queue.popleft()
        for move in config.generators:
            nxt = tuple(apply_permutation(move.permutation, current))
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
                if len(seen) >= max_states:
                    break
    return len(seen)


def scramble(state: PuzzleState, moves: int, rng: Optional[random.Random] = None) -> List[int]:
    """Apply ``moves`` random moves to ``state``.

    Args:
        state: Puzzle state mutated in place.
        moves: Number of moves to apply.
        rng: Optional random.Random instance (for reproducibility).

    Returns:
        Applied move indices.
    """
    if rng is None:
        rng = random.Random()
    if moves < 0:
        raise ValueError(f"Negative number of scramble moves: {moves}")
    if not state.moves:
        return []
    indices = [rng.randrange(len(state.moves)) for _ in range(moves)]
    state.apply_sequence(indices)
    return indices
