"""Permutation utilities: construction, validation and algebra.

Concepts
--------
Permutation
    A tuple ``perm`` of length ``n`` where ``perm[i]`` is the destination of
    the item currently at position ``i``. Every permutation handled by the
    engine is a bijection on ``range(n)``; the builder guarantees it by
    rejecting cycles that share a position.
"""

import math
from typing import Iterable, List, Sequence

from permgame.errors import OverlapError
from permgame.models import Cycle, Permutation


def identity_permutation(length: int) -> Permutation:
    """Return the identity permutation of size ``length``."""
    if length < 0:
        raise ValueError(f"Negative permutation length: {length}")
    return tuple(range(length))


def build_permutation(cycles: Iterable[Cycle], length: int) -> Permutation:
    """Build a permutation from disjoint cycles.

    Starts from the identity and, for each cycle ``(p0, ..., pk)``, sets
    ``perm[p0] = p1, ..., perm[pk] = p0``. Cycles of length 0 or 1 change
    nothing. Positions not mentioned are fixed points.

    Args:
        cycles: Cycles applied simultaneously.
        length: Size of the permutation.

    Returns:
        Permutation as a tuple.

    Raises:
        OverlapError: If a position occurs twice, within one cycle or across
            cycles.
        ValueError: If a position lies outside ``[0, length)``.
    """
    perm = list(identity_permutation(length))
    seen: set[int] = set()
    for cycle in cycles:
        for position in cycle:
            if not (0 <= position < length):
                raise ValueError(f"Position out of range: {position}")
            if position in seen:
                raise OverlapError(position)
            seen.add(position)
        if len(cycle) < 2:
            continue
        for i, position in enumerate(cycle):
            perm[position] = cycle[(i + 1) % len(cycle)]
    return tuple(perm)


def validate_permutation(permutation: Sequence[int], length: int) -> bool:
    """Validate that ``permutation`` is a bijection on ``range(length)``.

    Returns:
        True if valid (so it can be used inside assertions).

    Raises:
        ValueError: On wrong length, non-integer or out-of-range values, or
            repeated destinations.
    """
    if len(permutation) != length:
        raise ValueError(f"Permutation length {len(permutation)} != {length}")
    seen = [False] * length
    for value in permutation:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Non-integer position: {value!r}")
        if not (0 <= value < length):
            raise ValueError(f"Position out of range: {value}")
        if seen[value]:
            raise ValueError(f"Position {value} is a destination twice")
        seen[value] = True
    return True


def apply_permutation(permutation: Sequence[int], arrangement: Sequence) -> list:
    """Move every item to its destination: ``new[perm[i]] = old[i]``."""
    if len(permutation) != len(arrangement):
        raise ValueError(
            f"Permutation length {len(permutation)} != arrangement length {len(arrangement)}"
        )
    moved = list(arrangement)
    for source, destination in enumerate(permutation):
        moved[destination] = arrangement[source]
    return moved


def invert_permutation(permutation: Sequence[int]) -> Permutation:
    inverse = [0] * len(permutation)
    for source, destination in enumerate(permutation):
        inverse[destination] = source
    return tuple(inverse)


def compose_permutations(first: Sequence[int], second: Sequence[int]) -> Permutation:
    """Return the permutation equal to applying ``first`` and then ``second``."""
    if len(first) != len(second):
        raise ValueError("Cannot compose permutations of different lengths")
    return tuple(second[first[i]] for i in range(len(first)))


def permutation_to_cycles(permutation: Sequence[int]) -> List[Cycle]:
    """Decompose into non-trivial cycles.

    Each cycle starts at its smallest position; cycles are ordered by that
    position. Fixed points are omitted.
    """
    visited = [False] * len(permutation)
    cycles: List[Cycle] = []
    for start in range(len(permutation)):
        if visited[start]:
            continue
        cycle = []
        position = start
        while not visited[position]:
            visited[position] = True
            cycle.append(position)
            position = permutation[position]
        if len(cycle) > 1:
            cycles.append(tuple(cycle))
    return cycles


def format_cycle_notation(permutation: Sequence[int]) -> str:
    """Render a permutation in cycle notation, ``"()"`` for the identity."""
    cycles = permutation_to_cycles(permutation)
    if not cycles:
        return "()"
    return "".join("(" + ",".join(map(str, c)) + ")" for c in cycles)


def permutation_order(permutation: Sequence[int]) -> int:
    """Smallest k > 0 such that applying the permutation k times is identity."""
    order = 1
    for cycle in permutation_to_cycles(permutation):
        order = order * len(cycle) // math.gcd(order, len(cycle))
    return order


def permutation_parity(permutation: Sequence[int]) -> int:
    """Return 0 for even permutations and 1 for odd ones."""
    transpositions = sum(len(c) - 1 for c in permutation_to_cycles(permutation))
    return transpositions % 2
