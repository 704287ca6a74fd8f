"""Assembly of raw level schemas into puzzle configurations.

A schema supplies ``length``, ``initialItems`` and ``generatingSet`` (plus
optional ``goal``, ``id`` and ``title``). Every cycle-notation string is
parsed and built on its own; the resulting ``PuzzleConfig`` carries the
policy flags derived here once.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from permgame.errors import SchemaError
from permgame.models import LevelSchema, Move, Permutation, PuzzleConfig
from permgame.operations import (
    apply_permutation,
    build_permutation,
    compose_permutations,
    identity_permutation,
)
from permgame.parser import parse_cycle_notation

logger = logging.getLogger("permgame.assembler")

_FIELD_ALIASES = {
    "initialItems": "initial_items",
    "generatingSet": "generating_set",
    "id": "level_id",
}
_PUBLIC_NAMES = {v: k for k, v in _FIELD_ALIASES.items()}


def _notation_list(raw: Any, field: str) -> tuple[str, ...]:
    """Check that ``raw`` is a list of cycle-notation strings (``None`` is empty)."""
    if raw is None:
        return ()
    if isinstance(raw, str) or not isinstance(raw, Sequence):
        raise SchemaError(field, "expected a list of cycle-notation strings")
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise SchemaError(f"{field}[{i}]", f"expected a string, got {item!r}")
    return tuple(raw)


def schema_from_mapping(data: Mapping[str, Any]) -> LevelSchema:
    """Convert a deserialized level record into a ``LevelSchema``.

    Accepts camelCase keys (``initialItems``, ``generatingSet``) as well as
    their snake_case forms. Absent or ``None`` list fields become empty.

    Raises:
        SchemaError: If ``length`` is missing, not an integer or not
            positive, or a list field is not a list of strings.
    """
    if not isinstance(data, Mapping):
        raise SchemaError("schema", f"expected a mapping, got {type(data).__name__}")
    values = {_FIELD_ALIASES.get(k, k): v for k, v in data.items()}
    if "length" not in values:
        raise SchemaError("length", "missing")
    length = values["length"]
    if isinstance(length, bool) or not isinstance(length, int):
        raise SchemaError("length", f"expected an integer, got {length!r}")
    if length <= 0:
        raise SchemaError("length", f"must be positive, got {length}")

    lists = {
        name: _notation_list(values.get(name), _PUBLIC_NAMES.get(name, name))
        for name in ("initial_items", "generating_set", "goal")
    }

    level_id = values.get("level_id")
    title = values.get("title")
    return LevelSchema(
        length=length,
        initial_items=lists["initial_items"],
        generating_set=lists["generating_set"],
        goal=lists["goal"],
        level_id=str(level_id) if level_id is not None else None,
        title=str(title) if title is not None else None,
    )


def parse_permutation(text: str, length: int, field: str) -> Permutation:
    """Parse and build one cycle-notation string, naming ``field`` on error."""
    try:
        return build_permutation(parse_cycle_notation(text, length), length)
    except ValueError as e:
        raise SchemaError(field, str(e)) from e


def _compose_all(texts: Sequence[str], length: int, field: str) -> Permutation:
    result = identity_permutation(length)
    for i, text in enumerate(texts):
        result = compose_permutations(result, parse_permutation(text, length, f"{field}[{i}]"))
    return result


def assemble(schema: LevelSchema | Mapping[str, Any]) -> PuzzleConfig:
    """Assemble a level schema into a ``PuzzleConfig``.

    Args:
        schema: ``LevelSchema`` or a mapping accepted by
            :func:`schema_from_mapping`.

    Returns:
        Configuration with the composed initial permutation, one ``Move`` per
        generator, the goal arrangement and policy flags.
        ``lock_initial_items`` is true exactly when the generating set is
        non-empty; authoring flags stay false.

    Raises:
        SchemaError: Naming ``length``, ``initialItems[i]``,
            ``generatingSet[i]`` or ``goal[i]``.
    """
    if not isinstance(schema, LevelSchema):
        schema = schema_from_mapping(schema)
    elif (
        isinstance(schema.length, bool)
        or not isinstance(schema.length, int)
        or schema.length <= 0
    ):
        raise SchemaError("length", f"must be a positive integer, got {schema.length!r}")
    initial_items = _notation_list(schema.initial_items, "initialItems")
    generating_set = _notation_list(schema.generating_set, "generatingSet")
    goal_texts = _notation_list(schema.goal, "goal")

    length = schema.length
    initial = _compose_all(initial_items, length, "initialItems")
    generators = []
    for i, text in enumerate(generating_set):
        permutation = parse_permutation(text, length, f"generatingSet[{i}]")
        generators.append(Move(name=text.strip(), permutation=permutation))
    goal_perm = _compose_all(goal_texts, length, "goal")
    goal = tuple(apply_permutation(goal_perm, range(length)))

    config = PuzzleConfig(
        length=length,
        initial_permutation=initial,
        generators=generators,
        goal=goal,
        level_id=schema.level_id,
        title=schema.title,
    )
    logger.debug(
        "Assembled level %s: length=%d generators=%d locked=%s",
        schema.level_id,
        length,
        len(generators),
        config.lock_initial_items,
    )
    return config
