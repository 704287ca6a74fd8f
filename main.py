#!/usr/bin/env python3


import argparse
import json
import logging
import os
import random
from typing import Any, Dict, List, Optional

import yaml

from permgame.assembler import assemble
from permgame.errors import InvalidMoveError
from permgame.game import PuzzleState
from permgame.levels import LevelCatalog
from permgame.operations import format_cycle_notation, permutation_order
from permgame.solver import DEFAULT_MAX_STATES, count_reachable, scramble, solve
from permgame.visualization import save_generating_set_diagrams

logger = logging.getLogger("permgame")


def load_config(config_file: str = "config.yaml") -> dict:
    """Load configuration from a YAML (or JSON) file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith(".json"):
        cfg: Dict[str, Any] = json.loads(text)
    else:
        cfg = yaml.safe_load(text) or {}
    return cfg


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    return cfg.get(name, {}) if isinstance(cfg.get(name), dict) else {}


def list_levels(catalog: LevelCatalog) -> None:
    for info in catalog.level_list():
        print(f"{info.level_id:<24} {info.title}")


def play_level(
    catalog: LevelCatalog,
    level_id: str,
    moves: List[int],
    scramble_moves: int,
    seed: Optional[int],
    solver_enabled: bool,
    max_states: int,
    charts_dir: Optional[str],
) -> PuzzleState:
    config = assemble(catalog.load_level_schema(level_id))
    state = PuzzleState(config)
    logger.info(
        "Level %s: length=%d generators=%d locked=%s",
        level_id,
        config.length,
        len(config.generators),
        config.lock_initial_items,
    )
    for index, move in enumerate(config.generators):
        logger.info(
            "  move %d: %s order=%d",
            index,
            format_cycle_notation(move.permutation),
            permutation_order(move.permutation),
        )
    if charts_dir:
        paths = save_generating_set_diagrams(config, os.path.join(charts_dir, level_id))
        logger.info("Saved %d move diagrams to %s", len(paths), charts_dir)

    if scramble_moves:
        rng = random.Random(seed) if seed is not None else random.Random()
        applied = scramble(state, scramble_moves, rng)
        logger.info("Scrambled with moves %s", applied)

    try:
        state.apply_sequence(moves)
    except InvalidMoveError as e:
        logger.error("Move sequence rejected: %s", e)

    print(f"Arrangement: {list(state.snapshot_arrangement())}")
    print(f"Solved: {state.is_solved()}")

    if solver_enabled:
        solution = solve(config, state.snapshot_arrangement(), max_states=max_states)
        if solution is None:
            print("No solution found within the state limit.")
        else:
            print(f"Shortest solution ({len(solution)} moves): {solution}")
        print(f"Reachable arrangements: {count_reachable(config, max_states=max_states)}")
    return state


def main() -> None:
    parser = argparse.ArgumentParser(description="Permutation puzzle engine")
    parser.add_argument("--config", default="config.yaml", help="YAML/JSON config file")
    args = parser.parse_args()

    cfg = load_config(args.config)

    log_level = cfg.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    levels_cfg = _section(cfg, "levels")
    play_cfg = _section(cfg, "play")
    solver_cfg = _section(cfg, "solver")
    charts_cfg = _section(cfg, "charts")

    levels_dir = levels_cfg.get("dir")
    if not levels_dir:
        raise ValueError("Missing 'levels.dir' in config")

    with LevelCatalog(levels_dir) as catalog:
        level_id = levels_cfg.get("level")
        if not level_id:
            list_levels(catalog)
            return
        play_level(
            catalog,
            str(level_id),
            moves=[int(m) for m in play_cfg.get("moves") or []],
            scramble_moves=int(play_cfg.get("scramble", 0)),
            seed=play_cfg.get("seed"),
            solver_enabled=bool(solver_cfg.get("enabled", False)),
            max_states=int(solver_cfg.get("max_states", DEFAULT_MAX_STATES)),
            charts_dir=charts_cfg.get("dir") if charts_cfg.get("enabled") else None,
        )


if __name__ == "__main__":
    main()
