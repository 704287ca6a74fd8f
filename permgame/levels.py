"""Level catalog: discovery and caching of level schema files.

The catalog owns its cache explicitly. ``open()`` scans the levels
directory, ``close()`` drops everything; the object is also a context
manager. Level files are YAML (``.yaml``/``.yml``) or JSON mappings.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from permgame.errors import SchemaError

logger = logging.getLogger("permgame.levels")

LEVEL_SUFFIXES = (".yaml", ".yml", ".json")


@dataclass(frozen=True)
class LevelInfo:
    level_id: str
    title: str
    path: Path


def read_level_file(path: Path) -> Dict[str, Any]:
    """Read one level file into a mapping.

    Raises:
        SchemaError: If the file cannot be decoded or is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaError(str(path), f"cannot decode level file: {e}") from e
    if not isinstance(data, dict):
        raise SchemaError(str(path), "level file must contain a mapping")
    return data


class LevelCatalog:
    """Lifecycle-scoped supplier of raw level schemas.

    Usage::

        with LevelCatalog("levels") as catalog:
            for info in catalog.level_list():
                schema = catalog.load_level_schema(info.level_id)
    """

    def __init__(self, levels_dir: str | Path):
        self.levels_dir = Path(levels_dir)
        self._index: Dict[str, LevelInfo] | None = None
        self._cache: Dict[str, Dict[str, Any]] = {}

    def open(self) -> LevelCatalog:
        """Scan the levels directory and build the index."""
        if not self.levels_dir.is_dir():
            raise FileNotFoundError(f"Levels directory not found: {self.levels_dir}")
        self._cache.clear()
        index: Dict[str, LevelInfo] = {}
        for path in sorted(self.levels_dir.iterdir()):
            if path.suffix not in LEVEL_SUFFIXES or not path.is_file():
                continue
            data = read_level_file(path)
            level_id = str(data.get("id", path.stem))
            if level_id in index:
                raise SchemaError(str(path), f"duplicate level id {level_id!r}")
            index[level_id] = LevelInfo(
                level_id=level_id,
                title=str(data.get("title", level_id)),
                path=path,
            )
            self._cache[level_id] = data
        self._index = index
        logger.info("Loaded %d levels from %s", len(index), self.levels_dir)
        return self

    def close(self) -> None:
        self._index = None
        self._cache.clear()

    def __enter__(self) -> LevelCatalog:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._index is not None

    def _require_open(self) -> Dict[str, LevelInfo]:
        if self._index is None:
            raise RuntimeError("LevelCatalog is not open")
        return self._index

    def level_list(self) -> List[LevelInfo]:
        """All levels, sorted by id."""
        index = self._require_open()
        return [index[k] for k in sorted(index)]

    def load_level_schema(self, level_id: str) -> Dict[str, Any]:
        """Return a copy of the raw schema of ``level_id``.

        Raises:
            KeyError: Unknown level id.
        """
        index = self._require_open()
        if level_id not in index:
            raise KeyError(f"Unknown level: {level_id}")
        schema = copy.deepcopy(self._cache[level_id])
        schema.setdefault("id", level_id)
        return schema
