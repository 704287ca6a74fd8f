"""Pytest configuration & custom summary hook.

Also ensures the project root is on sys.path so ``import permgame`` works
without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from permgame.assembler import assemble  # noqa: E402
from permgame.models import PuzzleConfig  # noqa: E402


@pytest.fixture
def swap_and_rotate() -> PuzzleConfig:
    """4 positions, start with 0 and 1 swapped, one 4-cycle generator."""
    return assemble({"length": 4, "initialItems": ["(0,1)"], "generatingSet": ["(0,1,2,3)"]})


@pytest.fixture
def levels_dir() -> Path:
    return _root / "levels"


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        "Collected: "
        f"{collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
