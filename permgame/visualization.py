import math
import os
from typing import List

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from permgame.models import Move, PuzzleConfig  # noqa: E402
from permgame.operations import format_cycle_notation, permutation_to_cycles  # noqa: E402


def _ensure_dir(path: str) -> None:
    if path:
        os.makedirs(path, exist_ok=True)


def save_move_diagram(move: Move, length: int, filepath: str) -> str:
    """Draw a move as arrows between positions placed on a circle and save it.

    Each non-trivial cycle gets its own color; fixed points are drawn grey.
    """
    angles = [math.pi / 2 - 2 * math.pi * i / length for i in range(length)]
    xs = [math.cos(a) for a in angles]
    ys = [math.sin(a) for a in angles]

    fig, ax = plt.subplots(figsize=(6, 6), constrained_layout=True)
    cmap = matplotlib.colormaps["tab10"]
    moved = set()
    for c_idx, cycle in enumerate(permutation_to_cycles(move.permutation)):
        color = cmap(c_idx % 10)
        for i, src in enumerate(cycle):
            dst = cycle[(i + 1) % len(cycle)]
            moved.add(src)
            ax.annotate(
                "",
                xy=(xs[dst] * 0.88, ys[dst] * 0.88),
                xytext=(xs[src] * 0.88, ys[src] * 0.88),
                arrowprops=dict(
                    arrowstyle="-|>",
                    color=color,
                    linewidth=1.6,
                    connectionstyle="arc3,rad=0.15",
                ),
            )
    for p in range(length):
        ax.scatter(
            xs[p],
            ys[p],
            s=420,
            color="white" if p in moved else "#dddddd",
            edgecolor="black",
            zorder=3,
        )
        ax.text(xs[p], ys[p], str(p), ha="center", va="center", fontsize=10, zorder=4)

    ax.set_title(f"{move.name}  =  {format_cycle_notation(move.permutation)}", fontsize=12)
    ax.set_xlim(-1.3, 1.3)
    ax.set_ylim(-1.3, 1.3)
    ax.set_aspect("equal")
    ax.axis("off")

    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=120)
    plt.close(fig)
    return filepath


def save_generating_set_diagrams(config: PuzzleConfig, out_dir: str) -> List[str]:
    """Save one diagram per generator as ``move_<index>.png`` under ``out_dir``."""
    _ensure_dir(out_dir)
    paths = []
    for index, move in enumerate(config.generators):
        path = os.path.join(out_dir, f"move_{index}.png")
        paths.append(save_move_diagram(move, config.length, path))
    return paths
