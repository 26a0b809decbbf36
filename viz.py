# viz.py
from __future__ import annotations
from typing import Optional, Sequence
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from maze import Grid, Node

# --- Color palette (RGB in 0–1) ---
OPEN_COLOR    = np.array([0.96, 0.96, 0.96])  # light gray background
WALL_COLOR    = np.array([0.20, 0.24, 0.31])  # slate
VISITED_COLOR = np.array([0.62, 0.79, 0.94])  # pale blue
PATH_COLOR    = np.array([1.00, 0.78, 0.37])  # soft amber
START_COLOR   = "#2ca02c"                     # green
END_COLOR     = "#d62728"                     # red


def _figsize(rows: int, cols: int) -> tuple:
    scale = 0.25 if max(rows, cols) <= 80 else 12.0 / max(rows, cols)
    return (max(4.0, cols * scale), max(4.0, rows * scale))


def maze_image(
    grid: Grid,
    visited: Optional[Sequence[Node]] = None,
    path: Optional[Sequence[Node]] = None,
) -> np.ndarray:
    """rows x cols x 3 float image: walls, visited cells, path cells."""
    img = np.zeros((grid.rows, grid.cols, 3), dtype=float)
    img[:, :, :] = OPEN_COLOR

    for n in grid:
        if n.is_wall:
            img[n.row, n.col] = WALL_COLOR

    for n in visited or ():
        img[n.row, n.col] = VISITED_COLOR

    for n in path or ():
        img[n.row, n.col] = PATH_COLOR

    return img


def draw_maze(
    grid: Grid,
    start: Node,
    end: Node,
    out_path: str | Path,
    visited: Optional[Sequence[Node]] = None,
    path: Optional[Sequence[Node]] = None,
    title: str = "Maze",
) -> None:
    """
    Draw a snapshot of a maze:
      - open cells: light background
      - walls: slate
      - cells visited by a search: pale blue
      - reconstructed path: amber
      - start: green circle, end: red square
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    img = maze_image(grid, visited, path)

    fig, ax = plt.subplots(figsize=_figsize(grid.rows, grid.cols))
    # row 0 at the top
    ax.imshow(img, origin="upper", interpolation="nearest")

    marker_size = max(10, 4000 / max(grid.rows, grid.cols))
    h_start = ax.scatter(
        [start.col], [start.row],
        marker="o", s=marker_size, c=START_COLOR,
        edgecolors="white", linewidths=0.7, label="start",
    )
    h_end = ax.scatter(
        [end.col], [end.row],
        marker="s", s=marker_size, c=END_COLOR,
        edgecolors="white", linewidths=0.7, label="end",
    )

    ax.set_xlim(-0.5, grid.cols - 0.5)
    ax.set_ylim(grid.rows - 0.5, -0.5)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])

    fig.suptitle(title, fontsize=16, y=0.98)

    handles = [
        h_start,
        h_end,
        Patch(facecolor=WALL_COLOR, edgecolor="black", label="wall"),
    ]
    if visited:
        handles.append(Patch(facecolor=VISITED_COLOR, edgecolor="black", label="visited"))
    if path:
        handles.append(Patch(facecolor=PATH_COLOR, edgecolor="black", label="path"))

    fig.legend(
        handles=handles,
        loc="upper center",
        bbox_to_anchor=(0.5, 0.94),  # just below the title
        ncol=len(handles),            # single line
        fontsize=9,
        frameon=False,
    )

    # Leave space at top for title + legend
    fig.tight_layout(rect=[0.0, 0.0, 1.0, 0.90])

    fig.savefig(out_path, dpi=150)
    plt.close(fig)
