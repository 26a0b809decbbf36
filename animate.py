# animate.py
from __future__ import annotations

from math import ceil
from pathlib import Path
from typing import List, Sequence

import matplotlib.pyplot as plt
import matplotlib.animation as animation

from maze import Grid, Node
from viz import PATH_COLOR, VISITED_COLOR, _figsize, maze_image


def _frame_cuts(n_visited: int, max_frames: int) -> List[int]:
    """
    Number of visited cells shown in each exploration frame.
    Long searches are sampled so the GIF stays under max_frames.
    """
    if n_visited == 0:
        return [0]
    stride = max(1, ceil(n_visited / max_frames))
    cuts = list(range(stride, n_visited, stride))
    cuts.append(n_visited)
    return cuts


def animate_search(
    grid: Grid,
    visited: Sequence[Node],
    path: Sequence[Node],
    out_path: str | Path,
    title: str = "Search",
    fps: int = 20,
    max_frames: int = 200,
    hold_frames: int = 10,
) -> None:
    """
    Build a GIF showing the search spreading through the maze in
    visitation order, followed by the reconstructed path.

    - grid: the grid the algorithm ran on (walls are read only)
    - visited: find_path() result
    - path: grid.path_to(end), may be empty
    - out_path: path to save the GIF
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if not visited:
        print("[WARN] Nothing was visited; skipping GIF.")
        return

    cuts = _frame_cuts(len(visited), max_frames)
    n_explore = len(cuts)
    n_frames = n_explore + (hold_frames if path else 0)

    base_img = maze_image(grid)

    fig, ax = plt.subplots(figsize=_figsize(grid.rows, grid.cols))
    im = ax.imshow(base_img, origin="upper", interpolation="nearest", animated=True)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_aspect("equal")
    fig.suptitle(title, fontsize=14, y=0.98)
    fig.tight_layout(rect=[0.0, 0.0, 1.0, 0.95])

    def init():
        im.set_array(base_img)
        return (im,)

    def update(frame: int):
        img = base_img.copy()
        shown = cuts[min(frame, n_explore - 1)]
        for n in visited[:shown]:
            img[n.row, n.col] = VISITED_COLOR
        if frame >= n_explore:
            for n in path:
                img[n.row, n.col] = PATH_COLOR
        im.set_array(img)
        return (im,)

    ani = animation.FuncAnimation(
        fig,
        update,
        frames=n_frames,
        init_func=init,
        interval=1000 / fps,
        blit=True,
    )

    writer = animation.PillowWriter(fps=fps)
    ani.save(out_path, writer=writer)
    plt.close(fig)
    print(f"Saved animation GIF to {out_path}")
