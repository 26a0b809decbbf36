from config import Config
from maze import MazeLayout, generate_grids
from metrics import run_measured
from viz import draw_maze
from io_utils import make_run_dir, save_config, save_summary
from animate import animate_search
from pathfinding import Algorithm


def _log(cfg: Config, msg: str) -> None:
    if cfg.log_events:
        print(msg)


def main() -> None:
    """
    Single-maze entry point.

    Typical usage for a user:
      1. Open config.py and edit the Config defaults
         (maze size, single/multi path, seed, ...).
      2. Run:
             python main.py
      3. Inspect the output folder under outputs/ (PNGs, optional GIFs,
         summary.json). Set animate=True in Config for GIFs.
    """

    # ------------------------------------------------------------------
    # 1) Build configuration from config.py
    # ------------------------------------------------------------------
    cfg = Config()

    # ------------------------------------------------------------------
    # 2) Create output directory and save config
    # ------------------------------------------------------------------
    # make_run_dir builds something like:
    #   outputs/run_R25x25_SP_seed0_YYYYMMDD-HHMMSS-<uid>/
    run_dir = make_run_dir(cfg, base="outputs")
    save_config(cfg, run_dir)

    # ------------------------------------------------------------------
    # 3) Generate the maze once; every algorithm gets its own grid
    # ------------------------------------------------------------------
    layout = MazeLayout.from_config(cfg)
    _log(cfg, f"[INIT] {layout.rows}x{layout.cols} maze, "
              f"single_path={layout.single_path}, start={layout.start}, end={layout.end}")

    names = [a.value for a in Algorithm]
    grids = generate_grids(layout, names)

    # Draw the empty maze BEFORE any search runs.
    grid, start, end = layout.build_grid()
    draw_maze(grid, start, end, out_path=run_dir / "maze.png", title="Maze")

    # ------------------------------------------------------------------
    # 4) Run each algorithm and draw what it explored
    # ------------------------------------------------------------------
    summary: dict = {
        "grid": {
            "rows": layout.rows,
            "cols": layout.cols,
            "open_cells": layout.open_count(),
            "walls": len(layout.walls),
        },
        "maze": {
            "single_path": layout.single_path,
            "seed": layout.seed,
            "start": list(layout.start),
            "end": list(layout.end),
        },
        "algorithms": {},
    }

    for name in names:
        grid, start, end = grids[name]
        run, visited = run_measured(name, grid, start, end)
        path = grid.path_to(end)

        _log(cfg, f"[RUN] {name:<13} visited={run.visited_nodes:>6} "
                  f"({run.visited_percentage:6.2f}%) path={run.path_length:>5} "
                  f"time={run.time_ns / 1e6:.3f} ms")
        if not run.found:
            _log(cfg, f"[WARN] {name} did not reach the end cell")

        draw_maze(
            grid, start, end,
            out_path=run_dir / f"{name}.png",
            visited=visited,
            path=path,
            title=f"{name}: {run.visited_nodes} visited, path {run.path_length}",
        )

        # GIF of the search spreading in visitation order
        if cfg.animate:
            animate_search(
                grid,
                visited,
                path,
                out_path=run_dir / f"{name}.gif",
                title=name,
                fps=cfg.animation_fps,
            )

        summary["algorithms"][name] = {
            "found": run.found,
            "time_ms": run.time_ns / 1e6,
            "visited_nodes": run.visited_nodes,
            "visited_percentage": run.visited_percentage,
            "path_length": run.path_length,
            "memory_used_mb": run.memory_used_mb,
        }

    save_summary(summary, run_dir)

    print(f"Run directory: {run_dir}")


if __name__ == "__main__":
    main()
