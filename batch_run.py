#!/usr/bin/env python3
"""
Batch benchmark runner.

This script is meant for *offline experiments* where you want to:

- Generate many mazes of a given size (single-path and multi-path).
- Run every pathfinding algorithm on each maze, in parallel.
- Average the metrics per algorithm and write one CSV per maze size.

High-level behavior
-------------------

1. For each test iteration, generate one MazeLayout and build one
   independent Grid per algorithm from it.
2. Run all algorithms for that iteration in a process pool; pool.map()
   is the join barrier, so the next iteration only starts once every
   algorithm has finished.
3. Accumulate per-algorithm metrics (time, visited nodes, visited
   percentage, path length, heap delta).
4. After `numTests` single-path and `numTests` multi-path iterations,
   write `data/averages{rows}x{cols}x{numTests}[x{marker}].csv`.

Usage
-----

From the repo root:

    python batch_run.py 50 10            # 50x50 mazes, 10 tests per mode
    python batch_run.py 50 10 laptop     # same, filename marker "laptop"
    python batch_run.py -n laptop        # size sweep (see batch_config.py)
    python batch_run.py --profile 100 5  # inline run, writes cpu.prof / mem.prof
"""

from __future__ import annotations

import argparse
import cProfile
import multiprocessing as mp
import traceback
import tracemalloc
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

import batch_config
from io_utils import averages_filename, write_averages_csv
from maze import Grid, MazeLayout, generate_grids, generate_layout
from metrics import RunMetrics, calculate_averages, initialize_metrics, measure_run, record_runs
from pathfinding import Algorithm

ALGORITHM_ORDER: List[str] = [a.value for a in Algorithm]

# (algorithm name, grid, start index, end index, track_memory)
Task = Tuple[str, Grid, int, int, bool]


# ---------------------------------------------------------------------
# 1) One algorithm on one grid (runs inside a worker process)
# ---------------------------------------------------------------------

def run_one(task: Task) -> Optional[RunMetrics]:
    """
    Worker function for each process.

    - Calls measure_run() on the task's own grid.
    - If the run fails, prints the error and returns None so the
      sibling algorithms of this iteration are unaffected.
    """
    name, grid, start_idx, end_idx, track_memory = task
    try:
        return measure_run(
            name,
            grid,
            grid.nodes[start_idx],
            grid.nodes[end_idx],
            track_memory=track_memory,
        )
    except Exception as e:
        print(f"[ERROR] {name} failed on a {grid.rows}x{grid.cols} maze: {e}")
        traceback.print_exc()
        return None


# ---------------------------------------------------------------------
# 2) One test iteration: fan out, then join
# ---------------------------------------------------------------------

def build_tasks(
    layout: MazeLayout,
    names: Sequence[str] = ALGORITHM_ORDER,
    track_memory: bool = True,
) -> List[Task]:
    grids = generate_grids(layout, names)
    return [
        (name, grid, start.index, end.index, track_memory)
        for name, (grid, start, end) in grids.items()
    ]


def run_iteration(
    layout: MazeLayout,
    pool=None,
    names: Sequence[str] = ALGORITHM_ORDER,
    track_memory: bool = True,
) -> List[RunMetrics]:
    """
    Run every algorithm once on its own copy of `layout`.

    With a pool the tasks run in parallel and pool.map() blocks until
    all of them are done; without one they run inline, one by one.
    Failed tasks are dropped from the result.
    """
    tasks = build_tasks(layout, names, track_memory)
    if pool is None:
        results = [run_one(t) for t in tasks]
    else:
        results = pool.map(run_one, tasks)
    return [r for r in results if r is not None]


def resolve_workers(workers: Optional[int], n_tasks: int) -> int:
    if workers is None:
        workers = batch_config.CPU_COUNT
    if workers is None:
        workers = min(n_tasks, mp.cpu_count())
    return max(1, workers)


@contextmanager
def make_pool(workers: int) -> Iterator[Optional[mp.pool.Pool]]:
    if workers <= 1:
        yield None
        return
    with mp.Pool(processes=workers) as pool:
        yield pool


# ---------------------------------------------------------------------
# 3) One maze size: single-path block, then multi-path block
# ---------------------------------------------------------------------

def run_test(
    maze_size: int,
    num_tests: int,
    marker: str = "",
    workers: Optional[int] = None,
    out_dir: str | Path = batch_config.OUTPUT_DIR,
    seed: int = batch_config.BASE_SEED,
    extra_passage_density: float = batch_config.EXTRA_PASSAGE_DENSITY,
    endpoint_policy: str = batch_config.ENDPOINT_POLICY,
    track_memory: bool = True,
    names: Sequence[str] = ALGORITHM_ORDER,
) -> Path:
    """
    Benchmark every algorithm on `num_tests` square mazes of each mode
    and write the averages CSV. Returns the CSV path.

    A maze generation error (e.g. InvalidSize) aborts the whole run.
    """
    num_rows = maze_size
    num_cols = maze_size
    metrics_single = initialize_metrics(names)
    metrics_multi = initialize_metrics(names)

    n_workers = resolve_workers(workers, len(names))
    with make_pool(n_workers) as pool:
        for single_path, metrics, label in (
            (True, metrics_single, "a single path"),
            (False, metrics_multi, "multiple paths"),
        ):
            for i in range(num_tests):
                layout = generate_layout(
                    num_rows,
                    num_cols,
                    single_path=single_path,
                    seed=seed + i,
                    extra_passage_density=extra_passage_density,
                    endpoint_policy=endpoint_policy,
                )
                runs = run_iteration(layout, pool, names, track_memory)
                record_runs(metrics, runs)
                print(
                    f"Completed test {i + 1} of {num_tests} for mazes with "
                    f"{label}, for size: {maze_size}"
                )

    averages_single = calculate_averages(metrics_single)
    averages_multi = calculate_averages(metrics_multi)

    out_path = averages_filename(num_rows, num_cols, num_tests, marker, out_dir)
    write_averages_csv(out_path, averages_single, averages_multi, names)
    print(f"Results written to {out_path}")
    return out_path


def run_tests_with_increasing_size(
    marker: str = "",
    start: int = batch_config.SWEEP_START,
    step: int = batch_config.SWEEP_STEP,
    max_size: Optional[int] = batch_config.SWEEP_MAX,
    num_tests: int = batch_config.DEFAULT_NUM_TESTS,
    **kwargs,
) -> List[Path]:
    """
    Run run_test() for growing maze sizes until max_size (or forever
    when max_size is None). Stops at the first size that fails.
    """
    written: List[Path] = []
    size = start
    while max_size is None or size <= max_size:
        print(f"Running tests with maze size {size}")
        try:
            written.append(run_test(size, num_tests, marker, **kwargs))
        except Exception as e:
            print(f"Test failed for maze size {size}: {e}")
            break
        size += step
    return written


# ---------------------------------------------------------------------
# 4) Command line
# ---------------------------------------------------------------------

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark maze pathfinding algorithms and write averaged metrics."
    )
    parser.add_argument("-n", dest="marker", default="", help="Optional filename marker")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes per iteration (default: batch_config.CPU_COUNT)",
    )
    parser.add_argument(
        "--out-dir",
        default=batch_config.OUTPUT_DIR,
        help="Directory for the averages CSV files",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Write a cProfile CPU profile and a tracemalloc heap snapshot",
    )
    parser.add_argument(
        "--no-memory",
        action="store_true",
        help="Skip the second, traced run that measures the heap delta",
    )
    parser.add_argument(
        "positional",
        nargs="*",
        metavar="ARG",
        help="mazeSize numTests [marker]; omit to run the size sweep",
    )
    args = parser.parse_args(argv)

    args.maze_size = None
    args.num_tests = None
    if len(args.positional) >= 2:
        try:
            args.maze_size = int(args.positional[0])
            args.num_tests = int(args.positional[1])
        except ValueError:
            parser.error("mazeSize and numTests must be integers")
        if len(args.positional) > 2:
            args.marker = args.positional[2]
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    profiler = None
    if args.profile:
        # profilers only see this process; pool children would be invisible
        if args.workers != 1:
            print("[WARN] --profile runs every algorithm inline (workers=1).")
            args.workers = 1
        profiler = cProfile.Profile()
        tracemalloc.start()
        profiler.enable()

    common = dict(
        workers=args.workers,
        out_dir=args.out_dir,
        track_memory=not args.no_memory,
    )
    try:
        if args.maze_size is None:
            run_tests_with_increasing_size(args.marker, **common)
        else:
            run_test(args.maze_size, args.num_tests, args.marker, **common)
    finally:
        if profiler is not None:
            profiler.disable()
            profiler.dump_stats(batch_config.CPU_PROFILE_PATH)
            tracemalloc.take_snapshot().dump(batch_config.MEM_PROFILE_PATH)
            tracemalloc.stop()
            print(
                f"Profiles written to {batch_config.CPU_PROFILE_PATH} "
                f"and {batch_config.MEM_PROFILE_PATH}"
            )


if __name__ == "__main__":
    main()
