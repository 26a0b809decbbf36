# metrics.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from time import perf_counter_ns
from typing import Dict, Iterable, List, Tuple
import tracemalloc

from maze import Grid, Node
from pathfinding import get_algorithm

BYTES_PER_MB = 1024 * 1024


@dataclass
class RunMetrics:
    """Measurements for one algorithm on one maze."""
    algorithm: str
    time_ns: int
    visited_nodes: int
    visited_percentage: float
    path_length: int          # nodes on the reconstructed path, 0 if none
    memory_used_mb: float     # traced heap delta; observational only

    @property
    def found(self) -> bool:
        return self.path_length > 0


def _heap_delta(planner, grid: Grid, start: Node, end: Node) -> int:
    """Traced heap growth of one find_path() call, in bytes."""
    started_tracing = False
    if not tracemalloc.is_tracing():
        tracemalloc.start()
        started_tracing = True
    try:
        before = tracemalloc.get_traced_memory()[0]
        planner.find_path(grid, start, end)
        return tracemalloc.get_traced_memory()[0] - before
    finally:
        if started_tracing:
            tracemalloc.stop()


def run_measured(
    name: str,
    grid: Grid,
    start: Node,
    end: Node,
    track_memory: bool = True,
) -> Tuple[RunMetrics, List[Node]]:
    """
    Run one planner on its own grid and measure it.
    Returns the metrics and the visitation order.

    Time covers only find_path() and is taken with tracemalloc off
    (unless the caller is already tracing, e.g. under --profile).
    The heap delta comes from a second, traced run on a copy of the
    untouched grid. It is coarse: it depends on allocator and
    collector behavior.
    """
    planner = get_algorithm(name)
    fresh = copy.deepcopy(grid) if track_memory else None

    t0 = perf_counter_ns()
    visited = planner.find_path(grid, start, end)
    elapsed = perf_counter_ns() - t0

    mem_bytes = 0
    if fresh is not None:
        mem_bytes = _heap_delta(
            planner, fresh, fresh.nodes[start.index], fresh.nodes[end.index]
        )

    path = grid.path_to(end)
    open_cells = grid.open_count()
    visited_pct = (len(visited) / open_cells * 100.0) if open_cells else 0.0

    run = RunMetrics(
        algorithm=planner.name.value,
        time_ns=elapsed,
        visited_nodes=len(visited),
        visited_percentage=visited_pct,
        path_length=len(path),
        memory_used_mb=mem_bytes / BYTES_PER_MB,
    )
    return run, visited


def measure_run(
    name: str,
    grid: Grid,
    start: Node,
    end: Node,
    track_memory: bool = True,
) -> RunMetrics:
    return run_measured(name, grid, start, end, track_memory)[0]


@dataclass
class Metrics:
    """Per-algorithm accumulation across test iterations."""
    time: List[float] = field(default_factory=list)
    visited_nodes: List[int] = field(default_factory=list)
    visited_percentage: List[float] = field(default_factory=list)
    path_length: List[int] = field(default_factory=list)
    memory_used: List[float] = field(default_factory=list)

    def add(self, run: RunMetrics) -> None:
        self.time.append(float(run.time_ns))
        self.visited_nodes.append(run.visited_nodes)
        self.visited_percentage.append(run.visited_percentage)
        self.path_length.append(run.path_length)
        self.memory_used.append(run.memory_used_mb)

    def __len__(self) -> int:
        return len(self.time)


def initialize_metrics(names: Iterable[str]) -> Dict[str, Metrics]:
    return {name: Metrics() for name in names}


def record_runs(metrics: Dict[str, Metrics], runs: Iterable[RunMetrics]) -> None:
    for run in runs:
        metrics.setdefault(run.algorithm, Metrics()).add(run)


def _mean(values: List[float]) -> float:
    return sum(values) / len(values)


def calculate_averages(metrics: Dict[str, Metrics]) -> Dict[str, Dict[str, float]]:
    """
    Mean of every metric per algorithm. Algorithms without any
    recorded run are left out.

    Keys: time (ns), visitedNodes, visitedPercentage, pathLength, memoryUsed (MB).
    """
    averages: Dict[str, Dict[str, float]] = {}
    for algorithm, m in metrics.items():
        if not len(m):
            continue
        averages[algorithm] = {
            "time": _mean(m.time),
            "visitedNodes": _mean(m.visited_nodes),
            "visitedPercentage": _mean(m.visited_percentage),
            "pathLength": _mean(m.path_length),
            "memoryUsed": _mean(m.memory_used),
        }
    return averages
