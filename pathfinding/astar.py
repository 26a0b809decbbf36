# pathfinding/astar.py
from __future__ import annotations

from heapq import heappush, heappop
from itertools import count
from time import perf_counter
from typing import List, Tuple

from maze import Grid, Node
from .base import Algorithm, PathfindingAlgorithm


def manhattan(a: Node, b: Node) -> int:
    return abs(a.row - b.row) + abs(a.col - b.col)


class AStarPlanner(PathfindingAlgorithm):
    """
    A* search on a 4-connected grid.
    Uses Manhattan distance as heuristic, so paths are still optimal
    (same length as BFS) but usually found with fewer expansions.
    Ties on f are broken by the lower heuristic, then discovery order.
    """

    name = Algorithm.ASTAR

    def __init__(self) -> None:
        # timing stats
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

    # ---- stats API ----

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    # ---- main search API ----

    def find_path(self, grid: Grid, start: Node, end: Node) -> List[Node]:
        """
        Returns nodes in the order they were settled. The reconstructed
        path (grid.path_to(end)) is empty if end is unreachable.
        """
        grid.validate_endpoints(start, end)
        t0 = perf_counter()

        visited_in_order: List[Node] = []
        seq = count()

        # open set: (f, h, discovery seq, node index)
        open_heap: List[Tuple[int, int, int, int]] = []
        start.distance = 0
        start.heuristic = manhattan(start, end)
        heappush(open_heap, (start.heuristic, start.heuristic, next(seq), start.index))

        while open_heap:
            _, _, _, idx = heappop(open_heap)
            node = grid.nodes[idx]
            if node.visited:
                continue

            node.visited = True
            visited_in_order.append(node)
            if node is end:
                break

            for nb in grid.neighbors(node):
                if nb.visited:
                    continue
                new_g = node.distance + 1  # unit-cost grid
                if nb.distance is None or new_g < nb.distance:
                    nb.distance = new_g
                    nb.heuristic = manhattan(nb, end)
                    nb.previous = node.index
                    heappush(
                        open_heap,
                        (new_g + nb.heuristic, nb.heuristic, next(seq), nb.index),
                    )

        dt = perf_counter() - t0
        self._update_stats(dt)
        return visited_in_order


ALGORITHM = AStarPlanner()
