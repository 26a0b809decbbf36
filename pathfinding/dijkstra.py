# pathfinding/dijkstra.py
from __future__ import annotations

from heapq import heappush, heappop
from itertools import count
from time import perf_counter
from typing import List, Tuple

from maze import Grid, Node
from .base import Algorithm, PathfindingAlgorithm


class DijkstraPlanner(PathfindingAlgorithm):
    """
    Dijkstra's algorithm on a 4-connected grid with unit edge costs.
    Equal distances are settled in discovery order, so the visit
    order is reproducible on identical grids.
    """

    name = Algorithm.DIJKSTRA

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
        grid.validate_endpoints(start, end)
        t0 = perf_counter()

        visited_in_order: List[Node] = []
        seq = count()

        # open set: (distance, discovery seq, node index)
        open_heap: List[Tuple[int, int, int]] = []
        start.distance = 0
        heappush(open_heap, (0, next(seq), start.index))

        while open_heap:
            dist, _, idx = heappop(open_heap)
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
                new_dist = dist + 1  # unit-cost grid
                if nb.distance is None or new_dist < nb.distance:
                    nb.distance = new_dist
                    nb.previous = node.index
                    heappush(open_heap, (new_dist, next(seq), nb.index))

        dt = perf_counter() - t0
        self._update_stats(dt)
        return visited_in_order


ALGORITHM = DijkstraPlanner()
