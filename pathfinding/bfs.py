# pathfinding/bfs.py
from collections import deque
from time import perf_counter
from typing import List

from maze import Grid, Node
from .base import Algorithm, PathfindingAlgorithm


class BFSPlanner(PathfindingAlgorithm):
    name = Algorithm.BFS

    def __init__(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def find_path(self, grid: Grid, start: Node, end: Node) -> List[Node]:
        """
        Breadth-first search, layer by layer in hop count.
        Returns nodes in the order they were dequeued; end.previous
        chains back to start if end was reached.
        """
        grid.validate_endpoints(start, end)
        t0 = perf_counter()

        visited_in_order: List[Node] = []
        start.distance = 0
        start.visited = True
        q = deque([start])

        while q:
            node = q.popleft()
            visited_in_order.append(node)
            if node is end:
                break

            for nb in grid.neighbors(node):
                if nb.visited:
                    continue
                # marked on enqueue so nothing is queued twice
                nb.visited = True
                nb.distance = node.distance + 1
                nb.previous = node.index
                q.append(nb)

        dt = perf_counter() - t0
        self._update_stats(dt)
        return visited_in_order

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1


ALGORITHM = BFSPlanner()
