# pathfinding/dfs.py
from time import perf_counter
from typing import List, Optional, Tuple

from maze import Grid, Node
from .base import Algorithm, PathfindingAlgorithm


class DFSPlanner(PathfindingAlgorithm):
    """
    Depth-first search with an explicit stack.

    Finds *a* path, not the shortest one. A node is settled (and gets
    its predecessor) the first time it is popped, so the predecessor
    links always form a tree rooted at start.
    """

    name = Algorithm.DFS

    def __init__(self) -> None:
        self.total_runtime: float = 0.0
        self.call_count: int = 0
        self.last_runtime: float = 0.0

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1

    def find_path(self, grid: Grid, start: Node, end: Node) -> List[Node]:
        grid.validate_endpoints(start, end)
        t0 = perf_counter()

        visited_in_order: List[Node] = []
        stack: List[Tuple[Node, Optional[Node]]] = [(start, None)]

        while stack:
            node, parent = stack.pop()
            if node.visited:
                continue

            node.visited = True
            if parent is None:
                node.distance = 0
            else:
                node.distance = parent.distance + 1
                node.previous = parent.index
            visited_in_order.append(node)

            if node is end:
                break

            # reversed so the first direction (N) ends up on top
            for nb in reversed(grid.neighbors(node)):
                if not nb.visited:
                    stack.append((nb, node))

        dt = perf_counter() - t0
        self._update_stats(dt)
        return visited_in_order


ALGORITHM = DFSPlanner()
