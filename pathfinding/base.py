# pathfinding/base.py
from enum import Enum
from typing import Protocol, List

from maze import Grid, Node


class Algorithm(str, Enum):
    """Closed set of planners the benchmark knows about."""
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"
    BFS = "bfs"
    DFS = "dfs"
    WALL_FOLLOWER = "wallFollower"


class PathfindingAlgorithm(Protocol):
    name: Algorithm
    # Optional timing stats (per algorithm implementation)
    total_runtime: float
    call_count: int
    last_runtime: float

    def find_path(self, grid: Grid, start: Node, end: Node) -> List[Node]:
        ...

    def reset_stats(self) -> None:
        ...
