# pathfinding/wall_follower.py
from time import perf_counter
from typing import List, Set, Tuple

from maze import DIRECTIONS, Grid, Node
from .base import Algorithm, PathfindingAlgorithm

# relative turns tried at every step, right-hand rule:
# right, straight, left, back (DIRECTIONS is clockwise)
RIGHT_HAND_TURNS = (1, 0, -1, 2)
LEFT_HAND_TURNS = (-1, 0, 1, 2)


class WallFollowerPlanner(PathfindingAlgorithm):
    """
    Keeps one hand on the wall and walks.

    Only uses the local wall configuration around the current cell;
    grid edges count as walls. Always completes on single-path
    (tree) mazes. On mazes with loops it can circle forever, so the
    walk stops as soon as a (cell, heading) state repeats.

    The returned sequence lists each cell once, on first arrival; the
    predecessor of a cell is the cell it was first entered from.
    """

    name = Algorithm.WALL_FOLLOWER

    def __init__(self, right_hand: bool = True, initial_heading: int = 0) -> None:
        self.right_hand = right_hand
        self.initial_heading = initial_heading  # index into DIRECTIONS, 0 = N

        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def reset_stats(self) -> None:
        self.total_runtime = 0.0
        self.call_count = 0
        self.last_runtime = 0.0

    def find_path(self, grid: Grid, start: Node, end: Node) -> List[Node]:
        grid.validate_endpoints(start, end)
        t0 = perf_counter()

        turns = RIGHT_HAND_TURNS if self.right_hand else LEFT_HAND_TURNS
        heading = self.initial_heading
        current = start

        start.visited = True
        start.distance = 0
        visited_in_order: List[Node] = [start]
        seen_states: Set[Tuple[int, int]] = set()

        while current is not end:
            state = (current.index, heading)
            if state in seen_states:
                break  # walking a loop that never touches end
            seen_states.add(state)

            moved = False
            for turn in turns:
                h = (heading + turn) % 4
                dr, dc = DIRECTIONS[h]
                r, c = current.row + dr, current.col + dc
                if not grid.in_bounds((r, c)):
                    continue
                nxt = grid.nodes[r * grid.cols + c]
                if nxt.is_wall:
                    continue

                if not nxt.visited:
                    nxt.visited = True
                    nxt.distance = current.distance + 1
                    nxt.previous = current.index
                    visited_in_order.append(nxt)

                current, heading = nxt, h
                moved = True
                break

            if not moved:
                break  # boxed in on all four sides

        dt = perf_counter() - t0
        self._update_stats(dt)
        return visited_in_order

    def _update_stats(self, dt: float) -> None:
        self.last_runtime = dt
        self.total_runtime += dt
        self.call_count += 1


ALGORITHM = WallFollowerPlanner()
