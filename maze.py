# maze.py
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple
import numbers
import random

from config import Config

Pos = Tuple[int, int]  # (row, col), row 0 is the top of the maze

# 4-connected moves, clockwise: N, E, S, W
DIRECTIONS: List[Pos] = [(-1, 0), (0, 1), (1, 0), (0, -1)]

MIN_SIZE = 3
ENDPOINT_POLICIES = ("corners", "farthest")


class MazeError(ValueError):
    """Base class for bad maze requests and bad traversal inputs."""


class InvalidSize(MazeError):
    """Requested dimensions cannot hold a carved maze."""


class MalformedGrid(MazeError):
    """Start/end cell is a wall, out of bounds, or not part of the grid."""


class NoPathFound(MazeError):
    """The end cell was never reached by the search."""


@dataclass(eq=False)
class Node:
    """
    One grid cell.

    is_wall / is_start / is_end are fixed once the grid is built.
    distance, heuristic, visited and previous belong to whichever
    algorithm is currently running on this grid. previous is the
    linear index of the predecessor cell (None = no predecessor).
    """
    row: int
    col: int
    index: int
    is_wall: bool = False
    is_start: bool = False
    is_end: bool = False

    distance: Optional[int] = None
    heuristic: int = 0
    visited: bool = False
    previous: Optional[int] = None

    @property
    def pos(self) -> Pos:
        return (self.row, self.col)

    def __repr__(self) -> str:
        kind = "wall" if self.is_wall else "open"
        return f"Node({self.row}, {self.col}, {kind})"


@dataclass
class Grid:
    """rows x cols cells stored row-major; nodes[r * cols + c] is (r, c)."""
    rows: int
    cols: int
    nodes: List[Node]

    @classmethod
    def from_walls(cls, rows: int, cols: int, walls: Iterable[Pos]) -> "Grid":
        wall_set = set(walls)
        nodes = [
            Node(row=r, col=c, index=r * cols + c, is_wall=(r, c) in wall_set)
            for r in range(rows)
            for c in range(cols)
        ]
        return cls(rows=rows, cols=cols, nodes=nodes)

    # ------------------------------------------------------------------ #
    # Basic queries                                                      #
    # ------------------------------------------------------------------ #
    def in_bounds(self, p: Pos) -> bool:
        r, c = p
        return 0 <= r < self.rows and 0 <= c < self.cols

    def node(self, row: int, col: int) -> Node:
        if not self.in_bounds((row, col)):
            raise MalformedGrid(
                f"({row}, {col}) is outside the {self.rows}x{self.cols} grid"
            )
        return self.nodes[row * self.cols + col]

    def __getitem__(self, p: Pos) -> Node:
        return self.node(*p)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def neighbors(self, node: Node) -> List[Node]:
        """Open 4-neighbors of node in N, E, S, W order."""
        result = []
        for dr, dc in DIRECTIONS:
            r, c = node.row + dr, node.col + dc
            if 0 <= r < self.rows and 0 <= c < self.cols:
                nb = self.nodes[r * self.cols + c]
                if not nb.is_wall:
                    result.append(nb)
        return result

    def wall_count(self) -> int:
        return sum(1 for n in self.nodes if n.is_wall)

    def open_count(self) -> int:
        return len(self.nodes) - self.wall_count()

    def validate_endpoints(self, start: Node, end: Node) -> None:
        """Fail fast before a search touches the grid."""
        for label, n in (("start", start), ("end", end)):
            if not self.in_bounds((n.row, n.col)):
                raise MalformedGrid(
                    f"{label} {n.pos} is outside the {self.rows}x{self.cols} grid"
                )
            if self.nodes[n.row * self.cols + n.col] is not n:
                raise MalformedGrid(f"{label} {n.pos} is not a node of this grid")
            if n.is_wall:
                raise MalformedGrid(f"{label} {n.pos} is a wall")

    # ------------------------------------------------------------------ #
    # Path reconstruction                                                #
    # ------------------------------------------------------------------ #
    def path_to(self, end: Node) -> List[Node]:
        """
        Walk predecessor links back from end.
        Returns [start, ..., end], or [] if the search never reached end.
        """
        if not end.visited:
            return []

        path: List[Node] = []
        cur: Optional[Node] = end
        while cur is not None:
            path.append(cur)
            if len(path) > len(self.nodes):
                raise RuntimeError("Predecessor chain contains a cycle.")
            cur = self.nodes[cur.previous] if cur.previous is not None else None
        path.reverse()
        return path

    def require_path_to(self, end: Node) -> List[Node]:
        path = self.path_to(end)
        if not path:
            raise NoPathFound(f"No path reaches {end.pos}")
        return path


@dataclass(frozen=True)
class MazeLayout:
    """
    The shared, immutable part of a maze: wall positions plus endpoints.
    Every algorithm gets its own Grid built from the same layout.
    """
    rows: int
    cols: int
    walls: FrozenSet[Pos]
    start: Pos
    end: Pos
    single_path: bool = True
    seed: Optional[int] = None

    @classmethod
    def from_config(cls, cfg: Config) -> "MazeLayout":
        return generate_layout(
            cfg.rows,
            cfg.cols,
            single_path=cfg.single_path,
            seed=cfg.seed,
            extra_passage_density=cfg.extra_passage_density,
            endpoint_policy=cfg.endpoint_policy,
        )

    def is_wall(self, p: Pos) -> bool:
        return p in self.walls

    def open_count(self) -> int:
        return self.rows * self.cols - len(self.walls)

    def open_cells(self) -> List[Pos]:
        return [
            (r, c)
            for r in range(self.rows)
            for c in range(self.cols)
            if (r, c) not in self.walls
        ]

    def build_grid(self) -> Tuple[Grid, Node, Node]:
        """Allocate a fresh Grid; returns (grid, start_node, end_node)."""
        grid = Grid.from_walls(self.rows, self.cols, self.walls)
        start = grid[self.start]
        end = grid[self.end]
        start.is_start = True
        end.is_end = True
        grid.validate_endpoints(start, end)
        return grid, start, end

    def to_text(self) -> str:
        """'#' wall, '.' open, 'S' start, 'E' end."""
        lines = []
        for r in range(self.rows):
            row = []
            for c in range(self.cols):
                if (r, c) == self.start:
                    row.append("S")
                elif (r, c) == self.end:
                    row.append("E")
                elif (r, c) in self.walls:
                    row.append("#")
                else:
                    row.append(".")
            lines.append("".join(row))
        return "\n".join(lines)


# ---------------------------------------------------------------------- #
# Generation                                                             #
# ---------------------------------------------------------------------- #
def _check_size(rows: int, cols: int) -> Tuple[int, int]:
    # numpy integer sizes are accepted and come back as plain ints
    for label, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidSize(f"{label} must be an integer, got {value!r}")
        if value < MIN_SIZE:
            raise InvalidSize(
                f"{label}={value} is too small to carve a maze (minimum {MIN_SIZE})"
            )
    return int(rows), int(cols)


def _lattice_cells(rows: int, cols: int) -> List[Pos]:
    # carving happens on even rows/cols; an even dimension leaves its
    # last row/col as solid wall
    return [(r, c) for r in range(0, rows, 2) for c in range(0, cols, 2)]


def _carve_spanning_tree(rows: int, cols: int, rng: random.Random) -> Set[Pos]:
    """Randomized depth-first carve over the step-2 lattice."""
    origin = rng.choice(_lattice_cells(rows, cols))
    open_cells: Set[Pos] = {origin}
    stack = [origin]

    while stack:
        r, c = stack[-1]
        dirs = list(DIRECTIONS)
        rng.shuffle(dirs)
        for dr, dc in dirs:
            nr, nc = r + 2 * dr, c + 2 * dc
            if not (0 <= nr < rows and 0 <= nc < cols) or (nr, nc) in open_cells:
                continue
            open_cells.add((r + dr, c + dc))
            open_cells.add((nr, nc))
            stack.append((nr, nc))
            break
        else:
            stack.pop()

    return open_cells


def _spare_connectors(rows: int, cols: int, open_cells: Set[Pos]) -> List[Pos]:
    """Walled cells sitting between two open lattice cells, row-major."""
    spare: List[Pos] = []
    for r in range(rows):
        for c in range(cols):
            # lattice cells (both even) and pillars (both odd) never qualify
            if (r, c) in open_cells or r % 2 == c % 2:
                continue
            if r % 2:
                a, b = (r - 1, c), (r + 1, c)
            else:
                a, b = (r, c - 1), (r, c + 1)
            if a in open_cells and b in open_cells:
                spare.append((r, c))
    return spare


def _open_extra_passages(
    rows: int,
    cols: int,
    open_cells: Set[Pos],
    density: float,
    rng: random.Random,
) -> List[Pos]:
    spare = _spare_connectors(rows, cols, open_cells)
    if not spare:
        return []
    count = max(1, round(density * len(spare)))
    chosen = rng.sample(spare, count)
    open_cells.update(chosen)
    return chosen


def hop_distances(rows: int, cols: int, open_cells: Set[Pos], source: Pos) -> Dict[Pos, int]:
    """BFS hop counts from source over open cells."""
    dist = {source: 0}
    q = deque([source])
    while q:
        r, c = q.popleft()
        for dr, dc in DIRECTIONS:
            np = (r + dr, c + dc)
            if np in dist or np not in open_cells:
                continue
            dist[np] = dist[(r, c)] + 1
            q.append(np)
    return dist


def _pick_endpoints(
    rows: int,
    cols: int,
    open_cells: Set[Pos],
    policy: str,
) -> Tuple[Pos, Pos]:
    start: Pos = (0, 0)
    if policy == "corners":
        end: Pos = ((rows - 1) // 2 * 2, (cols - 1) // 2 * 2)
        return start, end

    dist = hop_distances(rows, cols, open_cells, start)
    end = start
    best = -1
    for r in range(rows):
        for c in range(cols):
            d = dist.get((r, c), -1)
            if d > best:
                best = d
                end = (r, c)
    return start, end


def generate_layout(
    rows: int,
    cols: int,
    single_path: bool = True,
    seed: Optional[int] = None,
    extra_passage_density: float = 0.1,
    endpoint_policy: str = "corners",
) -> MazeLayout:
    """
    Carve a maze layout.

    single_path=True gives a spanning tree: exactly one simple path
    between any two open cells. single_path=False then opens
    max(1, round(density * #spare connectors)) extra connector walls,
    each of which closes exactly one cycle.

    Raises InvalidSize for dimensions below 3x3 and ValueError for a
    density outside [0, 1] or an unknown endpoint policy.
    """
    rows, cols = _check_size(rows, cols)
    if not 0.0 <= extra_passage_density <= 1.0:
        raise ValueError(
            f"extra_passage_density must be in [0, 1], got {extra_passage_density}"
        )
    if endpoint_policy not in ENDPOINT_POLICIES:
        raise ValueError(
            f"Unknown endpoint policy: {endpoint_policy!r}. "
            f"Choose from {list(ENDPOINT_POLICIES)}"
        )

    rng = random.Random(seed)
    open_cells = _carve_spanning_tree(rows, cols, rng)
    if not single_path:
        _open_extra_passages(rows, cols, open_cells, extra_passage_density, rng)

    start, end = _pick_endpoints(rows, cols, open_cells, endpoint_policy)

    walls = frozenset(
        (r, c)
        for r in range(rows)
        for c in range(cols)
        if (r, c) not in open_cells
    )
    return MazeLayout(
        rows=rows,
        cols=cols,
        walls=walls,
        start=start,
        end=end,
        single_path=single_path,
        seed=seed,
    )


def generate_maze(
    rows: int,
    cols: int,
    single_path: bool = True,
    **kwargs,
) -> Tuple[Grid, Node, Node]:
    """Generate a layout and build one Grid from it: (grid, start, end)."""
    layout = generate_layout(rows, cols, single_path=single_path, **kwargs)
    return layout.build_grid()


def generate_grids(
    layout: MazeLayout,
    names: Iterable[str],
) -> Dict[str, Tuple[Grid, Node, Node]]:
    """One independently allocated Grid per algorithm name, same walls."""
    return {name: layout.build_grid() for name in names}
