from typing import Dict, List, Set

from maze import DIRECTIONS, MazeLayout, Node, Pos


def open_set(layout: MazeLayout) -> Set[Pos]:
    return set(layout.open_cells())


def open_edges(cells: Set[Pos]) -> int:
    """Number of 4-adjacent open pairs."""
    return sum(
        1
        for (r, c) in cells
        for nb in ((r + 1, c), (r, c + 1))
        if nb in cells
    )


def is_connected(cells: Set[Pos]) -> bool:
    if not cells:
        return True
    first = next(iter(cells))
    seen = {first}
    stack = [first]
    while stack:
        r, c = stack.pop()
        for dr, dc in DIRECTIONS:
            nb = (r + dr, c + dc)
            if nb in cells and nb not in seen:
                seen.add(nb)
                stack.append(nb)
    return seen == cells


def count_simple_paths(cells: Set[Pos], a: Pos, b: Pos, limit: int = 10) -> int:
    """Exhaustive simple-path count from a to b (stops counting at limit)."""
    found = 0
    on_path = {a}

    def walk(p: Pos) -> None:
        nonlocal found
        if found >= limit:
            return
        if p == b:
            found += 1
            return
        r, c = p
        for dr, dc in DIRECTIONS:
            nb = (r + dr, c + dc)
            if nb in cells and nb not in on_path:
                on_path.add(nb)
                walk(nb)
                on_path.discard(nb)

    walk(a)
    return found


def positions(nodes: List[Node]) -> List[Pos]:
    return [n.pos for n in nodes]


def assert_contiguous(test, path: List[Node]) -> None:
    """Consecutive cells 4-adjacent, all open, no repeats."""
    test.assertEqual(len({n.index for n in path}), len(path))
    for n in path:
        test.assertFalse(n.is_wall)
    for a, b in zip(path, path[1:]):
        test.assertEqual(abs(a.row - b.row) + abs(a.col - b.col), 1)


def hop_distance_table(layout: MazeLayout) -> Dict[Pos, int]:
    from maze import hop_distances
    return hop_distances(layout.rows, layout.cols, open_set(layout), layout.start)
