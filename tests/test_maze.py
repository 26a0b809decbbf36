import unittest
from itertools import combinations

import numpy as np

from config import Config
from maze import (
    Grid,
    InvalidSize,
    MalformedGrid,
    MazeLayout,
    NoPathFound,
    generate_grids,
    generate_layout,
    generate_maze,
)
from tests.helpers import count_simple_paths, is_connected, open_edges, open_set


class SinglePathGenerationTests(unittest.TestCase):
    def test_every_pair_of_open_cells_has_exactly_one_path(self) -> None:
        for seed in range(5):
            layout = generate_layout(5, 5, single_path=True, seed=seed)
            cells = open_set(layout)
            for a, b in combinations(sorted(cells), 2):
                self.assertEqual(count_simple_paths(cells, a, b), 1, f"seed={seed} {a}->{b}")

    def test_open_cells_form_a_spanning_tree(self) -> None:
        for rows, cols in [(9, 9), (11, 7), (21, 15)]:
            layout = generate_layout(rows, cols, seed=3)
            cells = open_set(layout)
            self.assertTrue(is_connected(cells))
            self.assertEqual(open_edges(cells), len(cells) - 1)

    def test_every_lattice_cell_is_carved(self) -> None:
        layout = generate_layout(9, 11, seed=1)
        for r in range(0, 9, 2):
            for c in range(0, 11, 2):
                self.assertFalse(layout.is_wall((r, c)))
        # pillars (odd, odd) stay solid
        for r in range(1, 9, 2):
            for c in range(1, 11, 2):
                self.assertTrue(layout.is_wall((r, c)))

    def test_even_dimensions_leave_last_row_and_col_walled(self) -> None:
        layout = generate_layout(6, 8, seed=2)
        self.assertEqual((layout.rows, layout.cols), (6, 8))
        self.assertTrue(all(layout.is_wall((5, c)) for c in range(8)))
        self.assertTrue(all(layout.is_wall((r, 7)) for r in range(6)))
        cells = open_set(layout)
        self.assertTrue(is_connected(cells))
        self.assertEqual(open_edges(cells), len(cells) - 1)

    def test_corner_endpoints(self) -> None:
        self.assertEqual(generate_layout(5, 5, seed=0).end, (4, 4))
        self.assertEqual(generate_layout(6, 8, seed=0).end, (4, 6))
        layout = generate_layout(5, 5, seed=0)
        self.assertEqual(layout.start, (0, 0))
        self.assertFalse(layout.is_wall(layout.start))
        self.assertFalse(layout.is_wall(layout.end))

    def test_farthest_endpoint_is_at_max_hop_distance(self) -> None:
        from tests.helpers import hop_distance_table

        layout = generate_layout(11, 11, seed=4, endpoint_policy="farthest")
        dist = hop_distance_table(layout)
        self.assertNotEqual(layout.start, layout.end)
        self.assertEqual(dist[layout.end], max(dist.values()))

    def test_same_seed_same_layout(self) -> None:
        a = generate_layout(15, 15, single_path=False, seed=42)
        b = generate_layout(15, 15, single_path=False, seed=42)
        self.assertEqual(a, b)
        c = generate_layout(15, 15, single_path=False, seed=43)
        self.assertNotEqual(a.walls, c.walls)


class MultiPathGenerationTests(unittest.TestCase):
    def test_multi_path_adds_cycles_on_top_of_the_tree(self) -> None:
        for seed in range(5):
            single = generate_layout(5, 5, single_path=True, seed=seed)
            multi = generate_layout(5, 5, single_path=False, seed=seed)

            # same carve, then extra openings only
            self.assertTrue(multi.walls < single.walls)
            opened = single.walls - multi.walls
            self.assertEqual(len(opened), 1)

            cells = open_set(multi)
            (r, c), = opened
            a, b = ((r - 1, c), (r + 1, c)) if r % 2 else ((r, c - 1), (r, c + 1))
            self.assertGreaterEqual(count_simple_paths(cells, a, b), 2)
            self.assertGreaterEqual(count_simple_paths(cells, multi.start, multi.end), 1)

    def test_density_controls_number_of_openings(self) -> None:
        single = generate_layout(21, 21, single_path=True, seed=7)
        sparse = generate_layout(21, 21, single_path=False, seed=7, extra_passage_density=0.1)
        dense = generate_layout(21, 21, single_path=False, seed=7, extra_passage_density=0.5)
        n_sparse = len(single.walls - sparse.walls)
        n_dense = len(single.walls - dense.walls)
        self.assertGreater(n_dense, n_sparse)
        # each opening closes exactly one cycle
        cells = open_set(dense)
        self.assertEqual(open_edges(cells), len(cells) - 1 + n_dense)

    def test_full_density_opens_every_connector(self) -> None:
        layout = generate_layout(7, 7, single_path=False, seed=1, extra_passage_density=1.0)
        # only the (odd, odd) pillars remain
        self.assertEqual(len(layout.walls), 9)

    def test_density_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            generate_layout(7, 7, single_path=False, extra_passage_density=1.5)


class SizeAndConfigTests(unittest.TestCase):
    def test_too_small_sizes_raise_invalid_size(self) -> None:
        for rows, cols in [(2, 5), (5, 2), (0, 0), (-3, 9)]:
            with self.assertRaises(InvalidSize):
                generate_layout(rows, cols)

    def test_non_integer_size_raises_invalid_size(self) -> None:
        with self.assertRaises(InvalidSize):
            generate_layout(5.0, 5)
        with self.assertRaises(InvalidSize):
            generate_layout(True, 5)

    def test_numpy_integer_sizes_are_accepted(self) -> None:
        layout = generate_layout(np.int64(9), np.int32(7), seed=0)
        self.assertEqual((layout.rows, layout.cols), (9, 7))
        self.assertIs(type(layout.rows), int)
        self.assertEqual(layout, generate_layout(9, 7, seed=0))

    def test_invalid_size_is_a_value_error(self) -> None:
        self.assertTrue(issubclass(InvalidSize, ValueError))

    def test_smallest_maze(self) -> None:
        single = generate_layout(3, 3, seed=0)
        multi = generate_layout(3, 3, single_path=False, seed=0)
        self.assertEqual(single.open_count(), 7)
        self.assertEqual(multi.open_count(), 8)

    def test_unknown_endpoint_policy(self) -> None:
        with self.assertRaises(ValueError):
            generate_layout(5, 5, endpoint_policy="random")

    def test_from_config(self) -> None:
        cfg = Config(rows=9, cols=13, single_path=False, seed=5)
        layout = MazeLayout.from_config(cfg)
        self.assertEqual((layout.rows, layout.cols), (9, 13))
        self.assertFalse(layout.single_path)
        self.assertEqual(layout, generate_layout(9, 13, single_path=False, seed=5))

    def test_to_text(self) -> None:
        text = generate_layout(3, 3, seed=0).to_text().splitlines()
        self.assertEqual(len(text), 3)
        self.assertEqual(text[0][0], "S")
        self.assertEqual(text[2][2], "E")
        self.assertEqual(text[1][1], "#")


class GridTests(unittest.TestCase):
    def test_build_grid_marks_endpoints(self) -> None:
        grid, start, end = generate_maze(7, 7, seed=0)
        self.assertTrue(start.is_start)
        self.assertTrue(end.is_end)
        self.assertIs(grid[(0, 0)], start)
        self.assertIs(grid.nodes[end.index], end)
        self.assertEqual(grid.open_count() + grid.wall_count(), 49)

    def test_generate_grids_are_independent(self) -> None:
        layout = generate_layout(7, 7, seed=0)
        grids = generate_grids(layout, ["bfs", "dfs"])
        g1, s1, _ = grids["bfs"]
        g2, s2, _ = grids["dfs"]
        self.assertIsNot(g1, g2)
        self.assertIsNot(s1, s2)
        s1.visited = True
        s1.previous = 3
        self.assertFalse(s2.visited)
        self.assertIsNone(s2.previous)
        self.assertEqual(
            [n.is_wall for n in g1], [n.is_wall for n in g2]
        )

    def test_neighbors_skip_walls_and_edges(self) -> None:
        grid = Grid.from_walls(3, 3, {(0, 1)})
        corner = grid[(0, 0)]
        self.assertEqual([n.pos for n in grid.neighbors(corner)], [(1, 0)])
        center = grid[(1, 1)]
        # N is a wall; then E, S, W
        self.assertEqual([n.pos for n in grid.neighbors(center)], [(1, 2), (2, 1), (1, 0)])

    def test_out_of_bounds_lookup(self) -> None:
        grid = Grid.from_walls(3, 3, set())
        with self.assertRaises(MalformedGrid):
            grid.node(3, 0)

    def test_validate_endpoints(self) -> None:
        grid = Grid.from_walls(3, 3, {(1, 1)})
        other = Grid.from_walls(3, 3, set())
        with self.assertRaises(MalformedGrid):
            grid.validate_endpoints(grid[(1, 1)], grid[(2, 2)])
        with self.assertRaises(MalformedGrid):
            grid.validate_endpoints(grid[(0, 0)], other[(2, 2)])
        grid.validate_endpoints(grid[(0, 0)], grid[(2, 2)])

    def test_path_to_unreached_end_is_empty(self) -> None:
        grid = Grid.from_walls(3, 3, set())
        end = grid[(2, 2)]
        self.assertEqual(grid.path_to(end), [])
        with self.assertRaises(NoPathFound):
            grid.require_path_to(end)


if __name__ == "__main__":
    unittest.main()
