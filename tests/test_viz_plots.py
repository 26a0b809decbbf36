import tempfile
import unittest
from pathlib import Path

import numpy as np

from animate import _frame_cuts, animate_search
from io_utils import averages_filename, write_averages_csv
from maze import generate_layout
from pathfinding import get_algorithm
from plot_utils import load_averages, parse_averages_name, plot_metrics_vs_size
from viz import OPEN_COLOR, PATH_COLOR, VISITED_COLOR, WALL_COLOR, draw_maze, maze_image


def _averages(path_length: float) -> dict:
    return {
        name: {"time": 1e6 * (i + 1), "visitedNodes": 10 + i, "visitedPercentage": 5.0 * i,
               "pathLength": path_length, "memoryUsed": 0.1}
        for i, name in enumerate(["dijkstra", "astar", "bfs"])
    }


class VizTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.out_dir = Path(self.tmp.name)
        layout = generate_layout(9, 9, seed=0)
        self.grid, self.start, self.end = layout.build_grid()
        self.visited = get_algorithm("bfs").find_path(self.grid, self.start, self.end)
        self.path = self.grid.path_to(self.end)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_maze_image_layers(self) -> None:
        img = maze_image(self.grid)
        self.assertEqual(img.shape, (9, 9, 3))
        self.assertTrue(np.allclose(img[1, 1], WALL_COLOR))
        self.assertTrue(np.allclose(img[0, 0], OPEN_COLOR))

        img = maze_image(self.grid, self.visited, self.path)
        self.assertTrue(np.allclose(img[0, 0], PATH_COLOR))
        off_path = [n for n in self.visited if n not in self.path]
        for n in off_path:
            self.assertTrue(np.allclose(img[n.row, n.col], VISITED_COLOR))

    def test_draw_maze_writes_png(self) -> None:
        out = self.out_dir / "sub" / "bfs.png"
        draw_maze(self.grid, self.start, self.end, out, visited=self.visited, path=self.path)
        self.assertTrue(out.exists())
        self.assertGreater(out.stat().st_size, 0)

    def test_frame_cuts(self) -> None:
        self.assertEqual(_frame_cuts(0, 10), [0])
        self.assertEqual(_frame_cuts(5, 10), [1, 2, 3, 4, 5])
        cuts = _frame_cuts(1000, 100)
        self.assertLessEqual(len(cuts), 100)
        self.assertEqual(cuts[-1], 1000)

    def test_animate_search_writes_gif(self) -> None:
        out = self.out_dir / "bfs.gif"
        animate_search(self.grid, self.visited, self.path, out, fps=10, max_frames=10, hold_frames=2)
        self.assertTrue(out.exists())


class PlotTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.csv_dir = Path(self.tmp.name)
        order = ["dijkstra", "astar", "bfs"]
        for size in (5, 7, 9):
            write_averages_csv(
                averages_filename(size, size, 2, out_dir=self.csv_dir),
                _averages(size), _averages(size - 1), order,
            )
        write_averages_csv(
            averages_filename(11, 11, 2, marker="other", out_dir=self.csv_dir),
            _averages(11), _averages(10), order,
        )

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_parse_averages_name(self) -> None:
        self.assertEqual(
            parse_averages_name("averages25x30x10xlaptop.csv"),
            {"rows": 25, "cols": 30, "num_tests": 10, "marker": "laptop"},
        )
        self.assertEqual(parse_averages_name("averages5x5x1.csv")["marker"], "")
        self.assertIsNone(parse_averages_name("summary.csv"))

    def test_load_averages_filters_by_marker(self) -> None:
        df = load_averages(self.csv_dir, marker="")
        self.assertEqual(sorted(df["rows"].unique()), [5, 7, 9])
        self.assertEqual(len(df), 3 * 6)
        self.assertEqual(set(df["SinglePath"]), {"single path", "multiple paths"})
        self.assertEqual(sorted(df["Size"].unique()), [25, 49, 81])

        everything = load_averages(self.csv_dir)
        self.assertEqual(len(everything), 4 * 6)

    def test_load_averages_missing_dir(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_averages(self.csv_dir / "nope")

    def test_plot_metrics_vs_size(self) -> None:
        df = load_averages(self.csv_dir, marker="")
        saved = plot_metrics_vs_size(
            df, ["Time [ms]", "PathLength"], output_dir=self.csv_dir / "plots", show=False
        )
        self.assertEqual(len(saved), 2)
        for path in saved:
            self.assertTrue(path.exists())

    def test_unknown_metric(self) -> None:
        df = load_averages(self.csv_dir)
        with self.assertRaises(ValueError):
            plot_metrics_vs_size(df, ["Speed"], show=False)


if __name__ == "__main__":
    unittest.main()
