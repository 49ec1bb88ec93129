import contextlib
import io
import os
import tempfile
import unittest

from portal_maze.cli import build_parser, main
from portal_maze.config import MazeSettings


def run_cli(*argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main(list(argv))
    return code, out.getvalue()


class TestCli(unittest.TestCase):

    def test_flat_solve(self):
        code, out = run_cli("--width", "11", "--height", "11", "--seed", "2", "--algorithm", "bfs")
        self.assertEqual(code, 0)
        self.assertIn("Breadth-First Search (BFS): found", out)
        self.assertIn("path length", out)

    def test_print_marks_path(self):
        code, out = run_cli("--width", "11", "--height", "11", "--seed", "2", "--print")
        self.assertEqual(code, 0)
        maze_text = out.split("\n\n")[0]
        self.assertEqual(maze_text.count("S"), 1)
        self.assertEqual(maze_text.count("G"), 1)
        self.assertIn("*", maze_text)

    def test_layered_print(self):
        code, out = run_cli("--width", "11", "--height", "11", "--layers", "3", "--seed", "5", "--print")
        self.assertEqual(code, 0)
        for z in range(3):
            self.assertIn(f"=== Layer {z} ===", out)
        self.assertIn("^", out)
        self.assertIn("v", out)
        self.assertIn("A* Search: found", out)

    def test_too_small_maze_fails(self):
        code, out = run_cli("--width", "3", "--height", "3", "--seed", "1")
        self.assertEqual(code, 1)
        self.assertIn("Could not generate maze", out)

    def test_unknown_algorithm_is_rejected(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args(["--algorithm", "bogo"])

    def test_bench_writes_results(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, out = run_cli("--bench", "--runs", "1", "--width", "9", "--height", "9",
                                "--seed", "3", "--out_dir", tmp)
            self.assertEqual(code, 0)
            self.assertIn(f"Wrote results to {tmp}", out)
            self.assertTrue(os.path.exists(os.path.join(tmp, "summary.csv")))


class TestMazeSettings(unittest.TestCase):

    def test_speed_maps_to_delay(self):
        self.assertEqual(MazeSettings(animation_speed=100).delay, 0)
        self.assertEqual(MazeSettings(animation_speed=30).delay, 70)

    def test_layers_pick_the_variant(self):
        self.assertFalse(MazeSettings(layers=1).is_3d)
        self.assertTrue(MazeSettings(layers=3).is_3d)


if __name__ == "__main__":
    unittest.main()
