import importlib.util
import unittest


@unittest.skipUnless(importlib.util.find_spec("tkinter"), "tkinter not available")
class TestMazeAppWithoutMaze(unittest.TestCase):
    """Buttons stay harmless when the first maze could not be generated."""

    def setUp(self):
        from portal_maze.app import MazeApp
        # Skip __init__ so no display is needed; only the state run/reset read
        self.app = MazeApp.__new__(MazeApp)
        self.app.runner = None

    def test_run_is_a_no_op(self):
        self.assertIsNone(self.app.run())

    def test_reset_is_a_no_op(self):
        self.assertIsNone(self.app.reset())


if __name__ == "__main__":
    unittest.main()
