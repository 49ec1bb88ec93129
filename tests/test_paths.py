import unittest

from portal_maze.paths import portal_crossings, reconstruct_path
from tests.helpers import loop_grid, two_layer_grid


class TestReconstructPath(unittest.TestCase):

    def test_follows_parents_to_start(self):
        came_from = {(2, 1): (1, 1), (3, 1): (2, 1), (3, 2): (3, 1)}
        self.assertEqual(reconstruct_path(came_from, (1, 1), (3, 2)), [(1, 1), (2, 1), (3, 1), (3, 2)])

    def test_start_is_goal(self):
        self.assertEqual(reconstruct_path({}, (4, 4), (4, 4)), [(4, 4)])

    def test_broken_chain_returns_partial_path(self):
        came_from = {(3, 1): (2, 1)}
        with self.assertLogs("portal_maze.paths", level="DEBUG"):
            path = reconstruct_path(came_from, (1, 1), (3, 1))
        self.assertEqual(path, [(2, 1), (3, 1)])

    def test_cyclic_parents_terminate(self):
        came_from = {(1, 0): (2, 0), (2, 0): (1, 0)}
        path = reconstruct_path(came_from, (0, 0), (1, 0))
        self.assertEqual(path[-1], (1, 0))
        self.assertLessEqual(len(path), len(came_from) + 2)


class TestPortalCrossings(unittest.TestCase):

    def test_matched_pair_going_up_and_down(self):
        maze = two_layer_grid()
        up = [(2, 1, 0), (3, 1, 0), (1, 1, 1), (2, 1, 1)]
        self.assertEqual(portal_crossings(maze, up), [((3, 1, 0), (1, 1, 1))])
        down = list(reversed(up))
        self.assertEqual(portal_crossings(maze, down), [((1, 1, 1), (3, 1, 0))])

    def test_layer_change_without_portals_is_ignored(self):
        maze = two_layer_grid()
        self.assertEqual(portal_crossings(maze, [(2, 1, 0), (2, 1, 1)]), [])

    def test_flat_path_has_no_crossings(self):
        self.assertEqual(portal_crossings(loop_grid(), [(1, 1), (2, 1), (3, 1)]), [])
        self.assertEqual(portal_crossings(loop_grid(), []), [])


if __name__ == "__main__":
    unittest.main()
