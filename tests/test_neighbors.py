import unittest

from portal_maze.grid import Grid, LayeredGrid
from portal_maze.neighbors import get_neighbors, neighbor_function, neighbors_2d, neighbors_3d
from tests.helpers import loop_grid, two_layer_grid


class TestNeighbors2D(unittest.TestCase):

    def test_order_is_up_right_down_left(self):
        grid = Grid.from_rows(["...", "...", "..."])
        self.assertEqual(neighbors_2d(grid, (1, 1)), [(1, 0), (2, 1), (1, 2), (0, 1)])

    def test_walls_and_edges_are_skipped(self):
        self.assertEqual(neighbors_2d(loop_grid(), (1, 1)), [(2, 1), (1, 2)])
        corner = Grid.from_rows(["..", ".."])
        self.assertEqual(neighbors_2d(corner, (0, 0)), [(1, 0), (0, 1)])

    def test_dispatch_by_grid_type(self):
        self.assertIs(neighbor_function(loop_grid()), neighbors_2d)
        self.assertIs(neighbor_function(two_layer_grid()), neighbors_3d)
        self.assertEqual(get_neighbors(loop_grid(), (5, 5)), [(5, 4), (4, 5)])


class TestNeighbors3D(unittest.TestCase):

    def test_portal_up_reaches_every_portal_down_above(self):
        self.assertEqual(neighbors_3d(two_layer_grid(), (3, 1, 0)), [(2, 1, 0), (1, 1, 1)])

    def test_portal_down_reaches_portal_up_below(self):
        self.assertEqual(neighbors_3d(two_layer_grid(), (1, 1, 1)), [(2, 1, 1), (3, 1, 0)])

    def test_plain_cells_stay_on_their_layer(self):
        self.assertEqual(neighbors_3d(two_layer_grid(), (2, 1, 0)), [(3, 1, 0), (1, 1, 0)])

    def test_several_portals_link_many_to_many(self):
        maze = LayeredGrid([Grid.from_rows(["^.^"]), Grid.from_rows(["v.v"])])
        self.assertEqual(neighbors_3d(maze, (0, 0, 0)), [(1, 0, 0), (0, 0, 1), (2, 0, 1)])
        self.assertEqual(neighbors_3d(maze, (2, 0, 1)), [(1, 0, 1), (0, 0, 0), (2, 0, 0)])

    def test_portal_without_partner_layer_is_inert(self):
        maze = LayeredGrid([Grid.from_rows(["v."]), Grid.from_rows(["^."])])
        self.assertEqual(neighbors_3d(maze, (0, 0, 0)), [(1, 0, 0)])
        self.assertEqual(neighbors_3d(maze, (0, 0, 1)), [(1, 0, 1)])


if __name__ == "__main__":
    unittest.main()
