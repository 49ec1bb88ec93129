"""Small hand-drawn mazes shared by the test modules."""
from portal_maze.grid import Grid, LayeredGrid

# Two equally short routes around a central block, 9 cells from S to G
LOOP_ROWS = [
    "#######",
    "#S....#",
    "#.###.#",
    "#.....#",
    "#.###.#",
    "#....G#",
    "#######",
]

# The goal is sealed off from the start
SEALED_ROWS = [
    "#######",
    "#S..#G#",
    "#...###",
    "#######",
]

LOWER_ROWS = [
    "#####",
    "#S.^#",
    "#####",
]

UPPER_ROWS = [
    "#####",
    "#v.G#",
    "#####",
]


def loop_grid():
    return Grid.from_rows(LOOP_ROWS)


def sealed_grid():
    return Grid.from_rows(SEALED_ROWS)


def two_layer_grid():
    """Layer 0 climbs at (3, 1); layer 1 lands at (1, 1), an unaligned pair."""
    return LayeredGrid([Grid.from_rows(LOWER_ROWS), Grid.from_rows(UPPER_ROWS)])


def is_connected_path(grid, path, neighbors):
    return all(b in neighbors(grid, a) for a, b in zip(path, path[1:]))
