"""Traversable adjacency for flat and layered grids."""
from .grid import CellKind, LayeredGrid

# Up, right, down, left
DIRECTIONS = [(0, -1), (1, 0), (0, 1), (-1, 0)]


def neighbors_2d(grid, pos):
    x, y = pos
    result = []
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if grid.in_bounds(nx, ny) and grid.cells[ny][nx] != CellKind.WALL:
            result.append((nx, ny))
    return result


def neighbors_3d(maze, pos):
    """Same-layer neighbors plus portal jumps.

    A PORTAL_UP cell links to every PORTAL_DOWN cell of the layer above and a
    PORTAL_DOWN cell to every PORTAL_UP cell of the layer below. Portals are
    matched by kind, not by coordinate, so a layer may hold several of them.
    """
    x, y, z = pos
    layer = maze.layers[z]
    result = [(nx, ny, z) for (nx, ny) in neighbors_2d(layer, (x, y))]

    kind = layer.cells[y][x]
    if kind == CellKind.PORTAL_UP and z + 1 < maze.depth:
        result.extend((px, py, z + 1) for (px, py) in maze.layers[z + 1].cells_of(CellKind.PORTAL_DOWN))
    elif kind == CellKind.PORTAL_DOWN and z > 0:
        result.extend((px, py, z - 1) for (px, py) in maze.layers[z - 1].cells_of(CellKind.PORTAL_UP))
    return result


def neighbor_function(grid):
    """Picks the flat or layered resolver once, so the search loop never re-checks."""
    return neighbors_3d if isinstance(grid, LayeredGrid) else neighbors_2d


def get_neighbors(grid, pos):
    return neighbor_function(grid)(grid, pos)
