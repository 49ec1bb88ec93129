"""
Grid model shared by the generator, the neighbor resolver and the search engine.

Maze Representation:
  - A flat maze is a Grid: a row-major matrix where cells[y][x] holds a CellKind.
  - A layered maze is a LayeredGrid: an ordered list of Grids of identical size,
    addressed by z (0 is the bottom layer, z grows upward).
  - Positions are plain tuples, (x, y) for a Grid and (x, y, z) for a LayeredGrid.
    Tuples already compare element-wise, so they are used directly as dict keys;
    position_key() gives the textual form renderers use for their own lookups.

Coordinates: x is the column, y is the row, origin (0, 0) is the top-left corner.
"""
import enum

from .errors import OutOfBounds


class CellKind(enum.IntEnum):
    WALL = 1
    OPEN = 2
    START = 3
    GOAL = 4
    PORTAL_UP = 5
    PORTAL_DOWN = 6


class ColorTag(enum.Enum):
    """Semantic paint events. The renderer decides what each one looks like."""

    VISITED = "visited"
    FRONTIER = "frontier"
    PATH = "path"
    START = "start"
    GOAL = "goal"
    PORTAL_UP = "portal_up"
    PORTAL_DOWN = "portal_down"


CELL_SYMBOLS = {
    CellKind.WALL: "#",
    CellKind.OPEN: ".",
    CellKind.START: "S",
    CellKind.GOAL: "G",
    CellKind.PORTAL_UP: "^",
    CellKind.PORTAL_DOWN: "v",
}


def is_traversable(kind):
    return kind != CellKind.WALL


def position_key(pos):
    """Comma-joined coordinates, e.g. (3, 5, 1) -> "3,5,1"."""
    return ",".join(str(c) for c in pos)


class Grid:
    """A single rectangular layer of cells."""

    def __init__(self, width, height, fill=CellKind.WALL):
        self.width = width
        self.height = height
        self.cells = [[fill for _ in range(width)] for _ in range(height)]

    @classmethod
    def from_rows(cls, rows):
        """Builds a grid from text rows using the CELL_SYMBOLS alphabet."""
        lookup = {symbol: kind for kind, symbol in CELL_SYMBOLS.items()}
        grid = cls(len(rows[0]), len(rows))
        for y, row in enumerate(rows):
            if len(row) != grid.width:
                raise ValueError("all rows must have the same length")
            for x, symbol in enumerate(row):
                grid.cells[y][x] = lookup[symbol]
        return grid

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x, y):
        if not self.in_bounds(x, y):
            raise OutOfBounds((x, y))
        return self.cells[y][x]

    def set_kind(self, x, y, kind):
        if not self.in_bounds(x, y):
            raise OutOfBounds((x, y))
        self.cells[y][x] = kind

    def cells_of(self, *kinds):
        """Row-major list of (x, y) positions whose kind is one of `kinds`."""
        return [(x, y)
                for y in range(self.height)
                for x in range(self.width)
                if self.cells[y][x] in kinds]

    def copy(self):
        clone = Grid(self.width, self.height)
        clone.cells = [list(row) for row in self.cells]
        return clone

    def __eq__(self, other):
        return isinstance(other, Grid) and self.cells == other.cells

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"


class LayeredGrid:
    """A stack of equally sized Grids linked by portal cells."""

    def __init__(self, layers):
        if not layers:
            raise ValueError("a layered grid needs at least one layer")
        width, height = layers[0].width, layers[0].height
        for layer in layers:
            if (layer.width, layer.height) != (width, height):
                raise ValueError("all layers must share the same width and height")
        self.layers = list(layers)
        self.width = width
        self.height = height

    @property
    def depth(self):
        return len(self.layers)

    def in_bounds(self, x, y, z):
        return 0 <= z < self.depth and self.layers[z].in_bounds(x, y)

    def get(self, x, y, z):
        if not self.in_bounds(x, y, z):
            raise OutOfBounds((x, y, z))
        return self.layers[z].cells[y][x]

    def set_kind(self, x, y, z, kind):
        if not self.in_bounds(x, y, z):
            raise OutOfBounds((x, y, z))
        self.layers[z].cells[y][x] = kind

    def find(self, *kinds):
        """All (x, y, z) positions whose kind is one of `kinds`, layer by layer."""
        return [(x, y, z)
                for z, layer in enumerate(self.layers)
                for (x, y) in layer.cells_of(*kinds)]

    def __eq__(self, other):
        return isinstance(other, LayeredGrid) and self.layers == other.layers

    def __repr__(self):
        return f"LayeredGrid({self.width}x{self.height}x{self.depth})"


def kind_at(grid, pos):
    """Returns the CellKind at `pos`, raising OutOfBounds outside the grid.

    A 2-tuple is only valid on a Grid and a 3-tuple only on a LayeredGrid.
    """
    if isinstance(grid, LayeredGrid):
        if len(pos) != 3:
            raise OutOfBounds(pos, f"layered grid needs an (x, y, z) position, got {pos}")
        return grid.get(*pos)
    if len(pos) != 2:
        raise OutOfBounds(pos, f"flat grid needs an (x, y) position, got {pos}")
    return grid.get(*pos)


def find_endpoints(grid):
    """Returns (start, goal) for a generated maze; either may be None."""
    if isinstance(grid, LayeredGrid):
        starts = grid.find(CellKind.START)
        goals = grid.find(CellKind.GOAL)
    else:
        starts = grid.cells_of(CellKind.START)
        goals = grid.cells_of(CellKind.GOAL)
    return (starts[0] if starts else None, goals[0] if goals else None)


def format_grid(grid):
    """Text dump of a maze, one row per line, layers separated by headers."""
    if isinstance(grid, LayeredGrid):
        blocks = []
        for z, layer in enumerate(grid.layers):
            blocks.append(f"=== Layer {z} ===\n" + format_grid(layer))
        return "\n\n".join(blocks)
    return "\n".join("".join(CELL_SYMBOLS[kind] for kind in row) for row in grid.cells)
