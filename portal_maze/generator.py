"""
Maze generation with randomized Prim's algorithm, flat and layered.

Maze Data Structure Context:
  - Generation works on a Grid (see grid.py) that starts with every cell a WALL.
  - Only the odd-parity sub-lattice holds "rooms"; the cell between two rooms
    two steps apart is the wall that gets knocked down to join them.
  - The outer ring of cells is never carved, so every layer keeps a solid border.

The layered variant stacks independent flat mazes and joins each adjacent pair
with a PORTAL_UP cell in the lower layer and a PORTAL_DOWN cell in the upper one.
"""
import logging
import random

from .config import LAYERS, WALL_DENSITY
from .errors import GenerationError
from .grid import CellKind, Grid, LayeredGrid

logger = logging.getLogger(__name__)

# Two-step moves on the room lattice: right, down, left, up
ROOM_STEPS = [(2, 0), (0, 2), (-2, 0), (0, -2)]
ORTHOGONAL = [(0, -1), (1, 0), (0, 1), (-1, 0)]


def _make_odd(n):
    return n + 1 if n % 2 == 0 else n


def _in_interior(grid, x, y):
    return 0 < x < grid.width - 1 and 0 < y < grid.height - 1


def _carve_prims(grid, rng):
    """Carves a perfect maze into an all-wall grid using randomized Prim's.

    Algorithm:
      1. Open a random room (odd x, odd y) as the seed.
      2. Queue every (wall, room) pair two steps away from the seed.
      3. While the queue is not empty:
         a. Pop a uniformly random pair.
         b. If its room is still a wall, open the wall and the room, then queue
            the new room's pairs whose room and wall are both still walls.

    Every room joins the tree through exactly one wall, so the result is a
    spanning tree over all rooms: connected, with no loops.
    """
    w, h = grid.width, grid.height
    seed_x = 1 + 2 * rng.randrange((w - 1) // 2)
    seed_y = 1 + 2 * rng.randrange((h - 1) // 2)
    grid.cells[seed_y][seed_x] = CellKind.OPEN

    frontier = []   # (wall_x, wall_y, room_x, room_y)
    queued = set()  # wall positions currently in the frontier

    def add_pairs(cx, cy):
        for dx, dy in ROOM_STEPS:
            nx, ny = cx + dx, cy + dy
            if not _in_interior(grid, nx, ny) or grid.cells[ny][nx] != CellKind.WALL:
                continue
            wx, wy = cx + dx // 2, cy + dy // 2
            if (wx, wy) in queued or grid.cells[wy][wx] != CellKind.WALL:
                continue
            frontier.append((wx, wy, nx, ny))
            queued.add((wx, wy))

    add_pairs(seed_x, seed_y)

    while frontier:
        wx, wy, rx, ry = frontier.pop(rng.randrange(len(frontier)))
        queued.discard((wx, wy))
        # Stale entry: the room was reached through another wall
        if grid.cells[ry][rx] != CellKind.WALL:
            continue
        grid.cells[wy][wx] = CellKind.OPEN
        grid.cells[ry][rx] = CellKind.OPEN
        add_pairs(rx, ry)


def _add_openings(grid, wall_density, rng):
    """Knocks down extra walls to create loops.

    Attempts floor(w * h * (1 - density) * 0.1) random interior cells; a wall is
    only opened when at least two of its orthogonal neighbors are already open,
    so openings join existing corridors and never strand a cell.
    """
    attempts = int(grid.width * grid.height * (1 - wall_density) * 0.1)
    opened = 0
    for _ in range(attempts):
        x = rng.randrange(grid.width - 2) + 1
        y = rng.randrange(grid.height - 2) + 1
        if grid.cells[y][x] != CellKind.WALL:
            continue
        open_neighbors = sum(1 for dx, dy in ORTHOGONAL
                             if grid.cells[y + dy][x + dx] == CellKind.OPEN)
        if open_neighbors >= 2:
            grid.cells[y][x] = CellKind.OPEN
            opened += 1
    return opened


def _in_top_left(grid, x, y):
    return x < grid.width / 3 and y < grid.height / 3


def _in_bottom_right(grid, x, y):
    return x > 2 * grid.width / 3 and y > 2 * grid.height / 3


def generate_maze(width, height, wall_density=WALL_DENSITY, rng=None):
    """Generates a flat maze with one START and one GOAL cell.

    Parameters:
      width, height (int): requested size, even values are bumped to the next odd
      wall_density (float): 1 keeps the perfect maze, lower values add loops
      rng: a random.Random instance (defaults to the module-level generator)

    Raises:
      GenerationError: if the maze is too small to hold a start and a goal
    """
    rng = rng or random
    if width < 3 or height < 3:
        raise GenerationError(f"maze must be at least 3x3, got {width}x{height}")
    wall_density = min(1.0, max(0.0, wall_density))

    # Step 1: odd dimensions, every cell a wall
    grid = Grid(_make_odd(width), _make_odd(height))

    # Step 2: perfect maze
    _carve_prims(grid, rng)

    # Step 3: loops
    opened = 0
    if wall_density < 1.0:
        opened = _add_openings(grid, wall_density, rng)

    # Step 4: start in the top-left third, goal in the bottom-right third
    open_cells = grid.cells_of(CellKind.OPEN)
    if len(open_cells) < 2:
        raise GenerationError("maze too small to place start and goal")

    top_left = [(x, y) for (x, y) in open_cells if _in_top_left(grid, x, y)]
    start = rng.choice(top_left) if top_left else open_cells[0]

    remaining = [p for p in open_cells if p != start]
    bottom_right = [(x, y) for (x, y) in remaining if _in_bottom_right(grid, x, y)]
    goal = rng.choice(bottom_right) if bottom_right else remaining[-1]

    grid.set_kind(*start, CellKind.START)
    grid.set_kind(*goal, CellKind.GOAL)

    logger.info("Generated %dx%d maze: %d open cells, %d extra openings, start=%s goal=%s",
                grid.width, grid.height, len(open_cells), opened, start, goal)
    return grid


def _link_layers(maze, z, aligned, rng):
    """Stamps a PORTAL_UP in layer z and a matching PORTAL_DOWN in layer z + 1."""
    lower, upper = maze.layers[z], maze.layers[z + 1]
    lower_open = lower.cells_of(CellKind.OPEN)
    upper_open = upper.cells_of(CellKind.OPEN)
    if not lower_open or not upper_open:
        raise GenerationError(f"no open cell left to place a portal between layers {z} and {z + 1}")

    if aligned:
        shared = [p for p in lower_open if upper.cells[p[1]][p[0]] == CellKind.OPEN]
        if shared:
            x, y = rng.choice(shared)
            lower.set_kind(x, y, CellKind.PORTAL_UP)
            upper.set_kind(x, y, CellKind.PORTAL_DOWN)
            return (x, y, z), (x, y, z + 1)
        # Portals are matched by kind, not by coordinate, so an unaligned pair still links the layers
        logger.warning("Layers %d and %d share no open cell; placing an unaligned portal pair", z, z + 1)

    bottom = rng.choice(lower_open)
    top = rng.choice(upper_open)
    lower.set_kind(*bottom, CellKind.PORTAL_UP)
    upper.set_kind(*top, CellKind.PORTAL_DOWN)
    return bottom + (z,), top + (z + 1,)


def generate_maze_3d(width, height, layers=LAYERS, wall_density=WALL_DENSITY, aligned=True, rng=None):
    """Generates a stack of flat mazes joined by portal pairs.

    Pipeline:
      1. Generate `layers` independent flat mazes and clear their START/GOAL markers.
      2. Join every adjacent pair with one PORTAL_UP / PORTAL_DOWN pair. With
         `aligned`, both portals share a coordinate that is open on both layers;
         otherwise each layer gets an independently chosen open cell.
      3. Pick START and GOAL uniformly among all (top-left third, bottom-right
         third) candidate pairs that lie on different layers.

    Raises:
      GenerationError: for fewer than two layers, a layer too small to generate,
        or when no cross-layer start/goal pair exists
    """
    rng = rng or random
    if layers < 2:
        raise GenerationError(f"a layered maze needs at least 2 layers, got {layers}")

    grids = [generate_maze(width, height, wall_density, rng) for _ in range(layers)]
    for grid in grids:
        for (x, y) in grid.cells_of(CellKind.START, CellKind.GOAL):
            grid.cells[y][x] = CellKind.OPEN
    maze = LayeredGrid(grids)

    portals = [_link_layers(maze, z, aligned, rng) for z in range(layers - 1)]

    starts = [(x, y, z) for (x, y, z) in maze.find(CellKind.OPEN)
              if _in_top_left(maze.layers[z], x, y)]
    goals = [(x, y, z) for (x, y, z) in maze.find(CellKind.OPEN)
             if _in_bottom_right(maze.layers[z], x, y)]
    pairs = [(s, g) for s in starts for g in goals if s[2] != g[2]]
    if not pairs:
        raise GenerationError("no start/goal pair on different layers")

    start, goal = rng.choice(pairs)
    maze.set_kind(*start, CellKind.START)
    maze.set_kind(*goal, CellKind.GOAL)

    logger.info("Generated %dx%dx%d layered maze: portals=%s start=%s goal=%s",
                maze.width, maze.height, maze.depth, portals, start, goal)
    return maze
