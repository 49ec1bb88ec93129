"""Prim's maze generation (flat and portal-linked layers) with five step-by-step search strategies."""
from .errors import GenerationError, MazeError, OutOfBounds, SearchCancelled
from .generator import generate_maze, generate_maze_3d
from .grid import CellKind, ColorTag, Grid, LayeredGrid, find_endpoints, format_grid, kind_at, position_key
from .neighbors import get_neighbors
from .paths import portal_crossings, reconstruct_path
from .runner import SearchRunner, reset_colors
from .search import (ALGORITHMS, CancellationToken, SearchResult, a_star_search, breadth_first_search,
                     depth_first_search, dijkstra_search, greedy_best_first_search, search)

__version__ = "0.1.0"
