from dataclasses import dataclass

# --- Maze Configuration ---
MAZE_WIDTH = 21     # Cells per row (normalized to odd)
MAZE_HEIGHT = 21    # Cells per column (normalized to odd)
WALL_DENSITY = 0.7  # 0 = many extra openings (loops), 1 = perfect maze
LAYERS = 3          # Layer count for the 3D variant (1 = flat 2D maze)

# --- Search Configuration ---
ALGORITHM = "astar"
ANIMATION_SPEED = 50  # 0..100, higher is faster
LAYER_PENALTY = 8     # A* bias toward portals when off the goal's layer

# --- GUI ---
CELL_SIZE = 18
LAYER_GAP = 24

# --- Color Scheme ---
BG_COLOR = "#2c3e50"
WALL_COLOR = "#bdc3c7"
OPEN_COLOR = "#ecf0f1"
START_COLOR = "#1abc9c"
GOAL_COLOR = "#e74c3c"
VISITED_COLOR = "#34495e"
FRONTIER_COLOR = "#3498db"
PATH_COLOR = "#f39c12"
PORTAL_UP_COLOR = "#9b59b6"
PORTAL_DOWN_COLOR = "#e67e22"


@dataclass
class MazeSettings:
    """Values the UI or command line hands to the core."""

    width: int = MAZE_WIDTH
    height: int = MAZE_HEIGHT
    wall_density: float = WALL_DENSITY
    layers: int = LAYERS
    algorithm: str = ALGORITHM
    animation_speed: int = ANIMATION_SPEED

    @property
    def delay(self):
        """Per-step pause in milliseconds derived from the speed slider."""
        return max(0, 100 - self.animation_speed)

    @property
    def is_3d(self):
        return self.layers > 1
