import queue
import random
import tkinter as tk
from tkinter import messagebox, ttk

from .config import (BG_COLOR, CELL_SIZE, FRONTIER_COLOR, GOAL_COLOR, LAYER_GAP, OPEN_COLOR, PATH_COLOR,
                     PORTAL_DOWN_COLOR, PORTAL_UP_COLOR, START_COLOR, VISITED_COLOR, WALL_COLOR, MazeSettings)
from .errors import GenerationError
from .generator import generate_maze, generate_maze_3d
from .grid import CellKind, ColorTag, LayeredGrid, find_endpoints
from .runner import SearchRunner
from .search import ALGORITHMS

# The renderer owns the tag -> color mapping; None is a plain open cell
TAG_COLORS = {
    None: OPEN_COLOR,
    ColorTag.VISITED: VISITED_COLOR,
    ColorTag.FRONTIER: FRONTIER_COLOR,
    ColorTag.PATH: PATH_COLOR,
    ColorTag.START: START_COLOR,
    ColorTag.GOAL: GOAL_COLOR,
    ColorTag.PORTAL_UP: PORTAL_UP_COLOR,
    ColorTag.PORTAL_DOWN: PORTAL_DOWN_COLOR,
}

POLL_MS = 30
EVENTS_PER_POLL = 500


class MazeApp:
    """
    Tkinter front end for the maze generator and search engine.

    Layers are drawn side by side on one canvas (layer 0 on the left). The
    search runs on a SearchRunner worker thread; its paint callbacks only push
    events onto a queue that the Tk thread drains with root.after, so no widget
    is touched off the main thread.
    """
    def __init__(self, root, settings=None):
        self.root = root
        self.root.title("Portal Maze Pathfinding Visualizer")
        self.root.configure(bg=BG_COLOR)

        settings = settings or MazeSettings()
        self.algorithm_var = tk.StringVar(value=ALGORITHMS[settings.algorithm].label)
        self.width_var = tk.IntVar(value=settings.width)
        self.height_var = tk.IntVar(value=settings.height)
        self.layers_var = tk.IntVar(value=settings.layers)
        self.density_var = tk.DoubleVar(value=settings.wall_density)
        self.speed_var = tk.IntVar(value=settings.animation_speed)
        self.stats_var = tk.StringVar(value="")

        self.events = queue.Queue()
        self.cells = {}  # position -> canvas rectangle id
        self.maze = None
        self.runner = None

        self._setup_ui()
        self.new_maze()
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.root.after(POLL_MS, self._poll_events)

    def _setup_ui(self):
        style = ttk.Style(); style.configure("TLabel", background=BG_COLOR, foreground="white")
        style.configure("TScale", background=BG_COLOR); style.configure("TButton", padding=6)

        control_top = tk.Frame(self.root, bg=BG_COLOR, padx=10, pady=5); control_top.pack(side=tk.TOP, fill=tk.X)
        control_bottom = tk.Frame(self.root, bg=BG_COLOR, padx=10, pady=5); control_bottom.pack(side=tk.TOP, fill=tk.X)
        maze_frame = tk.Frame(self.root, bg=BG_COLOR, padx=10, pady=10); maze_frame.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        ttk.Button(control_top, text="New Maze", command=self.new_maze).pack(side=tk.LEFT, padx=5)
        ttk.Button(control_top, text="Run", command=self.run).pack(side=tk.LEFT, padx=5)
        ttk.Button(control_top, text="Reset", command=self.reset).pack(side=tk.LEFT, padx=5)
        ttk.Label(control_top, text="Algorithm:").pack(side=tk.LEFT, padx=(10, 5))
        labels = [cls.label for cls in ALGORITHMS.values()]
        ttk.Combobox(control_top, textvariable=self.algorithm_var, values=labels, state="readonly", width=28).pack(side=tk.LEFT)
        ttk.Label(control_top, text="Speed:").pack(side=tk.LEFT, padx=(10, 5))
        ttk.Scale(control_top, from_=0, to=100, orient=tk.HORIZONTAL, variable=self.speed_var).pack(side=tk.LEFT, fill=tk.X, expand=True)

        ttk.Label(control_bottom, text="Width:").pack(side=tk.LEFT, padx=5)
        ttk.Spinbox(control_bottom, from_=5, to=61, increment=2, textvariable=self.width_var, width=5).pack(side=tk.LEFT)
        ttk.Label(control_bottom, text="Height:").pack(side=tk.LEFT, padx=(10, 5))
        ttk.Spinbox(control_bottom, from_=5, to=61, increment=2, textvariable=self.height_var, width=5).pack(side=tk.LEFT)
        ttk.Label(control_bottom, text="Layers:").pack(side=tk.LEFT, padx=(10, 5))
        ttk.Spinbox(control_bottom, from_=1, to=6, textvariable=self.layers_var, width=4).pack(side=tk.LEFT)
        ttk.Label(control_bottom, text="Wall density:").pack(side=tk.LEFT, padx=(10, 5))
        ttk.Scale(control_bottom, from_=0.0, to=1.0, orient=tk.HORIZONTAL, variable=self.density_var).pack(side=tk.LEFT)
        ttk.Label(control_bottom, textvariable=self.stats_var, width=60, anchor=tk.E).pack(side=tk.RIGHT)

        self.canvas = tk.Canvas(maze_frame, bg=BG_COLOR, highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)

    def settings(self):
        by_label = {cls.label: name for name, cls in ALGORITHMS.items()}
        return MazeSettings(
            width=self.width_var.get(),
            height=self.height_var.get(),
            wall_density=round(self.density_var.get(), 2),
            layers=self.layers_var.get(),
            algorithm=by_label[self.algorithm_var.get()],
            animation_speed=self.speed_var.get(),
        )

    # --- Maze lifecycle ---
    def new_maze(self):
        if self.runner:
            self.runner.cancel()
        s = self.settings()
        try:
            if s.is_3d:
                self.maze = generate_maze_3d(s.width, s.height, s.layers, s.wall_density, rng=random.Random())
            else:
                self.maze = generate_maze(s.width, s.height, s.wall_density, rng=random.Random())
        except GenerationError as e:
            messagebox.showerror("Maze generation failed", str(e))
            return
        # Events from the previous maze refer to cells that no longer exist
        self._drain(apply=False)
        start, goal = find_endpoints(self.maze)
        self.runner = SearchRunner(self.maze, start, goal, self._queue_paint, self._queue_edge)
        self.stats_var.set("")
        self._draw_maze()

    def run(self):
        # No maze yet: the first generation failed
        if self.runner is None:
            return
        self._clear_search()
        s = self.settings()
        self.stats_var.set(f"Running {ALGORITHMS[s.algorithm].label}...")
        self.runner.start(s.algorithm, s.delay, on_done=lambda result: self.events.put(("done", result)))

    def reset(self):
        if self.runner is None:
            return
        self._clear_search()
        self.runner.reset()
        self.stats_var.set("")

    def _clear_search(self):
        # Flush the stopped search's events before its path edges are removed
        self.runner.cancel()
        self._drain(apply=True)
        self.canvas.delete("edge")

    def close(self):
        if self.runner:
            self.runner.cancel()
        self.root.destroy()

    # --- Worker-thread callbacks (queue only) ---
    def _queue_paint(self, pos, tag):
        self.events.put(("paint", pos, tag))

    def _queue_edge(self, a, b, tag):
        self.events.put(("edge", a, b, tag))

    # --- Tk thread ---
    def _poll_events(self):
        self._drain(apply=True, limit=EVENTS_PER_POLL)
        self.root.after(POLL_MS, self._poll_events)

    def _drain(self, apply, limit=None):
        handled = 0
        while limit is None or handled < limit:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                break
            handled += 1
            if apply:
                self._apply(event)

    def _apply(self, event):
        kind = event[0]
        if kind == "paint":
            _, pos, tag = event
            rect = self.cells.get(pos)
            if rect is not None:
                self.canvas.itemconfig(rect, fill=TAG_COLORS[tag])
        elif kind == "edge":
            _, a, b, tag = event
            self._draw_line(a, b, TAG_COLORS[tag], width=3, tags=("edge",))
        elif kind == "done":
            result = event[1]
            if result is None:
                return
            status = "found" if result.success else "no path"
            self.stats_var.set(f"{ALGORITHMS[result.algorithm].label}: {status} | path length {result.path_length}"
                               f" | nodes visited {result.visited_count}")

    def _layer_origin(self, z):
        return 10 + z * (self.maze.width * CELL_SIZE + LAYER_GAP), 30

    def _cell_box(self, pos):
        x, y = pos[0], pos[1]
        ox, oy = self._layer_origin(pos[2] if len(pos) == 3 else 0)
        return ox + x * CELL_SIZE, oy + y * CELL_SIZE, ox + (x + 1) * CELL_SIZE, oy + (y + 1) * CELL_SIZE

    def _draw_line(self, a, b, color, width=1, dash=None, tags=()):
        ax1, ay1, ax2, ay2 = self._cell_box(a); bx1, by1, bx2, by2 = self._cell_box(b)
        self.canvas.create_line((ax1 + ax2) / 2, (ay1 + ay2) / 2, (bx1 + bx2) / 2, (by1 + by2) / 2,
                                fill=color, width=width, dash=dash, tags=tags)

    def _draw_maze(self):
        self.canvas.delete("all"); self.cells.clear()
        layers = self.maze.layers if isinstance(self.maze, LayeredGrid) else [self.maze]
        for z, layer in enumerate(layers):
            ox, oy = self._layer_origin(z)
            if len(layers) > 1:
                self.canvas.create_text(ox, oy - 15, text=f"Layer {z}", fill="white", anchor=tk.W)
            for y in range(layer.height):
                for x in range(layer.width):
                    pos = (x, y, z) if len(layers) > 1 else (x, y)
                    x1, y1, x2, y2 = self._cell_box(pos)
                    kind = layer.cells[y][x]
                    if kind == CellKind.WALL:
                        self.canvas.create_rectangle(x1, y1, x2, y2, fill=WALL_COLOR, outline="")
                    else:
                        self.cells[pos] = self.canvas.create_rectangle(x1, y1, x2, y2, fill=OPEN_COLOR, outline=BG_COLOR)
        # Resting colors arrive through the same event path the search uses
        self.runner.reset()
        if isinstance(self.maze, LayeredGrid):
            self._draw_portal_links()
        w = 20 + len(layers) * (self.maze.width * CELL_SIZE + LAYER_GAP)
        h = 40 + self.maze.height * CELL_SIZE
        self.canvas.configure(width=w, height=h)

    def _draw_portal_links(self):
        for z in range(self.maze.depth - 1):
            for (ux, uy) in self.maze.layers[z].cells_of(CellKind.PORTAL_UP):
                for (dx, dy) in self.maze.layers[z + 1].cells_of(CellKind.PORTAL_DOWN):
                    self._draw_line((ux, uy, z), (dx, dy, z + 1), PORTAL_UP_COLOR, dash=(3, 3))


def main(settings=None):
    root = tk.Tk()
    MazeApp(root, settings)
    root.mainloop()
