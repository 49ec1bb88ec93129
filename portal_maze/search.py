"""
Unified search engine for flat and layered mazes.

All five strategies share one loop (`search`) and only differ in how their
frontier orders positions and whether they accept a cheaper route to a
position that is already waiting in the frontier:

  Strategy   Frontier                  Ordering        Re-enqueue on cheaper route
  --------   ------------------------  --------------  ---------------------------
  bfs        FIFO queue                discovery       no
  dfs        LIFO stack                discovery       no
  dijkstra   binary heap               cost g          yes
  astar      binary heap               f = g + h       yes
  greedy     binary heap               h               no

Every edge costs 1. Heap entries carry an insertion counter, so equal
priorities pop in the order they were pushed.

Progress is reported through a paint(position, ColorTag) callback and, for
layered mazes, a paint_edge(a, b, ColorTag) callback for portal jumps on the
final path. The loop pauses after each VISITED event so a visualizer can keep
up; the pause is cancellable through the same CancellationToken that aborts
the search.
"""
import collections
import heapq
import itertools
import logging
import threading
from dataclasses import dataclass, field

from .config import LAYER_PENALTY
from .errors import SearchCancelled
from .grid import ColorTag, kind_at
from .neighbors import neighbor_function
from .paths import portal_crossings, reconstruct_path

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative stop signal shared between a search and whoever started it."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise SearchCancelled()

    def sleep(self, seconds):
        """Pauses for `seconds`, waking early on cancel. Returns True if cancelled."""
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)


@dataclass
class SearchResult:
    path: list
    visited_count: int
    success: bool
    algorithm: str = ""
    came_from: dict = field(default_factory=dict, repr=False)

    @property
    def path_length(self):
        """Number of positions on the path, endpoints included."""
        return len(self.path)


def manhattan(a, b):
    return sum(abs(p - q) for p, q in zip(a, b))


# --- Strategies ---

class Strategy:
    """Frontier discipline plugged into the shared search loop."""

    name = ""
    label = ""
    description = ""
    relaxes = False  # accept a strictly cheaper route to a queued position

    def __init__(self, goal, layer_penalty=LAYER_PENALTY):
        self.goal = goal
        self.layer_penalty = layer_penalty

    def push(self, pos, cost):
        raise NotImplementedError

    def pop(self):
        raise NotImplementedError

    def __len__(self):
        raise NotImplementedError


class BreadthFirst(Strategy):
    name = "bfs"
    label = "Breadth-First Search (BFS)"
    description = "Explores level by level. Guarantees shortest path."

    def __init__(self, goal, layer_penalty=LAYER_PENALTY):
        super().__init__(goal, layer_penalty)
        self.queue = collections.deque()

    def push(self, pos, cost):
        self.queue.append(pos)

    def pop(self):
        return self.queue.popleft()

    def __len__(self):
        return len(self.queue)


class DepthFirst(Strategy):
    name = "dfs"
    label = "Depth-First Search (DFS)"
    description = "Explores deeply before backtracking. Fast but not optimal."

    def __init__(self, goal, layer_penalty=LAYER_PENALTY):
        super().__init__(goal, layer_penalty)
        self.stack = []

    def push(self, pos, cost):
        self.stack.append(pos)

    def pop(self):
        return self.stack.pop()

    def __len__(self):
        return len(self.stack)


class PriorityStrategy(Strategy):
    """Heap-backed frontier; subclasses define priority()."""

    def __init__(self, goal, layer_penalty=LAYER_PENALTY):
        super().__init__(goal, layer_penalty)
        self.heap = []
        self.counter = itertools.count()

    def priority(self, pos, cost):
        raise NotImplementedError

    def push(self, pos, cost):
        heapq.heappush(self.heap, (self.priority(pos, cost), next(self.counter), pos))

    def pop(self):
        return heapq.heappop(self.heap)[2]

    def __len__(self):
        return len(self.heap)


class Dijkstra(PriorityStrategy):
    name = "dijkstra"
    label = "Dijkstra's Algorithm"
    description = "Uniform cost search. Guarantees shortest path."
    relaxes = True

    def priority(self, pos, cost):
        return cost


class AStar(PriorityStrategy):
    """f = g + Manhattan distance, plus layer_penalty off the goal's layer.

    Across layers the heuristic is not admissible: the layer penalty
    overestimates near a portal, and a portal jump costs 1 however far apart
    its two cells are. Generated mazes hold one portal pair per layer boundary
    and every route between layers goes through it, so paths there stay
    shortest. Hand-built grids with more than one portal route between two
    layers can get a longer path than BFS or Dijkstra return.
    """

    name = "astar"
    label = "A* Search"
    description = "Uses heuristic for efficiency. Optimal and fast."
    relaxes = True

    def heuristic(self, pos):
        h = manhattan(pos, self.goal)
        # Off the goal's layer: push the search toward a portal
        if len(pos) == 3 and pos[2] != self.goal[2]:
            h += self.layer_penalty
        return h

    def priority(self, pos, cost):
        return cost + self.heuristic(pos)


class GreedyBestFirst(PriorityStrategy):
    name = "greedy"
    label = "Greedy Best-First Search"
    description = "Uses only heuristic. Fast but may not find optimal path."

    def priority(self, pos, cost):
        return manhattan(pos, self.goal)


ALGORITHMS = {cls.name: cls for cls in (BreadthFirst, DepthFirst, AStar, Dijkstra, GreedyBestFirst)}


def get_strategy(algorithm):
    try:
        return ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"unknown algorithm {algorithm!r}, expected one of {sorted(ALGORITHMS)}") from None


def _no_paint(*args):
    pass


def _pause(token, seconds):
    if token.sleep(seconds):
        raise SearchCancelled()


def search(grid, start, goal, algorithm="astar", paint=None, delay=0, token=None,
           paint_edge=None, layer_penalty=LAYER_PENALTY):
    """Finds a path from start to goal with the chosen strategy.

    Parameters:
      grid: Grid or LayeredGrid (never modified)
      start, goal: (x, y) or (x, y, z) positions
      algorithm (str): one of ALGORITHMS ("bfs", "dfs", "astar", "dijkstra", "greedy")
      paint: callable(position, ColorTag) for VISITED / FRONTIER / PATH events
      delay (float): pause in milliseconds after each VISITED event (half of it
                     after each PATH event); pacing only, results never depend on it
      token: CancellationToken checked once per iteration and after each pause
      paint_edge: callable(a, b, ColorTag) for portal jumps on the final path
      layer_penalty (int): A* heuristic bonus for positions off the goal's layer

    Loop:
      1. Pop the next position; skip it if already visited (a heap may hold
         several entries for one position after relaxation).
      2. Mark visited. Start and goal emit no VISITED event.
      3. At the goal, rebuild the path, paint its interior, return success.
      4. Otherwise push each neighbor the strategy accepts: unseen neighbors
         always, seen-but-unvisited ones only for relaxing strategies that
         found a strictly cheaper route. Each push records the parent and
         paints FRONTIER (except for the goal).

    Returns:
      SearchResult; an exhausted frontier gives success=False and an empty path.

    Raises:
      SearchCancelled: once the token fires; no callbacks follow it.
      OutOfBounds: if start or goal lies outside the grid.
      ValueError: for an unknown algorithm name.
    """
    strategy = get_strategy(algorithm)(goal, layer_penalty)
    neighbors = neighbor_function(grid)
    paint = paint or _no_paint
    paint_edge = paint_edge or _no_paint
    token = token or CancellationToken()
    pause = max(0.0, delay) / 1000.0

    # Validates both endpoints against the grid's extents and dimensionality
    kind_at(grid, start)
    kind_at(grid, goal)

    cost = {start: 0}
    came_from = {}
    visited = set()
    visited_count = 0
    strategy.push(start, 0)

    while strategy:
        token.raise_if_cancelled()

        current = strategy.pop()
        if current in visited:
            continue
        visited.add(current)
        visited_count += 1

        if current != start and current != goal:
            paint(current, ColorTag.VISITED)
            _pause(token, pause)

        if current == goal:
            path = reconstruct_path(came_from, start, goal)
            _paint_path(grid, path, paint, paint_edge, token, pause / 2)
            logger.debug("%s reached %s: path=%d visited=%d", strategy.name, goal, len(path), visited_count)
            return SearchResult(path, visited_count, True, strategy.name, came_from)

        for neighbor in neighbors(grid, current):
            if neighbor in visited:
                continue
            new_cost = cost[current] + 1
            if neighbor in cost and not (strategy.relaxes and new_cost < cost[neighbor]):
                continue
            cost[neighbor] = new_cost
            came_from[neighbor] = current
            strategy.push(neighbor, new_cost)
            if neighbor != goal:
                paint(neighbor, ColorTag.FRONTIER)

    logger.debug("%s exhausted the frontier after %d cells without reaching %s",
                 strategy.name, visited_count, goal)
    return SearchResult([], visited_count, False, strategy.name, came_from)


def _paint_path(grid, path, paint, paint_edge, token, pause):
    crossings = set(portal_crossings(grid, path))
    last = len(path) - 1
    for i, pos in enumerate(path):
        if 0 < i < last:
            paint(pos, ColorTag.PATH)
            _pause(token, pause)
        if i < last and (pos, path[i + 1]) in crossings:
            paint_edge(pos, path[i + 1], ColorTag.PATH)


def breadth_first_search(grid, start, goal, paint=None, delay=0, token=None, paint_edge=None):
    return search(grid, start, goal, "bfs", paint, delay, token, paint_edge)


def depth_first_search(grid, start, goal, paint=None, delay=0, token=None, paint_edge=None):
    return search(grid, start, goal, "dfs", paint, delay, token, paint_edge)


def a_star_search(grid, start, goal, paint=None, delay=0, token=None, paint_edge=None,
                  layer_penalty=LAYER_PENALTY):
    return search(grid, start, goal, "astar", paint, delay, token, paint_edge, layer_penalty)


def dijkstra_search(grid, start, goal, paint=None, delay=0, token=None, paint_edge=None):
    return search(grid, start, goal, "dijkstra", paint, delay, token, paint_edge)


def greedy_best_first_search(grid, start, goal, paint=None, delay=0, token=None, paint_edge=None):
    return search(grid, start, goal, "greedy", paint, delay, token, paint_edge)
