"""
Runs one search at a time against a maze on a background thread.

The search itself is synchronous; the runner moves it off the caller's thread
so a GUI stays responsive, and guarantees that a new run (or a reset) first
cancels and joins the previous one before anything is repainted.
"""
import logging
import threading

from .errors import SearchCancelled
from .grid import CellKind, ColorTag, LayeredGrid, kind_at
from .search import CancellationToken, search

logger = logging.getLogger(__name__)

TRAVERSABLE = tuple(kind for kind in CellKind if kind != CellKind.WALL)

BASE_TAGS = {
    CellKind.START: ColorTag.START,
    CellKind.GOAL: ColorTag.GOAL,
    CellKind.PORTAL_UP: ColorTag.PORTAL_UP,
    CellKind.PORTAL_DOWN: ColorTag.PORTAL_DOWN,
}


def reset_colors(grid, paint):
    """Paints every traversable cell back to its resting tag (None for plain open cells)."""
    positions = grid.find(*TRAVERSABLE) if isinstance(grid, LayeredGrid) else grid.cells_of(*TRAVERSABLE)
    for pos in positions:
        paint(pos, BASE_TAGS.get(kind_at(grid, pos)))


class SearchRunner:
    """Owns the single active search for one maze."""

    def __init__(self, grid, start, goal, paint, paint_edge=None):
        self.grid = grid
        self.start_pos = start
        self.goal_pos = goal
        self.paint = paint
        self.paint_edge = paint_edge
        self.result = None
        self._token = None
        self._thread = None
        self._lock = threading.Lock()

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self, algorithm, delay=0, on_done=None):
        """Cancels any active search, repaints the maze and starts a new search.

        on_done(result) runs on the worker thread with the SearchResult, or with
        None when the search was cancelled or failed.
        """
        with self._lock:
            self._stop()
            self.result = None
            reset_colors(self.grid, self.paint)
            self._token = CancellationToken()
            self._thread = threading.Thread(
                target=self._worker, args=(algorithm, delay, self._token, on_done), daemon=True)
            self._thread.start()
            logger.debug("Started %s search from %s to %s", algorithm, self.start_pos, self.goal_pos)

    def cancel(self):
        """Requests cancellation and waits for the worker to finish."""
        with self._lock:
            self._stop()

    def reset(self):
        """Stops any active search and restores the resting colors."""
        with self._lock:
            self._stop()
            self.result = None
            reset_colors(self.grid, self.paint)

    def wait(self, timeout=None):
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return self.result

    def _stop(self):
        if self._token is not None:
            self._token.cancel()
        # on_done may restart the runner from the worker thread itself
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._token = None
        self._thread = None

    def _worker(self, algorithm, delay, token, on_done):
        result = None
        try:
            result = search(self.grid, self.start_pos, self.goal_pos, algorithm,
                            paint=self.paint, delay=delay, token=token, paint_edge=self.paint_edge)
            self.result = result
        except SearchCancelled:
            logger.debug("%s search cancelled", algorithm)
        except Exception:
            logger.exception("%s search failed", algorithm)
        finally:
            if on_done is not None:
                try:
                    on_done(result)
                except Exception:
                    logger.exception("on_done callback of %s search failed", algorithm)
