class MazeError(Exception):
    """Base class for maze generation and grid access failures."""


class GenerationError(MazeError):
    """Raised when a maze cannot be generated (too small, no start/goal pair)."""


class OutOfBounds(MazeError, IndexError):
    """Raised when a position lies outside the grid or layer extents."""

    def __init__(self, pos, message=None):
        self.pos = pos
        super().__init__(message or f"position {pos} is outside the grid")


class SearchCancelled(Exception):
    """Raised when a running search observes a cancellation request.

    Cancellation is not a failure: callers catch this to tell a stopped search
    apart from a search that found no path.
    """
