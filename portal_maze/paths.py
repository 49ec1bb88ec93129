"""Path reconstruction from a search's parent map."""
import logging

from .grid import CellKind, kind_at

logger = logging.getLogger(__name__)


def reconstruct_path(came_from, start, goal):
    """Walks parent pointers from goal back to start.

    Returns the path in start -> goal order. If a parent is missing the walk
    stops early and the partial chain (ending at goal) is returned.
    """
    path = [goal]
    current = goal
    # Guards against a corrupted parent map that loops back on itself
    limit = len(came_from) + 1
    while current != start and limit > 0:
        parent = came_from.get(current)
        if parent is None:
            logger.debug("Parent chain broken at %s while rebuilding path to %s", current, goal)
            break
        path.append(parent)
        current = parent
        limit -= 1
    path.reverse()
    return path


def portal_crossings(grid, path):
    """Consecutive path pairs that change layer through a matched portal pair.

    Only PORTAL_UP -> PORTAL_DOWN (going up) or PORTAL_DOWN -> PORTAL_UP (going
    down) steps count. Flat paths never cross.
    """
    crossings = []
    for a, b in zip(path, path[1:]):
        if len(a) != 3 or a[2] == b[2]:
            continue
        kinds = (kind_at(grid, a), kind_at(grid, b))
        going_up = b[2] == a[2] + 1 and kinds == (CellKind.PORTAL_UP, CellKind.PORTAL_DOWN)
        going_down = b[2] == a[2] - 1 and kinds == (CellKind.PORTAL_DOWN, CellKind.PORTAL_UP)
        if going_up or going_down:
            crossings.append((a, b))
    return crossings
