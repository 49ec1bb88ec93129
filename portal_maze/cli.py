import argparse
import logging
import random

from .config import ALGORITHM, LAYERS, MAZE_HEIGHT, MAZE_WIDTH, WALL_DENSITY, MazeSettings
from .errors import GenerationError
from .generator import generate_maze, generate_maze_3d
from .grid import find_endpoints, format_grid
from .search import ALGORITHMS, search


def build_parser():
    parser = argparse.ArgumentParser(description="Generate portal mazes and solve them step by step.")
    parser.add_argument("--gui", action="store_true", help="Open the interactive visualizer")
    parser.add_argument("--width", type=int, default=MAZE_WIDTH)
    parser.add_argument("--height", type=int, default=MAZE_HEIGHT)
    parser.add_argument("--layers", type=int, default=1, help=f"1 = flat maze, 2+ = layered (GUI default {LAYERS})")
    parser.add_argument("--wall_density", type=float, default=WALL_DENSITY)
    parser.add_argument("--algorithm", choices=sorted(ALGORITHMS), default=ALGORITHM)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--delay", type=float, default=0, help="Pause per visited cell in ms")
    parser.add_argument("--print", dest="print_maze", action="store_true", help="Print the maze and the found path")
    parser.add_argument("--tree", default=None, help="Render the search tree with graphviz to this path")
    parser.add_argument("--bench", action="store_true", help="Benchmark every algorithm instead of a single solve")
    parser.add_argument("--runs", type=int, default=10, help="Mazes per algorithm when benchmarking")
    parser.add_argument("--out_dir", default="metrics_output")
    parser.add_argument("--verbose", action="store_true")
    return parser


def _overlay_path(grid, path):
    """Text dump with path cells (endpoints excluded) marked by '*'."""
    rows = format_grid(grid).split("\n")
    flat = len(path[0]) == 2 if path else True
    # Each layer block is a header line, height rows and a blank separator
    for pos in path[1:-1]:
        x, y = pos[0], pos[1]
        row = y if flat else pos[2] * (grid.height + 2) + 1 + y
        line = rows[row]
        if line[x] == ".":
            rows[row] = line[:x] + "*" + line[x + 1:]
    return "\n".join(rows)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.gui:
        from .app import main as run_app
        run_app(MazeSettings(args.width, args.height, args.wall_density, max(args.layers, 1), args.algorithm))
        return 0

    if args.bench:
        from .metrics import run_benchmark
        _, summary = run_benchmark(args.runs, args.width, args.height, args.layers, args.wall_density,
                                   out_dir=args.out_dir, seed_base=args.seed)
        for row in summary:
            print(f"{row['algorithm']:>9}: path {row['path_length_avg']:.1f}  visited {row['visited_count_avg']:.1f}"
                  f"  success {row['success_rate']:.0%}")
        print(f"Wrote results to {args.out_dir}")
        return 0

    rng = random.Random(args.seed)
    try:
        if args.layers > 1:
            maze = generate_maze_3d(args.width, args.height, args.layers, args.wall_density, rng=rng)
        else:
            maze = generate_maze(args.width, args.height, args.wall_density, rng=rng)
    except GenerationError as e:
        print(f"Could not generate maze: {e}")
        return 1

    start, goal = find_endpoints(maze)
    result = search(maze, start, goal, args.algorithm, delay=args.delay)

    if args.print_maze:
        print(_overlay_path(maze, result.path))
        print()
    status = "found" if result.success else "no path"
    print(f"{ALGORITHMS[args.algorithm].label}: {status}, path length {result.path_length}, "
          f"nodes visited {result.visited_count}")

    if args.tree:
        from .tree_view import render_search_tree
        print(f"Wrote search tree to {render_search_tree(result, args.tree)}")
    return 0
