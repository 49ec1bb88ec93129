"""
Headless benchmark: runs every strategy over freshly generated mazes and
aggregates path length, cells visited, success rate and wall-clock time.
"""
import csv
import logging
import os
import random
import statistics
import time

from matplotlib.figure import Figure

from .generator import generate_maze, generate_maze_3d
from .grid import find_endpoints
from .search import ALGORITHMS, search

logger = logging.getLogger(__name__)

DEFAULT_ALGOS = list(ALGORITHMS)

METRICS = [
    "elapsed_sec",
    "path_length",
    "visited_count",
]


def run_single(width, height, algorithm, layers=1, wall_density=0.7, seed=None):
    """Generates one maze and solves it with `algorithm` at full speed (no pacing)."""
    rng = random.Random(seed)
    if layers > 1:
        maze = generate_maze_3d(width, height, layers, wall_density, rng=rng)
    else:
        maze = generate_maze(width, height, wall_density, rng=rng)
    start, goal = find_endpoints(maze)

    t0 = time.perf_counter()
    result = search(maze, start, goal, algorithm)
    elapsed = time.perf_counter() - t0

    return {
        "algorithm": algorithm,
        "width": maze.width,
        "height": maze.height,
        "layers": layers,
        "wall_density": wall_density,
        "seed": seed,
        "elapsed_sec": elapsed,
        "path_length": result.path_length,
        "visited_count": result.visited_count,
        "success": result.success,
    }


STATS = ("avg", "min", "max", "stdev")


def _describe(values):
    """(avg, min, max, population stdev) of one metric column."""
    if not values:
        return (0, 0, 0, 0)
    spread = statistics.pstdev(values) if len(values) > 1 else 0
    return (statistics.mean(values), min(values), max(values), spread)


def aggregate_results(rows, group_by=("algorithm",)):
    """One summary entry per group: count, METRICS x STATS columns, success_rate."""
    grouped = {}
    for r in rows:
        grouped.setdefault(tuple(r[k] for k in group_by), []).append(r)

    summary = []
    for key, items in grouped.items():
        entry = dict(zip(group_by, key), count=len(items))
        for metric in METRICS:
            described = _describe([it[metric] for it in items])
            entry.update((f"{metric}_{stat}", value) for stat, value in zip(STATS, described))
        entry["success_rate"] = sum(1 for it in items if it["success"]) / len(items)
        summary.append(entry)
    return summary


def _ensure_parent(path):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def write_csv(path, rows):
    """Writes dict rows with the first row's keys as header; nothing for no rows."""
    if not rows:
        return
    _ensure_parent(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)


def plot_metric(summary, metric_key, out_path):
    """Bar chart of one summary column, one bar per algorithm."""
    labels = [ALGORITHMS[row["algorithm"]].label if row["algorithm"] in ALGORITHMS else row["algorithm"]
              for row in summary]
    values = [row.get(metric_key, 0) for row in summary]

    fig = Figure(figsize=(max(8, len(labels) * 1.2), 5))
    ax = fig.add_subplot(111)
    ax.bar(range(len(values)), values)
    ax.set_xticks(range(len(values)))
    ax.set_xticklabels(labels, rotation=30, ha="right")
    ax.set_ylabel(metric_key)
    fig.tight_layout()

    _ensure_parent(out_path)
    fig.savefig(out_path)
    return out_path


def run_benchmark(runs=10, width=21, height=21, layers=1, wall_density=0.7, algorithms=None,
                  out_dir=None, seed_base=None):
    """Runs `runs` mazes per algorithm; every algorithm sees the same seeds.

    With `out_dir`, writes raw_results.csv, summary.csv and one chart per
    averaged metric. Returns (rows, summary).
    """
    algorithms = algorithms or DEFAULT_ALGOS
    if seed_base is None:
        seed_base = int(time.time())

    rows = []
    for algo in algorithms:
        for i in range(runs):
            rows.append(run_single(width, height, algo, layers, wall_density, seed=seed_base + i))
        logger.info("Finished %d runs of %s", runs, algo)

    summary = aggregate_results(rows)

    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
        write_csv(os.path.join(out_dir, "raw_results.csv"), rows)
        write_csv(os.path.join(out_dir, "summary.csv"), summary)
        for metric in METRICS:
            plot_metric(summary, f"{metric}_avg", os.path.join(out_dir, f"{metric}_avg.png"))

    return rows, summary
