import csv
import os
import tempfile
import unittest

from portal_maze.metrics import METRICS, STATS, aggregate_results, plot_metric, run_benchmark, run_single, write_csv


class TestMetrics(unittest.TestCase):

    def test_run_single_row(self):
        row = run_single(11, 11, "bfs", seed=3)
        self.assertEqual(row["algorithm"], "bfs")
        self.assertEqual((row["width"], row["height"], row["layers"]), (11, 11, 1))
        self.assertTrue(row["success"])
        self.assertGreater(row["path_length"], 1)
        self.assertGreaterEqual(row["visited_count"], row["path_length"])
        self.assertGreaterEqual(row["elapsed_sec"], 0)

    def test_run_single_layered(self):
        row = run_single(11, 11, "astar", layers=3, seed=4)
        self.assertEqual(row["layers"], 3)
        self.assertTrue(row["success"])

    def test_aggregate(self):
        rows = [
            {"algorithm": "bfs", "elapsed_sec": 1.0, "path_length": 10, "visited_count": 40, "success": True},
            {"algorithm": "bfs", "elapsed_sec": 3.0, "path_length": 12, "visited_count": 20, "success": False},
            {"algorithm": "dfs", "elapsed_sec": 2.0, "path_length": 30, "visited_count": 25, "success": True},
        ]
        summary = {entry["algorithm"]: entry for entry in aggregate_results(rows)}
        bfs = summary["bfs"]
        self.assertEqual(bfs["count"], 2)
        self.assertEqual(bfs["path_length_avg"], 11)
        self.assertEqual(bfs["visited_count_min"], 20)
        self.assertEqual(bfs["elapsed_sec_max"], 3.0)
        self.assertEqual(bfs["path_length_stdev"], 1)
        self.assertEqual(bfs["success_rate"], 0.5)
        self.assertEqual(summary["dfs"]["path_length_stdev"], 0)

    def test_summary_column_order(self):
        rows = [{"algorithm": "greedy", "elapsed_sec": 0.5, "path_length": 7, "visited_count": 9, "success": True}]
        entry = aggregate_results(rows)[0]
        expected = ["algorithm", "count"] + [f"{m}_{s}" for m in METRICS for s in STATS] + ["success_rate"]
        self.assertEqual(list(entry), expected)
        self.assertEqual(entry["visited_count_avg"], 9)

    def test_write_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "nested", "rows.csv")
            write_csv(path, [{"a": 1, "b": 2}, {"a": 3, "b": 4}])
            with open(path, newline="", encoding="utf-8") as f:
                self.assertEqual(list(csv.DictReader(f)), [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}])
            write_csv(os.path.join(tmp, "empty.csv"), [])
            self.assertFalse(os.path.exists(os.path.join(tmp, "empty.csv")))

    def test_plot_metric(self):
        summary = [{"algorithm": "bfs", "path_length_avg": 4}, {"algorithm": "dfs", "path_length_avg": 7}]
        with tempfile.TemporaryDirectory() as tmp:
            out = plot_metric(summary, "path_length_avg", os.path.join(tmp, "chart.png"))
            self.assertGreater(os.path.getsize(out), 0)

    def test_run_benchmark(self):
        with tempfile.TemporaryDirectory() as tmp:
            rows, summary = run_benchmark(runs=2, width=9, height=9, algorithms=["bfs", "astar"],
                                          out_dir=tmp, seed_base=1)
            self.assertEqual(len(rows), 4)
            self.assertEqual([entry["algorithm"] for entry in summary], ["bfs", "astar"])
            for name in ["raw_results.csv", "summary.csv"] + [f"{m}_avg.png" for m in METRICS]:
                self.assertTrue(os.path.exists(os.path.join(tmp, name)), name)

        # Every algorithm solves the same seeds, so optimal lengths line up
        by_seed = {}
        for row in rows:
            by_seed.setdefault(row["seed"], set()).add(row["path_length"])
        self.assertTrue(all(len(lengths) == 1 for lengths in by_seed.values()))


if __name__ == "__main__":
    unittest.main()
