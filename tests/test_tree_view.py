import os
import shutil
import tempfile
import unittest

from graphviz import Digraph

from portal_maze.search import search
from portal_maze.tree_view import PATH_EDGE_COLOR, build_search_tree, render_search_tree
from tests.helpers import sealed_grid, two_layer_grid


class TestSearchTree(unittest.TestCase):

    def setUp(self):
        self.result = search(two_layer_grid(), (1, 1, 0), (3, 1, 1), "bfs")

    def test_nodes_and_path_edges(self):
        dot = build_search_tree(self.result)
        self.assertIsInstance(dot, Digraph)
        source = dot.source
        for pos in self.result.path:
            self.assertIn('"%s"' % ",".join(map(str, pos)), source)
        self.assertIn("doublecircle", source)
        self.assertEqual(source.count(PATH_EDGE_COLOR), len(self.result.path) - 1)

    def test_failed_search_still_builds(self):
        result = search(sealed_grid(), (1, 1), (5, 1), "dfs")
        source = build_search_tree(result).source
        self.assertNotIn("doublecircle", source)
        self.assertNotIn(PATH_EDGE_COLOR, source)
        self.assertIn('"1,1"', source)

    @unittest.skipUnless(shutil.which("dot"), "Graphviz binaries not installed")
    def test_render(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = render_search_tree(self.result, os.path.join(tmp, "tree"))
            self.assertTrue(out.endswith(".png"))
            self.assertTrue(os.path.exists(out))


if __name__ == "__main__":
    unittest.main()
