"""Graphviz rendering of the parent tree a search built on its way to the goal."""
from graphviz import Digraph

from .grid import position_key

PATH_EDGE_COLOR = "#f39c12"


def build_search_tree(result):
    """Digraph with one edge per parent pointer; edges on the final path are highlighted."""
    dot = Digraph(comment=f"{result.algorithm} search tree")
    on_path = set(zip(result.path, result.path[1:]))
    nodes = set(result.came_from) | set(result.came_from.values())
    if result.path:
        nodes |= {result.path[0], result.path[-1]}

    for node in sorted(nodes):
        attrs = {}
        if result.path and node == result.path[0]:
            attrs = {"shape": "doublecircle", "color": "#1abc9c"}
        elif result.path and node == result.path[-1]:
            attrs = {"shape": "doublecircle", "color": "#e74c3c"}
        dot.node(position_key(node), str(node), **attrs)

    for child, parent in result.came_from.items():
        if (parent, child) in on_path:
            dot.edge(position_key(parent), position_key(child), color=PATH_EDGE_COLOR, penwidth="2")
        else:
            dot.edge(position_key(parent), position_key(child))
    return dot


def render_search_tree(result, out_path, view=False, format="png"):
    """Writes the tree next to out_path (needs the Graphviz `dot` binary)."""
    dot = build_search_tree(result)
    dot.format = format
    return dot.render(out_path, view=view, cleanup=True)
