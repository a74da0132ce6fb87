"""Exports a solver's discovery tree (its parent map) as a graphviz graph.

The classic solver's tree is long and thin, the quantum one is bushy; the
rendered graphs make that difference visible outside the animation.
"""
import logging

from graphviz import Digraph

logger = logging.getLogger(__name__)


def node_name(point):
    return f"{point[0]},{point[1]}"


def discovery_tree(parents, path=(), name='discovery_tree'):
    """Builds a Digraph with an edge parent -> child for every discovered cell.

    Cells on `path` are drawn filled so the solution branch stands out.
    """
    on_path = set(path)
    dot = Digraph(name=name)
    dot.attr('node', shape='box', fontsize='10')

    nodes = set(parents) | set(parents.values())
    for point in sorted(nodes, key=lambda p: (p[1], p[0])):
        if point in on_path:
            dot.node(node_name(point), style='filled', fillcolor='#f39c12')
        else:
            dot.node(node_name(point))

    for child, parent in sorted(parents.items(), key=lambda item: (item[0][1], item[0][0])):
        dot.edge(node_name(parent), node_name(child))
    return dot


def save_discovery_tree(solver, filename, fmt='svg', view=False):
    """Renders a solver's tree to `filename`.<fmt>. Needs the graphviz `dot` binary."""
    dot = discovery_tree(solver.parents, solver.path, name=f"{solver.name}_tree")
    dot.format = fmt
    out = dot.render(filename, view=view, cleanup=True)
    logger.info("Wrote %s discovery tree (%d nodes) to %s", solver.name, len(solver.visited), out)
    return out
