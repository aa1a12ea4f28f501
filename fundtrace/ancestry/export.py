"""
Forest Export

Turns an AncestryForest into shapes the presentation layer can draw or print.
"""

from typing import Callable, Iterator, Optional

import networkx as nx

from .forest import AncestryForest


def forest_to_graph(forest: AncestryForest) -> nx.DiGraph:
    """
    Build a directed graph with funder -> funded edges.

    Node attributes: seed, root, terminus (None for non-roots or unknown).
    """
    G = nx.DiGraph()

    for address, node in forest.nodes.items():
        G.add_node(
            address,
            seed=forest.is_seed(address),
            root=node.is_root,
            terminus=node.terminus
        )

    for address, node in forest.nodes.items():
        for child in node.children:
            G.add_edge(address, child.address)

    return G


def forest_lines(
    forest: AncestryForest,
    label: Optional[Callable[[str], str]] = None
) -> Iterator[str]:
    """
    Text outline of the forest, one line per node.

    Trees are numbered from 1 in root registration order. Seed addresses
    are starred.

        TRUNK: 1, 0: *ROOT
        CHILD: 1, 1: CHILD
    """
    if label is None:
        label = str

    for tree, root in enumerate(forest.roots(), start=1):
        for node, depth in forest.walk(root):
            kind = "TRUNK" if depth == 0 else "CHILD"
            star = "*" if forest.is_seed(node.address) else ""
            yield f"{kind}: {tree}, {depth}: {star}{label(node.address)}"
