#!/usr/bin/env python3
"""
Generate a static visualization of an ancestry forest.

Usage:
    pip install networkx matplotlib
    python visualize_static.py --address ADDR [--address ADDR ...]
"""

import argparse

import networkx as nx
import matplotlib.pyplot as plt

from fundtrace.addressbook.loader import AddressBookLoader
from fundtrace.ancestry.builder import ForestBuilder
from fundtrace.ancestry.export import forest_to_graph
from fundtrace.ledger.indexer import IndexerClient
from fundtrace.utils import get_addressbook_path


def get_node_color(attrs):
    """Get color for a node from its role in the forest."""
    if attrs.get('seed'):
        return '#E91E63'
    if attrs.get('root') and attrs.get('terminus'):
        return '#FF9800'
    if attrs.get('root'):
        return '#4CAF50'
    return '#2196F3'


def tree_layout(G):
    """Place each tree in its own column band, roots on top."""
    pos = {}
    x_offset = 0
    for component in nx.weakly_connected_components(G):
        sub = G.subgraph(component)
        root = next(n for n in sub.nodes() if sub.in_degree(n) == 0)
        depths = nx.single_source_shortest_path_length(sub, root)
        rows = {}
        for node, depth in depths.items():
            rows.setdefault(depth, []).append(node)
        width = max(len(row) for row in rows.values())
        for depth, row in rows.items():
            for i, node in enumerate(sorted(row)):
                pos[node] = (x_offset + i, -depth)
        x_offset += width + 1
    return pos


def visualize_forest(forest, label=str, output_file='ancestry_forest.png'):
    """Create and save visualization."""
    G = forest_to_graph(forest)
    stats = forest.stats()

    fig, ax = plt.subplots(1, 1, figsize=(20, 16))
    fig.suptitle(
        f'Funding Ancestry Forest '
        f'({stats["total_nodes"]} addresses, {stats["total_roots"]} trees)',
        fontsize=16,
        fontweight='bold'
    )

    pos = tree_layout(G)

    node_colors = [get_node_color(G.nodes[node]) for node in G.nodes()]
    node_sizes = [1500 if G.nodes[node]['seed'] else 800 for node in G.nodes()]

    nx.draw_networkx_nodes(
        G, pos,
        node_color=node_colors,
        node_size=node_sizes,
        alpha=0.9,
        edgecolors='black',
        linewidths=2,
        ax=ax
    )

    nx.draw_networkx_edges(
        G, pos,
        edge_color='gray',
        arrows=True,
        arrowsize=15,
        arrowstyle='->',
        width=2,
        alpha=0.6,
        ax=ax
    )

    labels = {node: label(node)[:12] for node in G.nodes()}
    nx.draw_networkx_labels(
        G, pos,
        labels,
        font_size=8,
        font_weight='bold',
        ax=ax
    )

    legend_text = (
        'seed: pink\n'
        'root funded by terminal wallet: orange\n'
        'root: green\n'
        'intermediate funder: blue'
    )
    ax.text(
        0.02, 0.98, legend_text,
        transform=ax.transAxes,
        fontsize=10,
        verticalalignment='top',
        bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8)
    )

    stats_text = (
        f'Total Addresses: {stats["total_nodes"]}\n'
        f'Trees: {stats["total_roots"]}\n'
        f'Terminal Wallets: {stats["total_ignored"]}\n'
        f'Failed Branches: {stats["total_failures"]}'
    )
    ax.text(
        0.98, 0.98, stats_text,
        transform=ax.transAxes,
        fontsize=10,
        verticalalignment='top',
        horizontalalignment='right',
        bbox=dict(boxstyle='round', facecolor='lightblue', alpha=0.8)
    )

    ax.axis('off')
    plt.tight_layout()

    plt.savefig(output_file, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"\n✅ Visualization saved to: {output_file}\n")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Draw the funding ancestry forest of seed addresses.")
    parser.add_argument("--address", action="append", default=[], help="Seed address; repeatable")
    parser.add_argument("--network", default=None, help="mainnet or testnet")
    parser.add_argument("--output", default="ancestry_forest.png", help="PNG output path")
    args = parser.parse_args()

    book = AddressBookLoader(config_dir=get_addressbook_path()).load_all()
    seeds = args.address or book.seeds

    print("🎨 Tracing seed addresses...")
    with ForestBuilder(IndexerClient.from_config(network=args.network),
                       known_wallets=book.known_wallets.keys()) as builder:
        builder.build(seeds)

    print(f"✅ Got {len(builder.forest)} addresses")
    print("\n🖼️  Creating visualization...")
    visualize_forest(builder.forest, label=book.label, output_file=args.output)

    print("Done! Check the PNG file.")


if __name__ == "__main__":
    main()
