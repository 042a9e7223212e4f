"""Utility script to check the structural properties of a single graph.

Usage example::

    python check_graph.py --graph6 "E|MO"
    python check_graph.py --edges arcs.csv --directed --multigraph --properties simple strongly_connected

The graph is read from a graph6 string, an adjacency matrix file or a CSV
edge list. Properties that are not defined for the orientation of the graph
are reported as ``n/a``.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

import networkx as nx
from matplotlib import pyplot as plt

from shape_checks.structure import (
    DEFAULT_PROPERTY_NAMES,
    evaluate_properties,
    resolve_property_functions,
)
from shape_checks.utility import load_adjacency_matrix, load_edge_list, parse_graph6


def load_input_graph(args: argparse.Namespace) -> nx.Graph:
    """Return the graph selected by the command-line arguments."""

    if args.graph6 is not None:
        if args.multigraph:
            raise SystemExit("graph6 input describes simple graphs; drop --multigraph")
        try:
            return parse_graph6(args.graph6, directed=args.directed)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc

    path: Path = args.adjacency if args.adjacency is not None else args.edges
    if not path.exists():
        raise SystemExit(f"Graph file not found: {path}")
    loader = load_adjacency_matrix if args.adjacency is not None else load_edge_list
    try:
        return loader(path, directed=args.directed, multigraph=args.multigraph)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def format_report(results: Dict[str, Optional[bool]]) -> str:
    width = max((len(name) for name in results), default=0)
    lines = []
    for name, value in results.items():
        label = "n/a" if value is None else str(value)
        lines.append(f"{name.ljust(width)} : {label}")
    return "\n".join(lines)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check the structural properties of a graph")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--graph6", help="Graph encoded in graph6 format")
    source.add_argument("--adjacency", type=Path, help="Adjacency matrix file (vertex count, then N rows)")
    source.add_argument("--edges", type=Path, help="CSV edge list with source,target columns")
    parser.add_argument("--directed", action="store_true", help="Read the graph as directed")
    parser.add_argument("--multigraph", action="store_true", help="Keep parallel edges")
    parser.add_argument(
        "--properties",
        nargs="+",
        default=None,
        help="Properties to check (available: " + ", ".join(DEFAULT_PROPERTY_NAMES) + ")",
    )
    parser.add_argument("--plot", action="store_true", help="Display a NetworkX drawing of the graph")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> Dict[str, Optional[bool]]:
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    properties = tuple(args.properties) if args.properties else DEFAULT_PROPERTY_NAMES
    try:
        resolve_property_functions(properties)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    graph = load_input_graph(args)
    results = evaluate_properties(graph, properties)
    kind = "directed" if graph.is_directed() else "undirected"
    print(f"Graph: {graph.number_of_nodes()} vertices, {graph.number_of_edges()} edges ({kind})")
    print(format_report(results))

    if args.plot:
        nx.draw(graph, with_labels=True, node_color="skyblue", edge_color="grey")
        plt.title(", ".join(name for name, value in results.items() if value) or "no property holds")
        plt.show()
    return results


if __name__ == "__main__":
    main()
