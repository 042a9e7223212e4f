"""Utility helpers for graph loading, sampling and relabelling."""

from __future__ import annotations

import csv
import random
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

Graph = nx.Graph
_RANDOM_RANGE = 2 ** 32
_NO_EDGE = "-"

_GRAPH_CLASSES: Dict[Tuple[bool, bool], type] = {
    (False, False): nx.Graph,
    (True, False): nx.DiGraph,
    (False, True): nx.MultiGraph,
    (True, True): nx.MultiDiGraph,
}


def graph_class(*, directed: bool = False, multigraph: bool = False) -> type:
    """Return the NetworkX class able to hold the requested kind of graph."""

    return _GRAPH_CLASSES[(directed, multigraph)]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def parse_graph6(text: str, *, directed: bool = False) -> Graph:
    """Return the graph encoded by the graph6 string ``text``.

    graph6 only describes undirected simple graphs. With ``directed=True``
    every edge becomes a pair of opposite arcs.
    """

    value = text.strip()
    if not value:
        raise ValueError("Empty graph6 string")
    try:
        graph = nx.from_graph6_bytes(value.encode("ascii"))
    except (nx.NetworkXError, ValueError, UnicodeEncodeError) as exc:
        raise ValueError(f"Invalid graph6 string {value!r}") from exc
    return graph.to_directed() if directed else graph


def load_graph6_lines(path: str | Path) -> List[str]:
    """Return the graph6 strings listed in ``path`` (one per non-blank line)."""

    entries: List[str] = []
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            value = line.strip()
            if value:
                entries.append(value)
    return entries


def load_adjacency_matrix(
    path: str | Path,
    *,
    directed: bool = False,
    multigraph: bool = False,
) -> Graph:
    """Load a graph from an adjacency matrix text file.

    The first line holds the vertex count ``N``; the next ``N`` lines hold
    ``N`` whitespace-separated cells each. ``-`` or ``0`` means no edge and a
    positive integer ``k`` means ``k`` parallel edges (a single edge unless
    ``multigraph`` is set). Undirected matrices must be symmetric.
    """

    path = Path(path)
    rows = [
        line.split()
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    if not rows:
        raise ValueError(f"{path}: empty adjacency file")
    header, cells = rows[0], rows[1:]
    if len(header) != 1 or not header[0].isdigit():
        raise ValueError(f"{path}: first line must hold the vertex count, got {' '.join(header)!r}")
    size = int(header[0])
    if len(cells) != size:
        raise ValueError(f"{path}: expected {size} matrix rows, found {len(cells)}")

    matrix = np.zeros((size, size), dtype=np.int64)
    for i, row in enumerate(cells):
        if len(row) != size:
            raise ValueError(f"{path}: row {i + 1} has {len(row)} cells, expected {size}")
        for j, cell in enumerate(row):
            matrix[i, j] = _parse_cell(cell, path, i + 1)

    if not directed and not np.array_equal(matrix, matrix.T):
        raise ValueError(f"{path}: adjacency matrix of an undirected graph must be symmetric")
    if not multigraph:
        matrix = (matrix > 0).astype(np.int64)

    return nx.from_numpy_array(
        matrix,
        parallel_edges=multigraph,
        create_using=graph_class(directed=directed, multigraph=multigraph),
    )


def _parse_cell(cell: str, path: Path, row: int) -> int:
    if cell == _NO_EDGE:
        return 0
    try:
        count = int(cell)
    except ValueError as exc:
        raise ValueError(f"{path}: row {row} holds a non-integer cell {cell!r}") from exc
    if count < 0:
        raise ValueError(f"{path}: row {row} holds a negative edge count {count}")
    return count


def load_edge_list(
    path: str | Path,
    *,
    directed: bool = False,
    multigraph: bool = False,
) -> Graph:
    """Load a graph from a CSV edge list with ``source`` and ``target`` columns.

    Self-loops are kept; duplicate rows become parallel edges when
    ``multigraph`` is set and collapse into one edge otherwise.
    """

    path = Path(path)
    graph = graph_class(directed=directed, multigraph=multigraph)()
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        missing = {"source", "target"} - set(reader.fieldnames or ())
        if missing:
            raise ValueError(f"{path}: missing column(s) {', '.join(sorted(missing))}")
        for line_number, row in enumerate(reader, start=2):
            source = (row.get("source") or "").strip()
            target = (row.get("target") or "").strip()
            if not source and not target:
                continue
            if not source or not target:
                raise ValueError(f"{path}: line {line_number} has only one endpoint")
            graph.add_edge(source, target)
    return graph


def graph_to_graph6(graph: Graph) -> str:
    """Return the graph6 representation of ``graph`` without header."""

    return nx.to_graph6_bytes(graph, header=False).decode("ascii").strip()


# ---------------------------------------------------------------------------
# Random graph generation
# ---------------------------------------------------------------------------


def _next_seed(rng: random.Random) -> int:
    """Return a 32-bit seed drawn from ``rng``."""

    return rng.randrange(_RANDOM_RANGE)


def generate_random_graph(
    size: int,
    p: float,
    *,
    seed: Optional[int] = None,
) -> Graph:
    """Return an ``Erdős–Rényi`` random graph with edge probability ``p``.

    The result may be disconnected.
    """

    return nx.erdos_renyi_graph(size, p, seed=seed)


def generate_random_forest(
    size: int,
    root_probability: float = 0.1,
    *,
    seed: Optional[int] = None,
) -> Graph:
    """Return a random forest on ``size`` vertices.

    Each vertex either starts a new tree (with ``root_probability``) or hangs
    below a uniformly chosen earlier vertex, so no cycle can appear.
    """

    rng = random.Random(seed)
    graph = nx.Graph()
    for vertex in range(size):
        graph.add_node(vertex)
        if vertex > 0 and rng.random() >= root_probability:
            graph.add_edge(vertex, rng.randrange(vertex))
    return graph


def generate_bipartite_graph(
    left_size: int,
    right_size: int,
    p: float = 0.5,
    *,
    seed: Optional[int] = None,
) -> Graph:
    """Return a random bipartite graph with parts of the given sizes.

    Vertices carry the ``bipartite`` attribute (0 or 1) naming their side.
    """

    graph = nx.Graph()
    left = [f"L{i}" for i in range(left_size)]
    right = [f"R{i}" for i in range(right_size)]
    graph.add_nodes_from(left, bipartite=0)
    graph.add_nodes_from(right, bipartite=1)
    rng = random.Random(seed)
    for u in left:
        for v in right:
            if rng.random() < p:
                graph.add_edge(u, v)
    return nx.convert_node_labels_to_integers(graph, ordering="default")


def generate_random_platonic_graph(*, seed: Optional[int] = None) -> Graph:
    """Return a random Platonic solid graph."""

    solids = [
        nx.tetrahedral_graph,
        nx.cubical_graph,
        nx.octahedral_graph,
        nx.dodecahedral_graph,
        nx.icosahedral_graph,
    ]
    rng = random.Random(seed)
    return rng.choice(solids)()


def generate_sample_graph(
    min_size: int,
    max_size: int,
    rng: Optional[random.Random] = None,
) -> Graph:
    """Return a random graph with order in ``[min_size, max_size]``.

    A graph family is picked uniformly from a curated list, then a random
    instance of that family is sampled. Platonic solids ignore the order
    bounds, and cycles have at least three vertices.
    """

    rng = rng or random.Random()
    size = rng.randint(min_size, max_size)
    generators = {
        "empty": lambda: nx.empty_graph(size),
        "random": lambda: generate_random_graph(size, p=rng.random(), seed=_next_seed(rng)),
        "forest": lambda: generate_random_forest(size, rng.random() / 2, seed=_next_seed(rng)),
        "star": lambda: nx.star_graph(max(size - 1, 0)),
        "path": lambda: nx.path_graph(size),
        "cycle": lambda: nx.cycle_graph(max(size, 3)),
        "clique": lambda: nx.complete_graph(size),
        "bipartite": lambda: generate_bipartite_graph(
            size // 2, size - size // 2, p=rng.random(), seed=_next_seed(rng)
        ),
        "planar": lambda: generate_random_platonic_graph(seed=_next_seed(rng)),
    }
    choice = rng.choice(list(generators))
    return generators[choice]()


# ---------------------------------------------------------------------------
# Relabelling and direction changes
# ---------------------------------------------------------------------------


def relabel_randomly(graph: Graph, rng: Optional[random.Random] = None) -> Graph:
    """Return a copy of ``graph`` whose vertices carry shuffled integer labels."""

    rng = rng or random.Random()
    nodes: Sequence = list(graph.nodes())
    fresh_labels = rng.sample(range(len(nodes)), len(nodes))
    mapping = {old: new for old, new in zip(nodes, fresh_labels)}
    return nx.relabel_nodes(graph, mapping, copy=True)


def reverse_edges(graph: Graph) -> Graph:
    """Return a copy of ``graph`` with every arc reversed (undirected graphs are copied)."""

    if graph.is_directed():
        return graph.reverse(copy=True)
    return graph.copy()


__all__ = [
    "generate_bipartite_graph",
    "generate_random_forest",
    "generate_random_graph",
    "generate_random_platonic_graph",
    "generate_sample_graph",
    "graph_class",
    "graph_to_graph6",
    "load_adjacency_matrix",
    "load_edge_list",
    "load_graph6_lines",
    "parse_graph6",
    "relabel_randomly",
    "reverse_edges",
]
