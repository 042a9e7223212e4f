"""Structural predicates over graph views.

The module gathers the shape tests callers branch on before picking an
algorithm: emptiness, simplicity, completeness, connectivity (undirected,
weak and strong), tree-ness and bipartiteness. Every predicate accepts a
:class:`~shape_checks.graph_view.GraphView` or a plain NetworkX graph and
returns a ``bool``; none of them mutates the graph or keeps state between
calls.

Connectivity questions are delegated to a
:class:`~shape_checks.connectivity.ConnectivityOracle`. The bipartiteness
test is computed here with a breadth-first two-colouring.
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

from .connectivity import DEFAULT_ORACLE, ConnectivityOracle
from .graph_view import GraphView, Orientation, Vertex, as_view

logger = logging.getLogger(__name__)

# Largest size a Python container can report; edge counts never exceed it.
_SIZE_LIMIT = sys.maxsize


class Colour(Enum):
    """Vertex state during the bipartiteness traversal."""

    UNVISITED = 0
    EVEN = 1
    ODD = 2


_OPPOSITE_COLOUR = {Colour.EVEN: Colour.ODD, Colour.ODD: Colour.EVEN}


# General helpers


def _checked_product(*factors: int) -> Optional[int]:
    """Return the product of ``factors``, or ``None`` once it passes ``_SIZE_LIMIT``."""

    product = 1
    for factor in factors:
        product *= factor
        if product > _SIZE_LIMIT:
            return None
    return product


def _oracle(oracle: Optional[ConnectivityOracle]) -> ConnectivityOracle:
    return DEFAULT_ORACLE if oracle is None else oracle


# Property predicates


def is_empty(G) -> bool:
    """Return ``True`` when ``G`` has no edges (isolated vertices only)."""

    view = as_view(G)
    return view.number_of_edges() == 0


def is_simple(G) -> bool:
    """Return ``True`` when ``G`` has neither self-loops nor parallel edges.

    Directed graphs compare ordered pairs (only outgoing edges are scanned),
    so ``u -> v`` together with ``v -> u`` is still simple.
    """

    view = as_view(G)
    if view.structurally_simple:
        logger.debug("%r cannot hold loops or parallel edges", view)
        return True

    directed = view.orientation is Orientation.DIRECTED
    for vertex in view.vertices():
        edges = view.outgoing_edges(vertex) if directed else view.incident_edges(vertex)
        neighbours = set()
        for edge in edges:
            other = view.opposite_vertex(edge, vertex)
            if other == vertex or other in neighbours:
                return False
            neighbours.add(other)
    return True


def is_complete(G) -> bool:
    """Return ``True`` when every pair of distinct vertices is joined exactly once.

    A complete directed graph joins every pair by one edge in each direction.
    Raises ``ValueError`` when the graph is neither directed nor undirected.
    """

    view = as_view(G)
    n = view.number_of_vertices()
    orientation = view.orientation
    if orientation is Orientation.DIRECTED:
        expected = _checked_product(n, n - 1)
    elif orientation is Orientation.UNDIRECTED:
        # Halve the even factor first so n(n-1)/2 never needs the full product.
        if n % 2 == 0:
            expected = _checked_product(n // 2, n - 1)
        else:
            expected = _checked_product(n, (n - 1) // 2)
    else:
        raise ValueError("Graph must be directed or undirected")

    if expected is None:
        logger.debug("Complete edge count for %d vertices overflows; not complete", n)
        return False
    return view.number_of_edges() == expected and is_simple(view)


def is_connected(G, *, oracle: Optional[ConnectivityOracle] = None) -> bool:
    """Return ``True`` when the undirected graph ``G`` is connected."""

    view = as_view(G)
    return _oracle(oracle).is_connected(view)


def is_weakly_connected(G, *, oracle: Optional[ConnectivityOracle] = None) -> bool:
    """Return ``True`` when the directed graph ``G`` is connected once directions are ignored."""

    view = as_view(G)
    return _oracle(oracle).is_connected(view)


def is_strongly_connected(G, *, oracle: Optional[ConnectivityOracle] = None) -> bool:
    """Return ``True`` when the directed graph ``G`` is strongly connected."""

    view = as_view(G)
    return _oracle(oracle).is_strongly_connected(view)


def is_tree(G, *, oracle: Optional[ConnectivityOracle] = None) -> bool:
    """Return ``True`` when ``G`` is an undirected tree.

    A single isolated vertex is a tree; the null graph is not.
    """

    view = as_view(G)
    if view.orientation is not Orientation.UNDIRECTED:
        return False
    if view.number_of_edges() != view.number_of_vertices() - 1:
        return False
    return is_connected(view, oracle=oracle)


def is_bipartite(G) -> bool:
    """Return ``True`` when ``G`` has no odd cycle.

    Edge directions are ignored and every connected component is coloured
    on its own. Self-loops make a graph non-bipartite.
    """

    view = as_view(G)
    if is_empty(view):
        return True

    arcs_per_pair = _arcs_per_pair(view)
    if arcs_per_pair is None:
        logger.debug("%r may hold parallel edges; skipping the edge bound", view)
    else:
        # A bipartite graph on n vertices joins at most n^2/4 pairs.
        scaled_size = _checked_product(4, view.number_of_edges())
        pair_bound = _checked_product(arcs_per_pair, view.number_of_vertices(), view.number_of_vertices())
        if scaled_size is None or pair_bound is None:
            logger.debug("Edge bound for %r overflows; running the full traversal", view)
        elif scaled_size > pair_bound:
            logger.debug("%r has too many edges to be bipartite", view)
            return False

    return _two_colour(view) is not None


def _arcs_per_pair(view: GraphView) -> Optional[int]:
    """Return how many edges may join one vertex pair, or ``None`` when unbounded.

    Self-loops are not counted out: a graph holding one is never bipartite.
    """

    if view.allows_multiple_edges and not view.structurally_simple:
        return None
    if view.orientation is Orientation.UNDIRECTED:
        return 1
    if view.orientation is Orientation.DIRECTED:
        return 2
    return None


def _two_colour(view: GraphView) -> Optional[Dict[Vertex, Colour]]:
    """Breadth-first two-colouring of ``view``.

    Returns the colour of every vertex, or ``None`` as soon as an edge joins
    two vertices of the same colour. Vertices are coloured when enqueued, so
    an edge towards a queued vertex is checked like one towards an expanded
    vertex.
    """

    colours = {vertex: Colour.UNVISITED for vertex in view.vertices()}
    frontier = deque()

    for seed in colours:
        if colours[seed] is not Colour.UNVISITED:
            continue
        # New component.
        colours[seed] = Colour.EVEN
        frontier.append(seed)

        while frontier:
            vertex = frontier.popleft()
            colour = colours[vertex]
            for edge in view.incident_edges(vertex):
                other = view.opposite_vertex(edge, vertex)
                if colours[other] is Colour.UNVISITED:
                    colours[other] = _OPPOSITE_COLOUR[colour]
                    frontier.append(other)
                elif colours[other] is colour:
                    return None
    return colours


# Property lookup by name

Predicate = Callable[..., bool]

# Mapping names of boolean properties to predicate functions
binary_properties_functions: Dict[str, Predicate] = {
    "empty": is_empty,
    "simple": is_simple,
    "complete": is_complete,
    "connected": is_connected,
    "weakly_connected": is_weakly_connected,
    "strongly_connected": is_strongly_connected,
    "tree": is_tree,
    "bipartite": is_bipartite,
}

# Orientations each property is defined for; missing names apply everywhere.
property_orientations: Dict[str, Tuple[Orientation, ...]] = {
    "complete": (Orientation.DIRECTED, Orientation.UNDIRECTED),
    "connected": (Orientation.UNDIRECTED,),
    "weakly_connected": (Orientation.DIRECTED,),
    "strongly_connected": (Orientation.DIRECTED,),
    "tree": (Orientation.UNDIRECTED,),
}

DEFAULT_PROPERTY_NAMES: Tuple[str, ...] = tuple(binary_properties_functions)


def resolve_property_functions(names: Sequence[str]) -> Tuple[Predicate, ...]:
    """Resolve property names to predicates."""

    functions: list[Predicate] = []
    for name in names:
        try:
            functions.append(binary_properties_functions[name])
        except KeyError as exc:
            raise ValueError(f"Unknown property '{name}'") from exc
    if not functions:
        raise ValueError("At least one property must be specified.")
    return tuple(functions)


def property_applies(name: str, orientation: Orientation) -> bool:
    """Return ``True`` when property ``name`` is defined for ``orientation``."""

    return orientation in property_orientations.get(name, tuple(Orientation))


def evaluate_properties(
    G,
    names: Iterable[str] = DEFAULT_PROPERTY_NAMES,
) -> Dict[str, Optional[bool]]:
    """Evaluate each named property on ``G``.

    Properties not defined for the orientation of ``G`` map to ``None``.
    """

    view = as_view(G)
    names = tuple(names)
    predicates = resolve_property_functions(names)
    results: Dict[str, Optional[bool]] = {}
    for name, predicate in zip(names, predicates):
        if property_applies(name, view.orientation):
            results[name] = predicate(view)
        else:
            results[name] = None
    return results


__all__ = [
    "Colour",
    "DEFAULT_PROPERTY_NAMES",
    "binary_properties_functions",
    "evaluate_properties",
    "is_bipartite",
    "is_complete",
    "is_connected",
    "is_empty",
    "is_simple",
    "is_strongly_connected",
    "is_tree",
    "is_weakly_connected",
    "property_applies",
    "property_orientations",
    "resolve_property_functions",
]


#####################################
# Usage example
#####################################

if __name__ == "__main__":
    from .utility import parse_graph6

    # Example graph expressed in graph6 format
    g = parse_graph6("E|MO")

    for name, value in evaluate_properties(g).items():
        label = "n/a" if value is None else value
        print(f"G is {name.replace('_', ' ')}:", label)
