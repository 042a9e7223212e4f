"""Read-only views over graphs consumed by the structural predicates.

The predicates never inspect concrete graph classes. Everything they need is
asked through the small :class:`GraphView` capability set: vertex and edge
collections, endpoints of an edge, incident edges of a vertex, the
orientation tag and an optional hint telling that the storage cannot hold
loops nor parallel edges.

:class:`NetworkXGraphView` adapts the four NetworkX graph classes. Edge
identifiers are ``(u, v)`` tuples for simple graphs and ``(u, v, key)``
tuples for multigraphs, so two parallel edges stay distinguishable.
"""

from __future__ import annotations

from enum import Enum
from itertools import chain
from typing import Any, Collection, Hashable, Iterable, Protocol, Tuple, runtime_checkable

import networkx as nx

Vertex = Hashable
Edge = Tuple[Any, ...]


class Orientation(Enum):
    """Edge orientation declared by a graph view."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"
    MIXED = "mixed"


@runtime_checkable
class GraphView(Protocol):
    """Capabilities the predicates read from a graph."""

    @property
    def orientation(self) -> Orientation:
        ...

    @property
    def allows_multiple_edges(self) -> bool:
        ...

    @property
    def structurally_simple(self) -> bool:
        ...

    def vertices(self) -> Collection[Vertex]:
        ...

    def edges(self) -> Collection[Edge]:
        ...

    def number_of_vertices(self) -> int:
        ...

    def number_of_edges(self) -> int:
        ...

    def endpoints(self, edge: Edge) -> Tuple[Vertex, Vertex]:
        ...

    def incident_edges(self, vertex: Vertex) -> Iterable[Edge]:
        ...

    def outgoing_edges(self, vertex: Vertex) -> Iterable[Edge]:
        ...

    def opposite_vertex(self, edge: Edge, vertex: Vertex) -> Vertex:
        ...


class NetworkXGraphView:
    """:class:`GraphView` over ``nx.Graph``, ``nx.DiGraph`` and their multigraph variants.

    NetworkX storage accepts self-loops on every graph class, so the view
    only reports itself structurally simple when the caller declares
    ``allows_loops=False`` for a non-multigraph.
    """

    __slots__ = ("graph", "allows_loops")

    def __init__(self, graph: nx.Graph, *, allows_loops: bool = True) -> None:
        if graph is None:
            raise ValueError("Graph cannot be None")
        self.graph = graph
        self.allows_loops = allows_loops

    def __repr__(self) -> str:
        return (
            f"NetworkXGraphView({type(self.graph).__name__}, "
            f"n={self.graph.number_of_nodes()}, m={self.graph.number_of_edges()})"
        )

    @property
    def orientation(self) -> Orientation:
        return Orientation.DIRECTED if self.graph.is_directed() else Orientation.UNDIRECTED

    @property
    def allows_multiple_edges(self) -> bool:
        return self.graph.is_multigraph()

    @property
    def structurally_simple(self) -> bool:
        return not self.allows_loops and not self.allows_multiple_edges

    def vertices(self) -> Collection[Vertex]:
        return self.graph.nodes

    def edges(self) -> Collection[Edge]:
        if self.graph.is_multigraph():
            return self.graph.edges(keys=True)
        return self.graph.edges

    def number_of_vertices(self) -> int:
        return self.graph.number_of_nodes()

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def endpoints(self, edge: Edge) -> Tuple[Vertex, Vertex]:
        return edge[0], edge[1]

    def incident_edges(self, vertex: Vertex) -> Iterable[Edge]:
        if not self.graph.is_directed():
            return self._edges_of(vertex)
        if self.graph.is_multigraph():
            return chain(
                self.graph.out_edges(vertex, keys=True),
                self.graph.in_edges(vertex, keys=True),
            )
        return chain(self.graph.out_edges(vertex), self.graph.in_edges(vertex))

    def outgoing_edges(self, vertex: Vertex) -> Iterable[Edge]:
        if not self.graph.is_directed():
            return self._edges_of(vertex)
        if self.graph.is_multigraph():
            return self.graph.out_edges(vertex, keys=True)
        return self.graph.out_edges(vertex)

    def opposite_vertex(self, edge: Edge, vertex: Vertex) -> Vertex:
        source, target = self.endpoints(edge)
        if vertex == source:
            return target
        if vertex == target:
            return source
        raise ValueError(f"Vertex {vertex!r} is not an endpoint of edge {edge!r}")

    def _edges_of(self, vertex: Vertex) -> Iterable[Edge]:
        if self.graph.is_multigraph():
            return self.graph.edges(vertex, keys=True)
        return self.graph.edges(vertex)


def as_view(graph: Any) -> GraphView:
    """Return ``graph`` as a :class:`GraphView`, wrapping NetworkX graphs."""

    if graph is None:
        raise ValueError("Graph cannot be None")
    if isinstance(graph, nx.Graph):
        return NetworkXGraphView(graph)
    return graph


def to_networkx(view: GraphView) -> nx.Graph:
    """Return a NetworkX graph holding the vertices and edges of ``view``.

    Views built on NetworkX hand back the wrapped graph untouched; any other
    view is copied into a multigraph so parallel edges survive. Mixed views
    are copied as undirected graphs.
    """

    if isinstance(view, NetworkXGraphView):
        return view.graph
    graph = nx.MultiDiGraph() if view.orientation is Orientation.DIRECTED else nx.MultiGraph()
    graph.add_nodes_from(view.vertices())
    for edge in view.edges():
        source, target = view.endpoints(edge)
        graph.add_edge(source, target)
    return graph


__all__ = [
    "Edge",
    "GraphView",
    "NetworkXGraphView",
    "Orientation",
    "Vertex",
    "as_view",
    "to_networkx",
]
