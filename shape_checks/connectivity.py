"""Connectivity queries answered on behalf of the structural predicates."""

from __future__ import annotations

from typing import Protocol

import networkx as nx

from .graph_view import GraphView, to_networkx


class ConnectivityOracle(Protocol):
    """Answers the two connectivity questions the predicates delegate."""

    def is_connected(self, view: GraphView) -> bool:
        """Return ``True`` when ``view`` is connected, ignoring edge direction."""
        ...

    def is_strongly_connected(self, view: GraphView) -> bool:
        """Return ``True`` when every vertex reaches every other along edge directions."""
        ...


class NetworkXConnectivityOracle:
    """Oracle backed by the NetworkX component algorithms.

    The null graph has no component at all and is reported as neither
    connected nor strongly connected. Any error raised by NetworkX (for
    instance :class:`networkx.NetworkXNotImplemented` when asking for strong
    connectivity of an undirected graph) reaches the caller unchanged.
    """

    def is_connected(self, view: GraphView) -> bool:
        graph = to_networkx(view)
        if graph.number_of_nodes() == 0:
            return False
        if graph.is_directed():
            return nx.is_weakly_connected(graph)
        return nx.is_connected(graph)

    def is_strongly_connected(self, view: GraphView) -> bool:
        graph = to_networkx(view)
        if graph.number_of_nodes() == 0:
            return False
        return nx.is_strongly_connected(graph)


DEFAULT_ORACLE = NetworkXConnectivityOracle()


__all__ = ["ConnectivityOracle", "DEFAULT_ORACLE", "NetworkXConnectivityOracle"]
