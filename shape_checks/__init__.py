from . import structure, utility
from .connectivity import ConnectivityOracle, NetworkXConnectivityOracle
from .graph_view import GraphView, NetworkXGraphView, Orientation, as_view
from .structure import (
    binary_properties_functions,
    evaluate_properties,
    is_bipartite,
    is_complete,
    is_connected,
    is_empty,
    is_simple,
    is_strongly_connected,
    is_tree,
    is_weakly_connected,
)

__all__ = [
    "ConnectivityOracle",
    "GraphView",
    "NetworkXConnectivityOracle",
    "NetworkXGraphView",
    "Orientation",
    "as_view",
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
    "structure",
    "utility",
]
