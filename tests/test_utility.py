import random

import networkx as nx
import pytest

from shape_checks.structure import is_simple
from shape_checks.utility import (
    generate_bipartite_graph,
    generate_random_forest,
    generate_sample_graph,
    graph_class,
    graph_to_graph6,
    load_adjacency_matrix,
    load_edge_list,
    load_graph6_lines,
    parse_graph6,
    relabel_randomly,
    reverse_edges,
)


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_graph_class():
    assert graph_class() is nx.Graph
    assert graph_class(directed=True) is nx.DiGraph
    assert graph_class(multigraph=True) is nx.MultiGraph
    assert graph_class(directed=True, multigraph=True) is nx.MultiDiGraph


def test_parse_graph6_round_trip_of_petersen():
    petersen = nx.petersen_graph()
    graph = parse_graph6(graph_to_graph6(petersen))
    assert nx.is_isomorphic(graph, petersen)


def test_parse_graph6_directed_holds_both_arcs():
    graph = parse_graph6(graph_to_graph6(nx.path_graph(3)), directed=True)
    assert graph.is_directed()
    assert set(graph.edges) == {(0, 1), (1, 0), (1, 2), (2, 1)}


@pytest.mark.parametrize("text", ["", "   ", "é"])
def test_parse_graph6_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_graph6(text)


def test_load_graph6_lines_skips_blank_lines(tmp_path):
    path = _write(tmp_path, "graphs.txt", "A_\n\n  Bw \n")
    assert load_graph6_lines(path) == ["A_", "Bw"]


def test_load_adjacency_matrix_simple(tmp_path):
    path = _write(tmp_path, "square.txt", "4\n- 1 - 1\n1 - 1 -\n- 1 - 1\n1 - 1 -\n")
    graph = load_adjacency_matrix(path)
    assert type(graph) is nx.Graph
    assert nx.is_isomorphic(graph, nx.cycle_graph(4))


def test_load_adjacency_matrix_counts_parallel_edges(tmp_path):
    path = _write(tmp_path, "double.txt", "2\n0 2\n2 0\n")
    multigraph = load_adjacency_matrix(path, multigraph=True)
    assert multigraph.number_of_edges() == 2
    assert not is_simple(multigraph)

    simple = load_adjacency_matrix(path)
    assert simple.number_of_edges() == 1


def test_load_adjacency_matrix_directed(tmp_path):
    path = _write(tmp_path, "arc.txt", "2\n- 1\n- -\n")
    graph = load_adjacency_matrix(path, directed=True)
    assert list(graph.edges) == [(0, 1)]


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "empty adjacency file"),
        ("x\n", "vertex count"),
        ("2\n- 1\n", "expected 2 matrix rows"),
        ("2\n- 1 1\n1 -\n", "row 1 has 3 cells"),
        ("2\n- a\na -\n", "non-integer cell"),
        ("2\n- -1\n-1 -\n", "negative edge count"),
        ("2\n- 1\n- -\n", "symmetric"),
    ],
)
def test_load_adjacency_matrix_errors(tmp_path, text, message):
    path = _write(tmp_path, "bad.txt", text)
    with pytest.raises(ValueError, match=message):
        load_adjacency_matrix(path)


def test_load_edge_list(tmp_path):
    path = _write(tmp_path, "edges.csv", "source,target\na,b\nb,c\n\na,b\nc,c\n")
    multigraph = load_edge_list(path, multigraph=True)
    assert multigraph.number_of_edges() == 4

    graph = load_edge_list(path)
    assert set(graph.nodes) == {"a", "b", "c"}
    assert graph.number_of_edges() == 3
    assert graph.has_edge("c", "c")


def test_load_edge_list_requires_columns(tmp_path):
    path = _write(tmp_path, "edges.csv", "from,to\na,b\n")
    with pytest.raises(ValueError, match="missing column"):
        load_edge_list(path)


def test_load_edge_list_rejects_half_rows(tmp_path):
    path = _write(tmp_path, "edges.csv", "source,target\na,\n")
    with pytest.raises(ValueError, match="line 2"):
        load_edge_list(path)


def test_random_forest_is_acyclic():
    forest = generate_random_forest(50, 0.2, seed=3)
    assert forest.number_of_nodes() == 50
    assert nx.is_forest(forest)


def test_bipartite_graph_labels_sides():
    graph = generate_bipartite_graph(3, 4, 1.0, seed=1)
    assert graph.number_of_nodes() == 7
    assert graph.number_of_edges() == 12
    sides = nx.get_node_attributes(graph, "bipartite")
    for u, v in graph.edges:
        assert sides[u] != sides[v]


def test_generate_sample_graph_is_reproducible():
    first = [graph_to_graph6(generate_sample_graph(2, 12, random.Random(5))) for _ in range(3)]
    second = [graph_to_graph6(generate_sample_graph(2, 12, random.Random(5))) for _ in range(3)]
    assert first == second


def test_relabel_randomly_preserves_structure():
    graph = nx.petersen_graph()
    relabelled = relabel_randomly(graph, random.Random(11))
    assert sorted(relabelled.nodes) == sorted(graph.nodes)
    assert nx.is_isomorphic(graph, relabelled)


def test_reverse_edges():
    digraph = nx.DiGraph([(0, 1), (1, 2)])
    assert set(reverse_edges(digraph).edges) == {(1, 0), (2, 1)}
    graph = nx.path_graph(3)
    copy = reverse_edges(graph)
    assert copy is not graph
    assert set(copy.edges) == set(graph.edges)


def test_parse_graph6_of_usage_example():
    graph = parse_graph6("E|MO")
    assert graph.number_of_nodes() == 6
    assert not graph.is_directed()
    assert graph_to_graph6(graph) == "E|MO"


@pytest.mark.parametrize("seed", range(40))
def test_small_sample_graphs_are_simple(seed):
    graph = generate_sample_graph(1, 2, random.Random(seed))
    assert nx.number_of_selfloops(graph) == 0
    assert is_simple(graph)
