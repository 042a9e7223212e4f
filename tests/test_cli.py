import csv

import networkx as nx
import pytest

import check_graph
from property_survey import survey
from property_survey.survey import SurveyConfig, run_survey, sample_graph6
from shape_checks.utility import graph_to_graph6


def test_check_graph_graph6(capsys):
    results = check_graph.main(["--graph6", graph_to_graph6(nx.cycle_graph(4))])
    output = capsys.readouterr().out

    assert results["bipartite"] is True
    assert results["complete"] is False
    assert "4 vertices, 4 edges (undirected)" in output
    assert "strongly_connected : n/a" in output


def test_check_graph_edge_list_multigraph(tmp_path, capsys):
    path = tmp_path / "arcs.csv"
    path.write_text("source,target\nu,v\nv,u\nu,v\n", encoding="utf-8")

    results = check_graph.main(
        ["--edges", str(path), "--directed", "--multigraph", "--properties", "simple", "strongly_connected"]
    )

    assert results == {"simple": False, "strongly_connected": True}
    assert "simple             : False" in capsys.readouterr().out


def test_check_graph_adjacency(tmp_path):
    path = tmp_path / "triangle.txt"
    path.write_text("3\n- 1 1\n1 - 1\n1 1 -\n", encoding="utf-8")
    results = check_graph.main(["--adjacency", str(path), "--properties", "complete", "bipartite"])
    assert results == {"complete": True, "bipartite": False}


def test_check_graph_reports_input_errors(tmp_path):
    with pytest.raises(SystemExit, match="not found"):
        check_graph.main(["--edges", str(tmp_path / "missing.csv")])
    with pytest.raises(SystemExit, match="Unknown property"):
        check_graph.main(["--graph6", "A_", "--properties", "planar"])
    with pytest.raises(SystemExit, match="drop --multigraph"):
        check_graph.main(["--graph6", "A_", "--multigraph"])


def test_format_report_aligns_names():
    report = check_graph.format_report({"tree": True, "bipartite": None})
    assert report.splitlines() == ["tree      : True", "bipartite : n/a"]


def test_run_survey_writes_results_and_summary(tmp_path, capsys):
    graphs = [graph_to_graph6(nx.cycle_graph(3)), graph_to_graph6(nx.path_graph(4))]
    config = SurveyConfig(properties=("tree", "bipartite", "strongly_connected"))

    run_dir = run_survey(graphs, tmp_path, config, source="inline")

    with (run_dir / "results.csv").open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["index", "graph6", "order", "size", "tree", "bipartite", "strongly_connected"]
    assert rows[1][2:] == ["3", "3", "False", "False", "n/a"]
    assert rows[2][2:] == ["4", "3", "True", "True", "n/a"]

    summary = (run_dir / "summary.txt").read_text(encoding="utf-8")
    assert "Source         : inline" in summary
    assert "tree               : 1/2" in summary
    assert "strongly_connected : 0/0" in summary
    assert f"Results written to {run_dir}" in capsys.readouterr().out


def test_run_survey_rejects_bad_input(tmp_path):
    with pytest.raises(ValueError, match="No graphs"):
        run_survey([], tmp_path, SurveyConfig())
    with pytest.raises(ValueError, match="Unknown property"):
        run_survey(["A_"], tmp_path, SurveyConfig(properties=("planar",)))


def test_prepare_output_directory_never_reuses_a_run(tmp_path):
    first = survey.prepare_output_directory(tmp_path)
    second = survey.prepare_output_directory(tmp_path)
    assert first != second
    assert first.is_dir() and second.is_dir()


def test_sample_graph6_is_seeded():
    config = SurveyConfig(sample_count=5, min_size=2, max_size=8, seed=3)
    assert sample_graph6(config) == sample_graph6(config)
    assert len(sample_graph6(config)) == 5


def test_survey_main_with_input_file(tmp_path):
    graphs = tmp_path / "graphs.txt"
    graphs.write_text(graph_to_graph6(nx.star_graph(3)) + "\n", encoding="utf-8")
    run_dir = survey.main(["--input", str(graphs), "--output", str(tmp_path / "out"), "--properties", "tree"])
    assert (run_dir / "results.csv").exists()


def test_survey_arguments_validation(tmp_path):
    with pytest.raises(SystemExit, match="not found"):
        survey.main(["--input", str(tmp_path / "missing.txt"), "--output", str(tmp_path)])
    with pytest.raises(SystemExit, match="order range"):
        survey.main(["--min-size", "5", "--max-size", "2", "--output", str(tmp_path)])
