from pathlib import Path
from typing import List

from property_survey.survey import SurveyConfig, run_survey, sample_graph6
from shape_checks.structure import DEFAULT_PROPERTY_NAMES
from shape_checks.utility import load_graph6_lines


def main() -> None:
    config = SurveyConfig(
        properties=DEFAULT_PROPERTY_NAMES,
        cpus=1,
        sample_count=500,
        min_size=1,
        max_size=30,
        seed=42,
        verbose=False,
    )

    graphs_path = Path("data/graphs.txt")
    if graphs_path.exists():
        graph6_strings = _load_graphs(graphs_path)
        source = str(graphs_path)
    else:
        graph6_strings = sample_graph6(config)
        source = f"sample of {config.sample_count} graphs, order in [{config.min_size}, {config.max_size}]"

    run_survey(graph6_strings, Path("out"), config, source=source)


def _load_graphs(path: Path) -> List[str]:
    graph6_strings = load_graph6_lines(path)
    if not graph6_strings:
        raise SystemExit(f"Graph file {path} is empty")
    return graph6_strings


if __name__ == "__main__":
    main()
