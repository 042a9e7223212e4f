"""Batch runner evaluating structural properties over many graphs.

Graphs come either from a file of graph6 strings or from a random sample of
curated families. Each graph is checked against the configured properties
and the outcomes are written to a timestamped run directory holding
``results.csv`` and ``summary.txt``.
"""

from __future__ import annotations

import argparse
import csv
import logging
import random
import time
from dataclasses import dataclass, field
from datetime import datetime
from multiprocessing import Pool, cpu_count
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from shape_checks.structure import (
    DEFAULT_PROPERTY_NAMES,
    evaluate_properties,
    resolve_property_functions,
)
from shape_checks.utility import (
    generate_sample_graph,
    graph_to_graph6,
    load_graph6_lines,
    parse_graph6,
)

logger = logging.getLogger(__name__)

PropertyResults = Dict[str, Optional[bool]]


@dataclass(slots=True)
class SurveyConfig:
    """Tunable parameters of a survey run."""

    properties: Tuple[str, ...] = DEFAULT_PROPERTY_NAMES
    cpus: int = 1
    sample_count: int = 100
    min_size: int = 1
    max_size: int = 20
    seed: Optional[int] = None
    verbose: bool = False


@dataclass(slots=True)
class GraphRecord:
    """Properties evaluated on a single graph."""

    index: int
    graph6: str
    order: int
    size: int
    results: PropertyResults = field(default_factory=dict)


def csv_header(properties: Sequence[str]) -> List[str]:
    return ["index", "graph6", "order", "size", *properties]


def prepare_output_directory(base: Path = Path("out")) -> Path:
    """Create (if necessary) the output directory for the current run."""

    base.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = 0
    while True:
        dirname = timestamp if suffix == 0 else f"{timestamp}_{suffix:02d}"
        candidate = base / dirname
        if not candidate.exists():
            candidate.mkdir(parents=True)
            return candidate
        suffix += 1


def _format_result(value: Optional[bool]) -> str:
    return "n/a" if value is None else str(value)


def write_results_csv(path: Path, records: Sequence[GraphRecord], properties: Sequence[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(csv_header(properties))
        for record in records:
            writer.writerow(
                [
                    record.index,
                    record.graph6,
                    record.order,
                    record.size,
                    *(_format_result(record.results.get(name)) for name in properties),
                ]
            )


def write_summary_txt(
    path: Path,
    records: Sequence[GraphRecord],
    config: SurveyConfig,
    source: str,
    elapsed: float,
) -> None:
    lines: list[str] = []
    lines.append("Property Survey Summary")
    lines.append("=" * 23)
    lines.append(f"Timestamp      : {datetime.now().isoformat(timespec='seconds')}")
    lines.append(f"Source         : {source}")
    lines.append(f"Graphs         : {len(records)}")
    lines.append(f"CPUs           : {config.cpus}")
    seed_label = config.seed if config.seed is not None else "random"
    lines.append(f"Seed           : {seed_label}")
    lines.append(f"Time (s)       : {elapsed:.3f}")
    lines.append("")

    width = max((len(name) for name in config.properties), default=0)
    for name in config.properties:
        values = [record.results.get(name) for record in records]
        applicable = [value for value in values if value is not None]
        holding = sum(applicable)
        lines.append(f"{name.ljust(width)} : {holding}/{len(applicable)}")

    with path.open("w", encoding="utf-8") as handle:
        handle.write("\n".join(lines).strip() + "\n")


def evaluate_graph6(index: int, graph6: str, properties: Sequence[str]) -> GraphRecord:
    """Decode ``graph6`` and evaluate ``properties`` on it."""

    graph = parse_graph6(graph6)
    return GraphRecord(
        index=index,
        graph6=graph6,
        order=graph.number_of_nodes(),
        size=graph.number_of_edges(),
        results=evaluate_properties(graph, properties),
    )


def sample_graph6(config: SurveyConfig) -> List[str]:
    """Return ``config.sample_count`` random graphs encoded as graph6."""

    rng = random.Random(config.seed)
    return [
        graph_to_graph6(generate_sample_graph(config.min_size, config.max_size, rng))
        for _ in range(config.sample_count)
    ]


def _worker_entry(arguments: Tuple[int, str, Tuple[str, ...]]) -> GraphRecord:
    """Entry point for multiprocessing workers."""

    index, graph6, properties = arguments
    return evaluate_graph6(index, graph6, properties)


def _maybe_log_record(record: GraphRecord, verbose: bool) -> None:
    if not verbose:
        return
    holding = [name for name, value in record.results.items() if value]
    print(
        f"[{record.index}] n={record.order} m={record.size} "
        f"holds={','.join(holding) or '-'} graph6={record.graph6}"
    )


def run_survey(
    graph6_strings: Sequence[str],
    output_dir: Path,
    config: SurveyConfig,
    *,
    source: str = "sample",
) -> Path:
    """Evaluate every graph, persist the outcomes and return the run directory."""

    if not graph6_strings:
        raise ValueError("No graphs provided.")
    resolve_property_functions(config.properties)

    run_dir = prepare_output_directory(output_dir)
    start_time = time.time()

    effective_cpus = 1
    if config.cpus > 1:
        effective_cpus = min(config.cpus, cpu_count())
    elif config.cpus < 0:
        effective_cpus = cpu_count()

    payloads = [(index, graph6, tuple(config.properties)) for index, graph6 in enumerate(graph6_strings)]
    records: List[GraphRecord] = []

    if effective_cpus == 1:
        for payload in payloads:
            record = _worker_entry(payload)
            _maybe_log_record(record, config.verbose)
            records.append(record)
    else:
        logger.info("Evaluating %d graphs on %d worker processes", len(payloads), effective_cpus)
        with Pool(processes=effective_cpus) as pool:
            for record in pool.imap(_worker_entry, payloads, chunksize=16):
                _maybe_log_record(record, config.verbose)
                records.append(record)

    elapsed = round(time.time() - start_time, 3)
    write_results_csv(run_dir / "results.csv", records, config.properties)
    write_summary_txt(run_dir / "summary.txt", records, config, source, elapsed)
    print(f"Results written to {run_dir}")
    return run_dir


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the survey runner."""

    parser = argparse.ArgumentParser(description="Evaluate structural properties over many graphs")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Text file listing graph6 strings (one per line); a random sample is drawn when omitted",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("out"),
        help="Base directory where run artefacts will be written",
    )
    parser.add_argument(
        "--properties",
        nargs="+",
        default=None,
        help="Properties to evaluate (available: " + ", ".join(DEFAULT_PROPERTY_NAMES) + ")",
    )
    parser.add_argument("--samples", type=int, default=100, help="Number of random graphs when no input is given")
    parser.add_argument("--min-size", type=int, default=1, help="Minimum number of vertices of sampled graphs")
    parser.add_argument("--max-size", type=int, default=20, help="Maximum number of vertices of sampled graphs")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--cpus", type=int, default=1, help="Number of worker processes (<=1 disables multiprocessing)")
    parser.add_argument("--verbose", action="store_true", help="Print per-graph summaries and debug logs")
    return parser.parse_args(argv)


def config_from_arguments(args: argparse.Namespace) -> SurveyConfig:
    properties = tuple(args.properties) if args.properties else DEFAULT_PROPERTY_NAMES
    try:
        resolve_property_functions(properties)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    if args.min_size < 0 or args.max_size < args.min_size:
        raise SystemExit(f"Invalid order range [{args.min_size}, {args.max_size}]")
    return SurveyConfig(
        properties=properties,
        cpus=args.cpus,
        sample_count=args.samples,
        min_size=args.min_size,
        max_size=args.max_size,
        seed=args.seed,
        verbose=args.verbose,
    )


def main(argv: Optional[Sequence[str]] = None) -> Path:
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = config_from_arguments(args)

    if args.input is not None:
        if not args.input.exists():
            raise SystemExit(f"Graph file not found: {args.input}")
        graph6_strings = load_graph6_lines(args.input)
        if not graph6_strings:
            raise SystemExit(f"Graph file {args.input} is empty")
        source = str(args.input)
    else:
        if config.sample_count <= 0:
            raise SystemExit("Sample count must be positive when no input file is given")
        graph6_strings = sample_graph6(config)
        source = f"sample of {config.sample_count} graphs, order in [{config.min_size}, {config.max_size}]"

    return run_survey(graph6_strings, args.output, config, source=source)


if __name__ == "__main__":
    main()
