"""
sweep-gauge CLI Runner

Runs parameter sweeps and inspects stored experiments.

Usage:
    python -m sweep_gauge.runner run --prompt "Explain quantum computing" --temperatures 0.3,0.7,1.0 --top-p 0.9,1.0
    python -m sweep_gauge.runner list --limit 10
    python -m sweep_gauge.runner show <experiment_id>
    python -m sweep_gauge.runner metrics <experiment_id>
    python -m sweep_gauge.runner export <experiment_id> --format csv --output results.csv
    python -m sweep_gauge.runner export <experiment_id> --output -
    python -m sweep_gauge.runner delete <experiment_id>
    python -m sweep_gauge.runner health --models mixtral-8x7b-32768,claude-haiku-4-5-20251001
"""

from __future__ import annotations

import argparse
import logging
import sys
from functools import partial
from pathlib import Path

from dotenv import load_dotenv

from sweep_gauge.domain.events import ProgressEvent
from sweep_gauge.domain.exceptions import SweepGaugeError
from sweep_gauge.domain.value_objects import ExperimentRequest, ParameterRanges
from sweep_gauge.exporter import EXPORT_FORMATS, export_filename
from sweep_gauge.infrastructure.model_clients import create_client
from sweep_gauge.infrastructure.storage import create_store
from sweep_gauge.sweep_config import SweepConfig, load_config
from sweep_gauge.use_cases.health_check import run_health_check
from sweep_gauge.use_cases.orchestrator import ExperimentOrchestrator
from sweep_gauge.use_cases.queries import ExperimentQueries


def _float_list(raw: str) -> list[float]:
    """Parse a comma-separated list of numbers"""
    try:
        return [float(v) for v in raw.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got '{raw}'")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="sweep-gauge: Compare LLM responses across sampling parameters",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a parameter sweep")
    run.add_argument("--prompt", required=True, help="Prompt to send (1-500 characters)")
    run.add_argument(
        "--temperatures",
        type=_float_list,
        required=True,
        help="Comma-separated temperature values, 0 to 2 (e.g. 0.3,0.7,1.0)",
    )
    run.add_argument(
        "--top-p",
        type=_float_list,
        required=True,
        help="Comma-separated top-p values, 0 to 1 (e.g. 0.9,1.0)",
    )
    run.add_argument(
        "--model",
        default=None,
        help="Model name (default: DEFAULT_MODEL from .env)",
    )

    list_cmd = sub.add_parser("list", help="List experiments, newest first")
    list_cmd.add_argument("--limit", type=int, default=20, help="Page size (default: 20)")
    list_cmd.add_argument("--cursor", default=None, help="Id of the last experiment of the previous page")

    show = sub.add_parser("show", help="Show an experiment and its responses")
    show.add_argument("experiment_id")

    metrics = sub.add_parser("metrics", help="Show score distribution and parameter breakdown")
    metrics.add_argument("experiment_id")

    export = sub.add_parser("export", help="Export an experiment as JSON or CSV")
    export.add_argument("experiment_id")
    export.add_argument("--format", choices=EXPORT_FORMATS, default="json")
    export.add_argument(
        "--output",
        default=None,
        help="Output file, or - for stdout (default: experiment-<id>.<format>)",
    )

    delete = sub.add_parser("delete", help="Delete an experiment and its responses")
    delete.add_argument("experiment_id")

    health = sub.add_parser("health", help="Check model connectivity")
    health.add_argument(
        "--models",
        default=None,
        help="Comma-separated list of model names (default: DEFAULT_MODEL)",
    )

    return parser.parse_args(argv)


def print_progress(event: ProgressEvent) -> None:
    if event.type == "error":
        print(f"  {event.message}")
    else:
        p = event.progress
        print(f"  [{p.current}/{p.total}] {p.percentage:>3}% {event.message}")
    if event.is_terminal:
        print()


def cmd_run(args: argparse.Namespace, config: SweepConfig) -> None:
    request = ExperimentRequest(
        prompt=args.prompt,
        parameter_ranges=ParameterRanges(temperatures=args.temperatures, top_p=args.top_p),
        model=args.model,
    )
    model = request.model or config.experiment.default_model

    print(f"\n=== Running Experiment ===\n")
    print(f"  Model: {model}")
    print(f"  Temperatures: {list(request.parameter_ranges.temperatures)}")
    print(f"  Top-P: {list(request.parameter_ranges.top_p)}")
    print()

    orchestrator = ExperimentOrchestrator(
        store=create_store(config),
        model_client=create_client(model, config=config),
        config=config,
    )
    result = orchestrator.run(request, on_progress=print_progress)
    summary = result.summary

    print("=== Summary ===\n")
    print(f"  Experiment ID: {result.experiment_id}")
    print(f"  Responses:     {summary.success_count} succeeded, {summary.failure_count} failed")
    if summary.best_response is not None:
        best = summary.best_response
        print(f"  Best score:    {summary.best_score:.3f} "
              f"(temperature={best.parameters.temperature}, top_p={best.parameters.top_p})")
    print(f"  Average score: {summary.average_score:.3f}")
    print()


def cmd_list(args: argparse.Namespace, queries: ExperimentQueries) -> None:
    page = queries.list_experiments(limit=args.limit, cursor=args.cursor)
    if not page.items:
        print("No experiments found.")
        return

    print(f"  {'ID':<34} {'Status':<11} {'Responses':>9} {'Avg':>6} {'Created':<20} Prompt")
    print(f"  {'-'*34} {'-'*11} {'-'*9} {'-'*6} {'-'*20} {'-'*30}")
    for item in page.items:
        prompt = item.prompt if len(item.prompt) <= 40 else item.prompt[:37] + "..."
        print(
            f"  {item.id:<34} "
            f"{item.status.value:<11} "
            f"{item.total_responses:>9} "
            f"{item.average_score:>6.3f} "
            f"{item.created_at:%Y-%m-%d %H:%M:%S}  "
            f"{prompt}"
        )
    if page.has_more:
        print(f"\n  More results: --cursor {page.next_cursor}")


def cmd_show(args: argparse.Namespace, queries: ExperimentQueries) -> None:
    detail = queries.get_experiment(args.experiment_id)
    experiment = detail.experiment

    print(f"\n=== Experiment {experiment.id} ===\n")
    print(f"  Prompt:  {experiment.prompt}")
    print(f"  Model:   {experiment.model}")
    print(f"  Status:  {experiment.status.value}")
    print(f"  Responses: {experiment.completed_responses} succeeded, "
          f"{experiment.failed_responses} failed (of {experiment.total_responses})")
    if experiment.error:
        print(f"  Error:   {experiment.error}")
    print()

    print(f"  {'Temp':>5} {'Top-P':>6} {'Status':<8} {'Overall':>8} {'Latency':>9}")
    print(f"  {'-'*5} {'-'*6} {'-'*8} {'-'*8} {'-'*9}")
    for r in detail.responses:
        score = f"{r.overall_score:.3f}" if r.overall_score is not None else "-"
        print(
            f"  {r.parameters.temperature:>5} "
            f"{r.parameters.top_p:>6} "
            f"{r.status.value:<8} "
            f"{score:>8} "
            f"{r.latency_ms:>7}ms"
        )
    print()

    if detail.best_response is not None:
        print("=== Best Response ===\n")
        print(detail.best_response.response_text)
        print()


def cmd_metrics(args: argparse.Namespace, queries: ExperimentQueries) -> None:
    report = queries.get_experiment_metrics(args.experiment_id)

    print(f"\n=== Metrics: {report.experiment_id} ===\n")
    print(f"  Successful responses: {report.total_responses}")
    print(f"  Average score: {report.average_score:.3f}")
    print(f"  Best score:    {report.best_score:.3f}")
    print(f"  Worst score:   {report.worst_score:.3f}")
    print()

    print("  Score histogram:")
    for i, count in enumerate(report.score_histogram):
        low = i / len(report.score_histogram)
        high = (i + 1) / len(report.score_histogram)
        print(f"    {low:.1f}-{high:.1f} {'#' * count} {count}")
    print()

    print("  Mean score by temperature:")
    for key, value in report.metric_breakdown.by_temperature.items():
        print(f"    {key:>6}: {value:.3f}")
    print("  Mean score by top-p:")
    for key, value in report.metric_breakdown.by_top_p.items():
        print(f"    {key:>6}: {value:.3f}")
    print()


def cmd_export(args: argparse.Namespace, queries: ExperimentQueries) -> None:
    payload = queries.export_experiment(args.experiment_id, args.format)
    if args.output == "-":
        print(payload)
        return
    output = Path(args.output or export_filename(args.experiment_id, args.format))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload, encoding="utf-8")
    print(f"  Exported to {output}")


def cmd_delete(args: argparse.Namespace, queries: ExperimentQueries) -> None:
    queries.delete_experiment(args.experiment_id)
    print(f"  Deleted experiment {args.experiment_id}")


def cmd_health(args: argparse.Namespace, config: SweepConfig) -> int:
    if args.models:
        models = [m.strip() for m in args.models.split(",")]
    else:
        models = [config.experiment.default_model]

    available_models, _ = run_health_check(models, partial(create_client, config=config))
    return 0 if available_models else 1


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)

    config = load_config()
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "run":
            cmd_run(args, config)
        elif args.command == "health":
            return cmd_health(args, config)
        else:
            queries = ExperimentQueries(create_store(config))
            handlers = {
                "list": cmd_list,
                "show": cmd_show,
                "metrics": cmd_metrics,
                "export": cmd_export,
                "delete": cmd_delete,
            }
            handlers[args.command](args, queries)
    except (SweepGaugeError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
