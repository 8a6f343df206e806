"""
Use Cases Layer

Aggregates business logic and provides use cases called from the runner.
"""

from sweep_gauge.use_cases.aggregation import (
    aggregate_responses,
    calculate_metric_breakdown,
    find_best_response,
    parameter_key,
    score_histogram,
    score_mean,
    score_median,
    score_std_dev,
)
from sweep_gauge.use_cases.combinations import (
    generate_parameter_combinations,
    validate_combination_count,
)
from sweep_gauge.use_cases.health_check import (
    HEALTH_CHECK_PROMPT,
    health_check_model,
    run_health_check,
)
from sweep_gauge.use_cases.orchestrator import ExperimentOrchestrator, run_experiment
from sweep_gauge.use_cases.queries import ExperimentQueries

__all__ = [
    # aggregation
    "aggregate_responses",
    "calculate_metric_breakdown",
    "find_best_response",
    "parameter_key",
    "score_histogram",
    "score_mean",
    "score_median",
    "score_std_dev",
    # combinations
    "generate_parameter_combinations",
    "validate_combination_count",
    # health_check
    "HEALTH_CHECK_PROMPT",
    "health_check_model",
    "run_health_check",
    # orchestration
    "ExperimentOrchestrator",
    "run_experiment",
    # queries
    "ExperimentQueries",
]
