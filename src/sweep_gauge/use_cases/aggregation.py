"""
Result Aggregation

Turns the scored responses of an experiment into summary statistics:
best response, mean/median/standard deviation, a fixed-bucket histogram,
and mean score per temperature and per top-p value.
"""

from __future__ import annotations

import math

import pandas as pd

from sweep_gauge.domain.constants import HISTOGRAM_BINS, PARAMETER_KEY_PRECISION
from sweep_gauge.domain.entities import Response
from sweep_gauge.domain.reports import ExperimentSummary
from sweep_gauge.domain.value_objects import MetricBreakdown, ScoreDistribution


def parameter_key(value: float) -> str:
    """
    Normalize a parameter value into a grouping key

    Rounds to a fixed precision first so that values differing only by
    floating-point noise (0.1 + 0.2 vs 0.3) share a key.

    Examples:
        0.30000000000000004 -> "0.3", 1.0 -> "1"
    """
    return f"{round(value, PARAMETER_KEY_PRECISION):g}"


def score_mean(scores: list[float]) -> float:
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def score_median(scores: list[float]) -> float:
    """
    Element at index n // 2 of the sorted scores

    For an even count this is the upper of the two middle values,
    not their average.
    """
    if not scores:
        return 0.0
    return sorted(scores)[len(scores) // 2]


def score_std_dev(scores: list[float], mean: float | None = None) -> float:
    """Population standard deviation (divides by n)"""
    if not scores:
        return 0.0
    if mean is None:
        mean = score_mean(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    return math.sqrt(variance)


def score_histogram(scores: list[float], bins: int = HISTOGRAM_BINS) -> list[int]:
    """
    Count scores into equal-width buckets over [0, 1]

    A score of exactly 1.0 falls into the last bucket.
    """
    histogram = [0] * bins
    for s in scores:
        index = min(math.floor(s * bins), bins - 1)
        histogram[max(index, 0)] += 1
    return histogram


def calculate_metric_breakdown(responses: list[Response]) -> MetricBreakdown:
    """
    Mean overall score per temperature and per top-p value

    Args:
        responses: Successful responses

    Returns:
        MetricBreakdown keyed by normalized parameter values, in ascending order
    """
    if not responses:
        return MetricBreakdown()

    df = pd.DataFrame([
        {
            "temperature": round(r.parameters.temperature, PARAMETER_KEY_PRECISION),
            "top_p": round(r.parameters.top_p, PARAMETER_KEY_PRECISION),
            "score": r.metrics.overall_score,
        }
        for r in responses
    ])

    by_temperature = df.groupby("temperature")["score"].mean()
    by_top_p = df.groupby("top_p")["score"].mean()

    return MetricBreakdown(
        by_temperature={parameter_key(k): float(v) for k, v in by_temperature.items()},
        by_top_p={parameter_key(k): float(v) for k, v in by_top_p.items()},
    )


def find_best_response(responses: list[Response]) -> Response | None:
    """
    Highest-scoring response

    Scans in the given (persistence) order with a strict comparison, so the
    first response to reach the maximum wins ties.
    """
    best: Response | None = None
    best_score = -1.0
    for r in responses:
        if r.metrics.overall_score > best_score:
            best_score = r.metrics.overall_score
            best = r
    return best


def aggregate_responses(responses: list[Response]) -> ExperimentSummary:
    """
    Summarize all responses of an experiment

    Failed responses are counted but excluded from every statistic. With no
    successful responses every score field is 0 and there is no best response.

    Args:
        responses: All responses of the experiment, in storage order

    Returns:
        ExperimentSummary
    """
    successes = [r for r in responses if r.is_success]
    scores = [r.metrics.overall_score for r in successes]

    mean = score_mean(scores)
    best = find_best_response(successes)

    distribution = ScoreDistribution(
        min=min(scores) if scores else 0.0,
        max=max(scores) if scores else 0.0,
        mean=mean,
        median=score_median(scores),
        std_dev=score_std_dev(scores, mean),
    )

    return ExperimentSummary(
        success_count=len(successes),
        failure_count=len(responses) - len(successes),
        best_response=best,
        best_score=best.metrics.overall_score if best else None,
        average_score=mean,
        worst_score=distribution.min,
        score_distribution=distribution,
        histogram=score_histogram(scores),
        metric_breakdown=calculate_metric_breakdown(successes),
    )
