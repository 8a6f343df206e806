"""
Domain Reports

Read models produced by aggregation and by the experiment queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sweep_gauge.domain.entities import Experiment, ExperimentStatus, Response
from sweep_gauge.domain.value_objects import (
    GenerationTask,
    MetricBreakdown,
    QualityMetrics,
    ScoreDistribution,
)


@dataclass(frozen=True)
class ExperimentSummary:
    """Aggregated statistics over an experiment's responses"""
    success_count: int
    failure_count: int
    best_response: Response | None
    best_score: float | None
    average_score: float
    worst_score: float
    score_distribution: ScoreDistribution
    histogram: list[int]
    metric_breakdown: MetricBreakdown

    def to_dict(self) -> dict:
        return {
            "success_count": self.success_count,
            "failure_count": self.failure_count,
            "best_response": self.best_response.to_dict() if self.best_response else None,
            "best_score": self.best_score,
            "average_score": self.average_score,
            "worst_score": self.worst_score,
            "score_distribution": self.score_distribution.to_dict(),
            "histogram": list(self.histogram),
            "metric_breakdown": self.metric_breakdown.to_dict(),
        }


@dataclass(frozen=True)
class ExperimentRunResult:
    """Return value of a completed experiment run"""
    experiment_id: str
    status: ExperimentStatus
    summary: ExperimentSummary


@dataclass(frozen=True)
class ExperimentDetail:
    """An experiment with all of its responses"""
    experiment: Experiment
    responses: list[Response]
    best_response: Response | None

    def to_dict(self) -> dict:
        return {
            "experiment": self.experiment.to_dict(),
            "responses": [r.to_dict() for r in self.responses],
            "best_response": self.best_response.to_dict() if self.best_response else None,
        }


@dataclass(frozen=True)
class BestResponsePreview:
    response_text: str
    overall_score: float
    parameters: GenerationTask


@dataclass(frozen=True)
class ExperimentListItem:
    id: str
    prompt: str
    created_at: datetime
    status: ExperimentStatus
    total_responses: int
    average_score: float
    best_response: BestResponsePreview | None = None


@dataclass(frozen=True)
class ExperimentList:
    items: list[ExperimentListItem]
    has_more: bool
    next_cursor: str | None


@dataclass(frozen=True)
class ResponsePreview:
    id: str
    parameters: GenerationTask
    metrics: QualityMetrics
    response_preview: str


@dataclass(frozen=True)
class ExperimentMetricsReport:
    """Score summary, histogram and per-parameter breakdown of one experiment"""
    experiment_id: str
    prompt: str
    total_responses: int
    average_score: float
    best_score: float
    worst_score: float
    score_histogram: list[int]
    metric_breakdown: MetricBreakdown
    responses: list[ResponsePreview] = field(default_factory=list)
