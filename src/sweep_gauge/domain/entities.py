"""
Domain Entities

Defines the experiment and response records persisted by the stores.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum

from sweep_gauge.domain.value_objects import (
    GenerationTask,
    ParameterRanges,
    QualityMetrics,
    ScoreDistribution,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ExperimentStatus(str, Enum):
    """Experiment lifecycle: pending -> processing -> completed | failed"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ExperimentStatus.COMPLETED, ExperimentStatus.FAILED)


class ResponseStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class Experiment:
    """One sweep over a prompt and its parameter ranges"""
    prompt: str
    parameter_ranges: ParameterRanges
    model: str
    total_responses: int
    status: ExperimentStatus = ExperimentStatus.PENDING
    completed_responses: int = 0
    failed_responses: int = 0
    best_response_id: str | None = None
    best_score: float | None = None
    average_score: float | None = None
    score_distribution: ScoreDistribution | None = None
    error: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    id: str | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary"""
        return {
            "id": self.id,
            "prompt": self.prompt,
            "parameter_ranges": self.parameter_ranges.to_dict(),
            "model": self.model,
            "status": self.status.value,
            "total_responses": self.total_responses,
            "completed_responses": self.completed_responses,
            "failed_responses": self.failed_responses,
            "best_response_id": self.best_response_id,
            "best_score": self.best_score,
            "average_score": self.average_score,
            "score_distribution": (
                self.score_distribution.to_dict() if self.score_distribution else None
            ),
            "error": self.error,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Experiment":
        distribution = data.get("score_distribution")
        return cls(
            id=data.get("id"),
            prompt=data["prompt"],
            parameter_ranges=ParameterRanges.from_dict(data["parameter_ranges"]),
            model=data["model"],
            status=ExperimentStatus(data.get("status", "pending")),
            total_responses=data["total_responses"],
            completed_responses=data.get("completed_responses", 0),
            failed_responses=data.get("failed_responses", 0),
            best_response_id=data.get("best_response_id"),
            best_score=data.get("best_score"),
            average_score=data.get("average_score"),
            score_distribution=(
                ScoreDistribution.from_dict(distribution) if distribution else None
            ),
            error=data.get("error"),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


@dataclass(frozen=True)
class Response:
    """Outcome of a single generation task (never mutated once stored)"""
    experiment_id: str
    parameters: GenerationTask
    status: ResponseStatus
    response_text: str = ""
    tokens_used: int = 0
    latency_ms: int = 0
    metrics: QualityMetrics | None = None
    error: str | None = None
    generated_at: datetime = field(default_factory=utc_now)
    id: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS and self.metrics is not None

    @property
    def overall_score(self) -> float | None:
        return self.metrics.overall_score if self.metrics else None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary"""
        return {
            "id": self.id,
            "experiment_id": self.experiment_id,
            "parameters": self.parameters.to_dict(),
            "status": self.status.value,
            "response_text": self.response_text,
            "tokens_used": self.tokens_used,
            "latency_ms": self.latency_ms,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "error": self.error,
            "generated_at": self.generated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Response":
        metrics = data.get("metrics")
        return cls(
            id=data.get("id"),
            experiment_id=data["experiment_id"],
            parameters=GenerationTask.from_dict(data["parameters"]),
            status=ResponseStatus(data["status"]),
            response_text=data.get("response_text", ""),
            tokens_used=data.get("tokens_used", 0),
            latency_ms=data.get("latency_ms", 0),
            metrics=QualityMetrics.from_dict(metrics) if metrics else None,
            error=data.get("error"),
            generated_at=datetime.fromisoformat(data["generated_at"]),
        )


@dataclass
class HealthCheckResult:
    """Health check result"""
    model_name: str
    success: bool
    latency_ms: int | None
    error: str | None

    def to_dict(self) -> dict:
        return asdict(self)
