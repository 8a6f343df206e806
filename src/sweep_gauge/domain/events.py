"""
Progress Events

An experiment run reports four ordered checkpoints (started, processing,
responses_generated, complete) and, on failure, a single error event.
Each event type carries exactly one payload shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, Union

from sweep_gauge.domain.constants import PROGRESS_TOTAL_STEPS
from sweep_gauge.domain.entities import Response

EventType = Literal["started", "processing", "responses_generated", "complete", "error"]


@dataclass(frozen=True)
class Progress:
    current: int
    total: int
    percentage: int

    @classmethod
    def checkpoint(cls, current: int) -> "Progress":
        return cls(
            current=current,
            total=PROGRESS_TOTAL_STEPS,
            percentage=round(current / PROGRESS_TOTAL_STEPS * 100),
        )

    @classmethod
    def none(cls) -> "Progress":
        return cls(current=0, total=0, percentage=0)


@dataclass(frozen=True)
class StartedPayload:
    experiment_id: str
    total_combinations: int


@dataclass(frozen=True)
class ResponsesGeneratedPayload:
    completed: int
    failed: int


@dataclass(frozen=True)
class CompletePayload:
    experiment_id: str
    completed_responses: int
    failed_responses: int
    best_score: float | None
    average_score: float
    best_response: Response | None


@dataclass(frozen=True)
class ErrorPayload:
    experiment_id: str | None = None


EventPayload = Union[StartedPayload, ResponsesGeneratedPayload, CompletePayload, ErrorPayload, None]

_PAYLOAD_TYPES: dict[str, type | None] = {
    "started": StartedPayload,
    "processing": None,
    "responses_generated": ResponsesGeneratedPayload,
    "complete": CompletePayload,
    "error": ErrorPayload,
}


@dataclass(frozen=True)
class ProgressEvent:
    """A progress notification emitted by the orchestrator"""

    type: EventType
    message: str
    progress: Progress
    payload: EventPayload = None

    def __post_init__(self):
        expected = _PAYLOAD_TYPES.get(self.type, ...)
        if expected is ...:
            raise ValueError(f"Unknown event type: {self.type}")
        if expected is None and self.payload is not None:
            raise ValueError(f"'{self.type}' events carry no payload")
        if expected is not None and not isinstance(self.payload, expected):
            raise ValueError(f"'{self.type}' events require a {expected.__name__} payload")

    @property
    def is_terminal(self) -> bool:
        return self.type in ("complete", "error")

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary (one message per event)"""
        data: dict = {
            "type": self.type,
            "message": self.message,
            "progress": {
                "current": self.progress.current,
                "total": self.progress.total,
                "percentage": self.progress.percentage,
            },
        }
        if self.payload is None:
            return data

        if isinstance(self.payload, CompletePayload):
            best = self.payload.best_response
            data["data"] = {
                "experiment_id": self.payload.experiment_id,
                "completed_responses": self.payload.completed_responses,
                "failed_responses": self.payload.failed_responses,
                "best_score": self.payload.best_score,
                "average_score": self.payload.average_score,
                "best_response": best.to_dict() if best else None,
            }
        else:
            data["data"] = dict(vars(self.payload))
        return data


ProgressCallback = Callable[[ProgressEvent], None]


def started_event(experiment_id: str, total_combinations: int) -> ProgressEvent:
    return ProgressEvent(
        type="started",
        message=f"Experiment created with {total_combinations} parameter combinations",
        progress=Progress.checkpoint(1),
        payload=StartedPayload(experiment_id, total_combinations),
    )


def processing_event(total_combinations: int) -> ProgressEvent:
    return ProgressEvent(
        type="processing",
        message=f"Processing {total_combinations} parameter combinations...",
        progress=Progress.checkpoint(2),
    )


def responses_generated_event(completed: int, failed: int) -> ProgressEvent:
    return ProgressEvent(
        type="responses_generated",
        message=f"Generated {completed} responses ({failed} failed)",
        progress=Progress.checkpoint(3),
        payload=ResponsesGeneratedPayload(completed, failed),
    )


def complete_event(payload: CompletePayload) -> ProgressEvent:
    best = f"{payload.best_score:.3f}" if payload.best_score is not None else "N/A"
    return ProgressEvent(
        type="complete",
        message=(
            f"Experiment complete! {payload.completed_responses} responses, "
            f"{payload.failed_responses} failed. Best score: {best}"
        ),
        progress=Progress.checkpoint(4),
        payload=payload,
    )


def error_event(message: str, experiment_id: str | None = None) -> ProgressEvent:
    return ProgressEvent(
        type="error",
        message=f"Error: {message}",
        progress=Progress.none(),
        payload=ErrorPayload(experiment_id),
    )
