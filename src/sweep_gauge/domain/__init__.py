"""
Domain Layer

Defines constants, entities, value objects, events and exceptions that form
the core of the business logic. Has no dependencies on external libraries.
"""

from sweep_gauge.domain.constants import (
    DEFAULT_MAX_COMBINATIONS,
    DEFAULT_MAX_CONCURRENT_CALLS,
    DEFAULT_MODEL,
    HISTOGRAM_BINS,
    PROGRESS_TOTAL_STEPS,
    SCORE_WEIGHTS,
)
from sweep_gauge.domain.entities import (
    Experiment,
    ExperimentStatus,
    HealthCheckResult,
    Response,
    ResponseStatus,
)
from sweep_gauge.domain.events import (
    CompletePayload,
    ErrorPayload,
    Progress,
    ProgressCallback,
    ProgressEvent,
    ResponsesGeneratedPayload,
    StartedPayload,
)
from sweep_gauge.domain.exceptions import (
    NotFoundError,
    OrchestrationError,
    ProviderError,
    SweepGaugeError,
    ValidationError,
)
from sweep_gauge.domain.reports import (
    ExperimentDetail,
    ExperimentList,
    ExperimentListItem,
    ExperimentMetricsReport,
    ExperimentRunResult,
    ExperimentSummary,
)
from sweep_gauge.domain.value_objects import (
    ExperimentRequest,
    GenerationTask,
    MetricBreakdown,
    MetricDetails,
    ModelResponse,
    ParameterRanges,
    QualityMetrics,
    ScoreDistribution,
)

__all__ = [
    # constants
    "DEFAULT_MAX_COMBINATIONS",
    "DEFAULT_MAX_CONCURRENT_CALLS",
    "DEFAULT_MODEL",
    "HISTOGRAM_BINS",
    "PROGRESS_TOTAL_STEPS",
    "SCORE_WEIGHTS",
    # entities
    "Experiment",
    "ExperimentStatus",
    "HealthCheckResult",
    "Response",
    "ResponseStatus",
    # events
    "CompletePayload",
    "ErrorPayload",
    "Progress",
    "ProgressCallback",
    "ProgressEvent",
    "ResponsesGeneratedPayload",
    "StartedPayload",
    # exceptions
    "NotFoundError",
    "OrchestrationError",
    "ProviderError",
    "SweepGaugeError",
    "ValidationError",
    # reports
    "ExperimentDetail",
    "ExperimentList",
    "ExperimentListItem",
    "ExperimentMetricsReport",
    "ExperimentRunResult",
    "ExperimentSummary",
    # value objects
    "ExperimentRequest",
    "GenerationTask",
    "MetricBreakdown",
    "MetricDetails",
    "ModelResponse",
    "ParameterRanges",
    "QualityMetrics",
    "ScoreDistribution",
]
