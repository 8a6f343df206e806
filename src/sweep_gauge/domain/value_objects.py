"""
Domain Value Objects

Defines immutable data structures: parameter ranges, generation tasks,
model responses, quality metrics, and score statistics.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field

from sweep_gauge.domain.constants import (
    MAX_RANGE_VALUES,
    MIN_RANGE_VALUES,
    PROMPT_MAX_LENGTH,
    PROMPT_MIN_LENGTH,
    TEMPERATURE_MAX,
    TEMPERATURE_MIN,
    TOP_P_MAX,
    TOP_P_MIN,
)
from sweep_gauge.domain.exceptions import ValidationError


def _validate_values(
    name: str, values: tuple[float, ...], low: float, high: float
) -> None:
    if not MIN_RANGE_VALUES <= len(values) <= MAX_RANGE_VALUES:
        raise ValidationError(
            f"{name} must contain between {MIN_RANGE_VALUES} and "
            f"{MAX_RANGE_VALUES} values (got {len(values)})"
        )
    for value in values:
        if math.isnan(value) or not low <= value <= high:
            raise ValidationError(f"{name} values must be within [{low}, {high}] (got {value})")


def _as_floats(name: str, values) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)) or any(isinstance(v, bool) for v in values):
        raise ValidationError(f"{name} must be a sequence of numbers")
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a sequence of numbers")


@dataclass(frozen=True)
class ParameterRanges:
    """Temperature and top-p values to sweep (order is preserved)"""

    temperatures: tuple[float, ...]
    top_p: tuple[float, ...]

    def __post_init__(self):
        temperatures = _as_floats("temperatures", self.temperatures)
        top_p = _as_floats("top_p", self.top_p)
        _validate_values("temperatures", temperatures, TEMPERATURE_MIN, TEMPERATURE_MAX)
        _validate_values("top_p", top_p, TOP_P_MIN, TOP_P_MAX)
        object.__setattr__(self, "temperatures", temperatures)
        object.__setattr__(self, "top_p", top_p)

    @property
    def combination_count(self) -> int:
        return len(self.temperatures) * len(self.top_p)

    def to_dict(self) -> dict:
        return {"temperatures": list(self.temperatures), "top_p": list(self.top_p)}

    @classmethod
    def from_dict(cls, data: dict) -> "ParameterRanges":
        return cls(temperatures=data["temperatures"], top_p=data["top_p"])


@dataclass(frozen=True)
class ExperimentRequest:
    """A request to run one experiment"""

    prompt: str
    parameter_ranges: ParameterRanges
    model: str | None = None

    def __post_init__(self):
        if not isinstance(self.prompt, str) or not self.prompt.strip():
            raise ValidationError("prompt must not be empty")
        if not PROMPT_MIN_LENGTH <= len(self.prompt) <= PROMPT_MAX_LENGTH:
            raise ValidationError(
                f"prompt must be between {PROMPT_MIN_LENGTH} and "
                f"{PROMPT_MAX_LENGTH} characters (got {len(self.prompt)})"
            )
        if self.model is not None and not self.model.strip():
            raise ValidationError("model must not be blank")


@dataclass(frozen=True)
class GenerationTask:
    """One (temperature, top-p, model) combination"""

    temperature: float
    top_p: float
    model: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationTask":
        return cls(
            temperature=float(data["temperature"]),
            top_p=float(data["top_p"]),
            model=data["model"],
        )


@dataclass(frozen=True)
class ModelResponse:
    """Model response"""
    text: str
    latency_ms: int
    model_name: str
    tokens_used: int = 0


@dataclass(frozen=True)
class MetricDetails:
    """Raw text statistics behind the quality sub-scores"""
    word_count: int
    sentence_count: int
    paragraph_count: int
    avg_sentence_length: float
    avg_word_length: float
    unique_word_ratio: float
    punctuation_ratio: float
    repeated_phrases: int
    max_repeated_phrase_length: int
    has_proper_ending: bool
    prompt_keywords: tuple[str, ...] = ()
    response_keywords: tuple[str, ...] = ()
    shared_keywords: tuple[str, ...] = ()
    keyword_overlap_ratio: float = 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("prompt_keywords", "response_keywords", "shared_keywords"):
            data[key] = list(data[key])
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "MetricDetails":
        values = dict(data)
        for key in ("prompt_keywords", "response_keywords", "shared_keywords"):
            values[key] = tuple(values.get(key, ()))
        return cls(**values)


@dataclass(frozen=True)
class QualityMetrics:
    """Five quality sub-scores, the weighted overall score, and their details"""
    coherence_score: float
    relevancy_score: float
    completeness_score: float
    repetition_score: float
    length_score: float
    overall_score: float
    details: MetricDetails

    def to_dict(self) -> dict:
        data = {k: v for k, v in asdict(self).items() if k != "details"}
        data["details"] = self.details.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "QualityMetrics":
        values = dict(data)
        values["details"] = MetricDetails.from_dict(values["details"])
        return cls(**values)


@dataclass(frozen=True)
class ScoreDistribution:
    """Summary statistics of overall scores"""
    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreDistribution":
        return cls(**data)


@dataclass(frozen=True)
class MetricBreakdown:
    """Mean overall score per temperature key and per top-p key"""
    by_temperature: dict[str, float] = field(default_factory=dict)
    by_top_p: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "by_temperature": dict(self.by_temperature),
            "by_top_p": dict(self.by_top_p),
        }
