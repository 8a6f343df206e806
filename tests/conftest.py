"""Shared fixtures: factories for scored responses and a fake model client"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from sweep_gauge.domain.entities import Experiment, Response, ResponseStatus
from sweep_gauge.domain.exceptions import ProviderError
from sweep_gauge.domain.value_objects import (
    GenerationTask,
    MetricDetails,
    ModelResponse,
    ParameterRanges,
    QualityMetrics,
)
from sweep_gauge.infrastructure.model_clients.base import ModelClient
from sweep_gauge.sweep_config import ExperimentConfig, SweepConfig

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def build_metrics(overall: float = 0.5, word_count: int = 10) -> QualityMetrics:
    details = MetricDetails(
        word_count=word_count,
        sentence_count=1,
        paragraph_count=1,
        avg_sentence_length=float(word_count),
        avg_word_length=4.0,
        unique_word_ratio=1.0,
        punctuation_ratio=0.1,
        repeated_phrases=0,
        max_repeated_phrase_length=0,
        has_proper_ending=True,
    )
    return QualityMetrics(
        coherence_score=overall,
        relevancy_score=overall,
        completeness_score=overall,
        repetition_score=overall,
        length_score=overall,
        overall_score=overall,
        details=details,
    )


def build_response(
    score: float | None = 0.5,
    temperature: float = 0.7,
    top_p: float = 0.9,
    response_id: str | None = None,
    text: str = "A generated answer.",
    experiment_id: str = "exp-1",
) -> Response:
    """A successful response with the given score, or a failed one if score is None"""
    task = GenerationTask(temperature=temperature, top_p=top_p, model="test-model")
    if score is None:
        return Response(
            experiment_id=experiment_id,
            parameters=task,
            status=ResponseStatus.FAILED,
            error="provider down",
            id=response_id,
        )
    return Response(
        experiment_id=experiment_id,
        parameters=task,
        status=ResponseStatus.SUCCESS,
        response_text=text,
        tokens_used=42,
        latency_ms=120,
        metrics=build_metrics(score),
        id=response_id,
    )


def build_experiment(prompt: str = "Explain quantum computing", minutes: int = 0) -> Experiment:
    created = BASE_TIME + timedelta(minutes=minutes)
    return Experiment(
        prompt=prompt,
        parameter_ranges=ParameterRanges(temperatures=[0.3, 0.7], top_p=[0.9]),
        model="test-model",
        total_responses=2,
        created_at=created,
        updated_at=created,
    )


class FakeModelClient(ModelClient):
    """Deterministic client: replies with a fixed text, or fails for chosen temperatures"""

    def __init__(
        self,
        text: str = "Quantum computing uses qubits.",
        fail_temperatures=(),
        error=None,
        delay_seconds: float = 0.0,
    ):
        self.model_name = "fake-model"
        self.text = text
        self.fail_temperatures = set(fail_temperatures)
        self.error = error
        self.delay_seconds = delay_seconds
        self.in_flight = 0
        self.peak_in_flight = 0
        self.calls: list[dict] = []
        self._lock = threading.Lock()

    def generate(self, prompt, *, temperature, top_p, model=None, max_tokens=None):
        with self._lock:
            self.calls.append({
                "prompt": prompt,
                "temperature": temperature,
                "top_p": top_p,
                "model": model,
                "max_tokens": max_tokens,
            })
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            return self._reply(temperature, top_p, model)
        finally:
            with self._lock:
                self.in_flight -= 1

    def _reply(self, temperature, top_p, model):
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        if temperature in self.fail_temperatures:
            raise ProviderError(f"rate limited at temperature {temperature}", model)
        return ModelResponse(
            text=f"{self.text} (t={temperature}, p={top_p})",
            latency_ms=25,
            model_name=model or self.model_name,
            tokens_used=17,
        )


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def make_experiment():
    return build_experiment


@pytest.fixture
def sweep_config():
    return SweepConfig(experiment=ExperimentConfig(max_combinations=20, max_concurrent_calls=3))


@pytest.fixture
def fake_client_class():
    return FakeModelClient
